from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..database import Base


class Recruiter(Base):
    __tablename__ = "reclutador"

    id_reclutador = Column(Integer, primary_key=True)
    nombre = Column(String(100), nullable=False)
    correo = Column(String(100), nullable=False, unique=True)
    fecha_registro = Column(DateTime, server_default=func.now())

    appointments = relationship("Appointment", back_populates="recruiter", passive_deletes=True)
