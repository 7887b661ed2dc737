from sqlalchemy import Column, DateTime, Index, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..database import Base


class Aspirant(Base):
    __tablename__ = "aspirante"

    id_aspirante = Column(Integer, primary_key=True)
    nombre = Column(String(100), nullable=False)
    apellidos = Column(String(100), nullable=False)
    celular = Column(String(15), nullable=False)
    correo = Column(String(100), nullable=False, unique=True)
    fecha_registro = Column(DateTime, server_default=func.now())

    requests = relationship("InterviewRequest", back_populates="aspirant", passive_deletes=True)


Index("idx_aspirante_correo", Aspirant.correo)
