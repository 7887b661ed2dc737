from sqlalchemy import Column, Date, ForeignKey, Index, Integer, Time
from sqlalchemy.orm import relationship

from ..database import Base


class Appointment(Base):
    __tablename__ = "cita"

    id_cita = Column(Integer, primary_key=True)
    fecha_cita = Column(Date, nullable=False)
    hora_cita = Column(Time, nullable=False)
    # One appointment per request.
    id_solicitud = Column(
        Integer,
        ForeignKey("solicitud.id_solicitud", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    id_reclutador = Column(
        Integer,
        ForeignKey("reclutador.id_reclutador", ondelete="SET NULL"),
        nullable=True,
    )

    request = relationship("InterviewRequest", back_populates="appointment")
    recruiter = relationship("Recruiter", back_populates="appointments")


Index("idx_cita_fecha", Appointment.fecha_cita)
