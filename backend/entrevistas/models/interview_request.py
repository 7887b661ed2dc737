import enum

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..database import Base


class RequestStatus(str, enum.Enum):
    PENDING = "pendiente"
    CONFIRMED = "confirmada"
    REJECTED = "rechazada"
    # Not reachable through the API; only set by hand in the database.
    CANCELLED = "cancelada"


_STATUS_VALUES = ", ".join(f"'{s.value}'" for s in RequestStatus)


class InterviewRequest(Base):
    __tablename__ = "solicitud"
    __table_args__ = (
        CheckConstraint(f"estado IN ({_STATUS_VALUES})", name="ck_solicitud_estado"),
    )

    id_solicitud = Column(Integer, primary_key=True)
    fecha_solicitud = Column(DateTime, server_default=func.now())
    estado = Column(String(20), nullable=False)
    id_aspirante = Column(
        Integer,
        ForeignKey("aspirante.id_aspirante", ondelete="CASCADE"),
        nullable=False,
    )

    aspirant = relationship("Aspirant", back_populates="requests")
    appointment = relationship(
        "Appointment",
        back_populates="request",
        uselist=False,
        passive_deletes=True,
    )


Index("idx_solicitud_estado", InterviewRequest.estado)
Index("idx_solicitud_aspirante", InterviewRequest.id_aspirante)
