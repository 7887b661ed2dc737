from datetime import date, datetime, time

from pydantic import BaseModel, Field


class InterviewRequestIn(BaseModel):
    nombre: str = Field(..., max_length=100)
    apellidos: str = Field(..., max_length=100)
    celular: str = Field(..., max_length=15)
    # Format is not checked; uniqueness is left to the database.
    correo: str = Field(..., max_length=100)
    fecha_cita: date
    hora_cita: time


class ConfirmIn(BaseModel):
    fecha_cita: date
    hora_cita: time


class MessageOut(BaseModel):
    message: str


class CreatedOut(MessageOut):
    id_solicitud: int


class InterviewRequestRow(BaseModel):
    id_solicitud: int
    fecha_solicitud: datetime | None = None
    estado: str
    id_aspirante: int
    nombre: str
    apellidos: str
    celular: str
    correo: str
    id_cita: int | None = None
    fecha_cita: date | None = None
    hora_cita: time | None = None
