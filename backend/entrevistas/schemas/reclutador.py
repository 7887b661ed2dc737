from datetime import datetime

from pydantic import BaseModel, ConfigDict


class RecruiterOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id_reclutador: int
    nombre: str
    correo: str
    fecha_registro: datetime | None = None
