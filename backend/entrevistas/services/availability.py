from datetime import date, time

from sqlalchemy import Date, String, Time, bindparam, text
from sqlalchemy.engine import Connection

from ..models import RequestStatus

_PG_CHECK = text("SELECT verificar_disponibilidad(:fecha, :hora)").bindparams(
    bindparam("fecha", type_=Date),
    bindparam("hora", type_=Time),
)

# Typed binds so SQLite compares against the same text format the ORM stores.
_INLINE_CHECK = text(
    """
    SELECT COUNT(*)
    FROM cita c
    INNER JOIN solicitud s ON c.id_solicitud = s.id_solicitud
    WHERE c.fecha_cita = :fecha
      AND c.hora_cita = :hora
      AND s.estado = :estado
    """
).bindparams(
    bindparam("fecha", type_=Date),
    bindparam("hora", type_=Time),
    bindparam("estado", type_=String),
)


def slot_is_available(conn: Connection, fecha: date, hora: time) -> bool:
    """
    True when no confirmed appointment already holds (fecha, hora).

    Postgres delegates to the `verificar_disponibilidad` stored function created
    by the bootstrap; other dialects run the same count inline. None of the
    endpoints enforce this yet.
    """
    if conn.dialect.name == "postgresql":
        row = conn.execute(_PG_CHECK, {"fecha": fecha, "hora": hora}).fetchone()
        return bool(row[0]) if row else True

    row = conn.execute(
        _INLINE_CHECK,
        {"fecha": fecha, "hora": hora, "estado": RequestStatus.CONFIRMED.value},
    ).fetchone()
    return int(row[0] if row else 0) == 0
