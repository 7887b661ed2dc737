"""
Startup schema bootstrap.

Creates the tables, indexes, reporting view and availability function the API
relies on. Skips everything when `aspirante` already exists, so it is safe to
run on every process start.
"""
import logging

from sqlalchemy import func, inspect, select
from sqlalchemy.engine import Connection

from .database import create_db_engine
from .models import Appointment, Aspirant, InterviewRequest, Recruiter

logger = logging.getLogger(__name__)

SENTINEL_TABLE = "aspirante"

# Creation order matters: each table references the ones before it.
TABLES = (
    Aspirant.__table__,
    Recruiter.__table__,
    InterviewRequest.__table__,
    Appointment.__table__,
)

INDEX_NAMES = (
    "idx_solicitud_estado",
    "idx_solicitud_aspirante",
    "idx_cita_fecha",
    "idx_aspirante_correo",
)

VIEW_NAME = "vista_solicitudes_completas"

VIEW_SELECT = """
SELECT
    s.id_solicitud,
    s.fecha_solicitud,
    s.estado,
    a.id_aspirante,
    a.nombre AS aspirante_nombre,
    a.apellidos AS aspirante_apellidos,
    a.celular AS aspirante_celular,
    a.correo AS aspirante_correo,
    c.id_cita,
    c.fecha_cita,
    c.hora_cita,
    r.nombre AS reclutador_nombre
FROM solicitud s
INNER JOIN aspirante a ON s.id_aspirante = a.id_aspirante
LEFT JOIN cita c ON c.id_solicitud = s.id_solicitud
LEFT JOIN reclutador r ON c.id_reclutador = r.id_reclutador
"""

AVAILABILITY_FUNCTION = """
CREATE OR REPLACE FUNCTION verificar_disponibilidad(
    p_fecha DATE,
    p_hora TIME
) RETURNS BOOLEAN AS $$
DECLARE
    v_count INTEGER;
BEGIN
    SELECT COUNT(*)
    INTO v_count
    FROM cita c
    INNER JOIN solicitud s ON c.id_solicitud = s.id_solicitud
    WHERE c.fecha_cita = p_fecha
      AND c.hora_cita = p_hora
      AND s.estado = 'confirmada';

    RETURN v_count = 0;
END;
$$ LANGUAGE plpgsql
"""

SEED_RECRUITER = {"nombre": "Reclutador Principal", "correo": "reclutador@empresa.com"}


def _indexes_by_name() -> dict:
    found = {}
    for table in TABLES:
        for index in table.indexes:
            found[index.name] = index
    return {name: found[name] for name in INDEX_NAMES}


def _create_tables(conn: Connection) -> None:
    for table in TABLES:
        table.create(conn, checkfirst=True)
        logger.info("Table %s ready", table.name)


def _create_indexes(conn: Connection) -> None:
    for name, index in _indexes_by_name().items():
        index.create(conn, checkfirst=True)
        logger.info("Index %s ready", name)


def _create_view(conn: Connection) -> None:
    if conn.dialect.name == "postgresql":
        conn.exec_driver_sql(f"CREATE OR REPLACE VIEW {VIEW_NAME} AS {VIEW_SELECT}")
    else:
        # SQLite (and most others) have no CREATE OR REPLACE VIEW.
        conn.exec_driver_sql(f"DROP VIEW IF EXISTS {VIEW_NAME}")
        conn.exec_driver_sql(f"CREATE VIEW {VIEW_NAME} AS {VIEW_SELECT}")
    logger.info("View %s ready", VIEW_NAME)


def _create_availability_function(conn: Connection) -> None:
    if conn.dialect.name != "postgresql":
        logger.debug("Skipping verificar_disponibilidad: %s has no stored functions", conn.dialect.name)
        return
    conn.exec_driver_sql(AVAILABILITY_FUNCTION)
    logger.info("Function verificar_disponibilidad ready")


def _seed_recruiter(conn: Connection) -> bool:
    table = Recruiter.__table__
    count = conn.execute(select(func.count()).select_from(table)).scalar_one()
    if int(count) > 0:
        return False
    conn.execute(table.insert().values(**SEED_RECRUITER))
    logger.info("Seed recruiter inserted")
    return True


def run_migrations(database_url: str, *, sslmode: str | None = None) -> bool:
    """
    Bootstrap the schema on `database_url`.

    Returns True when the schema was created, False when it already existed.
    Errors propagate to the caller; the engine is always disposed.
    """
    engine = create_db_engine(database_url, sslmode=sslmode)
    try:
        with engine.begin() as conn:
            if inspect(conn).has_table(SENTINEL_TABLE):
                logger.info("Schema already present, skipping migrations")
                return False

            logger.info("Creating schema...")
            _create_tables(conn)
            _create_indexes(conn)
            _create_view(conn)
            _create_availability_function(conn)
            _seed_recruiter(conn)
        logger.info("Migrations completed")
        return True
    finally:
        engine.dispose()
