from datetime import date, time

import pytest
from sqlalchemy import func, inspect, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError

from backend.entrevistas.bootstrap import INDEX_NAMES, VIEW_NAME, run_migrations
from backend.entrevistas.database import create_db_engine
from backend.entrevistas.models import Appointment, Aspirant, InterviewRequest, Recruiter
from backend.entrevistas.services.availability import slot_is_available


@pytest.fixture()
def engine(database_url):
    eng = create_db_engine(database_url)
    try:
        yield eng
    finally:
        eng.dispose()


def test_first_run_creates_schema_and_second_run_is_a_no_op(database_url, engine):
    assert run_migrations(database_url) is True
    assert run_migrations(database_url) is False

    insp = inspect(engine)
    for table in ("aspirante", "reclutador", "solicitud", "cita"):
        assert insp.has_table(table)
    assert VIEW_NAME in insp.get_view_names()

    index_names = set()
    for table in ("aspirante", "solicitud", "cita"):
        index_names.update(i["name"] for i in insp.get_indexes(table))
    assert set(INDEX_NAMES) <= index_names


def test_seed_recruiter_inserted_once(database_url, engine):
    run_migrations(database_url)
    run_migrations(database_url)

    with engine.connect() as conn:
        rows = conn.execute(text("SELECT nombre, correo FROM reclutador")).fetchall()
    assert [tuple(r) for r in rows] == [("Reclutador Principal", "reclutador@empresa.com")]


def test_bootstrap_error_propagates(tmp_path):
    missing_dir = tmp_path / "does-not-exist" / "db.sqlite3"
    with pytest.raises(Exception):
        run_migrations(f"sqlite+pysqlite:///{missing_dir.as_posix()}")


def test_bootstrap_disposes_engine_when_it_fails(tmp_path, monkeypatch):
    disposed = []
    original_dispose = Engine.dispose

    def _tracking_dispose(self, *args, **kwargs):
        disposed.append(self)
        return original_dispose(self, *args, **kwargs)

    monkeypatch.setattr(Engine, "dispose", _tracking_dispose)
    missing_dir = tmp_path / "does-not-exist" / "db.sqlite3"
    with pytest.raises(Exception):
        run_migrations(f"sqlite+pysqlite:///{missing_dir.as_posix()}")
    assert len(disposed) == 1


def test_view_keeps_requests_without_appointment(db_session):
    asp = Aspirant(nombre="Sin", apellidos="Cita", celular="1", correo="sin@x.com")
    db_session.add(asp)
    db_session.flush()
    db_session.add(InterviewRequest(estado="pendiente", id_aspirante=asp.id_aspirante))
    db_session.commit()

    rows = db_session.execute(text(f"SELECT aspirante_correo, id_cita, reclutador_nombre FROM {VIEW_NAME}")).fetchall()
    assert [tuple(r) for r in rows] == [("sin@x.com", None, None)]


def test_status_check_constraint(db_session):
    asp = Aspirant(nombre="A", apellidos="B", celular="1", correo="a@x.com")
    db_session.add(asp)
    db_session.flush()
    db_session.add(InterviewRequest(estado="archivada", id_aspirante=asp.id_aspirante))
    with pytest.raises(IntegrityError):
        db_session.flush()
    db_session.rollback()


def test_one_appointment_per_request(db_session):
    asp = Aspirant(nombre="A", apellidos="B", celular="1", correo="a@x.com")
    db_session.add(asp)
    db_session.flush()
    req = InterviewRequest(estado="pendiente", id_aspirante=asp.id_aspirante)
    db_session.add(req)
    db_session.flush()
    db_session.add(Appointment(fecha_cita=date(2024, 6, 1), hora_cita=time(10, 0), id_solicitud=req.id_solicitud))
    db_session.flush()
    db_session.add(Appointment(fecha_cita=date(2024, 6, 2), hora_cita=time(10, 0), id_solicitud=req.id_solicitud))
    with pytest.raises(IntegrityError):
        db_session.flush()
    db_session.rollback()


def test_foreign_key_delete_rules(db_session):
    recruiter = db_session.query(Recruiter).one()
    asp = Aspirant(nombre="A", apellidos="B", celular="1", correo="a@x.com")
    db_session.add(asp)
    db_session.flush()
    req = InterviewRequest(estado="pendiente", id_aspirante=asp.id_aspirante)
    db_session.add(req)
    db_session.flush()
    db_session.add(
        Appointment(
            fecha_cita=date(2024, 6, 1),
            hora_cita=time(10, 0),
            id_solicitud=req.id_solicitud,
            id_reclutador=recruiter.id_reclutador,
        )
    )
    db_session.commit()

    # Removing the recruiter keeps the appointment but clears the reference.
    db_session.execute(text("DELETE FROM reclutador"))
    db_session.commit()
    assert db_session.execute(text("SELECT id_reclutador FROM cita")).scalar() is None

    # Removing the aspirant cascades through request and appointment.
    db_session.execute(text("DELETE FROM aspirante"))
    db_session.commit()
    assert db_session.query(func.count(InterviewRequest.id_solicitud)).scalar() == 0
    assert db_session.query(func.count(Appointment.id_cita)).scalar() == 0


def test_slot_availability_only_counts_confirmed(client, context):
    r = client.post(
        "/api/solicitudes",
        json={
            "nombre": "Ana",
            "apellidos": "Gomez",
            "celular": "1",
            "correo": "ana@x.com",
            "fecha_cita": "2024-06-01",
            "hora_cita": "10:00",
        },
    )
    request_id = r.json()["id_solicitud"]

    with context.engine.connect() as conn:
        assert slot_is_available(conn, date(2024, 6, 1), time(10, 0)) is True

    client.put(f"/api/solicitudes/{request_id}/confirmar", json={"fecha_cita": "2024-06-01", "hora_cita": "10:00"})

    with context.engine.connect() as conn:
        assert slot_is_available(conn, date(2024, 6, 1), time(10, 0)) is False
        assert slot_is_available(conn, date(2024, 6, 1), time(11, 0)) is True
