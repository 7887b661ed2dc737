import logging

from fastapi import APIRouter, BackgroundTasks, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..context import get_mailer
from ..database import get_db
from ..models import Appointment, Aspirant, InterviewRequest, RequestStatus
from ..schemas.solicitud import (
    ConfirmIn,
    CreatedOut,
    InterviewRequestIn,
    InterviewRequestRow,
    MessageOut,
)
from ..services.emailer import Mailer, dispatch_email
from ..services.notifications import interview_confirmed_email, request_received_email
from ..utils.error_handlers import handle_database_error

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/solicitudes", tags=["Solicitudes"])


@router.post("", status_code=201, response_model=CreatedOut)
def create_request(
    body: InterviewRequestIn,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    mailer: Mailer = Depends(get_mailer),
):
    """
    Register an aspirant together with a pending request and its proposed
    appointment. All three rows are written in one transaction.
    """
    try:
        aspirant = Aspirant(
            nombre=body.nombre,
            apellidos=body.apellidos,
            celular=body.celular,
            correo=body.correo,
        )
        db.add(aspirant)
        db.flush()

        req = InterviewRequest(estado=RequestStatus.PENDING.value, id_aspirante=aspirant.id_aspirante)
        db.add(req)
        db.flush()

        db.add(
            Appointment(
                fecha_cita=body.fecha_cita,
                hora_cita=body.hora_cita,
                id_solicitud=req.id_solicitud,
            )
        )
        request_id = int(req.id_solicitud)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Error creating interview request")
        raise handle_database_error(e, "creating interview request", default_key="create_failed")

    # Runs after the response has been sent.
    subject, html = request_received_email(
        nombre=body.nombre,
        apellidos=body.apellidos,
        fecha=body.fecha_cita,
        hora=body.hora_cita,
    )
    background_tasks.add_task(dispatch_email, mailer, body.correo, subject, html)

    return {"message": "Solicitud creada exitosamente", "id_solicitud": request_id}


@router.get("", response_model=list[InterviewRequestRow])
def list_requests(db: Session = Depends(get_db)):
    try:
        rows = (
            db.query(
                InterviewRequest.id_solicitud,
                InterviewRequest.fecha_solicitud,
                InterviewRequest.estado,
                Aspirant.id_aspirante,
                Aspirant.nombre,
                Aspirant.apellidos,
                Aspirant.celular,
                Aspirant.correo,
                Appointment.id_cita,
                Appointment.fecha_cita,
                Appointment.hora_cita,
            )
            .join(Aspirant, InterviewRequest.id_aspirante == Aspirant.id_aspirante)
            .outerjoin(Appointment, Appointment.id_solicitud == InterviewRequest.id_solicitud)
            .order_by(InterviewRequest.fecha_solicitud.desc(), InterviewRequest.id_solicitud.desc())
            .all()
        )
    except SQLAlchemyError as e:
        logger.exception("Error listing interview requests")
        raise handle_database_error(e, "listing interview requests", default_key="list_failed")

    return [dict(row._mapping) for row in rows]


@router.put("/{request_id}/confirmar", response_model=MessageOut)
def confirm_request(
    request_id: int,
    body: ConfirmIn,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    mailer: Mailer = Depends(get_mailer),
):
    """
    Confirm a request and (re)schedule its appointment.

    There is no status guard, and an unknown id updates nothing but still
    answers 200.
    """
    try:
        db.query(InterviewRequest).filter(InterviewRequest.id_solicitud == request_id).update(
            {InterviewRequest.estado: RequestStatus.CONFIRMED.value},
            synchronize_session=False,
        )
        db.query(Appointment).filter(Appointment.id_solicitud == request_id).update(
            {Appointment.fecha_cita: body.fecha_cita, Appointment.hora_cita: body.hora_cita},
            synchronize_session=False,
        )
        recipient = (
            db.query(
                Aspirant.nombre,
                Aspirant.apellidos,
                Aspirant.correo,
                Appointment.fecha_cita,
                Appointment.hora_cita,
            )
            .select_from(InterviewRequest)
            .join(Aspirant, InterviewRequest.id_aspirante == Aspirant.id_aspirante)
            .join(Appointment, Appointment.id_solicitud == InterviewRequest.id_solicitud)
            .filter(InterviewRequest.id_solicitud == request_id)
            .first()
        )
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Error confirming interview request %s", request_id)
        raise handle_database_error(e, "confirming interview request", default_key="confirm_failed")

    if recipient is None:
        logger.warning("Confirmed request %s has no aspirant/appointment; confirmation email skipped", request_id)
    else:
        subject, html = interview_confirmed_email(
            nombre=recipient.nombre,
            apellidos=recipient.apellidos,
            fecha=recipient.fecha_cita,
            hora=recipient.hora_cita,
        )
        background_tasks.add_task(dispatch_email, mailer, recipient.correo, subject, html)

    return {"message": "Cita confirmada exitosamente"}


@router.put("/{request_id}/rechazar", response_model=MessageOut)
def reject_request(request_id: int, db: Session = Depends(get_db)):
    try:
        db.query(InterviewRequest).filter(InterviewRequest.id_solicitud == request_id).update(
            {InterviewRequest.estado: RequestStatus.REJECTED.value},
            synchronize_session=False,
        )
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Error rejecting interview request %s", request_id)
        raise handle_database_error(e, "rejecting interview request", default_key="reject_failed")

    return {"message": "Solicitud rechazada"}
