import logging

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import Recruiter
from ..schemas.reclutador import RecruiterOut
from ..utils.error_handlers import handle_database_error

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/reclutadores", tags=["Reclutadores"])


@router.get("", response_model=list[RecruiterOut])
def list_recruiters(db: Session = Depends(get_db)):
    try:
        return db.query(Recruiter).order_by(Recruiter.id_reclutador).all()
    except SQLAlchemyError as e:
        logger.exception("Error listing recruiters")
        raise handle_database_error(e, "listing recruiters", default_key="recruiters_failed")
