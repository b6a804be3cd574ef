import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..database import get_db
from ..schemas.visitor_stats_schema import (
    HeartbeatOut,
    HeartbeatRequest,
    RecordVisitOut,
    RecordVisitRequest,
    VisitorStatsOut,
)
from ..services import visitor_service
from ..utils import client_ip

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/visitor-stats", tags=["visitor-stats"])

SESSION_ID_MAX_LENGTH = 100


def _read_stats(db: Session) -> VisitorStatsOut:
    try:
        return VisitorStatsOut(**visitor_service.get_stats(db))
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error al obtener estadísticas de visitantes: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Error al obtener estadísticas de visitantes")


@router.get("", response_model=VisitorStatsOut)
def get_visitor_stats_no_slash(db: Session = Depends(get_db)):
    """
    Contadores actuales: total de visitas, visitas de hoy y usuarios en línea.
    """
    return _read_stats(db)


@router.get("/", response_model=VisitorStatsOut)
def get_visitor_stats(db: Session = Depends(get_db)):
    """
    Contadores actuales: total de visitas, visitas de hoy y usuarios en línea.
    """
    return _read_stats(db)


@router.post("/heartbeat", response_model=HeartbeatOut)
def post_heartbeat(
    payload: HeartbeatRequest,
    request: Request,
    db: Session = Depends(get_db),
):
    """
    Heartbeat de presencia. El frontend lo envía periódicamente mientras la
    pestaña está abierta; sin heartbeat por 3 minutos el visitante deja de
    contar como en línea.
    """
    session_id = (payload.session_id or "").strip()
    if not session_id:
        raise HTTPException(status_code=400, detail="session_id es requerido")
    if len(session_id) > SESSION_ID_MAX_LENGTH:
        raise HTTPException(status_code=400, detail="session_id demasiado largo")

    try:
        visitor_service.heartbeat(
            db,
            session_id,
            ip_address=client_ip(request),
            user_agent=request.headers.get("user-agent"),
        )
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error al registrar heartbeat: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Error al registrar heartbeat")

    return HeartbeatOut()


@router.post("/record-visit", response_model=RecordVisitOut)
def post_record_visit(payload: RecordVisitRequest, db: Session = Depends(get_db)):
    """
    Registra una visita nueva (una vez por visita, no por heartbeat).
    El id de la fila de contadores viene de GET /visitor-stats.
    """
    if payload.counters_id is None:
        raise HTTPException(
            status_code=400,
            detail="visitorStatsId es requerido para actualizar las estadísticas",
        )

    try:
        snapshot = visitor_service.record_visit(db, payload.counters_id)
    except visitor_service.VisitorStatsNotFoundError:
        db.rollback()
        raise HTTPException(status_code=404, detail="Estadísticas de visitantes no encontradas")
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error al actualizar estadísticas de visitantes: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Error al actualizar estadísticas de visitantes")

    return RecordVisitOut(**snapshot)
