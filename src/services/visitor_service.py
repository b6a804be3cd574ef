"""
Servicio de estadísticas de visitantes: presencia en línea por heartbeats
y contadores de visitas (total / hoy).

- Cada pestaña del frontend envía un heartbeat periódico con su session_id.
- Un visitante está "en línea" si su último heartbeat tiene menos de
  ONLINE_TIMEOUT_SECONDS (3 minutos por defecto).
- No hay proceso en segundo plano: las sesiones vencidas se eliminan en
  cada heartbeat y en cada lectura de estadísticas.
- online_users guardado en visitor_stats es solo un cache; el valor que se
  devuelve siempre se recalcula desde visitor_sessions.

Las funciones reciben `now` opcional (UTC naive) para poder simular el paso
del tiempo. Ningún error de base de datos se reintenta: se propaga al router.
"""
import logging
from datetime import datetime, timedelta

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..config import get_settings
from ..models.visitor_session import VisitorSession
from ..models.visitor_stats import VisitorStats
from ..utils import utcnow, local_date

logger = logging.getLogger(__name__)

USER_AGENT_MAX_LENGTH = 500


class VisitorStatsNotFoundError(LookupError):
    """La fila de contadores solicitada no existe."""


def _online_timeout() -> timedelta:
    return timedelta(seconds=get_settings().online_timeout_seconds)


def _cutoff(now: datetime, timeout: timedelta | None = None) -> datetime:
    return now - (timeout if timeout is not None else _online_timeout())


def purge_expired_sessions(
    db: Session, now: datetime | None = None, timeout: timedelta | None = None
) -> int:
    """
    Elimina las sesiones sin actividad dentro del timeout.
    No hace commit: queda dentro de la transacción del llamador.

    Returns:
        Cantidad de sesiones eliminadas
    """
    now = now or utcnow()
    removed = (
        db.query(VisitorSession)
        .filter(VisitorSession.last_activity < _cutoff(now, timeout))
        .delete(synchronize_session=False)
    )
    if removed:
        logger.info(f"Sesiones vencidas eliminadas: {removed}")
    return removed


def count_online(
    db: Session, now: datetime | None = None, timeout: timedelta | None = None
) -> int:
    now = now or utcnow()
    return (
        db.query(func.count(VisitorSession.id))
        .filter(VisitorSession.last_activity >= _cutoff(now, timeout))
        .scalar()
        or 0
    )


def _touch_session(
    db: Session,
    session_id: str,
    ip_address: str | None,
    user_agent: str | None,
    now: datetime,
) -> bool:
    """Crea o refresca la sesión. Retorna True si la fila es nueva."""
    if user_agent:
        user_agent = user_agent[:USER_AGENT_MAX_LENGTH]

    session = (
        db.query(VisitorSession)
        .filter(VisitorSession.session_id == session_id)
        .first()
    )
    created = session is None
    if created:
        session = VisitorSession(
            session_id=session_id,
            last_activity=now,
            ip_address=ip_address,
            user_agent=user_agent,
            created_at=now,
        )
        db.add(session)
    else:
        # Heartbeats concurrentes: solo importa el timestamp más reciente
        if session.last_activity is None or now > session.last_activity:
            session.last_activity = now
        session.ip_address = ip_address or session.ip_address
        session.user_agent = user_agent or session.user_agent

    # Flush antes de purgar, para que el DELETE vea el last_activity nuevo
    db.flush()
    return created


def heartbeat(
    db: Session,
    session_id: str,
    ip_address: str | None = None,
    user_agent: str | None = None,
    now: datetime | None = None,
) -> dict:
    """
    Registra un heartbeat (upsert por session_id) y purga las sesiones vencidas.

    Un session_id desconocido, o ya eliminado por timeout, simplemente crea
    una sesión nueva. No modifica total_visitors: para eso está record_visit.
    """
    now = now or utcnow()
    try:
        created = _touch_session(db, session_id, ip_address, user_agent, now)
    except IntegrityError:
        # Otro heartbeat con el mismo session_id insertó la fila primero
        db.rollback()
        created = _touch_session(db, session_id, ip_address, user_agent, now)

    purge_expired_sessions(db, now)
    db.commit()

    if created:
        logger.info(f"Nueva sesión de visitante: {session_id[:8]}...")
    return {"status": "ok", "created": created}


def _get_or_create_stats(db: Session, now: datetime) -> VisitorStats:
    stats = (
        db.query(VisitorStats)
        .order_by(VisitorStats.last_updated.desc().nulls_last(), VisitorStats.id.desc())
        .first()
    )
    if stats is None:
        logger.info("No hay estadísticas de visitantes, inicializando...")
        stats = VisitorStats(
            total_visitors=0,
            today_visitors=0,
            online_users=0,
            last_updated=now,
        )
        db.add(stats)
        db.flush()
    return stats


def _reset_today_if_new_day(stats: VisitorStats, now: datetime) -> bool:
    tz_name = get_settings().stats_timezone
    if stats.last_updated is not None and local_date(stats.last_updated, tz_name) == local_date(now, tz_name):
        return False

    logger.info(f"Cambio de día detectado, reseteando today_visitors (id={stats.id})")
    stats.today_visitors = 0
    stats.last_updated = now
    return True


def _snapshot(stats: VisitorStats, online: int) -> dict:
    return {
        "id": stats.id,
        "total_visitors": stats.total_visitors or 0,
        "today_visitors": stats.today_visitors or 0,
        "online_users": online,
    }


def get_stats(db: Session, now: datetime | None = None) -> dict:
    """
    Lee los contadores actuales con mantenimiento perezoso:
    purga sesiones vencidas, recalcula online, resetea today si cambió el día
    y guarda el online recalculado como cache.
    """
    now = now or utcnow()
    purge_expired_sessions(db, now)
    online = count_online(db, now)

    stats = _get_or_create_stats(db, now)
    _reset_today_if_new_day(stats, now)
    stats.online_users = online
    db.commit()

    return _snapshot(stats, online)


def record_visit(
    db: Session, counters_id: int | None = None, now: datetime | None = None
) -> dict:
    """
    Registra una visita nueva: total_visitors + 1 y today_visitors + 1
    (today se resetea antes si cambió el día).

    Se llama una vez por visita, no por heartbeat. Sin counters_id usa
    la fila actual (creándola si no existe).

    Raises:
        VisitorStatsNotFoundError: si counters_id no existe
    """
    now = now or utcnow()
    if counters_id is None:
        stats = _get_or_create_stats(db, now)
    else:
        stats = db.query(VisitorStats).filter(VisitorStats.id == counters_id).first()
        if stats is None:
            raise VisitorStatsNotFoundError(f"visitor_stats {counters_id} no existe")

    _reset_today_if_new_day(stats, now)
    stats.total_visitors = (stats.total_visitors or 0) + 1
    stats.today_visitors = (stats.today_visitors or 0) + 1
    stats.last_updated = now

    purge_expired_sessions(db, now)
    online = count_online(db, now)
    db.commit()

    return _snapshot(stats, online)
