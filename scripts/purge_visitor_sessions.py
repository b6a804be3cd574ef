"""
Elimina las sesiones de visitantes vencidas (sin heartbeat dentro del timeout).

No es necesario para que los contadores sean correctos (la purga también se
hace en cada heartbeat y en cada lectura), solo mantiene chica la tabla
visitor_sessions si el sitio queda mucho tiempo sin tráfico.

Ejecutar desde la raíz del backend (por ejemplo desde un cron de Railway):
    python -m scripts.purge_visitor_sessions
"""
import logging

from src.database import Base, SessionLocal, engine
from src.models.visitor_session import VisitorSession  # noqa: F401
from src.services.visitor_service import purge_expired_sessions

logger = logging.getLogger(__name__)


def purge(session_factory=SessionLocal) -> int:
    db = session_factory()
    try:
        removed = purge_expired_sessions(db)
        db.commit()
        return removed
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    Base.metadata.create_all(bind=engine, tables=[VisitorSession.__table__])
    removed = purge()
    print(f"🧹 Sesiones vencidas eliminadas: {removed}")
