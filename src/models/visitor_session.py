from sqlalchemy import Column, Integer, String, DateTime

from ..database import Base
from ..utils import utcnow


class VisitorSession(Base):
    """
    Presencia de un visitante en el sitio.
    El frontend genera un session_id por pestaña y envía heartbeats periódicos;
    la fila se elimina cuando last_activity supera el timeout de inactividad.
    """
    __tablename__ = "visitor_sessions"

    id = Column(Integer, primary_key=True, index=True)
    session_id = Column(String(100), unique=True, index=True, nullable=False)
    last_activity = Column(DateTime, default=utcnow, index=True, nullable=False)
    # Solo diagnóstico, no se usan para el conteo
    ip_address = Column(String(64), nullable=True)
    user_agent = Column(String(500), nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
