from sqlalchemy import Column, Integer, DateTime

from ..database import Base
from ..utils import utcnow


class VisitorStats(Base):
    """
    Fila única con los contadores globales de visitas.
    online_users es solo un cache: el valor real se recalcula desde visitor_sessions.
    """
    __tablename__ = "visitor_stats"

    id = Column(Integer, primary_key=True, index=True)
    total_visitors = Column(Integer, default=0, nullable=False)
    today_visitors = Column(Integer, default=0, nullable=False)
    online_users = Column(Integer, default=0, nullable=False)
    last_updated = Column(DateTime, default=utcnow, nullable=True)
