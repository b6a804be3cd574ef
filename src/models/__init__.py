# Importar todos los modelos para que create_all() los registre
from .page import Page
from .visitor_session import VisitorSession
from .visitor_stats import VisitorStats

__all__ = [
    "Page",
    "VisitorSession",
    "VisitorStats",
]
