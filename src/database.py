# Configuración de base de datos usando SQLAlchemy.
#
# ESTRATEGIA DE BASE DE DATOS:
# - DESARROLLO LOCAL: Usa SQLite local (cvalams.db) por defecto
# - PRODUCCIÓN/RAILWAY: Usa PostgreSQL (solo si DATABASE_URL está configurada)
#
# DATABASE_URL también acepta una URL sqlite:// explícita (tests, otra ruta local).

import logging
import os
from pathlib import Path
from dotenv import load_dotenv
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

logger = logging.getLogger(__name__)

# Cargar variables de entorno desde .env (solo en desarrollo local)
backend_dir = Path(__file__).parent.parent
env_path = backend_dir / ".env"
load_dotenv(dotenv_path=env_path)

env_database_url = os.getenv("DATABASE_URL", "").strip()

IS_POSTGRES = bool(env_database_url) and not env_database_url.startswith("sqlite")

if env_database_url:
    DATABASE_URL = env_database_url
else:
    DATABASE_URL = "sqlite:///./cvalams.db"

if IS_POSTGRES:
    logger.info("Usando PostgreSQL externa (Railway/configurada)")
else:
    logger.info(f"Usando SQLite: {DATABASE_URL}")

connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(
    DATABASE_URL,
    connect_args=connect_args,
    pool_pre_ping=IS_POSTGRES,
)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """
    Dependencia para inyectar la sesión de DB en los endpoints de FastAPI.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
