import os
import time
import logging
from pathlib import Path
from dotenv import load_dotenv
from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import inspect

from .routers import pages, uploads, visitor_stats
from .config import DEFAULT_CORS_ORIGINS, get_settings, clear_settings_cache
from .database import Base, engine
from .services.cloudinary_service import is_cloudinary_configured

# Configurar logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Cargar variables de entorno desde .env (solo en desarrollo local)
backend_dir = Path(__file__).parent.parent
env_path = backend_dir / ".env"
loaded = load_dotenv(dotenv_path=env_path)
if loaded:
    logger.info(f"Variables de entorno cargadas desde: {env_path}")
else:
    logger.warning(f"No se pudo cargar archivo .env desde: {env_path}")

# Limpiar cache de settings para asegurar que se recarguen las variables
clear_settings_cache()

# Importar todos los modelos para que SQLAlchemy los registre antes de create_all()
from .models.page import Page  # noqa: F401,E402
from .models.visitor_session import VisitorSession  # noqa: F401,E402
from .models.visitor_stats import VisitorStats  # noqa: F401,E402

app_settings = get_settings()
logger.info(f"🔧 CORS_ORIGIN configurado al iniciar: {app_settings.cors_origin}")

if not is_cloudinary_configured():
    logger.warning("⚠️ Cloudinary no configurado: /api/upload-image responderá 500")

app = FastAPI(title=app_settings.app_name, version="0.1.0", redirect_slashes=False)


def build_allowed_origins() -> list[str]:
    """Orígenes CORS: los del frontend conocidos más los de CORS_ORIGIN."""
    allowed_origins = list(DEFAULT_CORS_ORIGINS)

    # Verificar si CORS_ORIGIN está realmente configurado (no es el default)
    cors_origin_env = os.getenv("CORS_ORIGIN", "")
    cors_origin_configured = bool(cors_origin_env) and cors_origin_env != "http://localhost:3000"

    if cors_origin_configured:
        # Permitir múltiples orígenes separados por coma
        for origin in (o.strip() for o in cors_origin_env.split(",")):
            if origin and origin not in allowed_origins:
                allowed_origins.append(origin)

    # En producción sin CORS_ORIGIN explícito se permiten todos los orígenes
    if app_settings.environment == "production" and not cors_origin_configured:
        logger.warning("⚠️ CORS_ORIGIN no configurado en producción, permitiendo todos los orígenes")
        return ["*"]

    return allowed_origins


allowed_origins = build_allowed_origins()
logger.info(f"🌐 Orígenes CORS permitidos: {allowed_origins}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Content-Type", "Authorization"],
)


def create_tables():
    """Crea las tablas en la base de datos si no existen."""
    logger.info("Creando tablas en la base de datos...")

    expected_tables = list(Base.metadata.tables.keys())
    logger.info(f"Tablas esperadas: {', '.join(expected_tables)}")

    Base.metadata.create_all(bind=engine)

    existing_tables = inspect(engine).get_table_names()
    logger.info(f"Tablas existentes en la BD: {', '.join(existing_tables) if existing_tables else '(ninguna)'}")

    missing_tables = [t for t in expected_tables if t not in existing_tables]
    if missing_tables:
        logger.warning(f"⚠️  Tablas faltantes: {', '.join(missing_tables)}")
    else:
        logger.info("✅ Todas las tablas fueron creadas/verificadas exitosamente")


# Crear tablas al iniciar (no bloquear el inicio si falla)
try:
    create_tables()
except Exception as e:
    logger.error(f"❌ Error al crear tablas al iniciar: {str(e)}", exc_info=True)
    logger.warning("⚠️ El servidor continuará iniciando, pero algunas funcionalidades pueden no estar disponibles")

# Include routers
app.include_router(pages.router, prefix="/api")
app.include_router(uploads.router, prefix="/api")
app.include_router(visitor_stats.router, prefix="/api")


@app.get("/", tags=["root"])  # Simple welcome endpoint
async def root():
    return {"message": "Bienvenido al backend de CVALAMS"}


@app.get("/api/health", tags=["health"])  # Health check for frontend
async def health():
    logger.info("💓 Health check recibido")
    return {"status": "ok", "server": "alive"}


@app.get("/api/ping", tags=["health"])
async def ping():
    return {"pong": True, "time": time.time()}


@app.get("/favicon.ico", tags=["static"])
async def favicon():
    return Response(status_code=204)
