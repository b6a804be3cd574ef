import os

# Orígenes del frontend (Nuxt local y despliegues en Vercel)
DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",
    "https://cvalams-rizqis-projects-607b9812.vercel.app",
    "https://cvalams.vercel.app",
]


class Settings:
    """Configuración de la aplicación que lee variables de entorno dinámicamente."""

    @property
    def app_name(self) -> str:
        return "CVALAMS Web Backend"

    @property
    def environment(self) -> str:
        # Detectar producción por variables de Railway o ENV
        env = os.getenv("ENV", "").lower()
        railway_env = os.getenv("RAILWAY_ENVIRONMENT", "").lower()
        # Si está en Railway (tiene PORT) o ENV=production, es producción
        if env == "production" or railway_env == "production" or os.getenv("PORT"):
            return "production"
        return "development"

    @property
    def cors_origin(self) -> str:
        return os.getenv("CORS_ORIGIN", "http://localhost:3000")

    @property
    def online_timeout_seconds(self) -> int:
        # 3 minutos sin heartbeat = visitante fuera de línea
        return int(os.getenv("ONLINE_TIMEOUT_SECONDS", "180"))

    @property
    def stats_timezone(self) -> str:
        return os.getenv("STATS_TIMEZONE", "UTC")

    @property
    def cloudinary_upload_folder(self) -> str:
        return os.getenv("CLOUDINARY_UPLOAD_FOLDER", "cvalams/pages")

    @property
    def max_upload_bytes(self) -> int:
        return int(os.getenv("MAX_UPLOAD_BYTES", str(5 * 1024 * 1024)))


# Instancia singleton de Settings (sin cache, lee valores dinámicamente)
_settings_instance = None


def get_settings() -> Settings:
    """Retorna la instancia de Settings. Lee variables de entorno dinámicamente."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance


def clear_settings_cache():
    """Limpia la instancia de settings (aunque no es necesario con propiedades dinámicas)."""
    global _settings_instance
    _settings_instance = None
