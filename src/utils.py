from datetime import date, datetime, timezone, tzinfo
from zoneinfo import ZoneInfo

from fastapi import Request


def utcnow() -> datetime:
    """Hora actual en UTC, sin tzinfo (así se guardan los timestamps en la BD)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def get_timezone(name: str) -> tzinfo:
    if not name or name.upper() == "UTC":
        return timezone.utc
    return ZoneInfo(name)


def local_date(value: datetime, tz_name: str = "UTC") -> date:
    """
    Convierte un timestamp UTC naive a la fecha del calendario local.

    Ejemplo con tz_name="Asia/Jakarta" (UTC+7):
    - 2026-10-19 18:30 UTC -> 2026-10-20
    """
    return value.replace(tzinfo=timezone.utc).astimezone(get_timezone(tz_name)).date()


def client_ip(request: Request) -> str | None:
    """
    IP del visitante. Detrás del proxy de Railway la IP real viene
    en el primer valor de X-Forwarded-For.
    """
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    if request.client:
        return request.client.host
    return None
