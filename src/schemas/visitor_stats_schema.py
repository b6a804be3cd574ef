from pydantic import BaseModel, Field


class HeartbeatRequest(BaseModel):
    # Opcional para poder responder 400 (y no 422) cuando falta
    session_id: str | None = Field(default=None, alias="sessionId")

    class Config:
        populate_by_name = True


class HeartbeatOut(BaseModel):
    status: str = "ok"


class RecordVisitRequest(BaseModel):
    counters_id: int | None = Field(default=None, alias="visitorStatsId")

    class Config:
        populate_by_name = True


class VisitorStatsOut(BaseModel):
    """Contadores con los nombres que espera el frontend (camelCase)."""
    id: int
    total_visitors: int = Field(alias="totalVisitors")
    today_visitors: int = Field(alias="todayVisitors")
    online_users: int = Field(alias="onlineUsers")

    class Config:
        populate_by_name = True


class RecordVisitOut(VisitorStatsOut):
    message: str = "Estadísticas de visitantes actualizadas."
