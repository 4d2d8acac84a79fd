"""FastAPI application exposing the Attendance Board REST API."""

from __future__ import annotations

from typing import Optional

from fastapi import Depends, FastAPI, Header, HTTPException, status

from .client import AttendanceApiError, AttendanceClient
from .config import Settings, load_settings
from .service import AttendanceBoardService, MonthView, parse_year_month


def create_app(
    settings: Optional[Settings] = None,
    client: Optional[AttendanceClient] = None,
) -> FastAPI:
    settings = settings or load_settings()
    attendance_client = client or AttendanceClient(settings.api_base_url, timeout=settings.http_timeout)
    service = AttendanceBoardService(settings, attendance_client)

    async def verify_api_key(x_api_key: str = Header(..., alias="X-API-Key")) -> None:
        if x_api_key != settings.api_key:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="invalid api key")

    async def month_view_dependency(year_month: Optional[str] = None) -> MonthView:
        if year_month:
            try:
                year, month = parse_year_month(year_month)
            except ValueError as exc:
                raise HTTPException(status_code=400, detail="Invalid year_month. Use YYYYMM") from exc
        else:
            today = service.today()
            year, month = today.year, today.month
        try:
            return await service.month_view(year, month - 1)
        except AttendanceApiError as exc:
            raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc

    app = FastAPI(title="Attendance Board API", version="1.0.0")

    @app.on_event("shutdown")
    async def shutdown_event() -> None:  # pragma: no cover - io bound
        await attendance_client.close()

    def get_service() -> AttendanceBoardService:
        return service

    @app.get("/healthz")
    async def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/api/days")
    async def get_days(
        _: None = Depends(verify_api_key),
        view: MonthView = Depends(month_view_dependency),
    ) -> dict[str, object]:
        return service.days_payload(view)

    @app.get("/api/calendar")
    async def get_calendar(
        _: None = Depends(verify_api_key),
        view: MonthView = Depends(month_view_dependency),
    ) -> dict[str, object]:
        return service.calendar_payload(view)

    @app.post("/api/check-in")
    async def post_check_in(
        _: None = Depends(verify_api_key),
        svc: AttendanceBoardService = Depends(get_service),
    ) -> dict[str, object]:
        try:
            return await svc.check_in()
        except AttendanceApiError as exc:
            raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc

    @app.post("/api/check-out")
    async def post_check_out(
        _: None = Depends(verify_api_key),
        svc: AttendanceBoardService = Depends(get_service),
    ) -> dict[str, object]:
        try:
            return await svc.check_out()
        except AttendanceApiError as exc:
            raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc

    return app


__all__ = ["create_app"]
