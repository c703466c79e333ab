"""FastAPI adapter for the engine's endpoints."""

from typing import Any

from fastapi import APIRouter, Query, Response

from vitalwatch.core.engine import EXPORT_RECENT_LIMIT, PerformanceEngine


def create_vitals_router(engine: PerformanceEngine) -> APIRouter:
    """Create a FastAPI router with vitals, summary, alerts and export endpoints.

    Args:
        engine: The engine to read from.

    Returns:
        APIRouter with the endpoints configured.
    """
    router = APIRouter()

    # @tra: Adapter.FastAPI.VitalsEndpoint
    # @tra: Adapter.FastAPI.SummaryEndpoint
    # @tra: Adapter.FastAPI.ExportEndpoint
    @router.get("/vitals")
    async def get_vitals() -> dict[str, float]:
        """Return the current headline vitals."""
        return engine.vitals()

    @router.get("/summary")
    async def get_summary() -> dict[str, Any]:
        """Return the performance summary."""
        return engine.summary().as_dict()

    @router.get("/alerts")
    async def get_alerts() -> list[dict[str, Any]]:
        """Return active alerts in arrival order."""
        return [a.as_dict() for a in engine.alerts()]

    # @tra: Adapter.FastAPI.AlertDismissal
    @router.delete("/alerts/{alert_id}", status_code=204)
    async def dismiss_alert(alert_id: str) -> Response:
        """Dismiss an alert by id. Unknown ids are ignored."""
        engine.dismiss_alert(alert_id)
        return Response(status_code=204)

    # @tra: Adapter.FastAPI.MetricsEndpoint
    @router.get("/metrics")
    async def get_metrics(
        name: str | None = Query(default=None),
        limit: int = Query(default=EXPORT_RECENT_LIMIT, ge=0),
    ) -> list[dict[str, Any]]:
        """Return retained metric records, most recent last.

        Args:
            name: Only return records with this signal name.
            limit: Maximum number of records.
        """
        records = engine.metrics_by_name(name.upper()) if name else engine.metrics()
        return [r.as_dict() for r in records[-limit:]] if limit else []

    @router.get("/export")
    async def get_export() -> dict[str, Any]:
        """Return the export snapshot."""
        return engine.export_snapshot()

    return router
