"""ASGI generic adapter for the engine's read endpoints.

This adapter provides a framework-agnostic ASGI application that can be used
with any ASGI server (uvicorn, hypercorn, daphne) without requiring FastAPI
as a dependency. All endpoints are read-only and return JSON.
"""

import json
import logging
from collections.abc import Callable, Coroutine
from typing import Any
from urllib.parse import parse_qs

from vitalwatch.adapters.frameworks.query_params import (
    _parse_limit_param,
    _parse_name_param,
)
from vitalwatch.core.engine import PerformanceEngine

logger = logging.getLogger(__name__)

# ASGI type aliases
Scope = dict[str, Any]
Receive = Callable[[], Coroutine[Any, Any, dict[str, Any]]]
Send = Callable[[dict[str, Any]], Coroutine[Any, Any, None]]
ASGIApp = Callable[[Scope, Receive, Send], Coroutine[Any, Any, None]]

JSON_CONTENT_TYPE = "application/json"


def _parse_query_params(scope: Scope) -> dict[str, list[str]]:
    """Parse query string from ASGI scope into parameter dictionary.

    Args:
        scope: ASGI scope dictionary containing request metadata.

    Returns:
        Dictionary mapping parameter names to lists of values.
        Returns empty dict if query_string is missing or empty.
    """
    # @tra: Adapter.ASGI.QueryParameter.Parser
    # @tra: Adapter.ASGI.QueryParameter.InvalidUTF8
    query_string = scope.get("query_string", b"").decode(errors="replace")
    return parse_qs(query_string)


async def _send_response(send: Send, status: int, content_type: str, body: str) -> None:
    """Send an HTTP response with headers and body.

    Args:
        send: ASGI send callable for writing response.
        status: HTTP status code.
        content_type: Content-Type header value.
        body: Response body as string (will be encoded to bytes).
    """
    headers = [(b"content-type", content_type.encode())]
    await send({"type": "http.response.start", "status": status, "headers": headers})
    await send({"type": "http.response.body", "body": body.encode()})


async def _handle_endpoint(
    send: Send,
    endpoint_func: Callable[[], Any],
    log_message: str,
) -> None:
    """Build a JSON payload with error handling and send the response.

    Args:
        send: ASGI send callable for writing response.
        endpoint_func: Callable returning a JSON-serializable payload.
        log_message: Message to log on error.
    """
    # @tra: Adapter.ASGI.EndpointError
    try:
        body = json.dumps(endpoint_func())
    except Exception:
        logger.exception(log_message)
        error_body = json.dumps({"error": "Internal Server Error"})
        await _send_response(send, 500, JSON_CONTENT_TYPE, error_body)
        return
    await _send_response(send, 200, JSON_CONTENT_TYPE, body)


def _metrics_payload(engine: PerformanceEngine, params: dict[str, list[str]]) -> Any:
    # @tra: Adapter.ASGI.MetricsEndpointNameFilter
    # @tra: Adapter.ASGI.MetricsEndpointLimit
    name = _parse_name_param(params)
    limit = _parse_limit_param(params)
    records = engine.metrics_by_name(name) if name else engine.metrics()
    return [r.as_dict() for r in records[-limit:]] if limit else []


def create_asgi_app(engine: PerformanceEngine) -> ASGIApp:
    """Create an ASGI app exposing the engine's read endpoints.

    Endpoints:
        /vitals   - current headline vitals
        /summary  - performance summary
        /alerts   - active alerts
        /metrics  - retained records (``name`` and ``limit`` query params)
        /export   - export snapshot

    Args:
        engine: The engine to read from.

    Returns:
        ASGI application callable.
    """
    # @tra: Adapter.ASGI.VitalsEndpoint
    # @tra: Adapter.ASGI.SummaryEndpoint
    # @tra: Adapter.ASGI.AlertsEndpoint
    # @tra: Adapter.ASGI.MetricsEndpoint
    # @tra: Adapter.ASGI.ExportEndpoint
    routes: dict[str, Callable[[dict[str, list[str]]], Any]] = {
        "/vitals": lambda params: engine.vitals(),
        "/summary": lambda params: engine.summary().as_dict(),
        "/alerts": lambda params: [a.as_dict() for a in engine.alerts()],
        "/metrics": lambda params: _metrics_payload(engine, params),
        "/export": lambda params: engine.export_snapshot(),
    }

    async def app(scope: Scope, receive: Receive, send: Send) -> None:
        # @tra: Adapter.ASGI.NonHTTPScope
        if scope["type"] != "http":
            return

        path = scope["path"]
        route = routes.get(path)
        # @tra: Adapter.ASGI.UnknownPath
        if route is None:
            await _send_response(send, 404, "text/plain", "Not Found")
            return
        # @tra: Adapter.ASGI.MethodNotAllowed
        if scope.get("method", "GET") != "GET":
            await _send_response(send, 405, "text/plain", "Method Not Allowed")
            return
        params = _parse_query_params(scope)
        await _handle_endpoint(
            send,
            lambda: route(params),
            f"Error building {path} endpoint",
        )

    return app
