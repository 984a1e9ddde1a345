"""HTTP server exposing the aggregated snapshot as JSON."""

from __future__ import annotations

import base64
import errno
import json
import logging
import threading
import time
from collections import deque
from functools import partial
from http import HTTPStatus
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any, ClassVar, Deque, Optional

from sysstats import __version__
from sysstats.aggregator import SnapshotAggregator
from sysstats.core.config import SECURITY, SERVER, SecurityConfig

from .runner import AggregatorRunner

logger = logging.getLogger(__name__)


class StatsRequestHandler(BaseHTTPRequestHandler):
    """Serves ``/api/stats``, ``/api/history``, ``/api/diagnostics`` and ``/healthz``."""

    server_version: ClassVar[str] = f"sysstats/{__version__}"
    _rate_lock: ClassVar[threading.Lock] = threading.Lock()
    _request_log: ClassVar[dict[str, Deque[float]]] = {}

    def __init__(
        self,
        *args: Any,
        runner: AggregatorRunner,
        security_config: SecurityConfig = SECURITY,
        **kwargs: Any,
    ) -> None:
        self._runner = runner
        self._security = security_config
        self._response_origin: Optional[str] = None
        super().__init__(*args, **kwargs)

    def do_GET(self) -> None:  # noqa: N802
        self._response_origin = None
        path = self.path.split("?", 1)[0]
        if path == "/healthz":
            self._send_json({"status": "ok"})
            return
        routes = {
            "/api/stats": self._runner.snapshot,
            "/api/history": self._runner.aggregator.history,
            "/api/diagnostics": self._runner.aggregator.diagnostics,
        }
        handler = routes.get(path)
        if handler is None:
            self._send_json({"error": "not_found"}, status=HTTPStatus.NOT_FOUND)
            return
        if not self._prepare_api_request():
            return
        try:
            payload = handler()
        except Exception:
            logger.exception("Error atendiendo %s", path)
            self._send_json({"error": "internal"}, status=HTTPStatus.INTERNAL_SERVER_ERROR)
            return
        self._send_json(payload)

    def do_OPTIONS(self) -> None:  # noqa: N802
        allowed, origin = self._resolve_origin()
        if not allowed:
            return
        self._response_origin = origin
        self.send_response(HTTPStatus.NO_CONTENT)
        self._apply_cors_headers(origin)
        self.send_header("Access-Control-Allow-Methods", "GET, OPTIONS")
        self.send_header("Access-Control-Allow-Headers", "Authorization, Content-Type")
        self.send_header("Access-Control-Max-Age", "600")
        self.end_headers()

    def log_message(self, format: str, *args: Any) -> None:  # noqa: A003 - parity with BaseHTTPRequestHandler
        logger.debug("%s - %s", self.client_address[0], format % args)

    def _send_json(self, payload: Any, status: HTTPStatus = HTTPStatus.OK) -> None:
        body = json.dumps(payload, ensure_ascii=False, default=str).encode("utf-8")
        self.send_response(status)
        self._apply_cors_headers(self._response_origin)
        self.send_header("Content-Type", "application/json; charset=utf-8")
        self.send_header("Cache-Control", "no-store")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def _prepare_api_request(self) -> bool:
        allowed, origin = self._resolve_origin()
        if not allowed:
            return False
        self._response_origin = origin
        if not self._check_basic_auth():
            self._require_auth()
            return False
        return self._enforce_rate_limit()

    def _resolve_origin(self) -> tuple[bool, Optional[str]]:
        origin = self.headers.get("Origin")
        allowed = self._security.allowed_origins
        wildcard = "*" in allowed and not self._security.allow_credentials
        if origin:
            if "*" in allowed or origin in allowed:
                return True, "*" if wildcard else origin
            self._respond_forbidden("Origin no autorizado")
            return False, None
        return True, "*" if wildcard else None

    def _apply_cors_headers(self, origin: Optional[str]) -> None:
        if origin:
            self.send_header("Access-Control-Allow-Origin", origin)
            if self._security.allow_credentials and origin != "*":
                self.send_header("Access-Control-Allow-Credentials", "true")
        self.send_header("Vary", "Origin")

    def _check_basic_auth(self) -> bool:
        username = self._security.basic_auth_username
        password = self._security.basic_auth_password
        if not username or not password:
            return True
        header = self.headers.get("Authorization")
        if not header or not header.startswith("Basic "):
            return False
        try:
            decoded = base64.b64decode(header.split(" ", 1)[1]).decode("utf-8")
        except (ValueError, UnicodeDecodeError):
            return False
        provided_user, _, provided_pass = decoded.partition(":")
        return provided_user == username and provided_pass == password

    def _require_auth(self) -> None:
        self.send_response(HTTPStatus.UNAUTHORIZED)
        self._apply_cors_headers(self._response_origin)
        self.send_header("WWW-Authenticate", 'Basic realm="sysstats", charset="UTF-8"')
        self.send_header("Content-Length", "0")
        self.end_headers()

    def _enforce_rate_limit(self) -> bool:
        if not self._security.enable_rate_limit:
            return True
        client_ip = self.client_address[0]
        now = time.monotonic()
        window = max(1, self._security.rate_limit_window_seconds)
        max_requests = max(1, self._security.rate_limit_requests)
        with self._rate_lock:
            bucket = self._request_log.setdefault(client_ip, deque())
            while bucket and now - bucket[0] > window:
                bucket.popleft()
            if len(bucket) >= max_requests:
                limited = True
            else:
                bucket.append(now)
                limited = False
        if limited:
            logger.warning("Rate limit excedido para %s", client_ip)
            self.send_response(HTTPStatus.TOO_MANY_REQUESTS)
            self._apply_cors_headers(self._response_origin)
            self.send_header("Retry-After", str(window))
            self.send_header("Content-Length", "0")
            self.end_headers()
            return False
        return True

    def _respond_forbidden(self, message: str) -> None:
        logger.warning("Solicitud bloqueada por CORS desde %s: %s", self.client_address[0], message)
        self._send_json({"error": "forbidden", "message": message}, status=HTTPStatus.FORBIDDEN)


class StatsServer:
    """Wraps the HTTP server and the aggregator's event-loop thread."""

    def __init__(
        self,
        host: str = SERVER.host,
        port: int = SERVER.port,
        aggregator: SnapshotAggregator | None = None,
        security_config: SecurityConfig = SECURITY,
        port_attempts: int = SERVER.port_attempts,
    ) -> None:
        self._runner = AggregatorRunner(aggregator or SnapshotAggregator())
        handler = partial(StatsRequestHandler, runner=self._runner, security_config=security_config)

        attempts = 1 if port == 0 else max(1, port_attempts)
        for attempt in range(attempts):
            try:
                self._httpd = ThreadingHTTPServer((host, port + attempt), handler)
                break
            except OSError as exc:
                if exc.errno != errno.EADDRINUSE or attempt == attempts - 1:
                    raise
                logger.info("Puerto %d ocupado, probando el siguiente", port + attempt)
        self._runner.start()

    @property
    def aggregator(self) -> SnapshotAggregator:
        return self._runner.aggregator

    def serve_forever(self) -> None:
        self._httpd.serve_forever()

    def stop(self) -> None:
        """Stop a ``serve_forever`` running in another thread, then release resources."""

        try:
            self._httpd.shutdown()
        finally:
            self.close()

    def close(self) -> None:
        self._httpd.server_close()
        self._runner.stop()

    def server_address(self) -> str:
        host, port = self._httpd.server_address[:2]
        return f"http://{host}:{port}"


def create_app(
    host: str = SERVER.host,
    port: int = SERVER.port,
    aggregator: SnapshotAggregator | None = None,
    security_config: SecurityConfig = SECURITY,
) -> StatsServer:
    """Factory helper used by the CLI, scripts and tests."""

    return StatsServer(host=host, port=port, aggregator=aggregator, security_config=security_config)
