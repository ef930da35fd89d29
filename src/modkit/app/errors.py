"""RFC 7807 Problem Details for modkit hosts.

Provides :class:`ApiProblem`, an exception that renders itself as an
``application/problem+json`` response, the error-type URNs used by
the host, and a Flask error-handler registration function.

Usage::

    raise ApiProblem(UNAUTHORIZED, "The request requires valid credentials", 401)
"""

from __future__ import annotations

import logging
from typing import Any

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

log = logging.getLogger(__name__)

_P = "urn:modkit:error:"

BAD_REQUEST = _P + "badRequest"
FORBIDDEN = _P + "forbidden"
NOT_FOUND = _P + "notFound"
SERVER_INTERNAL = _P + "serverInternal"
UNAUTHORIZED = _P + "unauthorized"

PROBLEM_CONTENT_TYPE = "application/problem+json"


class ApiProblem(Exception):
    """An RFC 7807 *problem details* object that doubles as an exception.

    Parameters
    ----------
    error_type:
        A URN string (one of the constants above) or ``"about:blank"``.
    detail:
        Human-readable explanation of the problem.
    status:
        HTTP status code (default 400).
    title:
        Short summary, omitted when ``None``.
    headers:
        Extra HTTP headers to include on the response
        (e.g. ``WWW-Authenticate``).

    """

    def __init__(
        self,
        error_type: str,
        detail: str,
        status: int = 400,
        *,
        title: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.error_type = error_type
        self.detail = detail
        self.status = status
        self.title = title
        self.extra_headers = headers or {}
        super().__init__(detail)

    def to_dict(self) -> dict[str, Any]:
        """Serialise to the RFC 7807 JSON structure."""
        body: dict[str, Any] = {
            "type": self.error_type,
            "detail": self.detail,
            "status": self.status,
        }
        if self.title is not None:
            body["title"] = self.title
        return body

    def to_response(self):
        """Build a Flask :class:`~flask.Response`."""
        resp = jsonify(self.to_dict())
        resp.status_code = self.status
        resp.headers["Content-Type"] = PROBLEM_CONTENT_TYPE
        resp.headers["Cache-Control"] = "no-store"
        for key, value in self.extra_headers.items():
            resp.headers[key] = value
        return resp


def register_error_handlers(app: Flask) -> None:
    """Attach handlers that produce RFC 7807 responses for all errors."""

    @app.errorhandler(ApiProblem)
    def _handle_api_problem(exc: ApiProblem):
        return exc.to_response()

    @app.errorhandler(HTTPException)
    def _handle_http_exception(exc: HTTPException):
        problem = ApiProblem(
            "about:blank",
            exc.description or "An error occurred",
            exc.code or 500,
            title=exc.name,
        )
        return problem.to_response()

    @app.errorhandler(Exception)
    def _handle_unhandled(exc: Exception):
        log.exception("Unhandled exception during request")
        problem = ApiProblem(
            SERVER_INTERNAL,
            "An unexpected internal error occurred",
            500,
        )
        return problem.to_response()
