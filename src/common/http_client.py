"""Shared HTTP helpers used by the repository clients and mirror discovery.

Encapsulates common request/timeout error handling so modules avoid
duplicating try/except blocks. A 200 response yields the body, a 404 is
reported as NotFoundError (a valid negative answer for callers), anything
else is an HttpError.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional, Tuple

import requests

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer

logger = logging.getLogger(__name__)


class HttpError(Exception):
    """Non-success HTTP response or transport failure (status 0)."""

    def __init__(self, url: str, status: int, body: str = ""):
        self.url = safe_url(url)
        self.status = status
        self.body = body
        if status:
            message = f"GET {self.url}: {status}, body: {body}"
        else:
            message = f"GET {self.url}: {body}"
        super().__init__(message)


class NotFoundError(HttpError):
    """The requested resource does not exist (HTTP 404)."""

    def __init__(self, url: str):
        super().__init__(url, 404, "not found")


def get(
    url: str,
    *,
    context: str,
    auth: Optional[Tuple[str, str]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> bytes:
    """Perform a GET request and return the response body.

    Args:
        url: Target URL.
        context: Human-readable source tag for logs (e.g., "github").
        auth: Optional (username, token) basic-auth credentials.
        headers: Optional request headers.

    Returns:
        bytes: Response body of a 200 response.

    Raises:
        NotFoundError: On a 404 response.
        HttpError: On any other status, a timeout or a connection error.
    """
    safe_target = safe_url(url)
    with Timer() as t:
        if is_debug_enabled(logger):
            logger.debug(
                "HTTP request",
                extra=extra_context(
                    event="http_request",
                    component="http_client",
                    action="GET",
                    target=safe_target,
                    context=context
                )
            )
        try:
            res = requests.get(
                url,
                timeout=Constants.REQUEST_TIMEOUT,
                auth=auth,
                headers=headers,
            )
        except requests.Timeout as exc:
            logger.error(
                "%s request timed out after %s seconds",
                context,
                Constants.REQUEST_TIMEOUT,
            )
            raise HttpError(url, 0, "request timed out") from exc
        except requests.RequestException as exc:  # includes ConnectionError
            logger.error("%s connection error: %s", context, exc)
            raise HttpError(url, 0, str(exc)) from exc

    if is_debug_enabled(logger):
        logger.debug(
            "HTTP response",
            extra=extra_context(
                event="http_response",
                component="http_client",
                action="GET",
                status_code=res.status_code,
                duration_ms=t.duration_ms(),
                target=safe_target,
                context=context
            )
        )

    if res.status_code == 200:
        return res.content
    if res.status_code == 404:
        raise NotFoundError(url)
    raise HttpError(url, res.status_code, res.text)


def get_json(url: str, *, context: str, **kwargs: Any) -> Any:
    """Perform a GET request and decode the JSON body.

    Raises:
        NotFoundError: On a 404 response.
        HttpError: On transport failures, non-success statuses or a body
            that is not valid JSON.
    """
    body = get(url, context=context, **kwargs)
    try:
        return json.loads(body)
    except ValueError as exc:
        text = body.decode("utf-8", errors="replace")
        raise HttpError(url, 200, f"error unmarshalling: {exc}, resp: {text}") from exc
