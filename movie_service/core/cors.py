"""Origin allow-list used to decide which CORS headers a response carries."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Iterable

from movie_service.core.config import get_settings

logger = logging.getLogger(__name__)

ALLOWED_METHODS = ("GET", "POST", "PATCH", "DELETE")


class OriginGate:
    """Echo the request origin back only when it is on the allow-list.

    Requests without an ``Origin`` header come from the same origin or from a
    non-browser client and are always allowed. Rejected origins get no CORS
    headers at all; the browser enforces the restriction on its side.
    """

    def __init__(self, allowed_origins: Iterable[str]) -> None:
        self._allowed = frozenset(allowed_origins)

    @property
    def allowed_origins(self) -> frozenset[str]:
        return self._allowed

    def allows(self, origin: str | None) -> bool:
        return not origin or origin in self._allowed

    def headers_for(self, origin: str | None, *, preflight: bool = False) -> dict[str, str]:
        if not self.allows(origin):
            logger.debug("Origin %s is not allowed, withholding CORS headers", origin)
            return {}
        headers = {"Access-Control-Allow-Origin": origin or "*"}
        if preflight:
            headers["Access-Control-Allow-Methods"] = ", ".join(ALLOWED_METHODS)
        return headers


@lru_cache(maxsize=1)
def get_origin_gate() -> OriginGate:
    """FastAPI dependency returning the process-wide gate."""

    return OriginGate(get_settings().allowed_origins)
