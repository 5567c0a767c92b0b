"""HTTP client for the diff backend."""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar

import requests

from .models import DiffResult, MalformedPayload, TableDiffOutcome, outcomes_from_list

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_BATCH_KEY = "ID"


@dataclass(frozen=True)
class Fetched(Generic[T]):
    """Outcome of one backend request: a value or the raw error text.

    Attributes:
        value: Decoded payload when the request succeeded
        error: Raw error message (response body text or transport error)
        status_code: HTTP status, None when no response was received
    """

    value: T | None = None
    error: str | None = None
    status_code: int | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class DiffBackendClient:
    """Client for the `/api/diff` endpoints of the diff backend.

    No retries are made; failures come back as `Fetched` errors instead of
    exceptions.
    """

    def __init__(
        self,
        base_url: str,
        session: requests.Session | None = None,
        timeout: float | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def diff_table(self, table: str, key: str, schema: str | None = None) -> Fetched[DiffResult]:
        """Fetch the row diff of one table."""
        params = {}
        if schema:
            params["schema"] = schema
        params["table"] = table
        params["key"] = key
        return self._get("/api/diff", params, DiffResult.from_dict)

    def diff_tables(
        self, key: str | None = None, schema: str | None = None, detect_pk: bool = False
    ) -> Fetched[list[TableDiffOutcome]]:
        """Fetch the diffs of every table the backend lists.

        Args:
            key: Key column to compare by (default: ID)
            schema: Optional schema name
            detect_pk: Let the backend detect primary keys per table
        """
        params = {}
        if schema:
            params["schema"] = schema
        params["key"] = key.strip() if key and key.strip() else DEFAULT_BATCH_KEY
        params["detectPk"] = "true" if detect_pk else "false"
        return self._get("/api/diff/tables", params, outcomes_from_list)

    def _get(self, path: str, params: dict[str, str], decode: Callable[[Any], T]) -> Fetched[T]:
        url = f"{self.base_url}{path}"
        logger.debug(f"GET {url} {params}")
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning(f"Request to {url} failed: {e}")
            return Fetched(error=str(e) or "Request failed")

        if not response.ok:
            logger.warning(f"Backend returned {response.status_code} for {url}")
            return Fetched(
                error=response.text or "Request failed", status_code=response.status_code
            )

        try:
            value = decode(response.json())
        except (ValueError, MalformedPayload) as e:
            logger.warning(f"Invalid payload from {url}: {e}")
            return Fetched(
                error=f"Invalid response from backend: {e}", status_code=response.status_code
            )
        return Fetched(value=value, status_code=response.status_code)
