"""Current-view state for interactive diff browsing.

A DiffSession holds the form fields (schema, table, key) and the single
current view (result, batch results, error, loading flag). Each action issues
one request and replaces the view wholesale when its response arrives.

Every request is tagged with a generation number. A response is applied only
if no newer request was started meanwhile, so a slow stale response never
overwrites a later one.
"""

import logging

from .client import DiffBackendClient, Fetched
from .models import DiffResult, TableDiffOutcome
from .render import NoKeyAvailable, resolve_key

logger = logging.getLogger(__name__)

MISSING_FIELDS = "Please enter required fields: table and key."


class DiffSession:
    """View model for single-table and batch comparisons."""

    def __init__(self, client: DiffBackendClient, schema: str = "", table: str = "", key: str = ""):
        self.client = client
        self.schema = schema
        self.table = table
        self.key = key

        self.loading = False
        self.error: str | None = None
        self.result: DiffResult | None = None
        self.list_results: list[TableDiffOutcome] | None = None
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    def submit(self) -> bool:
        """Compare the table named in the form fields.

        Returns:
            True if the result was stored, False on any error
        """
        self.error = None
        self.result = None
        self.list_results = None
        if not self.table or not self.key:
            self.error = MISSING_FIELDS
            return False
        return self._fetch_result(self.table, self.key)

    def open_table(self, outcome: TableDiffOutcome) -> bool:
        """Open the detailed diff of one table from the batch list.

        The batch list is kept so the user can move between tables.
        """
        self.error = None
        self.result = None
        try:
            key = resolve_key(outcome, self.key)
        except NoKeyAvailable as e:
            self.error = str(e)
            return False

        self.table = outcome.table
        self.key = key
        return self._fetch_result(outcome.table, key)

    def compare_listed(self) -> bool:
        """Compare every table the backend lists, by the form key or ID."""
        self.error = None
        self.result = None
        self.list_results = None
        generation = self._begin()
        try:
            fetched = self.client.diff_tables(
                key=self.key, schema=self.schema or None, detect_pk=False
            )
            if not self._is_current(generation):
                return False
            return self._apply(fetched, "list_results")
        finally:
            self._end(generation)

    def _fetch_result(self, table: str, key: str) -> bool:
        generation = self._begin()
        try:
            fetched = self.client.diff_table(table, key, schema=self.schema or None)
            if not self._is_current(generation):
                return False
            return self._apply(fetched, "result")
        finally:
            self._end(generation)

    def _begin(self) -> int:
        self._generation += 1
        self.loading = True
        return self._generation

    def _is_current(self, generation: int) -> bool:
        if generation != self._generation:
            logger.info(
                f"Discarding stale response (request {generation}, latest {self._generation})"
            )
            return False
        return True

    def _end(self, generation: int) -> None:
        if generation == self._generation:
            self.loading = False

    def _apply(self, fetched: Fetched, attr: str) -> bool:
        if not fetched.ok:
            self.error = fetched.error
            return False
        setattr(self, attr, fetched.value)
        return True
