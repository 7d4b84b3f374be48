"""Audit sinks: append-only destinations for calculation records."""

import logging
import sqlite3
import time
from abc import ABC, abstractmethod
from pathlib import Path

import httpx

from evtax.db.repository import CalculationLogRepository
from evtax.db.schema import create_schema
from evtax.exceptions import AuditSinkError
from evtax.models.submission import AuditRecord

logger = logging.getLogger(__name__)

INITIAL_BACKOFF = 0.5  # seconds


class AuditSink(ABC):
    """Abstract base class for audit destinations."""

    name = "sink"

    @abstractmethod
    def append(self, record: AuditRecord) -> None:
        """Store one record. Raises AuditSinkError on failure."""
        ...


class SQLiteAuditSink(AuditSink):
    """Appends records to a local SQLite ``calculation_log`` table.

    A connection is opened per append so the sink can be used from worker
    threads.
    """

    name = "sqlite"

    def __init__(self, db_path: Path):
        self.db_path = db_path

    def append(self, record: AuditRecord) -> None:
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = create_schema(self.db_path)
        except (OSError, sqlite3.Error) as e:
            raise AuditSinkError(self.name, f"cannot open {self.db_path}: {e}") from e
        try:
            row_id = CalculationLogRepository(conn).append(record)
        except sqlite3.Error as e:
            raise AuditSinkError(self.name, str(e)) from e
        finally:
            conn.close()
        logger.info("Stored calculation record %d in %s", row_id, self.db_path)


class WebhookAuditSink(AuditSink):
    """POSTs records as JSON to an external endpoint (e.g. a spreadsheet bridge)."""

    name = "webhook"

    def __init__(
        self,
        url: str,
        token: str | None = None,
        timeout: float = 10.0,
        max_retries: int = 3,
        client: httpx.Client | None = None,
    ):
        self.url = url
        self.token = token
        self.timeout = timeout
        self.max_retries = max(max_retries, 1)
        self._client = client

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def append(self, record: AuditRecord) -> None:
        payload = {
            "values": [record.as_row()],
            "record": record.model_dump(mode="json"),
        }
        client = self._client or httpx.Client(timeout=self.timeout)
        last_error: Exception | None = None
        try:
            for attempt in range(self.max_retries):
                try:
                    response = client.post(self.url, json=payload, headers=self._headers())
                    response.raise_for_status()
                    logger.info("Webhook accepted calculation record (status %d)", response.status_code)
                    return
                except httpx.HTTPStatusError as exc:
                    last_error = exc
                    # Client errors will not succeed on retry
                    if exc.response.status_code < 500 and exc.response.status_code != 429:
                        break
                except httpx.HTTPError as exc:
                    last_error = exc

                if attempt < self.max_retries - 1:
                    backoff = INITIAL_BACKOFF * (2 ** attempt)
                    logger.warning(
                        "Webhook delivery failed (attempt %d/%d): %s. Retrying in %.1fs...",
                        attempt + 1, self.max_retries, last_error, backoff,
                    )
                    time.sleep(backoff)
        finally:
            if self._client is None:
                client.close()

        raise AuditSinkError(self.name, f"delivery failed after {self.max_retries} attempts: {last_error}")
