"""Fire-and-forget delivery of audit records.

Records are handed to a small thread pool so the caller never waits on, or
fails because of, a sink. Every sink failure is logged and dropped.
"""

import logging
from concurrent.futures import Future, ThreadPoolExecutor

from evtax.audit.sinks import AuditSink, SQLiteAuditSink, WebhookAuditSink
from evtax.config import AuditSettings
from evtax.models.submission import AuditRecord

logger = logging.getLogger(__name__)


class AuditDispatcher:
    """Delivers audit records to every configured sink in the background."""

    def __init__(self, sinks: list[AuditSink], max_workers: int = 2) -> None:
        self.sinks = list(sinks)
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="evtax-audit"
        )

    @classmethod
    def from_settings(cls, settings: AuditSettings) -> "AuditDispatcher":
        sinks: list[AuditSink] = []
        if settings.db_path is not None:
            sinks.append(SQLiteAuditSink(settings.db_path))
        if settings.webhook_url:
            sinks.append(
                WebhookAuditSink(
                    settings.webhook_url,
                    token=settings.webhook_token,
                    timeout=settings.webhook_timeout,
                    max_retries=settings.webhook_max_retries,
                )
            )
        return cls(sinks)

    def dispatch(self, record: AuditRecord) -> Future | None:
        """Schedule delivery of ``record``.

        Returns the pending job, or None when there is no sink or the
        dispatcher has been shut down.
        """
        if not self.sinks:
            logger.warning("No audit sink configured, skipping calculation record")
            return None
        try:
            return self._executor.submit(self._deliver, record)
        except RuntimeError as e:
            # Executor already shut down
            logger.warning("Audit dispatcher is closed, dropping calculation record: %s", e)
            return None

    def _deliver(self, record: AuditRecord) -> int:
        """Send to each sink. Returns the number of sinks that stored the record."""
        delivered = 0
        for sink in self.sinks:
            try:
                sink.append(record)
                delivered += 1
            except Exception:
                logger.exception("Failed to append calculation record to %s sink", sink.name)
        return delivered

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> "AuditDispatcher":
        return self

    def __exit__(self, *exc_info) -> None:
        self.shutdown(wait=True)
