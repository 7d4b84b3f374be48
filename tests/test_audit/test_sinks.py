"""Tests for the SQLite and webhook audit sinks."""

import json

import httpx
import pytest

from evtax.audit.sinks import SQLiteAuditSink, WebhookAuditSink
from evtax.db.repository import CalculationLogRepository
from evtax.db.schema import create_schema
from evtax.exceptions import AuditSinkError

WEBHOOK_URL = "https://hooks.example.com/evtax"


@pytest.fixture(autouse=True)
def no_sleep(monkeypatch):
    sleeps: list[float] = []
    monkeypatch.setattr("evtax.audit.sinks.time.sleep", sleeps.append)
    return sleeps


def _client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


class TestSQLiteAuditSink:
    def test_append_creates_database(self, tmp_path, audit_record):
        db = tmp_path / "nested" / "audit.db"
        SQLiteAuditSink(db).append(audit_record)

        conn = create_schema(db)
        try:
            rows = CalculationLogRepository(conn).get_entries()
        finally:
            conn.close()
        assert len(rows) == 1
        assert rows[0]["email"] == "laura@example.com"
        assert rows[0]["bracket_without_vehicle"] == "28%"
        assert rows[0]["timestamp"] == "2025-03-14T09:30:00+00:00"

    def test_append_only(self, tmp_path, audit_record):
        db = tmp_path / "audit.db"
        sink = SQLiteAuditSink(db)
        sink.append(audit_record)
        sink.append(audit_record.model_copy(update={"name": "Andrés Ruiz"}))

        conn = create_schema(db)
        try:
            repo = CalculationLogRepository(conn)
            assert repo.count() == 2
            rows = repo.get_entries(limit=1)
        finally:
            conn.close()
        assert [r["name"] for r in rows] == ["Andrés Ruiz"]

    def test_unwritable_path(self, tmp_path, audit_record):
        blocker = tmp_path / "file"
        blocker.write_text("not a directory")
        with pytest.raises(AuditSinkError, match="sqlite"):
            SQLiteAuditSink(blocker / "audit.db").append(audit_record)


class TestWebhookAuditSink:
    def test_posts_row_and_record(self, audit_record):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"ok": True})

        WebhookAuditSink(WEBHOOK_URL, client=_client(handler)).append(audit_record)

        assert len(seen) == 1
        assert str(seen[0].url) == WEBHOOK_URL
        assert "authorization" not in seen[0].headers
        body = json.loads(seen[0].content)
        assert body["values"] == [audit_record.as_row()]
        assert body["record"]["city"] == "Medellín"
        assert body["record"]["client_type"] == "natural"

    def test_bearer_token(self, audit_record):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(201)

        WebhookAuditSink(WEBHOOK_URL, token="s3cret", client=_client(handler)).append(audit_record)
        assert seen[0].headers["authorization"] == "Bearer s3cret"

    def test_retries_server_errors(self, audit_record, no_sleep):
        statuses = iter([503, 500, 200])

        def handler(request):
            return httpx.Response(next(statuses))

        WebhookAuditSink(WEBHOOK_URL, max_retries=3, client=_client(handler)).append(audit_record)
        assert no_sleep == [0.5, 1.0]

    def test_retries_rate_limit(self, audit_record, no_sleep):
        statuses = iter([429, 200])

        def handler(request):
            return httpx.Response(next(statuses))

        WebhookAuditSink(WEBHOOK_URL, client=_client(handler)).append(audit_record)
        assert no_sleep == [0.5]

    def test_retries_transport_errors(self, audit_record, no_sleep):
        calls = []

        def handler(request):
            calls.append(request)
            if len(calls) == 1:
                raise httpx.ConnectError("connection refused", request=request)
            return httpx.Response(200)

        WebhookAuditSink(WEBHOOK_URL, client=_client(handler)).append(audit_record)
        assert len(calls) == 2

    def test_client_error_not_retried(self, audit_record, no_sleep):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(403)

        with pytest.raises(AuditSinkError, match="webhook"):
            WebhookAuditSink(WEBHOOK_URL, client=_client(handler)).append(audit_record)
        assert len(calls) == 1
        assert no_sleep == []

    def test_gives_up_after_max_retries(self, audit_record, no_sleep):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(502)

        with pytest.raises(AuditSinkError, match="after 2 attempts"):
            WebhookAuditSink(WEBHOOK_URL, max_retries=2, client=_client(handler)).append(audit_record)
        assert len(calls) == 2
        assert no_sleep == [0.5]
