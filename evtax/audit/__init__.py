"""Audit logging of calculation requests."""

from evtax.audit.dispatcher import AuditDispatcher
from evtax.audit.sinks import AuditSink, SQLiteAuditSink, WebhookAuditSink

__all__ = ["AuditDispatcher", "AuditSink", "SQLiteAuditSink", "WebhookAuditSink"]
