"""Data access layer for the calculation audit log."""

import sqlite3

from evtax.models.submission import AuditRecord


class CalculationLogRepository:
    """Append-only access to the ``calculation_log`` table."""

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    def append(self, record: AuditRecord) -> int:
        """Insert one audit record. Returns the row ID."""
        cursor = self.conn.execute(
            """INSERT INTO calculation_log
               (timestamp, name, email, id_document, phone, city, client_type,
                monthly_income, other_deductions, vehicle_value,
                annual_savings, bracket_without_vehicle, bracket_with_vehicle)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
            tuple(record.as_row()),
        )
        self.conn.commit()
        return cursor.lastrowid

    def get_entries(self, limit: int | None = None) -> list[dict]:
        """Retrieve audit rows, newest first."""
        sql = "SELECT * FROM calculation_log ORDER BY id DESC"
        params: tuple = ()
        if limit:
            sql += " LIMIT ?"
            params = (limit,)
        cursor = self.conn.execute(sql, params)
        columns = [desc[0] for desc in cursor.description]
        return [dict(zip(columns, row)) for row in cursor.fetchall()]

    def count(self) -> int:
        row = self.conn.execute("SELECT COUNT(*) FROM calculation_log").fetchone()
        return row[0] if row else 0
