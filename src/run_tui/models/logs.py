from __future__ import annotations

import enum
from datetime import datetime, timezone
from typing import Any, Optional

from .common import RunModel, Timestamp


class Order(str, enum.Enum):
    NEWEST_FIRST = "timestamp desc"
    OLDEST_FIRST = "timestamp asc"


def format_timestamp(ts: datetime) -> str:
    """RFC 3339 in UTC, the form the logging filter language compares against."""
    return ts.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")


class LogEntry(RunModel):
    timestamp: Timestamp
    severity: str = "DEFAULT"
    payload: str = ""
    log_name: Optional[str] = None
    # exact upstream text, kept so nanosecond precision survives the next filter
    timestamp_text: Optional[str] = None

    @property
    def filter_timestamp(self) -> str:
        return self.timestamp_text or format_timestamp(self.timestamp)

    def format_line(self) -> str:
        return f"[{self.timestamp.astimezone(timezone.utc).strftime('%H:%M:%S')}] {self.payload}"

    @classmethod
    def from_api(cls, item: dict[str, Any]) -> "LogEntry":
        payload = item.get("textPayload")
        if payload is None and "jsonPayload" in item:
            json_payload = item["jsonPayload"]
            payload = json_payload.get("message") or str(json_payload)
        if payload is None and "protoPayload" in item:
            payload = str(item["protoPayload"])
        return cls(
            timestamp=item["timestamp"],
            timestamp_text=item["timestamp"],
            severity=item.get("severity", "DEFAULT"),
            payload=payload or "",
            log_name=item.get("logName"),
        )
