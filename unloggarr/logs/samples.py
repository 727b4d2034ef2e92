# FILE: unloggarr/logs/samples.py
"""Built-in records served when the log proxy cannot be reached."""

from datetime import datetime, timezone

from unloggarr.logs.schemas import LogRecord, Severity


def _ts(value: str) -> datetime:
    return datetime.fromisoformat(value).replace(tzinfo=timezone.utc)


SAMPLE_LOGS = (
    LogRecord(sequence=1, timestamp=_ts("2024-01-15T10:30:15.123"), severity=Severity.INFO,
              message="Application started successfully on port 3000", source="server.js"),
    LogRecord(sequence=2, timestamp=_ts("2024-01-15T10:30:16.456"), severity=Severity.INFO,
              message="Connected to database: mongodb://localhost:27017/myapp", source="database.js"),
    LogRecord(sequence=3, timestamp=_ts("2024-01-15T10:31:02.789"), severity=Severity.WARN,
              message="Deprecated API endpoint /api/v1/users accessed", source="api.js"),
    LogRecord(sequence=4, timestamp=_ts("2024-01-15T10:31:15.234"), severity=Severity.ERROR,
              message="Failed to connect to external API: timeout after 5000ms", source="external-api.js"),
    LogRecord(sequence=5, timestamp=_ts("2024-01-15T10:31:20.567"), severity=Severity.DEBUG,
              message="User authentication token validated for user ID: 12345", source="auth.js"),
    LogRecord(sequence=6, timestamp=_ts("2024-01-15T10:32:01.890"), severity=Severity.ERROR,
              message="Database query failed: SELECT * FROM users WHERE active = true", source="database.js"),
    LogRecord(sequence=7, timestamp=_ts("2024-01-15T10:32:15.123"), severity=Severity.INFO,
              message="Cache cleared successfully for key: user_sessions", source="cache.js"),
)

# Curated from the files the proxy exposes; compressed, empty and binary logs excluded
AVAILABLE_LOG_FILES = sorted([
    "/var/log/syslog",
    "/var/log/syslog.1",
    "/var/log/syslog.2",
    "/var/log/dmesg",
    "/var/log/docker.log",
    "/var/log/graphql-api.log",
    "/var/log/tailscale.log",
    "/var/log/tailscale-utils.log",
    "/var/log/vfio-pci",
    "/var/log/vfio-pci-errors",
    "/var/log/gitflash",
    "/var/log/gitflash1",
    "/var/log/gitcount",
])
