"""Audit logging for changes made during convergence runs.

Provides change tracking with:
- Timestamped entries for every link change
- Before/after targets
- Structured JSON log format
- Separate audit log file
"""
import json
import logging
import os
from dataclasses import dataclass, asdict
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

DEFAULT_AUDIT_LOG = os.path.expanduser("~/.ey-core/audit.log")

# Dedicated audit logger, silent until configured
audit_logger = logging.getLogger("ey_core.audit")
audit_logger.addHandler(logging.NullHandler())
audit_logger.propagate = False


def setup_audit_logging(log_file: Optional[str] = None) -> str:
    """Configure audit logging to file.

    Args:
        log_file: Audit log path. Defaults to ~/.ey-core/audit.log

    Returns:
        The path being written to
    """
    log_file = log_file or DEFAULT_AUDIT_LOG
    Path(log_file).parent.mkdir(parents=True, exist_ok=True)

    audit_logger.setLevel(logging.INFO)
    for handler in list(audit_logger.handlers):
        audit_logger.removeHandler(handler)
        handler.close()

    handler = RotatingFileHandler(
        log_file,
        maxBytes=10 * 1024 * 1024,  # 10MB
        backupCount=10,
        encoding="utf-8",
    )
    # One JSON document per line
    handler.setFormatter(logging.Formatter("%(message)s"))
    audit_logger.addHandler(handler)

    return log_file


@dataclass
class ChangeRecord:
    """Record of a change applied to the host."""
    timestamp: str
    path: str
    operation: str  # link, notify
    user: str
    dry_run: bool
    success: bool
    context: str = ""
    before: Optional[str] = None
    after: Optional[str] = None
    error: Optional[str] = None

    def to_json(self) -> str:
        """Convert to JSON string."""
        return json.dumps(asdict(self), indent=None)

    @classmethod
    def from_json(cls, json_str: str) -> "ChangeRecord":
        """Parse from JSON string."""
        data = json.loads(json_str)
        return cls(**data)


def log_change(
    path: str,
    operation: str,
    success: bool,
    before: Optional[str] = None,
    after: Optional[str] = None,
    error: Optional[str] = None,
    dry_run: bool = False,
    context: str = "",
    user: Optional[str] = None,
) -> ChangeRecord:
    """Log a change to the audit log.

    Returns:
        The ChangeRecord that was logged
    """
    record = ChangeRecord(
        timestamp=datetime.now(timezone.utc).isoformat(),
        path=path,
        operation=operation,
        user=user or "system",
        dry_run=dry_run,
        success=success,
        context=context,
        before=before,
        after=after,
        error=error,
    )

    audit_logger.info(record.to_json())

    return record


def get_recent_changes(
    log_file: Optional[str] = None,
    path: Optional[str] = None,
    operation: Optional[str] = None,
    limit: int = 100,
) -> list[ChangeRecord]:
    """Read recent changes from the audit log.

    Args:
        log_file: Path to audit log. Defaults to ~/.ey-core/audit.log
        path: Filter by changed path
        operation: Filter by operation type
        limit: Maximum number of records to return

    Returns:
        List of ChangeRecords, most recent first
    """
    log_file = log_file or DEFAULT_AUDIT_LOG

    if not os.path.exists(log_file):
        return []

    records = []
    with open(log_file, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            try:
                record = ChangeRecord.from_json(line)
            except (json.JSONDecodeError, TypeError):
                continue  # Skip malformed lines

            if path and record.path != path:
                continue
            if operation and record.operation != operation:
                continue

            records.append(record)

    if limit <= 0:
        return []
    return list(reversed(records[-limit:]))
