"""Logging configuration for ey-core runs.

Provides configurable logging with:
- File-based logging with rotation
- Console output for real-time debugging
- Performance timing decorators for efficiency analysis

Environment Variables:
    EY_CORE_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR (default: INFO)
    EY_CORE_LOG_FILE: Path to log file (default: ~/.ey-core/ey-core.log)
    EY_CORE_LOG_MAX_SIZE: Max log file size in MB (default: 10)
    EY_CORE_LOG_BACKUPS: Number of backup files to keep (default: 5)

Usage:
    from ey_core.utils.logging_config import setup_logging, timed

    setup_logging()  # Call once at startup

    @timed("service_restart")
    def restart(self, service):
        ...

    with timed_section("link", path="/etc/localtime"):
        ...
"""
import functools
import logging
import os
import time
from contextlib import contextmanager
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Callable, Any

# Performance logger - separate from main logger for easy filtering
perf_logger = logging.getLogger("ey_core.perf")


def get_log_level() -> int:
    """Get log level from environment."""
    level_str = os.environ.get("EY_CORE_LOG_LEVEL", "INFO").upper()
    return getattr(logging, level_str, logging.INFO)


def get_log_file() -> Path:
    """Get log file path from environment."""
    default_path = Path.home() / ".ey-core" / "ey-core.log"
    path_str = os.environ.get("EY_CORE_LOG_FILE", str(default_path))
    return Path(path_str)


def setup_logging(level: Optional[int] = None, log_file: Optional[Path] = None) -> None:
    """Configure logging for the application.

    Sets up:
    - Console handler (INFO+ by default, respects EY_CORE_LOG_LEVEL)
    - File handler with rotation (DEBUG level - captures everything)
    """
    log_level = level if level is not None else get_log_level()
    log_file = log_file or get_log_file()
    max_size_mb = int(os.environ.get("EY_CORE_LOG_MAX_SIZE", "10"))
    backup_count = int(os.environ.get("EY_CORE_LOG_BACKUPS", "5"))

    log_file.parent.mkdir(parents=True, exist_ok=True)

    main_format = logging.Formatter(
        "%(asctime)s.%(msecs)03d | %(name)-28s | %(levelname)-7s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(main_format)

    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=max_size_mb * 1024 * 1024,
        backupCount=backup_count,
        encoding="utf-8"
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(main_format)

    root_logger = logging.getLogger("ey_core")
    root_logger.setLevel(logging.DEBUG)  # Capture all, handlers filter
    root_logger.handlers.clear()
    root_logger.addHandler(console_handler)
    root_logger.addHandler(file_handler)

    root_logger.info(f"Logging initialized: level={logging.getLevelName(log_level)}, file={log_file}")


def _log_timing(operation: str, target: Optional[str], start: float, error: Optional[Exception] = None, extra: str = "") -> None:
    elapsed = (time.perf_counter() - start) * 1000  # ms
    if error is None:
        msg = f"{operation:20s} | {target or 'N/A':15s} | {elapsed:8.2f}ms | OK"
    else:
        msg = f"{operation:20s} | {target or 'N/A':15s} | {elapsed:8.2f}ms | FAIL: {error}"
    if extra:
        msg += f" | {extra}"

    if error is None:
        perf_logger.info(msg)
    else:
        perf_logger.warning(msg)


def timed(operation: str):
    """Decorator to log execution time of a function.

    The first positional argument after ``self`` is logged as the target
    (e.g. the service name).

    Usage:
        @timed("service_restart")
        def restart(self, service):
            ...
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            target = args[1] if len(args) > 1 else None
            start = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                _log_timing(operation, target, start, e)
                raise
            _log_timing(operation, target, start)
            return result

        return wrapper

    return decorator


@contextmanager
def timed_section(operation: str, target: Optional[str] = None, **extra):
    """Context manager for timing code sections.

    Usage:
        with timed_section("converge", target="/etc/localtime", zone="UTC"):
            ...
    """
    start = time.perf_counter()
    extra_str = " | ".join(f"{k}={v}" for k, v in extra.items()) if extra else ""

    try:
        yield
    except Exception as e:
        _log_timing(operation, target, start, e, extra_str)
        raise
    _log_timing(operation, target, start, extra=extra_str)
