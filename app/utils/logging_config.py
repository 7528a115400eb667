"""
Logging setup for the Hiring AI API: one dictConfig, environment-driven
"""
import functools
import logging
import logging.config
import os
import time
from datetime import datetime
from pathlib import Path
from typing import Any, Dict

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)-36s | %(funcName)-20s:%(lineno)-4d | %(message)s"
MAX_LOG_BYTES = 10 * 1024 * 1024


def _rotating_file(filename: Path, level: str) -> Dict[str, Any]:
    return {
        "class": "logging.handlers.RotatingFileHandler",
        "level": level,
        "formatter": "detailed",
        "filename": str(filename),
        "maxBytes": MAX_LOG_BYTES,
        "backupCount": 5,
        "encoding": "utf8",
    }


def setup_logging(level: str = "INFO", log_to_file: bool = True) -> None:
    """
    Configure the root, uvicorn and pdfminer loggers.

    Console output always goes to stdout. With log_to_file, $LOG_DIR (default
    ./logs) also gets a daily hiring_ai_<date>.log and an errors-only file.
    """
    handlers: Dict[str, Any] = {
        "console": {
            "class": "logging.StreamHandler",
            "level": level,
            "formatter": "detailed",
            "stream": "ext://sys.stdout",
        }
    }

    log_file = None
    if log_to_file:
        log_dir = Path(os.getenv("LOG_DIR", "logs"))
        log_dir.mkdir(parents=True, exist_ok=True)
        stamp = datetime.now().strftime("%Y%m%d")
        log_file = log_dir / f"hiring_ai_{stamp}.log"
        handlers["file"] = _rotating_file(log_file, level)
        handlers["error_file"] = _rotating_file(log_dir / f"hiring_ai_errors_{stamp}.log", "ERROR")

    app_handlers = list(handlers)
    server_handlers = [h for h in app_handlers if h != "error_file"]

    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"detailed": {"format": LOG_FORMAT, "datefmt": "%Y-%m-%d %H:%M:%S"}},
        "handlers": handlers,
        "loggers": {
            "": {"level": level, "handlers": app_handlers, "propagate": False},
            "uvicorn": {"level": "INFO", "handlers": server_handlers, "propagate": False},
            "uvicorn.access": {"level": "INFO", "handlers": ["console"], "propagate": False},
            # chatty on malformed PDFs
            "pdfminer": {"level": "ERROR", "handlers": [], "propagate": True},
        },
    })

    logger = logging.getLogger("hiring_ai.logging")
    logger.info(f"Logging configured - Level: {level}, File: {log_file or 'disabled'}")


def get_logger(name: str) -> logging.Logger:
    """Logger under the hiring_ai namespace (pass __name__)"""
    return logging.getLogger(f"hiring_ai.{name}")


def log_api_call(operation: str):
    """Log start, duration and failure of an async route handler"""
    def decorator(func):
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            logger = get_logger(f"api.{func.__module__}")
            start_time = time.time()
            logger.info(f"API {operation} started - {func.__name__}")
            try:
                result = await func(*args, **kwargs)
            except Exception as e:
                execution_time = time.time() - start_time
                logger.error(f"API {operation} failed after {execution_time:.3f}s: {e}",
                             extra={"execution_time": execution_time, "error": str(e)})
                raise
            execution_time = time.time() - start_time
            logger.info(f"API {operation} completed in {execution_time:.3f}s", extra={"execution_time": execution_time})
            return result

        return wrapper
    return decorator


def configure_for_environment():
    """ENVIRONMENT picks the level and whether log files are written; LOG_LEVEL applies outside development/testing."""
    environment = os.getenv("ENVIRONMENT", "development").lower()

    if environment == "development":
        setup_logging(level="DEBUG")
    elif environment == "testing":
        setup_logging(level="WARNING", log_to_file=False)
    else:
        setup_logging(level=os.getenv("LOG_LEVEL", "INFO").upper())


class PerformanceMonitor:
    """Times a block; logs at warning level past threshold_ms, error level if it raised"""

    def __init__(self, operation_name: str, logger: logging.Logger = None, threshold_ms: float = 1000):
        self.operation_name = operation_name
        self.logger = logger or get_logger("performance")
        self.threshold_ms = threshold_ms
        self.start_time = None
        self.elapsed_ms = 0.0

    def __enter__(self):
        self.start_time = time.time()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.elapsed_ms = (time.time() - self.start_time) * 1000
        if exc_type is not None:
            self.logger.error(f"{self.operation_name} failed after {self.elapsed_ms:.0f}ms: {exc_val}")
        elif self.elapsed_ms > self.threshold_ms:
            self.logger.warning(f"{self.operation_name} took {self.elapsed_ms:.0f}ms (threshold {self.threshold_ms:.0f}ms)")
        else:
            self.logger.info(f"{self.operation_name} completed in {self.elapsed_ms:.0f}ms")
        return False


configure_for_environment()
