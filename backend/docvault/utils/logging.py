# backend/docvault/utils/logging.py
import logging
import sys
from logging.handlers import RotatingFileHandler
from ..config import settings

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s [%(module)s:%(lineno)d] - %(message)s'

# Attributes every LogRecord carries; ``extra`` keys may not shadow them
RESERVED_ATTRS = frozenset(logging.makeLogRecord({}).__dict__) | {"message", "asctime"}


def _build_handlers(name: str):
    settings.LOGS_PATH.mkdir(parents=True, exist_ok=True)
    formatter = logging.Formatter(LOG_FORMAT)

    file_handler = RotatingFileHandler(
        settings.LOGS_PATH / f"{name}.log",
        maxBytes=10*1024*1024,  # 10MB
        backupCount=5
    )
    console_handler = logging.StreamHandler(sys.stdout)

    for handler in (file_handler, console_handler):
        handler.setFormatter(formatter)
    return file_handler, console_handler


class DocVaultLogger:
    """Component logger that accepts structured ``extra`` fields"""

    def __init__(self, name: str):
        self.logger = logging.getLogger(f"docvault.{name}")
        self.logger.setLevel(logging.INFO)
        if not self.logger.handlers:
            for handler in _build_handlers(name):
                self.logger.addHandler(handler)

    @staticmethod
    def sanitize_extra(extra):
        """Prefix keys that collide with LogRecord attributes"""
        if extra is None:
            return None
        return {
            f"extra_{key}" if key in RESERVED_ATTRS else key: value
            for key, value in extra.items()
        }

    def _log(self, level, msg, extra=None, exc_info=None):
        # stacklevel points %(module)s/%(lineno)d at the caller, not this wrapper
        self.logger.log(level, msg, extra=self.sanitize_extra(extra), exc_info=exc_info, stacklevel=3)

    def debug(self, msg, extra=None, exc_info=None):
        self._log(logging.DEBUG, msg, extra, exc_info)

    def info(self, msg, extra=None, exc_info=None):
        self._log(logging.INFO, msg, extra, exc_info)

    def warning(self, msg, extra=None, exc_info=None):
        self._log(logging.WARNING, msg, extra, exc_info)

    def error(self, msg, extra=None, exc_info=None):
        self._log(logging.ERROR, msg, extra, exc_info)


api_logger = DocVaultLogger("api")
db_logger = DocVaultLogger("database")
storage_logger = DocVaultLogger("storage")
service_logger = DocVaultLogger("service")

__all__ = ["DocVaultLogger", "api_logger", "db_logger", "storage_logger", "service_logger"]
