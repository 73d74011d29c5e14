"""Logging configuration and utilities."""

import logging
import logging.handlers
import os
from pathlib import Path
from config.settings import settings

CONSOLE_OFF = logging.CRITICAL + 1
_console_suppressed = False

class DeviceContextFilter(logging.Filter):
    """Filter to add SNMP agent / interface context to log records."""

    def __init__(self):
        super().__init__()
        self.agent = None
        self.interface = None

    def set_device_context(self, agent: str, interface: str = None):
        """Set the device context for this filter."""
        self.agent = agent
        self.interface = interface

    def filter(self, record):
        """Add device context to the log record."""
        record.agent = self.agent or '-'
        record.interface = self.interface or '-'
        return True

def get_logger(name: str, agent: str = None, interface: str = None) -> logging.Logger:
    """Get configured logger instance with optional device context."""
    logger = logging.getLogger(name)

    if not logger.handlers:
        # Configure logger
        level = getattr(logging, settings.get('logging.level', 'INFO').upper(), logging.INFO)
        logger.setLevel(level)
        logger.propagate = False

        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - [%(agent)s:%(interface)s] - %(levelname)s - %(message)s'
        )

        # Console handler
        console_handler = logging.StreamHandler()
        console_handler.setLevel(CONSOLE_OFF if _console_suppressed else level)
        console_handler.setFormatter(formatter)

        console_filter = DeviceContextFilter()
        if agent:
            console_filter.set_device_context(agent, interface)
        console_handler.addFilter(console_filter)
        logger.addHandler(console_handler)

        # File handler
        log_file = settings.get('logging.file', 'logs/port_viewer.log')
        log_dir = os.path.dirname(log_file)
        if log_dir:
            Path(log_dir).mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=settings.get('logging.max_bytes', 10485760),
            backupCount=settings.get('logging.backup_count', 5)
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)

        file_filter = DeviceContextFilter()
        if agent:
            file_filter.set_device_context(agent, interface)
        file_handler.addFilter(file_filter)
        logger.addHandler(file_handler)

    # Update device context for existing handlers if provided
    if agent and logger.handlers:
        update_logger_device_context(logger, agent, interface)

    return logger

def update_logger_device_context(logger: logging.Logger, agent: str, interface: str = None):
    """Update the device context for an existing logger."""
    for handler in logger.handlers:
        for filter_obj in handler.filters:
            if isinstance(filter_obj, DeviceContextFilter):
                filter_obj.set_device_context(agent, interface)
                break

def suppress_console_logging():
    """Stop console output on every configured logger.

    The terminal UI owns stdout/stderr; records still reach the log file.
    """
    global _console_suppressed
    _console_suppressed = True
    for logger in _project_loggers():
        for handler in logger.handlers:
            if _is_console_handler(handler):
                handler.setLevel(CONSOLE_OFF)

def _is_console_handler(handler: logging.Handler) -> bool:
    # RotatingFileHandler is itself a StreamHandler subclass
    return isinstance(handler, logging.StreamHandler) and not isinstance(handler, logging.FileHandler)

def _project_loggers():
    for name, logger in logging.Logger.manager.loggerDict.items():
        if isinstance(logger, logging.Logger) and name.startswith(('src.', '__main__')):
            yield logger
