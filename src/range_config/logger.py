import logging
import sys
import json
from datetime import datetime
from typing import Optional

from .context import get_current_session
from .loader import get_config
from .models import AppConfig

_RESERVED_ATTRS = {
    'name', 'msg', 'args', 'levelname', 'levelno', 'pathname',
    'filename', 'module', 'lineno', 'funcName', 'created',
    'msecs', 'relativeCreated', 'thread', 'threadName', 'taskName',
    'processName', 'process', 'getMessage', 'exc_info',
    'exc_text', 'stack_info', 'message', 'session_id',
}


class StructuredFormatter(logging.Formatter):
    """Formatter for structured logging with session_id support"""

    def __init__(self, output_format: Optional[str] = None):
        super().__init__()
        self.output_format = output_format

    def format(self, record):
        log_data = {
            'timestamp': datetime.fromtimestamp(record.created).strftime('%Y-%m-%d %H:%M:%S'),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage()
        }

        if getattr(record, 'session_id', None):
            log_data['session_id'] = record.session_id

        # Any other extra fields
        for key, value in record.__dict__.items():
            if key in _RESERVED_ATTRS:
                continue
            if isinstance(value, datetime):
                log_data[key] = value.strftime('%Y-%m-%d %H:%M:%S')
            else:
                log_data[key] = value

        output_format = self.output_format or get_config().logging.format
        if output_format == 'json':
            return json.dumps(log_data, default=str)

        base_msg = f"{log_data['timestamp']} - {log_data['logger']} - {log_data['level']} - {log_data['message']}"
        if 'session_id' in log_data:
            base_msg += f" [session_id={log_data['session_id']}]"
        return base_msg


def configure_root_logger(config: Optional[AppConfig] = None):
    """Configure the root logger to use structured formatting"""
    config = config or get_config()
    root_logger = logging.getLogger()

    # Clear existing handlers to avoid duplicates
    root_logger.handlers.clear()
    root_logger.setLevel(getattr(logging, config.logging.level.upper()))

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(StructuredFormatter(config.logging.format))
    root_logger.addHandler(console_handler)


def _session_properties():
    """Extract the current editing session for logging"""
    session_id = get_current_session()
    if session_id is None:
        return {}
    return {'session_id': session_id}


class AppLogger:
    """Logger wrapper that attaches the current editing session from the ContextVar"""

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)

    def log_debug(self, message: str):
        self.logger.debug(message, extra=_session_properties())

    def log_info(self, message: str):
        self.logger.info(message, extra=_session_properties())

    def log_warning(self, message: str):
        self.logger.warning(message, extra=_session_properties())

    def log_error(self, message: str):
        self.logger.error(message, extra=_session_properties())
