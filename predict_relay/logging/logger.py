import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Any, Dict

from predict_relay.config.settings import Config
from .formatters import JSONFormatter, PrettyFormatter


class RelayLogger:
    """Custom logger with context support"""

    def __init__(self, name: str = "predict_relay"):
        self.logger = logging.getLogger(name)
        self.logger.propagate = False  # Prevent double logging if root logger is configured
        self._context: Dict[str, Any] = {}
        self._setup_done = False

    def setup(self, config: Config):
        """Setup logging based on config"""
        if self._setup_done:
            return

        self.logger.setLevel(config.log_level)
        self.logger.handlers.clear()

        console = logging.StreamHandler(sys.stdout)
        if config.env == "production":
            console.setFormatter(JSONFormatter())
        else:
            console.setFormatter(PrettyFormatter())
        self.logger.addHandler(console)

        if config.log_file:
            try:
                log_dir = os.path.dirname(config.log_file)
                if log_dir:
                    os.makedirs(log_dir, exist_ok=True)

                file_handler = RotatingFileHandler(
                    config.log_file,
                    maxBytes=10*1024*1024,  # 10MB
                    backupCount=5
                )
                file_handler.setFormatter(JSONFormatter())
                self.logger.addHandler(file_handler)
            except OSError as e:
                self.logger.warning(f"Failed to setup file logging: {e}")

        # Set external libraries to WARNING to reduce noise
        logging.getLogger("aiohttp").setLevel(logging.WARNING)

        self._setup_done = True

    def with_context(self, **kwargs) -> "RelayLogger":
        """Return logger with additional context"""
        new_logger = RelayLogger(self.logger.name)
        new_logger.logger = self.logger
        new_logger._context = {**self._context, **kwargs}
        new_logger._setup_done = self._setup_done
        return new_logger

    def _log(self, level: int, msg: str, exc_info: bool = False, **kwargs):
        extra_data = {**self._context, **kwargs}
        extra = {"extra_data": extra_data} if extra_data else {}
        self.logger.log(level, msg, exc_info=exc_info, extra=extra)

    def debug(self, msg: str, **kwargs):
        self._log(logging.DEBUG, msg, **kwargs)

    def info(self, msg: str, **kwargs):
        self._log(logging.INFO, msg, **kwargs)

    def warning(self, msg: str, **kwargs):
        self._log(logging.WARNING, msg, **kwargs)

    def error(self, msg: str, **kwargs):
        self._log(logging.ERROR, msg, **kwargs)

    def critical(self, msg: str, **kwargs):
        self._log(logging.CRITICAL, msg, **kwargs)

    def trade(self, action: str, **kwargs):
        """Log trade workflow step (always logged)"""
        self.info(f"TRADE: {action}", **kwargs)

# Singleton
logger = RelayLogger()

def setup_logging(config: Config):
    """Initialize logging"""
    logger.setup(config)
