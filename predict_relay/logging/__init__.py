from .logger import logger, setup_logging, RelayLogger
from .decorators import log_timing

__all__ = ["logger", "setup_logging", "RelayLogger", "log_timing"]
