"""pybeans Logging — logging port, its settings, and the structlog adapter."""

from pybeans.logging.port import LoggingPort
from pybeans.logging.properties import LoggingProperties
from pybeans.logging.structlog_adapter import StructlogAdapter

__all__ = ["LoggingPort", "LoggingProperties", "StructlogAdapter"]
