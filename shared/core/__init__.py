"""Health endpoints and JSON request logging shared by the production services."""

from .health import HealthStatus, ServiceHealth
from .logging_config import RequestLoggingMiddleware, get_logger, setup_logging

__all__ = ["HealthStatus", "ServiceHealth", "RequestLoggingMiddleware", "get_logger", "setup_logging"]
