# ABOUTME: Logging configuration and structured logger helpers
# ABOUTME: Provides loguru sink setup and structlog loggers for the pipeline

from .config import LoggingMode, configure_logging, get_logging_status
from .utils import get_logger, log_api_call, with_article_context, with_pipeline_context

__all__ = [
    # Configuration
    "LoggingMode",
    "configure_logging",
    "get_logging_status",
    # Utilities
    "get_logger",
    "log_api_call",
    "with_article_context",
    "with_pipeline_context",
]
