# ABOUTME: Logging configuration, progress tracking, and output formatting
# ABOUTME: Provides rich console output and structured logging for the pipeline

from .config import LoggingMode, configure_logging, detect_logging_mode, get_logging_status
from .progress import SimpleProgressTracker, create_smart_progress
from .utils import get_logger, log_api_call, with_pipeline_context, with_record_context

__all__ = [
    # Configuration
    "LoggingMode",
    "configure_logging",
    "detect_logging_mode",
    "get_logging_status",
    # Progress
    "SimpleProgressTracker",
    "create_smart_progress",
    # Utilities
    "get_logger",
    "log_api_call",
    "with_pipeline_context",
    "with_record_context",
]
