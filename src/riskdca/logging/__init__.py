"""Logging configuration for riskdca."""

from riskdca.logging.config import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
