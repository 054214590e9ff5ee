"""Logging utilities for EKS MCP Server.

This module provides standardized logging configuration and logger creation
for consistent logging across the application.
"""

import logging
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_root_logger(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """Configure the root logger for the application.

    Console output always goes to stderr because stdout carries the stdio
    transport. A file handler is added when ``log_file`` is given.
    """
    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
        root_logger.info(f"Logging initialized. Log file: {log_file}")


def get_logger(name):
    """Get a standardized logger with the application prefix.

    Args:
        name: The name of the module or component

    Returns:
        A logger instance with the application prefix
    """
    return logging.getLogger(f"eks-mcp-server.{name}")
