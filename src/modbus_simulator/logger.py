"""
Logging configuration.

Console logging by default, or a YAML dictConfig file when one is supplied.
"""

import logging
import logging.config
import sys
from pathlib import Path
from typing import Optional

import yaml


def setup_logging(log_level: str = "INFO", config_file: Optional[Path] = None) -> None:
    """
    Initialize logging configuration.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        config_file: Optional path to YAML logging config file
    """
    if config_file and config_file.exists():
        with open(config_file) as f:
            config = yaml.safe_load(f)
        logging.config.dictConfig(config)
    else:
        # Basic console logging
        logging.basicConfig(
            level=getattr(logging, log_level.upper()),
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            stream=sys.stdout
        )


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance."""
    return logging.getLogger(name)
