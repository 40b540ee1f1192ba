"""
Configuration management for the SDK.
"""

import logging
from dataclasses import dataclass


@dataclass
class SDKConfig:
    """Configuration for SDK operations."""

    debug: bool = False
    log_level: str = "INFO"

    def setup_logging(self) -> None:
        """Configure logging for the SDK."""
        level = logging.DEBUG if self.debug else getattr(
            logging, self.log_level.upper(), logging.INFO
        )

        logger = logging.getLogger("pdf_server.sdk")
        logger.setLevel(level)

        if not logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            )
            handler.setFormatter(formatter)
            logger.addHandler(handler)
        # records stay off the root handlers
        logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given module name."""
    return logging.getLogger(f"pdf_server.sdk.{name}")
