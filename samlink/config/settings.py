"""
samlink Configuration Settings

This module contains all configuration constants for the SAM client.
Values can be overridden through SAMLINK_* environment variables.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Client configuration settings."""

    # Gateway settings
    SAM_HOST: str = os.environ.get("SAMLINK_HOST", "127.0.0.1")
    SAM_TCP_PORT: int = int(os.environ.get("SAMLINK_TCP_PORT", "7656"))
    SAM_UDP_PORT: int = int(os.environ.get("SAMLINK_UDP_PORT", "7655"))

    # Connection settings
    SOCKET_TIMEOUT: float = float(os.environ.get("SAMLINK_TIMEOUT", "30.0"))
    READ_BUFFER_SIZE: int = 4096

    # Protocol settings
    MIN_VERSION: str = "3.1"
    MAX_VERSION: str = "3.1"
    NICK_LENGTH: int = 30

    # Logging settings
    DEBUG: bool = os.environ.get("SAMLINK_DEBUG", "false").lower() == "true"
    LOG_LEVEL: str = os.environ.get("SAMLINK_LOG_LEVEL", "INFO")


# Global settings instance
settings = Settings()
