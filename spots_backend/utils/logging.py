"""
Logging utilities for the Spots backend.

Provides standardized logger configuration following security and privacy rules.

CRITICAL SECURITY RULES:
- NEVER log the Gemini API key or the cron shared secret
- NEVER log Authorization headers
- NEVER log full model output (log lengths or short previews only)
- NEVER log precise user coordinates at INFO level

Acceptable logging:
- High-level events (e.g., "Recommendation pipeline invoked", "Trending refresh completed")
- Non-sensitive metadata (e.g., "interests=3, limit=5, mode=degraded")
- Error codes and sanitized error messages (no stack traces with secrets)
"""

import logging
from typing import Optional


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """
    Get a configured logger for the specified module.

    Args:
        name: Module name (typically __name__)
        level: Optional logging level (defaults to INFO)

    Returns:
        Configured logger instance

    Usage:
        >>> from spots_backend.utils.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.info("High-level event occurred")
    """
    logger = logging.getLogger(name)

    if level is None:
        level = logging.INFO

    logger.setLevel(level)

    # Add handler if not already configured (avoid duplicate handlers)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def preview(text: Optional[str], length: int = 50) -> str:
    """Shorten free text for log lines."""
    if not text:
        return ""
    return text if len(text) <= length else f"{text[:length]}..."
