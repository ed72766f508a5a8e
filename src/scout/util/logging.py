"""Logging helpers with secret redaction and payload shortening."""

from __future__ import annotations

import logging
import re
from typing import Iterable

_REDACTIONS = [
    re.compile(r"Bearer\s+[A-Za-z0-9\-_.]+"),
    re.compile(r"sk-[A-Za-z0-9]+"),
]
# Screenshots and data URLs would flood the log otherwise.
_BASE64_BLOB = re.compile(r"(?:data:[\w/+.-]+;base64,)?[A-Za-z0-9+/=]{256,}")

_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def redact(text: str, extra_secrets: Iterable[str] | None = None) -> str:
    """Redact known secret patterns and explicit secrets from text."""
    redacted = text
    for pattern in _REDACTIONS:
        redacted = pattern.sub("Bearer [REDACTED]", redacted)
    if extra_secrets:
        for secret in extra_secrets:
            if secret:
                redacted = redacted.replace(secret, "[REDACTED]")
    return redacted


def shorten(text: str, limit: int = 500) -> str:
    """Collapse base64 blobs and cap the length of a log payload."""
    collapsed = _BASE64_BLOB.sub(lambda m: f"<base64 {len(m.group(0))} chars>", text)
    if len(collapsed) > limit:
        return f"{collapsed[:limit]}... ({len(collapsed) - limit} more chars)"
    return collapsed


def get_logger(name: str) -> logging.Logger:
    """Return a configured logger."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
    return logger


def set_verbose(verbose: bool) -> None:
    """Switch every ``scout`` logger between INFO and DEBUG."""
    level = logging.DEBUG if verbose else logging.INFO
    for name, logger in logging.Logger.manager.loggerDict.items():
        if isinstance(logger, logging.Logger) and name.split(".")[0] == "scout":
            logger.setLevel(level)
