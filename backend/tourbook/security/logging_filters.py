"""Logging filters that scrub guest contact details."""

from __future__ import annotations

import logging
import re

_EMAIL_PATTERN = re.compile(r"\b([A-Za-z0-9._%+-])[A-Za-z0-9._%+-]*@([A-Za-z0-9.-]+\.[A-Za-z]{2,})\b")
_PHONE_PATTERN = re.compile(r"\+\d[\d\s().-]{6,}\d")


def scrub(message: str) -> str:
    message = _EMAIL_PATTERN.sub(r"\1***@\2", message)
    return _PHONE_PATTERN.sub("**REDACTED**", message)


class SensitiveFilter(logging.Filter):
    """Mask email addresses and phone numbers in log messages."""

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = scrub(record.msg)
        if isinstance(record.args, dict):
            record.args = {
                key: scrub(value) if isinstance(value, str) else value
                for key, value in record.args.items()
            }
        elif isinstance(record.args, tuple):
            record.args = tuple(
                scrub(arg) if isinstance(arg, str) else arg for arg in record.args
            )
        return True


def install_sensitive_filter(*logger_names: str) -> None:
    """Attach a :class:`SensitiveFilter` to each named logger and its handlers.

    A logger filter only sees records created on that logger; handler filters
    also see records propagated from child loggers such as ``tourbook.*``.
    """

    for name in logger_names:
        target_logger = logging.getLogger(name)
        for target in (target_logger, *target_logger.handlers):
            if not any(isinstance(flt, SensitiveFilter) for flt in target.filters):
                target.addFilter(SensitiveFilter())


__all__ = ["SensitiveFilter", "install_sensitive_filter", "scrub"]
