"""Parsers for nginx access-log lines."""

from . import dates, nginx  # noqa: F401

__all__ = ["dates", "nginx"]
