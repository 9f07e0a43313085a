"""Shared helpers for logging and validation."""

from .logging import log_call

__all__ = ["log_call"]
