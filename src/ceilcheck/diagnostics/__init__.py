"""Diagnostics produced when an application description is rejected."""

from .diagnostic import MESSAGES, Diagnostic, ErrorKind, SpecValidationError

__all__ = [
    "Diagnostic",
    "ErrorKind",
    "MESSAGES",
    "SpecValidationError",
]
