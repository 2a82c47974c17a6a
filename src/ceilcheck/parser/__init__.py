"""Loaders that assemble the application model from documents."""

from .spec_loader import DuplicateIdentifierError, SpecLoader

__all__ = [
    "DuplicateIdentifierError",
    "SpecLoader",
]
