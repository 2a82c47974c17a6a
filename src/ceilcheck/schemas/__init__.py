"""JSON Schema generation for application documents."""

from .generator import SchemaGenerator

__all__ = [
    "SchemaGenerator",
]
