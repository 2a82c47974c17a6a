"""Pydantic data models for the application description."""

from ceilcheck.models.app import (
    App,
    AccessMode,
    Binding,
    HardwareTask,
    IdleTask,
    InitTask,
    Resource,
    ResourceAccess,
    SoftwareTask,
    Span,
    Task,
)

__all__ = [
    "App",
    "AccessMode",
    "Binding",
    "HardwareTask",
    "IdleTask",
    "InitTask",
    "Resource",
    "ResourceAccess",
    "SoftwareTask",
    "Span",
    "Task",
]
