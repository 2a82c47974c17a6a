"""Validation layer for application descriptions.

Proves that the declared resource sharing admits a sound priority-ceiling
discipline before any code is generated.
"""

from .framework import (
    ValidationFramework,
    ValidationResult,
    ValidationRule,
    ValidationStatus,
    validate,
)
from .rules import (
    AccessModeRule,
    DeclaredResourcesRule,
    DispatcherInterruptRule,
    InitAccessRule,
    LateResourceCoverageRule,
)

__all__ = [
    "ValidationFramework",
    "ValidationResult",
    "ValidationRule",
    "ValidationStatus",
    "validate",
    "DeclaredResourcesRule",
    "AccessModeRule",
    "InitAccessRule",
    "LateResourceCoverageRule",
    "DispatcherInterruptRule",
]
