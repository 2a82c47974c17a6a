"""ceilcheck - Static verifier for priority-ceiling resource sharing.

ceilcheck checks that the resources and tasks declared by an embedded
real-time application can be shared soundly under a priority-ceiling
discipline before any scheduler code is generated.
"""

__version__ = "0.1.0"
__author__ = "ceilcheck developers"
__description__ = "Static verifier for priority-ceiling resource sharing"

from ceilcheck.config import CeilcheckConfig
from ceilcheck.models import App
from ceilcheck.validation import ValidationResult, validate

__all__ = [
    "__version__",
    "__author__",
    "__description__",
    "App",
    "CeilcheckConfig",
    "ValidationResult",
    "validate",
]
