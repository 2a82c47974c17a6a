"""Structured diagnostics reported by the validator."""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from ceilcheck.models.app import Span


class ErrorKind(str, Enum):
    """Every way an application description can be rejected."""
    UNDECLARED_RESOURCE = "UndeclaredResource"
    CONFLICTING_ACCESS_MODE = "ConflictingAccessMode"
    LATE_RESOURCE_IN_INIT = "LateResourceInInit"
    SHARED_ACCESS_IN_INIT = "SharedAccessInInit"
    MISSING_INIT_FOR_LATE_RESOURCES = "MissingInitForLateResources"
    DISPATCHER_INTERRUPT_REUSED = "DispatcherInterruptReused"


MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.UNDECLARED_RESOURCE: "this resource has NOT been declared",
    ErrorKind.CONFLICTING_ACCESS_MODE: (
        "shared and exclusive access to the same resource is not supported; "
        "use exclusive access everywhere"
    ),
    ErrorKind.LATE_RESOURCE_IN_INIT: "late resources can NOT be assigned to `init`",
    ErrorKind.SHARED_ACCESS_IN_INIT: (
        "`init` has direct exclusive access to resources; use exclusive access"
    ),
    ErrorKind.MISSING_INIT_FOR_LATE_RESOURCES: "late resources exist so an `init` task must be defined",
    ErrorKind.DISPATCHER_INTERRUPT_REUSED: "dispatcher interrupts can't be used as hardware tasks",
}


@dataclass(frozen=True)
class Diagnostic:
    """A single violation: what went wrong, on which name, and where."""
    kind: ErrorKind
    identifier: str | None = None
    task: str | None = None
    span: Span | None = None
    rule: str | None = None

    @property
    def message(self) -> str:
        return MESSAGES[self.kind]

    def __str__(self) -> str:
        subject = f" `{self.identifier}`" if self.identifier else ""
        where = f" in task `{self.task}`" if self.task else ""
        location = f"{self.span}: " if self.span else ""
        return f"{location}error[{self.kind.value}]{subject}{where}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {
            "kind": self.kind.value,
            "identifier": self.identifier,
            "task": self.task,
            "rule": self.rule,
            "message": self.message,
            "span": self.span.model_dump() if self.span else None,
        }


class SpecValidationError(Exception):
    """Raised by callers that want a failing validation as an exception."""

    def __init__(self, diagnostic: Diagnostic):
        super().__init__(str(diagnostic))
        self.diagnostic = diagnostic
