"""Core validation framework for application descriptions.

Rules run in a fixed order. By default the first violation ends the whole
run; with `validation.collectAll` every rule runs and reports every violation
it finds.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum

from ..config import CeilcheckConfig, create_default_config
from ..diagnostics import Diagnostic, SpecValidationError
from ..models.app import App

logger = logging.getLogger(__name__)


class ValidationStatus(str, Enum):
    """Validation verdict. There is no warning level."""
    PASS = "pass"
    FAIL = "fail"


@dataclass
class ValidationResult:
    """Results of a validation run."""
    status: ValidationStatus = ValidationStatus.PASS
    diagnostics: list[Diagnostic] = field(default_factory=list)
    counters: dict[str, int] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status == ValidationStatus.PASS

    @property
    def diagnostic(self) -> Diagnostic | None:
        """The first violation found, if any."""
        return self.diagnostics[0] if self.diagnostics else None

    @property
    def exit_code(self) -> int:
        """Exit code for CI: 0 = pass, 1 = fail."""
        return 0 if self.ok else 1

    def add_diagnostic(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)
        self.status = ValidationStatus.FAIL

    def increment_counter(self, name: str, value: int = 1) -> None:
        """Increment a counter."""
        self.counters[name] = self.counters.get(name, 0) + value

    def raise_for_status(self) -> None:
        """Raise SpecValidationError carrying the first diagnostic on failure."""
        if not self.ok:
            raise SpecValidationError(self.diagnostics[0])

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON output."""
        return {
            "status": self.status.value,
            "exit_code": self.exit_code,
            "counters": self.counters,
            "diagnostics": [diagnostic.to_dict() for diagnostic in self.diagnostics],
        }


class ValidationRule(ABC):
    """Base class for validation rules."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Rule name for identification."""
        pass

    @abstractmethod
    def validate(self, app: App, config: CeilcheckConfig, result: ValidationResult) -> None:
        """Execute validation rule.

        Args:
            app: Application description to check
            config: ceilcheck configuration
            result: Validation result to update with diagnostics/counters
        """
        pass

    def report(self, diagnostic: Diagnostic, config: CeilcheckConfig, result: ValidationResult) -> bool:
        """Record a violation; returns True when the rule should keep scanning."""
        result.add_diagnostic(diagnostic)
        logger.debug(f"Rule {self.name} reported: {diagnostic}")
        return config.validation.collect_all


class ValidationFramework:
    """Runs the ordered rule set over an application description."""

    def __init__(self, config: CeilcheckConfig | None = None):
        self.config = config or create_default_config()
        self.rules: list[ValidationRule] = []

    def add_rule(self, rule: ValidationRule) -> None:
        """Add a validation rule."""
        self.rules.append(rule)

    def validate(self, app: App) -> ValidationResult:
        """Run validation on an application description.

        Args:
            app: Application description to check

        Returns:
            ValidationResult with status, diagnostics, and counters
        """
        result = ValidationResult()

        logger.info(f"Validating application '{app.name}' with {len(self.rules)} rules")

        for rule in self.rules:
            logger.debug(f"Executing rule: {rule.name}")
            rule.validate(app, self.config, result)
            if not result.ok and not self.config.validation.collect_all:
                break

        logger.info(f"Validation completed with status: {result.status.value}")
        return result

    def create_default_rules(self) -> None:
        """Install the standard rules in their required order."""
        from .rules import (
            AccessModeRule,
            DeclaredResourcesRule,
            DispatcherInterruptRule,
            InitAccessRule,
            LateResourceCoverageRule,
        )

        self.add_rule(DeclaredResourcesRule())
        self.add_rule(AccessModeRule())
        self.add_rule(InitAccessRule())
        self.add_rule(LateResourceCoverageRule())
        self.add_rule(DispatcherInterruptRule())


def validate(app: App, config: CeilcheckConfig | None = None) -> ValidationResult:
    """Validate `app` with the standard rule set."""
    framework = ValidationFramework(config)
    framework.create_default_rules()
    return framework.validate(app)
