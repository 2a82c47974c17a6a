"""Validation rules for the priority-ceiling sharing discipline.

Each rule checks one aspect of the application description and stops at its
first violation unless the configuration asks for every violation.
"""

import logging

from ..config import CeilcheckConfig
from ..diagnostics import Diagnostic, ErrorKind
from ..models.app import App
from .framework import ValidationResult, ValidationRule

logger = logging.getLogger(__name__)


class DeclaredResourcesRule(ValidationRule):
    """Every resource a task names must be declared."""

    @property
    def name(self) -> str:
        return "declared_resources"

    def validate(self, app: App, config: CeilcheckConfig, result: ValidationResult) -> None:
        owners = set()
        for _, task_name, access in app.resource_accesses():
            result.increment_counter("resource_accesses")
            if app.resource(access.resource) is None:
                diagnostic = Diagnostic(
                    ErrorKind.UNDECLARED_RESOURCE,
                    identifier=access.resource,
                    task=task_name,
                    span=access.span,
                    rule=self.name,
                )
                if not self.report(diagnostic, config, result):
                    return
                continue

            if access.is_exclusive:
                owners.add(access.resource)

        result.increment_counter("exclusive_owners", len(owners))


class AccessModeRule(ValidationRule):
    """A resource is either always exclusive or always shared.

    `init` does not lock, so its exclusive accesses do not count towards the
    conflict set; `idle` does.
    """

    @property
    def name(self) -> str:
        return "access_mode"

    def validate(self, app: App, config: CeilcheckConfig, result: ValidationResult) -> None:
        # TODO: allow mixed shared/exclusive access behind a configuration flag
        exclusive = {
            access.resource
            for priority, _, access in app.resource_accesses()
            if priority is not None and access.is_exclusive
        }

        for _, task_name, access in app.resource_accesses():
            if access.is_shared and access.resource in exclusive:
                diagnostic = Diagnostic(
                    ErrorKind.CONFLICTING_ACCESS_MODE,
                    identifier=access.resource,
                    task=task_name,
                    span=access.span,
                    rule=self.name,
                )
                if not self.report(diagnostic, config, result):
                    return


class InitAccessRule(ValidationRule):
    """`init` may only take exclusive access to resources that already exist."""

    @property
    def name(self) -> str:
        return "init_access"

    def validate(self, app: App, config: CeilcheckConfig, result: ValidationResult) -> None:
        if app.init is None:
            return

        task_name, init = app.init
        for access in init.resources:
            resource = app.resource(access.resource)
            if resource is not None and resource.late:
                kind = ErrorKind.LATE_RESOURCE_IN_INIT
            elif access.is_shared:
                kind = ErrorKind.SHARED_ACCESS_IN_INIT
            else:
                continue

            diagnostic = Diagnostic(
                kind,
                identifier=access.resource,
                task=task_name,
                span=access.span,
                rule=self.name,
            )
            if not self.report(diagnostic, config, result):
                return


class LateResourceCoverageRule(ValidationRule):
    """Late resources need an `init` task to produce them.

    Only the existence of `init` is checked here; whether it produces every
    late resource is up to the code generator.
    """

    @property
    def name(self) -> str:
        return "late_resources"

    def validate(self, app: App, config: CeilcheckConfig, result: ValidationResult) -> None:
        late = app.late_resources
        result.increment_counter("late_resources", len(late))

        if late and app.init is None:
            logger.debug(f"Late resources without init: {', '.join(late)}")
            self.report(
                Diagnostic(ErrorKind.MISSING_INIT_FOR_LATE_RESOURCES, rule=self.name),
                config,
                result,
            )


class DispatcherInterruptRule(ValidationRule):
    """Hardware tasks can not bind interrupts reserved for software dispatch."""

    @property
    def name(self) -> str:
        return "dispatcher_interrupts"

    def validate(self, app: App, config: CeilcheckConfig, result: ValidationResult) -> None:
        dispatchers = set(app.extern_interrupts)

        for task_name, task in app.hardware_tasks.items():
            for bind in task.binds:
                result.increment_counter("interrupt_bindings")
                if bind.interrupt in dispatchers:
                    diagnostic = Diagnostic(
                        ErrorKind.DISPATCHER_INTERRUPT_REUSED,
                        identifier=bind.interrupt,
                        task=task_name,
                        span=bind.span,
                        rule=self.name,
                    )
                    if not self.report(diagnostic, config, result):
                        return
