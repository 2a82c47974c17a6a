"""Models for the application description consumed by the verifier.

The model is assembled once (by the loader or any other front-end) and never
mutated afterwards: models are frozen, sequences are tuples and mappings are
read-only. Identifier uniqueness for resources and tasks comes from the
mappings themselves.
"""

from collections.abc import Iterator, Mapping
from enum import Enum
from types import MappingProxyType
from typing import Annotated, Any, Literal, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    GetJsonSchemaHandler,
    field_serializer,
    field_validator,
    model_validator,
)
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import CoreSchema

_MODEL_CONFIG = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

# Idle runs below every numbered task
IDLE_PRIORITY = 0


def _accept_bare_name(core_schema: CoreSchema, handler: GetJsonSchemaHandler) -> JsonSchemaValue:
    """Document the bare-string shorthand next to the object form."""
    json_schema = handler(core_schema)
    definition = handler.resolve_ref_schema(json_schema)
    object_schema = dict(definition)
    definition.clear()
    definition["anyOf"] = [{"type": "string"}, object_schema]
    return json_schema


class Span(BaseModel):
    """Source location attached by the front-end; opaque to the validator."""
    file: str | None = None
    line: int = Field(default=1, ge=1)
    column: int = Field(default=0, ge=0)

    model_config = _MODEL_CONFIG

    def __str__(self) -> str:
        return f"{self.file or '<unknown>'}:{self.line}:{self.column}"


class AccessMode(str, Enum):
    """How a task touches a resource."""
    EXCLUSIVE = "exclusive"
    SHARED = "shared"


class Resource(BaseModel):
    """Shared state, either statically initialized or produced late by `init`."""
    init: Any | None = None
    late: bool = False
    span: Span | None = None

    model_config = _MODEL_CONFIG

    @model_validator(mode="after")
    def check_initialization(self) -> "Resource":
        if self.late and self.init is not None:
            raise ValueError("a late resource can not have a static initial value")
        if not self.late and self.init is None:
            raise ValueError("resource needs a static initial value or must be marked late")
        return self


class ResourceAccess(BaseModel):
    """A resource named in a task's `resources` list."""
    resource: str
    mode: AccessMode = AccessMode.EXCLUSIVE
    span: Span | None = None

    model_config = _MODEL_CONFIG

    @model_validator(mode="before")
    @classmethod
    def coerce_name(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"resource": data}
        return data

    @classmethod
    def __get_pydantic_json_schema__(
        cls, core_schema: CoreSchema, handler: GetJsonSchemaHandler
    ) -> JsonSchemaValue:
        return _accept_bare_name(core_schema, handler)

    @property
    def is_exclusive(self) -> bool:
        return self.mode == AccessMode.EXCLUSIVE

    @property
    def is_shared(self) -> bool:
        return self.mode == AccessMode.SHARED


class Binding(BaseModel):
    """An interrupt source a hardware task is bound to."""
    interrupt: str
    span: Span | None = None

    model_config = _MODEL_CONFIG

    @model_validator(mode="before")
    @classmethod
    def coerce_name(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"interrupt": data}
        return data

    @classmethod
    def __get_pydantic_json_schema__(
        cls, core_schema: CoreSchema, handler: GetJsonSchemaHandler
    ) -> JsonSchemaValue:
        return _accept_bare_name(core_schema, handler)


class InitTask(BaseModel):
    """Runs once at boot before anything else; has no priority."""
    kind: Literal["init"] = "init"
    resources: tuple[ResourceAccess, ...] = Field(default_factory=tuple)
    late_resources: tuple[str, ...] = Field(alias="lateResources", default_factory=tuple)
    span: Span | None = None

    model_config = _MODEL_CONFIG

    @property
    def priority(self) -> None:
        return None


class IdleTask(BaseModel):
    """Runs when nothing else is ready."""
    kind: Literal["idle"] = "idle"
    resources: tuple[ResourceAccess, ...] = Field(default_factory=tuple)
    span: Span | None = None

    model_config = _MODEL_CONFIG

    @property
    def priority(self) -> int:
        return IDLE_PRIORITY


class HardwareTask(BaseModel):
    """Task dispatched by one or more external interrupts."""
    kind: Literal["hardware"] = "hardware"
    binds: tuple[Binding, ...] = Field(min_length=1)
    priority: int = Field(default=1, ge=1)
    resources: tuple[ResourceAccess, ...] = Field(default_factory=tuple)
    span: Span | None = None

    model_config = _MODEL_CONFIG


class SoftwareTask(BaseModel):
    """Task spawned through a bounded software queue."""
    kind: Literal["software"] = "software"
    capacity: int = Field(default=1, ge=1)
    priority: int = Field(default=1, ge=1)
    resources: tuple[ResourceAccess, ...] = Field(default_factory=tuple)
    span: Span | None = None

    model_config = _MODEL_CONFIG


Task = Annotated[
    Union[InitTask, IdleTask, HardwareTask, SoftwareTask],
    Field(discriminator="kind"),
]


class App(BaseModel):
    """Complete application description: resources, tasks and dispatchers."""
    name: str = "app"
    resources: Mapping[str, Resource] = Field(default_factory=dict, validate_default=True)
    tasks: Mapping[str, Task] = Field(default_factory=dict, validate_default=True)
    extern_interrupts: tuple[str, ...] = Field(alias="externInterrupts", default_factory=tuple)

    model_config = _MODEL_CONFIG

    @field_validator("resources")
    @classmethod
    def freeze_resources(cls, v):
        return MappingProxyType(dict(v))

    @field_validator("tasks")
    @classmethod
    def validate_singletons(cls, v):
        for kind in ("init", "idle"):
            names = [name for name, task in v.items() if task.kind == kind]
            if len(names) > 1:
                raise ValueError(f"at most one `{kind}` task may be defined, found: {', '.join(names)}")
        return MappingProxyType(dict(v))

    @field_serializer("resources", "tasks", mode="wrap")
    def serialize_mapping(self, value, handler):
        return handler(dict(value))

    def _tasks_of(self, task_type: type) -> dict[str, Any]:
        return {name: task for name, task in self.tasks.items() if isinstance(task, task_type)}

    @property
    def init(self) -> tuple[str, InitTask] | None:
        """Name and definition of the init task, if any."""
        return next(iter(self._tasks_of(InitTask).items()), None)

    @property
    def idle(self) -> tuple[str, IdleTask] | None:
        """Name and definition of the idle task, if any."""
        return next(iter(self._tasks_of(IdleTask).items()), None)

    @property
    def hardware_tasks(self) -> dict[str, HardwareTask]:
        return self._tasks_of(HardwareTask)

    @property
    def software_tasks(self) -> dict[str, SoftwareTask]:
        return self._tasks_of(SoftwareTask)

    @property
    def late_resources(self) -> dict[str, Resource]:
        return {name: res for name, res in self.resources.items() if res.late}

    def resource(self, name: str) -> Resource | None:
        return self.resources.get(name)

    def resource_accesses(self) -> Iterator[tuple[int | None, str, ResourceAccess]]:
        """Yield (priority, task name, access) for every declared access.

        Order is init, idle, hardware tasks, software tasks, each group in
        declaration order. The priority of `init` is None.
        """
        groups: list[dict[str, Any]] = [
            self._tasks_of(InitTask),
            self._tasks_of(IdleTask),
            self.hardware_tasks,
            self.software_tasks,
        ]
        for group in groups:
            for task_name, task in group.items():
                for access in task.resources:
                    yield task.priority, task_name, access
