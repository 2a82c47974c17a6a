"""Tests for the application description models."""

import pytest
from pydantic import ValidationError

from ceilcheck.models import (
    AccessMode,
    App,
    Binding,
    HardwareTask,
    IdleTask,
    InitTask,
    Resource,
    ResourceAccess,
    SoftwareTask,
    Span,
)


class TestResource:
    """Test Resource initialization invariant."""

    def test_static_initial_value(self):
        resource = Resource(init=0)
        assert resource.init == 0
        assert resource.late is False

    def test_late_resource(self):
        resource = Resource(late=True)
        assert resource.late is True
        assert resource.init is None

    def test_late_with_initial_value_rejected(self):
        with pytest.raises(ValidationError, match="late resource can not have a static initial value"):
            Resource(init=0, late=True)

    def test_neither_initial_value_nor_late_rejected(self):
        with pytest.raises(ValidationError, match="static initial value or must be marked late"):
            Resource()

    def test_resource_is_immutable(self):
        resource = Resource(init=1)
        with pytest.raises(ValidationError):
            resource.init = 2


class TestResourceAccess:
    """Test ResourceAccess parsing and mode helpers."""

    def test_default_mode_is_exclusive(self):
        access = ResourceAccess(resource="a")
        assert access.mode == AccessMode.EXCLUSIVE
        assert access.is_exclusive
        assert not access.is_shared

    def test_shared_mode(self):
        access = ResourceAccess.model_validate({"resource": "a", "mode": "shared"})
        assert access.is_shared
        assert not access.is_exclusive

    def test_bare_name_coerces_to_exclusive_access(self):
        access = ResourceAccess.model_validate("b")
        assert access.resource == "b"
        assert access.is_exclusive

    def test_unknown_mode_rejected(self):
        with pytest.raises(ValidationError):
            ResourceAccess.model_validate({"resource": "a", "mode": "readonly"})


class TestTasks:
    """Test task variants."""

    def test_init_has_no_priority(self):
        assert InitTask().priority is None

    def test_idle_has_lowest_priority(self):
        assert IdleTask().priority == 0

    def test_hardware_task_defaults(self):
        task = HardwareTask(binds=["EXTI0"])
        assert task.priority == 1
        assert task.binds == (Binding(interrupt="EXTI0"),)

    def test_hardware_task_requires_binding(self):
        with pytest.raises(ValidationError):
            HardwareTask(binds=[])

    def test_priority_must_be_positive(self):
        with pytest.raises(ValidationError):
            SoftwareTask(priority=0)

    def test_capacity_must_be_positive(self):
        with pytest.raises(ValidationError):
            SoftwareTask(capacity=0)

    def test_init_late_resources_alias(self):
        task = InitTask.model_validate({"kind": "init", "lateResources": ["a", "b"]})
        assert task.late_resources == ("a", "b")


class TestApp:
    """Test App aggregate and its helpers."""

    @pytest.fixture
    def app(self):
        return App.model_validate({
            "name": "demo",
            "externInterrupts": ["SSI0"],
            "resources": {
                "a": {"late": True},
                "b": {"late": True},
                "c": {"init": 0},
                "d": {"init": 0},
            },
            "tasks": {
                "bar": {"kind": "software", "capacity": 2, "priority": 2, "resources": ["d"]},
                "foo": {"kind": "hardware", "binds": ["EXTI1"], "resources": ["b", {"resource": "c", "mode": "shared"}]},
                "idle": {"kind": "idle", "resources": [{"resource": "a", "mode": "shared"}, "d"]},
                "init": {"kind": "init", "resources": ["c"], "lateResources": ["a", "b"]},
            },
        })

    def test_task_lookup_by_kind(self, app):
        assert app.init[0] == "init"
        assert app.idle[0] == "idle"
        assert list(app.hardware_tasks) == ["foo"]
        assert list(app.software_tasks) == ["bar"]

    def test_late_resources(self, app):
        assert list(app.late_resources) == ["a", "b"]

    def test_resource_lookup(self, app):
        assert app.resource("c") == Resource(init=0)
        assert app.resource("missing") is None

    def test_resource_accesses_order_and_priorities(self, app):
        accesses = [(priority, task, access.resource) for priority, task, access in app.resource_accesses()]

        assert accesses == [
            (None, "init", "c"),
            (0, "idle", "a"),
            (0, "idle", "d"),
            (1, "foo", "b"),
            (1, "foo", "c"),
            (2, "bar", "d"),
        ]

    def test_no_init_or_idle(self):
        app = App()
        assert app.init is None
        assert app.idle is None
        assert list(app.resource_accesses()) == []

    def test_two_init_tasks_rejected(self):
        with pytest.raises(ValidationError, match="at most one `init` task"):
            App(tasks={"a": InitTask(), "b": InitTask()})

    def test_two_idle_tasks_rejected(self):
        with pytest.raises(ValidationError, match="at most one `idle` task"):
            App(tasks={"a": IdleTask(), "b": IdleTask()})

    def test_unknown_task_kind_rejected(self):
        with pytest.raises(ValidationError):
            App.model_validate({"tasks": {"t": {"kind": "timer"}}})

    def test_app_is_immutable(self, app):
        with pytest.raises(ValidationError):
            app.name = "other"

    def test_tasks_can_not_be_added_after_construction(self, app):
        with pytest.raises(TypeError):
            app.tasks["second_init"] = InitTask()

        assert app.init[0] == "init"
        assert len(app.tasks) == 4

    def test_resources_can_not_be_added_after_construction(self, app):
        with pytest.raises(TypeError):
            app.resources["Z"] = Resource(init=0)

        assert app.resource("Z") is None

    def test_empty_app_containers_are_read_only(self):
        app = App()

        with pytest.raises(TypeError):
            app.tasks["t"] = IdleTask()
        with pytest.raises(TypeError):
            app.resources["r"] = Resource(late=True)

    def test_sequences_are_tuples(self, app):
        assert isinstance(app.extern_interrupts, tuple)
        assert isinstance(app.tasks["foo"].binds, tuple)
        assert isinstance(app.tasks["foo"].resources, tuple)
        assert isinstance(app.tasks["init"].late_resources, tuple)

    def test_model_dump_round_trips(self, app):
        data = app.model_dump(by_alias=True)

        assert data["externInterrupts"] == ("SSI0",)
        assert data["tasks"]["init"]["lateResources"] == ("a", "b")
        assert App.model_validate(data) == app


class TestSpan:
    """Test Span rendering."""

    def test_str(self):
        assert str(Span(file="src/main.rs", line=12, column=4)) == "src/main.rs:12:4"

    def test_str_without_file(self):
        assert str(Span(line=3)) == "<unknown>:3:0"
