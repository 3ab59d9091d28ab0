"""Tests for the command lifecycle."""

import re
from enum import Enum
from typing import Annotated
from unittest.mock import Mock

import pytest

from declick import (
    Argument,
    Command,
    CommandLifecycle,
    ConsoleConfig,
    Option,
    command,
    on_exception,
    on_startup,
)
from declick.exceptions import InvalidValueError, SchemaError
from declick.orchestration import resolve_exit_code


class Mode(Enum):
    FAST = "fast"
    SLOW = "slow"


@command("job", description="Run a job")
class Job(Command):
    """Records every lifecycle step into ``events``."""

    mode: Annotated[Mode, Argument()] = Mode.FAST
    retries: Annotated[int, Option()] = 0

    def __init__(self, events=None, outcome=None, error=None, resolution=None):
        super().__init__()
        self.events = events if events is not None else []
        self.outcome = outcome
        self.error = error
        self.resolution = resolution

    @on_startup
    def connect(self, console_input, output):
        self.events.append("startup")

        def disconnect():
            self.events.append("shutdown")

        return disconnect

    @on_exception
    def handle(self, error):
        self.events.append(f"exception:{type(error).__name__}")
        return self.resolution

    def invoke(self, console_input, output):
        self.events.append(f"invoke:{self.mode.value}:{self.retries}")
        if self.error is not None:
            raise self.error
        return self.outcome


class TestResolveExitCode:
    """Test mapping return values to exit codes."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "value,expected",
        [(None, 0), (True, 0), (False, 1), (0, 0), (5, 5), ("done", 0)],
    )
    def test_default_codes(self, value, expected):
        assert resolve_exit_code(value, ConsoleConfig()) == expected

    @pytest.mark.unit
    def test_configured_codes(self):
        config = ConsoleConfig(success_exit_code=10, failure_exit_code=20)
        assert resolve_exit_code(True, config) == 10
        assert resolve_exit_code(False, config) == 20
        assert resolve_exit_code(None, config) == 10
        assert resolve_exit_code(3, config) == 3


class TestLifecycleRun:
    """Test the full run sequence."""

    @pytest.fixture
    def lifecycle(self, quiet_config):
        return CommandLifecycle(Job, quiet_config)

    @pytest.mark.unit
    def test_definition_compiled_once(self, lifecycle):
        assert lifecycle.definition.name == "job"
        assert lifecycle.definition.argument("mode").default == "fast"

    @pytest.mark.unit
    def test_invalid_class_fails_at_construction(self):
        with pytest.raises(SchemaError):
            CommandLifecycle(Command)

    @pytest.mark.unit
    def test_success_sequence(self, lifecycle, make_input, output):
        job = Job(outcome=4)
        code = lifecycle.run(make_input({"mode": "slow"}, {"retries": "2"}), output, job)

        assert code == 4
        assert job.events == ["startup", "invoke:slow:2", "shutdown"]

    @pytest.mark.unit
    def test_fresh_instance_when_none_given(self, lifecycle, make_input, output):
        assert lifecycle.run(make_input({"mode": "fast"}), output) == 0

    @pytest.mark.unit
    def test_helpers_attached(self, lifecycle, make_input, output):
        job = Job()
        console_input = make_input({"mode": "fast"})
        lifecycle.run(console_input, output, job)

        assert job.get_input() is console_input
        assert job.get_output() is output
        assert job.argument("mode") == "fast"

    @pytest.mark.unit
    def test_resolved_failure_still_shuts_down(self, lifecycle, make_input, output):
        job = Job(error=TimeoutError("slow backend"), resolution=3)
        code = lifecycle.run(make_input({"mode": "fast"}), output, job)

        assert code == 3
        assert job.events == ["startup", "invoke:fast:0", "exception:TimeoutError", "shutdown"]
        assert job.events.count("shutdown") == 1

    @pytest.mark.unit
    def test_unresolved_failure_reraised_after_shutdown(self, lifecycle, make_input, output):
        error = RuntimeError("database gone")
        job = Job(error=error)

        with pytest.raises(RuntimeError) as exc_info:
            lifecycle.run(make_input({"mode": "fast"}), output, job)

        assert exc_info.value is error
        assert job.events[-2:] == ["exception:RuntimeError", "shutdown"]

    @pytest.mark.unit
    def test_terminate_bypasses_exception_hooks(self, lifecycle, make_input, output):
        class Stopper(Job):
            def invoke(self, console_input, output):
                self.events.append("invoke")
                self.terminate(7)

        job = Stopper()
        code = lifecycle.run(make_input({"mode": "fast"}), output, job)

        assert code == 7
        assert job.events == ["startup", "invoke", "shutdown"]

    @pytest.mark.unit
    def test_bind_failure_aborts_before_startup(self, lifecycle, make_input, output):
        job = Job()
        with pytest.raises(InvalidValueError, match="Allowed values: `fast`, `slow`"):
            lifecycle.run(make_input({"mode": "medium"}), output, job)
        assert job.events == []

    @pytest.mark.unit
    def test_failing_shutdown_propagates(self, lifecycle, make_input, output):
        closer = Mock(side_effect=OSError("close failed"))

        class Failing(Job):
            @on_startup
            def connect(self, console_input, output):
                return closer

        with pytest.raises(OSError, match="close failed"):
            lifecycle.run(make_input({"mode": "fast"}), output, Failing())
        closer.assert_called_once()


class TestDiagnostics:
    """Test execution time and memory reporting."""

    @pytest.mark.unit
    def test_printed_by_default(self, make_input, output, buffer):
        CommandLifecycle(Job).run(make_input({"mode": "fast"}), output, Job())

        text = buffer.getvalue()
        assert re.search(r"Execution time: \d+\.\d{2}s", text)

    @pytest.mark.unit
    def test_disabled_by_config(self, quiet_config, make_input, output, buffer):
        CommandLifecycle(Job, quiet_config).run(make_input({"mode": "fast"}), output, Job())
        assert "Execution time" not in buffer.getvalue()

    @pytest.mark.unit
    def test_enabled_by_option(self, quiet_config, make_input, output, buffer):
        console_input = make_input({"mode": "fast"}, {"diagnostics": True})
        CommandLifecycle(Job, quiet_config).run(console_input, output, Job())
        assert "Execution time" in buffer.getvalue()

    @pytest.mark.unit
    def test_printed_after_resolved_failure(self, make_input, output, buffer):
        job = Job(error=ValueError("bad row"), resolution=3)
        code = CommandLifecycle(Job).run(make_input({"mode": "fast"}), output, job)

        assert code == 3
        assert "Execution time" in buffer.getvalue()

    @pytest.mark.unit
    def test_memory_usage_line(self, make_input, output, buffer, monkeypatch):
        monkeypatch.setattr(
            "declick.orchestration.lifecycle.peak_memory_bytes", lambda: 5 * 1024 * 1024
        )
        CommandLifecycle(Job).run(make_input({"mode": "fast"}), output, Job())
        assert "Memory usage: 5.00 MB" in buffer.getvalue()
