"""Tests for the make_request tool wrapper."""

import asyncio

import pytest

from curlguard.core.config import Settings
from curlguard.core.types import ActionResult, RiskLevel
from curlguard.probe.executor import ExecutionOutcome
from curlguard.tools.base import Tool, ToolParameter, tool
from curlguard.tools.builtin import make_request as make_request_module
from curlguard.tools.builtin import register_all_builtin_tools
from curlguard.tools.builtin.make_request import configure_make_request, make_request
from curlguard.tools.registry import ToolRegistry, get_global_registry


@pytest.fixture(autouse=True)
def fresh_tool_state():
    """Each test gets its own pipeline and semaphore."""
    configure_make_request(Settings(_env_file=None))
    yield
    configure_make_request(Settings(_env_file=None))


class TestToolDecorator:
    def test_make_request_metadata(self):
        tool_obj = make_request._tool
        assert tool_obj.name == "make_request"
        assert tool_obj.risk_level == RiskLevel.MEDIUM

        params = {p.name: p for p in tool_obj.parameters}
        assert params["command"].required is True
        assert params["command"].type == "string"
        assert "curl" in params["command"].description
        assert params["evidence"].required is False

    def test_basic_decorator(self):
        @tool("echo", "Echo input")
        async def echo(text: str, times: int = 1) -> ActionResult:
            """
            text: Text to echo
            times: Repeat count
            """
            return ActionResult(success=True, data=text * times)

        tool_obj = echo._tool
        assert [p.name for p in tool_obj.parameters] == ["text", "times"]
        assert tool_obj.parameters[1].type == "number"
        assert tool_obj.parameters[1].default == 1
        assert tool_obj.parameters[0].description == "Text to echo"


class TestRegistry:
    def test_register_and_context(self):
        registry = ToolRegistry()
        registry.register(
            Tool(
                name="ping",
                description="Ping something",
                parameters=[ToolParameter("command", "string", "The command")],
            )
        )

        assert registry.has_tool("ping")
        context = registry.get_context_string()
        assert "ping(command: string)" in context

    def test_empty_registry(self):
        assert ToolRegistry().get_context_string() == "No tools available."

    def test_builtin_registration(self):
        register_all_builtin_tools()
        assert get_global_registry().has_tool("make_request")


@pytest.mark.asyncio
async def test_rejected_command_shape():
    result = await make_request("curl -u admin:secret https://a.test", evidence="auth check")

    assert result.success is False
    assert result.error == "Flag not allowed: -u"
    assert result.data == {
        "success": False,
        "apiResponse": {"data": "", "error": "Flag not allowed: -u"},
    }


@pytest.mark.asyncio
async def test_successful_request_shape(monkeypatch: pytest.MonkeyPatch):
    class StubExecutor:
        async def execute(self, argv):
            return ExecutionOutcome(
                stdout='{"ok": true}', stderr="< HTTP/1.1 200 OK\n", exit_code=0, duration_ms=3
            )

    monkeypatch.setattr(make_request_module._pipeline, "executor", StubExecutor())
    result = await make_request("curl -v https://a.test")

    assert result.success is True
    assert result.error is None
    assert result.data == {
        "success": True,
        "apiResponse": {"data": {"ok": True}, "statusCode": 200},
    }


def test_configure_applies_settings():
    settings = Settings(
        _env_file=None, timeout_seconds=3.0, max_concurrent_requests=2, include_raw_stderr=True
    )
    configure_make_request(settings)

    pipeline = make_request_module._pipeline
    assert pipeline.executor.limits.timeout_seconds == 3.0
    assert pipeline.include_raw_stderr is True
    assert make_request_module._slots is None


class SlowExecutor:
    """Records how many runs overlap."""

    def __init__(self):
        self.active = 0
        self.peak = 0

    async def execute(self, argv):
        self.active += 1
        self.peak = max(self.peak, self.active)
        await asyncio.sleep(0.01)
        self.active -= 1
        return ExecutionOutcome(stdout="ok", stderr="", exit_code=0, duration_ms=10)


class TestConcurrencyGate:
    @pytest.mark.asyncio
    async def test_limits_parallel_runs(self, monkeypatch: pytest.MonkeyPatch):
        configure_make_request(Settings(_env_file=None, max_concurrent_requests=2))
        executor = SlowExecutor()
        monkeypatch.setattr(make_request_module._pipeline, "executor", executor)

        results = await asyncio.gather(*(make_request("curl https://a.test") for _ in range(5)))

        assert all(r.success for r in results)
        assert executor.peak == 2

    def test_works_across_event_loops(self, monkeypatch: pytest.MonkeyPatch):
        configure_make_request(Settings(_env_file=None, max_concurrent_requests=1))
        executor = SlowExecutor()
        monkeypatch.setattr(make_request_module._pipeline, "executor", executor)

        async def contended():
            return await asyncio.gather(make_request("curl https://a.test"), make_request("curl https://b.test"))

        first = asyncio.run(contended())
        second = asyncio.run(contended())

        assert all(r.success for r in first + second)
        assert executor.peak == 1
