"""Tests for the no-shell executor.

The current interpreter stands in for curl so these run without network.
"""

import asyncio
import sys
import time

import pytest

from curlguard.probe.errors import ExecutionError, ExecutionFailure, FailureKind
from curlguard.probe.executor import CurlExecutor
from curlguard.probe.policy import ProbeLimits


def _python(code: str) -> tuple[str, ...]:
    return (sys.executable, "-c", code)


@pytest.mark.asyncio
async def test_captures_stdout_and_stderr():
    code = "import sys; print('out'); print('err', file=sys.stderr)"
    outcome = await CurlExecutor().execute(_python(code))

    assert outcome.stdout.strip() == "out"
    assert outcome.stderr.strip() == "err"
    assert outcome.exit_code == 0
    assert outcome.duration_ms >= 0


@pytest.mark.asyncio
async def test_nonzero_exit_is_not_fatal():
    code = "import sys; sys.stderr.write('< HTTP/1.1 404\\n'); sys.exit(22)"
    outcome = await CurlExecutor().execute(_python(code))

    assert outcome.exit_code == 22
    assert "< HTTP/1.1 404" in outcome.stderr


@pytest.mark.asyncio
async def test_arguments_are_not_shell_expanded():
    code = "import sys; print(sys.argv[1:])"
    outcome = await CurlExecutor().execute(_python(code) + ("$HOME", "*", "a b"))

    assert outcome.stdout.strip() == "['$HOME', '*', 'a b']"


@pytest.mark.asyncio
async def test_environment_reduced_to_path(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("CURLGUARD_TEST_SECRET", "hunter2")
    code = "import os; print('CURLGUARD_TEST_SECRET' in os.environ, 'PATH' in os.environ)"
    outcome = await CurlExecutor().execute(_python(code))

    assert outcome.stdout.strip() == "False True"


@pytest.mark.asyncio
async def test_timeout_kills_process():
    limits = ProbeLimits(timeout_seconds=0.5)
    start = time.monotonic()

    with pytest.raises(ExecutionError) as exc_info:
        await CurlExecutor(limits).execute(_python("import time; time.sleep(10)"))

    assert exc_info.value.failure is ExecutionFailure.TIMEOUT
    assert exc_info.value.kind is FailureKind.EXECUTION
    assert "timed out" in exc_info.value.message
    assert time.monotonic() - start < 5


@pytest.mark.asyncio
async def test_output_limit():
    limits = ProbeLimits(max_output_bytes=1024)

    with pytest.raises(ExecutionError) as exc_info:
        await CurlExecutor(limits).execute(_python("print('x' * 5000)"))

    assert exc_info.value.failure is ExecutionFailure.OUTPUT_LIMIT


@pytest.mark.asyncio
async def test_output_limit_counts_both_streams():
    limits = ProbeLimits(max_output_bytes=1000)
    code = "import sys; sys.stdout.write('a' * 600); sys.stderr.write('b' * 600)"

    with pytest.raises(ExecutionError) as exc_info:
        await CurlExecutor(limits).execute(_python(code))

    assert exc_info.value.failure is ExecutionFailure.OUTPUT_LIMIT


@pytest.mark.asyncio
async def test_output_under_limit():
    limits = ProbeLimits(max_output_bytes=1000)
    outcome = await CurlExecutor(limits).execute(_python("print('x' * 500)"))
    assert len(outcome.stdout.strip()) == 500


@pytest.mark.asyncio
async def test_spawn_failure():
    with pytest.raises(ExecutionError) as exc_info:
        await CurlExecutor().execute(("/nonexistent/curlguard-test-binary", "http://a.test"))

    assert exc_info.value.failure is ExecutionFailure.SPAWN


@pytest.mark.asyncio
async def test_invalid_utf8_replaced():
    code = "import sys; sys.stdout.buffer.write(b'ok\\xff')"
    outcome = await CurlExecutor().execute(_python(code))
    assert outcome.stdout == "ok\ufffd"


@pytest.mark.asyncio
async def test_concurrent_runs_do_not_interfere():
    executor = CurlExecutor()
    first, second = await asyncio.gather(
        executor.execute(_python("import time; time.sleep(0.2); print('first')")),
        executor.execute(_python("print('second')")),
    )

    assert first.stdout.strip() == "first"
    assert second.stdout.strip() == "second"
