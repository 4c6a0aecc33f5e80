"""Run a validated argument vector without a shell."""

import asyncio
import contextlib
import os
from dataclasses import dataclass
from time import time

from curlguard.core.logging import get_logger
from curlguard.probe.errors import ExecutionError, ExecutionFailure
from curlguard.probe.policy import DEFAULT_LIMITS, ArgumentVector, ProbeLimits

logger = get_logger("probe.executor")

_READ_CHUNK = 64 * 1024


@dataclass(frozen=True)
class ExecutionOutcome:
    """Captured output of one curl run."""

    stdout: str
    stderr: str
    exit_code: int
    duration_ms: int


class _OutputBudget:
    """Byte allowance shared by the stdout and stderr readers of one run."""

    def __init__(self, limit: int):
        self.remaining = limit

    def take(self, size: int) -> None:
        self.remaining -= size
        if self.remaining < 0:
            raise ExecutionError(ExecutionFailure.OUTPUT_LIMIT, "Output exceeded buffer limit")


class CurlExecutor:
    """Spawns curl directly with a minimal environment.

    Non-zero exit codes are returned, not raised: HTTP-level failures still
    produce diagnostics worth parsing.
    """

    def __init__(self, limits: ProbeLimits = DEFAULT_LIMITS):
        self.limits = limits

    async def execute(self, argv: ArgumentVector) -> ExecutionOutcome:
        """
        Execute argv[0] with argv[1:] as literal arguments.

        Raises:
            ExecutionError: On spawn failure, timeout or output overflow
        """
        env = {"PATH": os.environ.get("PATH", "")}
        logger.debug(f"Spawning {argv[0]} with {len(argv) - 1} args")
        start_time = time()

        try:
            proc = await asyncio.create_subprocess_exec(
                *argv,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                env=env,
            )
        except OSError as e:
            logger.error(f"Failed to spawn {argv[0]}: {e}")
            raise ExecutionError(ExecutionFailure.SPAWN, f"Failed to start {argv[0]}: {e}") from e

        budget = _OutputBudget(self.limits.max_output_bytes)
        try:
            stdout_data, stderr_data = await asyncio.wait_for(
                self._collect(proc, budget), timeout=self.limits.timeout_seconds
            )
        except asyncio.TimeoutError:
            await self._kill(proc)
            logger.warning(f"{argv[0]} timed out after {self.limits.timeout_seconds}s")
            raise ExecutionError(
                ExecutionFailure.TIMEOUT,
                f"Command timed out after {self.limits.timeout_seconds:g}s",
            ) from None
        except ExecutionError:
            await self._kill(proc)
            logger.warning(f"{argv[0]} exceeded {self.limits.max_output_bytes} output bytes")
            raise

        duration_ms = int((time() - start_time) * 1000)
        exit_code = proc.returncode if proc.returncode is not None else -1
        logger.info(f"Execution complete: exit={exit_code}, duration={duration_ms}ms")

        return ExecutionOutcome(
            stdout=self._decode_output(stdout_data),
            stderr=self._decode_output(stderr_data),
            exit_code=exit_code,
            duration_ms=duration_ms,
        )

    async def _collect(
        self, proc: asyncio.subprocess.Process, budget: _OutputBudget
    ) -> tuple[bytes, bytes]:
        readers = [
            asyncio.ensure_future(self._read_stream(proc.stdout, budget)),
            asyncio.ensure_future(self._read_stream(proc.stderr, budget)),
        ]
        try:
            stdout_data, stderr_data = await asyncio.gather(*readers)
        finally:
            for reader in readers:
                reader.cancel()
        await proc.wait()
        return stdout_data, stderr_data

    @staticmethod
    async def _read_stream(stream: asyncio.StreamReader | None, budget: _OutputBudget) -> bytes:
        if stream is None:
            return b""
        chunks = []
        while True:
            chunk = await stream.read(_READ_CHUNK)
            if not chunk:
                break
            budget.take(len(chunk))
            chunks.append(chunk)
        return b"".join(chunks)

    @staticmethod
    async def _kill(proc: asyncio.subprocess.Process) -> None:
        if proc.returncode is None:
            with contextlib.suppress(ProcessLookupError):
                proc.kill()
        await proc.wait()

    @staticmethod
    def _decode_output(data: bytes) -> str:
        return data.decode("utf-8", errors="replace")
