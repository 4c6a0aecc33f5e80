"""
End-to-end probe: extract, tokenize, validate, execute, parse.

Each call is independent. Typed failures are converted into a failure
record at this boundary so callers never see an exception.
"""

from curlguard.core.logging import get_logger
from curlguard.probe.diagnostics import CurlVerboseParser, DiagnosticParser
from curlguard.probe.errors import ExecutionError, PolicyError, ProbeError
from curlguard.probe.executor import CurlExecutor
from curlguard.probe.extractor import extract_command
from curlguard.probe.policy import DEFAULT_LIMITS, CommandPolicy, ProbeLimits
from curlguard.probe.response import ParsedResponse, decode_payload

logger = get_logger("probe.pipeline")


class ProbePipeline:
    """Runs curl probes under the command policy."""

    def __init__(
        self,
        limits: ProbeLimits = DEFAULT_LIMITS,
        policy: CommandPolicy | None = None,
        executor: CurlExecutor | None = None,
        parser: DiagnosticParser | None = None,
        include_raw_stderr: bool = False,
    ):
        self.policy = policy or CommandPolicy(limits)
        self.executor = executor or CurlExecutor(limits)
        self.parser = parser or CurlVerboseParser()
        self.include_raw_stderr = include_raw_stderr

    async def run(self, text: str) -> ParsedResponse:
        """
        Run a probe described by free-form text.

        Args:
            text: A curl command, or text containing a curl```...``` block

        Returns:
            ParsedResponse; on failure ``data`` is empty and ``error`` is set
        """
        try:
            argv = self.policy.check(extract_command(text))
            outcome = await self.executor.execute(argv)
        except ProbeError as e:
            label = e.kind.value
            if isinstance(e, PolicyError):
                label += f"/{e.reason.name}"
            elif isinstance(e, ExecutionError):
                label += f"/{e.failure.value}"
            logger.warning(f"Probe failed [{label}]: {e.message}")
            return ParsedResponse.failure(e.message)
        except Exception as e:
            logger.error(f"Probe failed unexpectedly: {e}", exc_info=True)
            return ParsedResponse.failure(f"Execution error: {e}")

        meta = self.parser.parse(outcome.stderr)
        if outcome.exit_code != 0:
            logger.info(f"curl exited with {outcome.exit_code}, status={meta.status_code}")

        return ParsedResponse.from_diagnostics(
            decode_payload(outcome.stdout),
            meta,
            raw_stderr=outcome.stderr if self.include_raw_stderr else None,
        )


async def run_probe(text: str, limits: ProbeLimits = DEFAULT_LIMITS) -> ParsedResponse:
    """Run a single probe with default components."""
    return await ProbePipeline(limits).run(text)
