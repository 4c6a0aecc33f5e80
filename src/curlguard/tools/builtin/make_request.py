"""HTTP probe tool backed by the restricted curl pipeline."""

import asyncio

from curlguard.core.config import Settings
from curlguard.core.logging import get_logger
from curlguard.core.types import ActionResult
from curlguard.probe.pipeline import ProbePipeline
from curlguard.tools.base import RiskLevel, tool
from curlguard.tools.registry import register_tool

logger = get_logger("tools.make_request")

# Global state - replaced by configure_make_request during startup
_pipeline = ProbePipeline()
_max_concurrent = 4

# Semaphore is bound to the loop that first awaits it, so it is built on demand
_slots: asyncio.Semaphore | None = None
_slots_loop: asyncio.AbstractEventLoop | None = None


def configure_make_request(settings: Settings) -> None:
    """Apply settings to the shared pipeline and concurrency limit."""
    global _pipeline, _max_concurrent, _slots
    _pipeline = ProbePipeline(
        settings.probe_limits(),
        include_raw_stderr=settings.include_raw_stderr,
    )
    _max_concurrent = settings.max_concurrent_requests
    _slots = None
    logger.debug(
        f"make_request configured: timeout={settings.timeout_seconds}s, "
        f"concurrency={settings.max_concurrent_requests}"
    )


def _get_slots() -> asyncio.Semaphore:
    """Concurrency gate for the running event loop."""
    global _slots, _slots_loop
    loop = asyncio.get_running_loop()
    if _slots is None or _slots_loop is not loop:
        _slots = asyncio.Semaphore(_max_concurrent)
        _slots_loop = loop
    return _slots


@tool(
    "make_request",
    "Execute a curl command to make HTTP requests and return the response",
    risk_level=RiskLevel.MEDIUM,
    examples=[
        'make_request("curl -s https://httpbin.org/json")',
        "make_request(\"curl -v -H 'Accept: application/json' https://api.github.com\")",
        "make_request(\"curl```-I https://example.com```\")",
    ],
)
async def make_request(command: str, evidence: str = "") -> ActionResult:
    """
    Run one curl probe under the command policy.

    command: Actual finalized curl command, or text with a curl```...``` block
    evidence: Short description of what the request is meant to show

    Returns:
        ActionResult whose data holds {"success", "apiResponse"}
    """
    if evidence:
        logger.info(f"make_request: {evidence[:200]}")

    async with _get_slots():
        response = await _pipeline.run(command)

    success = response.ok
    return ActionResult(
        success=success,
        data={"success": success, "apiResponse": response.to_dict()},
        error=None if success else response.error,
    )


def register_make_request_tool() -> None:
    """Register the make_request tool with the global registry."""
    register_tool(make_request._tool)  # type: ignore[attr-defined]
