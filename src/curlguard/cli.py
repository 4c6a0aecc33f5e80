"""
CLI entry point.

Commands:
- probe: Run a curl probe and print the JSON result
- check: Validate a command without running it
- flags: List allowed and denied curl flags
- tools: Show the tool definitions exposed to agents
- health: Check that curl is installed

Command text is taken from the remaining arguments (quote the whole
command as one argument to keep its own quoting intact), or from stdin
when the only argument is "-".

Flags:
- --debug: Enable debug logging
"""

import asyncio
import json
import logging
import shutil
import sys

from curlguard.core.config import Settings, get_settings
from curlguard.core.logging import get_logger, setup_logging
from curlguard.probe.errors import ProbeError
from curlguard.probe.extractor import extract_command
from curlguard.probe.flags import ALLOWED_FLAGS, DENIED_FLAGS, VALUE_FLAGS
from curlguard.probe.policy import CommandPolicy


def main() -> int:
    """Main entry point."""
    settings = get_settings()

    debug_mode = "--debug" in sys.argv
    if debug_mode:
        sys.argv.remove("--debug")

    log_level = logging.DEBUG if debug_mode else logging.INFO
    setup_logging(level=log_level, log_file=settings.log_path)
    logger = get_logger("cli")

    if len(sys.argv) < 2:
        print("Usage: curlguard [--debug] <command> [text]")
        print("Commands: probe, check, flags, tools, health")
        print("Flags: --debug (enable debug logging)")
        return 1

    command = sys.argv[1]

    if command == "probe":
        text = _read_text(sys.argv[2:])
        if not text:
            print("Usage: curlguard probe <curl command | ->")
            return 1
        logger.info("Running probe from CLI")
        return asyncio.run(_probe(settings, text))

    if command == "check":
        text = _read_text(sys.argv[2:])
        if not text:
            print("Usage: curlguard check <curl command | ->")
            return 1
        return _check(settings, text)

    if command == "flags":
        return _list_flags()

    if command == "tools":
        return _list_tools()

    if command == "health":
        return _health_check()

    print(f"Unknown command: {command}")
    return 1


def _read_text(args: list[str]) -> str:
    if args == ["-"]:
        return sys.stdin.read()
    return " ".join(args)


async def _probe(settings: Settings, text: str) -> int:
    """Run one probe through the make_request tool."""
    from curlguard.tools.builtin.make_request import configure_make_request, make_request

    configure_make_request(settings)
    result = await make_request(text)
    print(json.dumps(result.data, indent=2, ensure_ascii=False))
    return 0 if result.success else 2


def _check(settings: Settings, text: str) -> int:
    """Print the validated argument vector or the rejection reason."""
    policy = CommandPolicy(settings.probe_limits())
    try:
        argv = policy.check(extract_command(text))
    except ProbeError as e:
        print(f"Rejected ({e.kind.value}): {e.message}")
        return 2
    print(json.dumps(list(argv)))
    return 0


def _list_flags() -> int:
    print("Allowed:")
    for flag in sorted(ALLOWED_FLAGS, key=lambda f: f.value):
        suffix = " <value>" if flag in VALUE_FLAGS else ""
        print(f"  {flag.value}{suffix}")
    print("Denied:")
    for flag in sorted(DENIED_FLAGS, key=lambda f: f.value):
        print(f"  {flag.value}")
    return 0


def _list_tools() -> int:
    from curlguard.tools.builtin import register_all_builtin_tools
    from curlguard.tools.registry import get_global_registry

    register_all_builtin_tools()
    print(get_global_registry().get_context_string())
    return 0


def _health_check() -> int:
    """Check that the curl binary is reachable on PATH."""
    path = shutil.which("curl")
    if path is None:
        print("curl: NOT FOUND on PATH")
        return 1
    print(f"curl: OK ({path})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
