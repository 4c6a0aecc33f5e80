"""Built-in tools."""

from curlguard.tools.builtin.make_request import register_make_request_tool


def register_all_builtin_tools() -> None:
    """Register all built-in tools with the global registry."""
    register_make_request_tool()


__all__ = ["register_all_builtin_tools"]
