"""Tool registry for managing available tools."""

from curlguard.core.logging import get_logger
from curlguard.tools.base import Tool

logger = get_logger("tools.registry")


class ToolRegistry:
    """Central registry for all available tools."""

    def __init__(self):
        self._tools: dict[str, Tool] = {}

    def register(self, tool: Tool) -> None:
        """Register a tool."""
        if tool.name in self._tools:
            logger.warning(f"Tool {tool.name} already registered, overwriting")
        self._tools[tool.name] = tool
        logger.debug(f"Registered tool: {tool.name}")

    def has_tool(self, name: str) -> bool:
        """Check if tool exists."""
        return name in self._tools

    def get_context_string(self) -> str:
        """Formatted tool definitions for an agent's context."""
        if not self._tools:
            return "No tools available."

        lines = ["# AVAILABLE TOOLS\n"]
        for tool in self._tools.values():
            lines.append(tool.to_context_string())
            lines.append("")
        return "\n".join(lines)


# Global registry instance
_global_registry: ToolRegistry | None = None


def get_global_registry() -> ToolRegistry:
    """Get or create the global tool registry."""
    global _global_registry
    if _global_registry is None:
        _global_registry = ToolRegistry()
    return _global_registry


def register_tool(tool: Tool) -> None:
    """Register a tool with the global registry."""
    get_global_registry().register(tool)
