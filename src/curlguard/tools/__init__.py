"""Tool layer exposing the probe pipeline to calling agents."""

from curlguard.tools.base import Tool, tool
from curlguard.tools.registry import ToolRegistry

__all__ = ["Tool", "tool", "ToolRegistry"]
