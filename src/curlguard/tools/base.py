"""Base tool definitions and decorators."""

import inspect
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any, TypeVar

from curlguard.core.types import ActionResult, RiskLevel


@dataclass
class ToolParameter:
    """Definition of a tool parameter."""

    name: str
    type: str  # "string", "number", "boolean", "object", "array"
    description: str
    required: bool = True
    default: Any = None


@dataclass
class Tool:
    """Definition of a callable tool."""

    name: str
    description: str
    parameters: list[ToolParameter]
    risk_level: RiskLevel = RiskLevel.LOW
    examples: list[str] = field(default_factory=list)

    def to_context_string(self) -> str:
        """Format tool for a calling agent's context."""
        params_str = ", ".join(
            f"{p.name}: {p.type}" + ("" if p.required else " (optional)")
            for p in self.parameters
        )

        lines = [f"{self.name}({params_str})"]
        lines.append(f"  {self.description}")

        if self.parameters:
            lines.append("  Parameters:")
            for p in self.parameters:
                req = "required" if p.required else "optional"
                lines.append(f"    - {p.name} ({p.type}, {req}): {p.description}")
                if p.default is not None and p.default != "":
                    lines.append(f"      default: {p.default}")

        if self.examples:
            lines.append("  Examples:")
            for ex in self.examples:
                lines.append(f"    {ex}")

        return "\n".join(lines)


F = TypeVar("F", bound=Callable[..., Awaitable[ActionResult]])

_ANNOTATION_TYPES = {
    str: "string",
    int: "number",
    float: "number",
    bool: "boolean",
    dict: "object",
    list: "array",
}


def tool(
    name: str,
    description: str,
    risk_level: RiskLevel = RiskLevel.LOW,
    examples: list[str] | None = None,
) -> Callable[[F], F]:
    """
    Decorator to describe an async function as a tool.

    Parameters are read from the signature; a docstring line of the form
    ``param_name: description`` supplies each parameter's description.

    Example:
        @tool("make_request", "Run a curl probe")
        async def make_request(command: str) -> ActionResult:
            ...
    """

    def decorator(func: F) -> F:
        sig = inspect.signature(func)
        parameters = []

        for param_name, param in sig.parameters.items():
            if param_name in ("self", "cls"):
                continue

            param_type = _ANNOTATION_TYPES.get(param.annotation, "string")
            required = param.default == inspect.Parameter.empty
            default = None if required else param.default

            param_desc = f"Parameter {param_name}"
            if func.__doc__:
                for line in func.__doc__.split("\n"):
                    parts = line.strip().split(":", 1)
                    if len(parts) == 2 and parts[0].strip() == param_name:
                        param_desc = parts[1].strip()
                        break

            parameters.append(
                ToolParameter(
                    name=param_name,
                    type=param_type,
                    description=param_desc,
                    required=required,
                    default=default,
                )
            )

        func._tool = Tool(  # type: ignore[attr-defined]
            name=name,
            description=description,
            parameters=parameters,
            risk_level=risk_level,
            examples=examples or [],
        )
        return func

    return decorator
