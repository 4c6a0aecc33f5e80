"""
Shared type definitions.

Core data structures used across modules.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, TypeAlias

JSONDict: TypeAlias = dict[str, Any]


class RiskLevel(Enum):
    LOW = "low"
    MEDIUM = "medium"


@dataclass
class ActionResult:
    """Result of an executed action."""

    success: bool
    data: Any = None
    error: str | None = None
