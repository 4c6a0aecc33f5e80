"""
Diagnostic stream parsing.

curl's verbose output (``-v``) is an external, semi-stable format. The
extraction rules live here as a named, versioned rule set behind a single
parser interface so the policy and executor never depend on its shape.
"""

import re
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from curlguard.core.logging import get_logger

logger = get_logger("probe.diagnostics")


@dataclass(frozen=True)
class DiagnosticMetadata:
    """Response metadata recovered from the diagnostic stream."""

    status_code: int | None = None
    response_time: float | None = None
    content_length: int | None = None
    content_type: str | None = None
    server: str | None = None
    connection: str | None = None
    date: str | None = None
    etag: str | None = None
    x_powered_by: str | None = None
    error: str | None = None


@dataclass(frozen=True)
class ExtractionRule:
    """One field pulled from the first match of a pattern."""

    field: str
    pattern: re.Pattern[str]
    convert: Callable[[str], Any] = str.strip


def _header_rule(field_name: str, header: str) -> ExtractionRule:
    # Header names match case-sensitively, as curl echoes them
    return ExtractionRule(field_name, re.compile(rf"< {re.escape(header)}: ([^\r\n]+)"))


@dataclass(frozen=True)
class RuleSet:
    """A versioned collection of extraction rules."""

    version: str
    rules: tuple[ExtractionRule, ...]
    error_markers: tuple[str, ...] = ()
    error_pattern: re.Pattern[str] | None = None


# HTTP/2 responses are echoed with lowercase header names and do not match.
CURL_VERBOSE_V1 = RuleSet(
    version="curl-verbose/1",
    rules=(
        ExtractionRule("status_code", re.compile(r"< HTTP/\d+(?:\.\d+)?\s+(\d+)"), int),
        _header_rule("content_type", "Content-Type"),
        ExtractionRule("content_length", re.compile(r"< Content-Length: (\d+)"), int),
        _header_rule("server", "Server"),
        _header_rule("connection", "Connection"),
        _header_rule("date", "Date"),
        _header_rule("etag", "ETag"),
        _header_rule("x_powered_by", "X-Powered-By"),
        ExtractionRule("response_time", re.compile(r"(\d+\.\d+) secs"), float),
    ),
    error_markers=("curl:", "error:"),
    error_pattern=re.compile(r"curl: \(\d+\) ([^\r\n]+)"),
)


class DiagnosticParser(ABC):
    """Turns a diagnostic stream into response metadata."""

    version: str

    @abstractmethod
    def parse(self, stderr: str) -> DiagnosticMetadata:
        """Extract whatever metadata the stream carries; never raises."""


class CurlVerboseParser(DiagnosticParser):
    """Regex extraction over curl's ``-v`` stream.

    Each rule is independent: a missing header leaves its field unset and
    only the first occurrence of a repeated header is kept.
    """

    def __init__(self, rule_set: RuleSet = CURL_VERBOSE_V1):
        self.rule_set = rule_set
        self.version = rule_set.version

    def parse(self, stderr: str) -> DiagnosticMetadata:
        values: dict[str, Any] = {}

        for rule in self.rule_set.rules:
            match = rule.pattern.search(stderr)
            if match:
                values[rule.field] = rule.convert(match.group(1))

        if self.rule_set.error_pattern is not None and any(
            marker in stderr for marker in self.rule_set.error_markers
        ):
            match = self.rule_set.error_pattern.search(stderr)
            if match:
                values["error"] = match.group(1).strip()

        if values:
            logger.debug(f"Parsed diagnostics ({self.version}): {sorted(values)}")
        return DiagnosticMetadata(**values)
