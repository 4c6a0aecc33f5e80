"""Allow/deny policy over tokenized curl commands."""

import dataclasses
import ipaddress
from dataclasses import dataclass
from typing import NoReturn, TypeAlias
from urllib.parse import SplitResult, urlsplit

from curlguard.core.logging import get_logger
from curlguard.probe.errors import LexError, PolicyError, PolicyViolation
from curlguard.probe.extractor import PROGRAM
from curlguard.probe.flags import (
    ALLOWED_FLAGS,
    DATA_FLAGS,
    DENIED_FLAGS,
    HEADER_FLAGS,
    VALUE_FLAGS,
    CurlFlag,
)
from curlguard.probe.lexer import tokenize

logger = get_logger("probe.policy")

# Validated argv; element 0 is always the program name
ArgumentVector: TypeAlias = tuple[str, ...]

SHELL_METACHARACTERS = frozenset("|&;><`")
ALLOWED_SCHEMES = frozenset({"http", "https"})


@dataclass(frozen=True)
class ProbeLimits:
    """Fixed ceilings applied to every probe."""

    max_command_length: int = 20_000
    max_url_length: int = 4_096
    max_header_length: int = 8_192
    timeout_seconds: float = 15.0
    max_output_bytes: int = 2 * 1024 * 1024

    def replace(self, **changes: object) -> "ProbeLimits":
        """Return a copy with some limits overridden."""
        return dataclasses.replace(self, **changes)


DEFAULT_LIMITS = ProbeLimits()


def _has_glob_pattern(parts: SplitResult) -> bool:
    """True if curl would expand the URL into several requests.

    Brackets are only accepted around an IPv6 host literal.
    """
    tail = parts.path + parts.query + parts.fragment
    if any(char in tail for char in "{}[]"):
        return True
    if "{" in parts.netloc or "}" in parts.netloc:
        return True
    if "[" in parts.netloc or "]" in parts.netloc:
        host = parts.netloc.rsplit("@", 1)[-1]
        if not host.startswith("[") or host.count("[") != 1 or host.count("]") != 1:
            return True
        try:
            ipaddress.IPv6Address(host[1 : host.index("]")].split("%", 1)[0])
        except ValueError:
            return True
    return False


class CommandPolicy:
    """Validates curl commands against the flag and URL policy.

    Checks are fail-closed: the first violation raises PolicyError and
    nothing is executed.
    """

    def __init__(self, limits: ProbeLimits = DEFAULT_LIMITS):
        self.limits = limits

    def check(self, raw: str) -> ArgumentVector:
        """Guard, tokenize and validate a raw command string."""
        self.guard_raw(raw)
        try:
            tokens = tokenize(raw.strip())
        except LexError:
            logger.warning("Rejected command: unclosed quote")
            raise
        return self.validate(tokens)

    def guard_raw(self, raw: str) -> None:
        """Checks that apply to the text before it is tokenized."""
        if any(char in SHELL_METACHARACTERS for char in raw):
            self._reject(PolicyViolation.SHELL_METACHARACTER)
        if len(raw) > self.limits.max_command_length:
            self._reject(PolicyViolation.COMMAND_TOO_LONG)

    def validate(self, tokens: list[str]) -> ArgumentVector:
        """
        Validate a token list and return it as an argument vector.

        Args:
            tokens: Output of the lexer

        Returns:
            The same tokens as an immutable tuple

        Raises:
            PolicyError: On the first violation found
        """
        if not tokens:
            self._reject(PolicyViolation.EMPTY_COMMAND)
        if tokens[0] != PROGRAM:
            self._reject(PolicyViolation.PROGRAM_MISMATCH)

        url_count = 0
        i = 1
        while i < len(tokens):
            token = tokens[i]

            if not token.startswith("-"):
                self.validate_url(token)
                url_count += 1
                i += 1
                continue

            flag = CurlFlag.lookup(token)
            # Deny-list first so a forbidden flag never reads as merely unsupported
            if flag in DENIED_FLAGS:
                self._reject(PolicyViolation.FLAG_NOT_ALLOWED, token)
            if flag not in ALLOWED_FLAGS:
                self._reject(PolicyViolation.UNSUPPORTED_FLAG, token)

            if flag in VALUE_FLAGS:
                if i + 1 >= len(tokens):
                    self._reject(PolicyViolation.MISSING_FLAG_VALUE, token)
                value = tokens[i + 1]
                if self._reads_file(flag, value):
                    self._reject(PolicyViolation.FILE_DATA_SOURCE)
                if flag in HEADER_FLAGS and len(value) > self.limits.max_header_length:
                    self._reject(PolicyViolation.HEADER_TOO_LONG)
                i += 2
            else:
                i += 1

        if url_count == 0:
            self._reject(PolicyViolation.MISSING_URL)
        if url_count > 1:
            self._reject(PolicyViolation.MULTIPLE_URLS)

        return tuple(tokens)

    def validate_url(self, raw: str) -> None:
        """Require an absolute, credential-free http(s) URL."""
        try:
            parts = urlsplit(raw)
            has_credentials = parts.username is not None or parts.password is not None
        except ValueError:
            self._reject(PolicyViolation.INVALID_URL, raw[:200])

        if not parts.scheme:
            self._reject(PolicyViolation.INVALID_URL, raw[:200])
        if parts.scheme.lower() not in ALLOWED_SCHEMES:
            self._reject(PolicyViolation.UNSUPPORTED_SCHEME)
        if has_credentials:
            self._reject(PolicyViolation.URL_CREDENTIALS)
        if not parts.netloc or not parts.hostname:
            self._reject(PolicyViolation.INVALID_URL, raw[:200])
        if _has_glob_pattern(parts):
            self._reject(PolicyViolation.INVALID_URL, raw[:200])
        if len(raw) > self.limits.max_url_length:
            self._reject(PolicyViolation.URL_TOO_LONG)

    @staticmethod
    def _reads_file(flag: CurlFlag, value: str) -> bool:
        """True if curl would load this flag's value from a local file."""
        if flag is CurlFlag.DATA_URLENCODE:
            # name@file form: an @ before the first = names a file
            return "@" in value.split("=", 1)[0]
        if flag in DATA_FLAGS or flag in HEADER_FLAGS:
            return value.startswith("@")
        return False

    def _reject(self, reason: PolicyViolation, detail: str | None = None) -> NoReturn:
        logger.warning(f"Rejected command: {reason.name}" + (f" ({detail})" if detail else ""))
        raise PolicyError(reason, detail)
