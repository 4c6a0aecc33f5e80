"""Typed failures raised inside the probe pipeline.

Every failure carries a ``kind`` so the pipeline boundary can log it
before flattening it into the error string of the returned record.
"""

from enum import Enum


class FailureKind(Enum):
    LEX = "lex"
    POLICY = "policy"
    EXECUTION = "execution"


class PolicyViolation(Enum):
    """Why the policy validator rejected a command."""

    SHELL_METACHARACTER = "Shell metacharacters are not allowed."
    COMMAND_TOO_LONG = "Command too long."
    EMPTY_COMMAND = "Empty curl command."
    PROGRAM_MISMATCH = "Only curl is allowed."
    MISSING_URL = "URL is required."
    MULTIPLE_URLS = "Multiple URLs are not allowed."
    INVALID_URL = "Invalid URL."
    UNSUPPORTED_SCHEME = "Only HTTP/HTTPS URLs are allowed."
    URL_CREDENTIALS = "Credentials in URL are not allowed."
    URL_TOO_LONG = "URL too long."
    FLAG_NOT_ALLOWED = "Flag not allowed."
    UNSUPPORTED_FLAG = "Unsupported flag."
    MISSING_FLAG_VALUE = "Flag requires a value."
    FILE_DATA_SOURCE = "Reading data from files is not allowed."
    HEADER_TOO_LONG = "Header value too long."


class ExecutionFailure(Enum):
    SPAWN = "spawn"
    TIMEOUT = "timeout"
    OUTPUT_LIMIT = "output_limit"


class ProbeError(Exception):
    """Base class for pipeline failures."""

    kind: FailureKind

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class LexError(ProbeError):
    """Unterminated quote in the command text."""

    kind = FailureKind.LEX


class PolicyError(ProbeError):
    """Command rejected by the flag/URL policy."""

    kind = FailureKind.POLICY

    def __init__(self, reason: PolicyViolation, detail: str | None = None):
        message = reason.value if detail is None else f"{reason.value.rstrip('.')}: {detail}"
        super().__init__(message)
        self.reason = reason
        self.detail = detail


class ExecutionError(ProbeError):
    """curl could not be run to completion."""

    kind = FailureKind.EXECUTION

    def __init__(self, failure: ExecutionFailure, message: str):
        super().__init__(message)
        self.failure = failure
