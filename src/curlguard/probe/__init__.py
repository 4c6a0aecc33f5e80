"""Restricted curl probe pipeline."""

from curlguard.probe.diagnostics import CurlVerboseParser, DiagnosticMetadata, DiagnosticParser
from curlguard.probe.errors import (
    ExecutionError,
    ExecutionFailure,
    FailureKind,
    LexError,
    PolicyError,
    PolicyViolation,
    ProbeError,
)
from curlguard.probe.executor import CurlExecutor, ExecutionOutcome
from curlguard.probe.extractor import extract_command
from curlguard.probe.lexer import tokenize
from curlguard.probe.pipeline import ProbePipeline, run_probe
from curlguard.probe.policy import DEFAULT_LIMITS, ArgumentVector, CommandPolicy, ProbeLimits
from curlguard.probe.response import ParsedResponse, decode_payload

__all__ = [
    "ArgumentVector",
    "CommandPolicy",
    "CurlExecutor",
    "CurlVerboseParser",
    "DEFAULT_LIMITS",
    "DiagnosticMetadata",
    "DiagnosticParser",
    "ExecutionError",
    "ExecutionFailure",
    "ExecutionOutcome",
    "FailureKind",
    "LexError",
    "ParsedResponse",
    "PolicyError",
    "PolicyViolation",
    "ProbeError",
    "ProbeLimits",
    "ProbePipeline",
    "decode_payload",
    "extract_command",
    "run_probe",
    "tokenize",
]
