"""Structured result returned to probe callers."""

import json
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from curlguard.core.logging import get_logger
from curlguard.core.types import JSONDict
from curlguard.probe.diagnostics import DiagnosticMetadata

logger = get_logger("probe.response")


class ParsedResponse(BaseModel):
    """Result of one probe. ``error`` is set on failure or client-reported errors."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    data: Any = ""
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
    raw_stderr: str | None = None

    @classmethod
    def from_diagnostics(
        cls, data: Any, meta: DiagnosticMetadata, raw_stderr: str | None = None
    ) -> "ParsedResponse":
        return cls(
            data=data,
            status_code=meta.status_code,
            response_time=meta.response_time,
            content_length=meta.content_length,
            content_type=meta.content_type,
            server=meta.server,
            connection=meta.connection,
            date=meta.date,
            etag=meta.etag,
            x_powered_by=meta.x_powered_by,
            error=meta.error,
            raw_stderr=raw_stderr,
        )

    @classmethod
    def failure(cls, message: str) -> "ParsedResponse":
        return cls(data="", error=message)

    @property
    def ok(self) -> bool:
        """True unless the probe failed before any response arrived."""
        return self.error is None or self.status_code is not None

    def to_dict(self) -> JSONDict:
        """camelCase dict with unset fields omitted (``data`` always present)."""
        out = self.model_dump(by_alias=True, exclude_none=True)
        out.setdefault("data", self.data)
        return out


def decode_payload(stdout: str) -> Any:
    """Decode stdout as JSON, falling back to the raw text."""
    try:
        return json.loads(stdout)
    except json.JSONDecodeError as e:
        logger.debug(f"Response body is not JSON ({e.msg}), keeping raw text")
        return stdout
