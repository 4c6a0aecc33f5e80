"""Closed set of curl flags known to the policy.

Every spelling the policy has an opinion about is a member of ``CurlFlag``;
anything else is unsupported. The allow/deny partitions are frozensets of
members so a flag cannot drift between them at runtime.
"""

from enum import Enum


class CurlFlag(str, Enum):
    # Request shape
    REQUEST = "-X"
    REQUEST_LONG = "--request"
    HEADER = "-H"
    HEADER_LONG = "--header"
    HEAD = "-I"
    HEAD_LONG = "--head"

    # Output noise
    SILENT = "-s"
    SILENT_LONG = "--silent"
    NO_PROGRESS_METER = "--no-progress-meter"
    VERBOSE = "-v"
    VERBOSE_LONG = "--verbose"

    # Transport
    COMPRESSED = "--compressed"
    LOCATION = "-L"
    LOCATION_LONG = "--location"
    MAX_TIME = "--max-time"
    CONNECT_TIMEOUT = "--connect-timeout"
    HTTP1_1 = "--http1.1"
    HTTP2 = "--http2"

    # Request body
    DATA = "-d"
    DATA_LONG = "--data"
    DATA_RAW = "--data-raw"
    DATA_BINARY = "--data-binary"
    DATA_URLENCODE = "--data-urlencode"

    # Forbidden: local files, credentials, routing, help
    CONFIG = "-K"
    CONFIG_LONG = "--config"
    OUTPUT = "-o"
    OUTPUT_LONG = "--output"
    REMOTE_NAME = "-O"
    REMOTE_NAME_LONG = "--remote-name"
    WRITE_OUT = "--write-out"
    DUMP_HEADER = "--dump-header"
    TRACE = "--trace"
    TRACE_ASCII = "--trace-ascii"
    TRACE_TIME = "--trace-time"
    UPLOAD_FILE = "-T"
    UPLOAD_FILE_LONG = "--upload-file"
    USER = "-u"
    USER_LONG = "--user"
    PROTO = "--proto"
    PROTO_REDIR = "--proto-redir"
    INTERFACE = "--interface"
    PROXY = "--proxy"
    HELP = "--help"
    MANUAL = "--manual"

    @classmethod
    def lookup(cls, token: str) -> "CurlFlag | None":
        """Map a command-line token to its member, or None if unknown."""
        try:
            return cls(token)
        except ValueError:
            return None


ALLOWED_FLAGS: frozenset[CurlFlag] = frozenset(
    {
        CurlFlag.REQUEST,
        CurlFlag.REQUEST_LONG,
        CurlFlag.HEADER,
        CurlFlag.HEADER_LONG,
        CurlFlag.HEAD,
        CurlFlag.HEAD_LONG,
        CurlFlag.SILENT,
        CurlFlag.SILENT_LONG,
        CurlFlag.NO_PROGRESS_METER,
        CurlFlag.COMPRESSED,
        CurlFlag.LOCATION,
        CurlFlag.LOCATION_LONG,
        CurlFlag.MAX_TIME,
        CurlFlag.CONNECT_TIMEOUT,
        CurlFlag.HTTP1_1,
        CurlFlag.HTTP2,
        CurlFlag.DATA,
        CurlFlag.DATA_LONG,
        CurlFlag.DATA_RAW,
        CurlFlag.DATA_BINARY,
        CurlFlag.DATA_URLENCODE,
        CurlFlag.VERBOSE,
        CurlFlag.VERBOSE_LONG,
    }
)

DENIED_FLAGS: frozenset[CurlFlag] = frozenset(
    {
        CurlFlag.CONFIG,
        CurlFlag.CONFIG_LONG,
        CurlFlag.OUTPUT,
        CurlFlag.OUTPUT_LONG,
        CurlFlag.REMOTE_NAME,
        CurlFlag.REMOTE_NAME_LONG,
        CurlFlag.WRITE_OUT,
        CurlFlag.DUMP_HEADER,
        CurlFlag.TRACE,
        CurlFlag.TRACE_ASCII,
        CurlFlag.TRACE_TIME,
        CurlFlag.UPLOAD_FILE,
        CurlFlag.UPLOAD_FILE_LONG,
        CurlFlag.USER,
        CurlFlag.USER_LONG,
        CurlFlag.PROTO,
        CurlFlag.PROTO_REDIR,
        CurlFlag.INTERFACE,
        CurlFlag.PROXY,
        CurlFlag.HELP,
        CurlFlag.MANUAL,
    }
)

DATA_FLAGS: frozenset[CurlFlag] = frozenset(
    {
        CurlFlag.DATA,
        CurlFlag.DATA_LONG,
        CurlFlag.DATA_RAW,
        CurlFlag.DATA_BINARY,
        CurlFlag.DATA_URLENCODE,
    }
)

HEADER_FLAGS: frozenset[CurlFlag] = frozenset({CurlFlag.HEADER, CurlFlag.HEADER_LONG})

# Flags whose next token is consumed as their argument
VALUE_FLAGS: frozenset[CurlFlag] = (
    frozenset(
        {
            CurlFlag.REQUEST,
            CurlFlag.REQUEST_LONG,
            CurlFlag.MAX_TIME,
            CurlFlag.CONNECT_TIMEOUT,
        }
    )
    | DATA_FLAGS
    | HEADER_FLAGS
)

