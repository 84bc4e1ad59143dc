"""Central error mapping for command problems.

Single source of truth for mapping error codes to problem titles. Command
handlers and the problem factory import from here instead of hardcoding
strings.
"""

from __future__ import annotations

STORE_IO = {
    "code": "STORE_IO_ERROR",
    "title": "Storage Unavailable",
}

STORE_PARSE = {
    "code": "STORE_PARSE_ERROR",
    "title": "Corrupt Document",
}

NOT_FOUND = {
    "code": "NOT_FOUND",
    "title": "Not Found",
}

VALIDATION = {
    "code": "VALIDATION_ERROR",
    "title": "Invalid Request",
}

UNKNOWN_COMMAND = {
    "code": "UNKNOWN_COMMAND",
    "title": "Unknown Command",
}

INVALID_ARGUMENTS = {
    "code": "INVALID_ARGUMENTS",
    "title": "Invalid Arguments",
}

INTERNAL = {
    "code": "INTERNAL_ERROR",
    "title": "Internal Error",
}

ERROR_MAP = {
    entry["code"]: entry
    for entry in (STORE_IO, STORE_PARSE, NOT_FOUND, VALIDATION, UNKNOWN_COMMAND, INVALID_ARGUMENTS, INTERNAL)
}

__all__ = ["ERROR_MAP"]
