"""
Extraction of native ORA- error numbers from driver exceptions.
"""

from __future__ import annotations

import re
from typing import Any, Final

UNKNOWN_ERROR_CODE: Final[int] = 0

_ORA_CODE_RE = re.compile(r"\bORA-(\d{1,5})\b")


def _as_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        match = _ORA_CODE_RE.search(value)
        if match:
            return int(match.group(1))
        stripped = value.strip()
        if stripped.isdigit():
            return int(stripped)
    return None


def _error_record(error: BaseException) -> Any:
    args = getattr(error, "args", ())
    if args and not isinstance(args[0], (str, bytes, int)):
        return args[0]
    return None


def extract_error_code(error: BaseException | None) -> int:
    """
    Return the native numeric error code carried by ``error``.

    The structured error record (``error.args[0]`` for python-oracledb) is
    read first, but only a well-typed integer ``code`` is trusted there. The
    looser accessors (``full_code``, a ``code`` attribute on the exception,
    then the message text) are tried next. Unknown errors yield
    ``UNKNOWN_ERROR_CODE``.
    """

    if error is None:
        return UNKNOWN_ERROR_CODE

    record = _error_record(error)
    if record is not None:
        code = getattr(record, "code", None)
        if isinstance(code, int) and not isinstance(code, bool):
            return code

    candidates = []
    if record is not None:
        candidates.append(getattr(record, "full_code", None))
        candidates.append(getattr(record, "code", None))
    candidates.append(getattr(error, "full_code", None))
    candidates.append(getattr(error, "code", None))
    for candidate in candidates:
        code = _as_int(candidate)
        if code is not None:
            return code

    try:
        message = str(record if record is not None else error)
    except Exception:
        return UNKNOWN_ERROR_CODE
    code = _as_int(message)
    if code is not None:
        return code
    return UNKNOWN_ERROR_CODE


def format_error_code(code: int) -> str:
    if code == UNKNOWN_ERROR_CODE:
        return "ORA-?????"
    return f"ORA-{code:05d}"
