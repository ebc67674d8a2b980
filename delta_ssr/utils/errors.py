"""
Console and JSON Lines reporting for render events.

Every event is keyed by a code from :data:`ERRORS` and printed as a
``[ERROR]`` or ``[OK]`` line. The conversion core passes a ``report_dir``
only during batch runs; with one, entries are also appended to
``errors.jsonl`` or ``success.jsonl`` there. Without one, nothing touches
the filesystem.

Unknown codes are reported with the code itself as message.
"""

from __future__ import annotations

import json
import os
from typing import Any, Dict, Optional

# The keys include both error and success codes as the same lookup is used by
# :func:`report_error` and :func:`report_ok`.
ERRORS: Dict[str, str] = {
    "INVALID_DELTA": "Input is not a valid delta document",
    "INVALID_EMBED_SIZE": "Embed size is not numeric, using neutral placeholder",
    "UNKNOWN_EMBED": "Embed kind not handled, rendered as neutral placeholder",
    "RENDER_FAILED": "Failed to render document",
    "RENDERED": "Document rendered successfully",
}

ERROR_LOG_NAME = "errors.jsonl"
OK_LOG_NAME = "success.jsonl"


def _write_jsonl(report_dir: str, name: str, data: Dict[str, Any]) -> None:
    """Append ``data`` as a JSON object followed by a newline to ``report_dir/name``."""
    os.makedirs(report_dir, exist_ok=True)
    with open(os.path.join(report_dir, name), "a", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False)
        f.write("\n")


def _describe(context: Dict[str, Any]) -> str:
    return context.get("source") or context.get("embed") or ""


def report_error(
    code: str,
    context: Dict[str, Any],
    exc: Optional[Exception] = None,
    *,
    report_dir: Optional[str] = None,
) -> Dict[str, Any]:
    """Log a problem described by ``context``.

    Parameters
    ----------
    code:
        A key identifying the type of problem. If ``code`` is present in
        :data:`ERRORS` its value will be used as the message.
    context:
        Free-form details. The ``source`` (file being rendered) or ``embed``
        (embed kind) keys are shown on the console line when present.
    exc:
        Optional exception instance that triggered the error. Its string
        representation is included in the entry.
    report_dir:
        Directory receiving ``errors.jsonl``. Nothing is written when omitted.

    Returns the entry that was logged.
    """
    message = ERRORS.get(code, code)
    entry: Dict[str, Any] = {"code": code, "message": message}
    entry.update(context)
    if exc is not None:
        entry["error"] = str(exc)
    print(f"[ERROR] {message} - {_describe(context)}")
    if report_dir:
        _write_jsonl(report_dir, ERROR_LOG_NAME, entry)
    return entry


def report_ok(
    code: str,
    context: Dict[str, Any],
    extra: Optional[Dict[str, Any]] = None,
    *,
    report_dir: Optional[str] = None,
) -> Dict[str, Any]:
    """Log a successful event described by ``context``.

    ``extra`` is merged into the entry; ``report_dir`` receives
    ``success.jsonl`` when given.
    """
    message = ERRORS.get(code, code)
    entry: Dict[str, Any] = {"code": code, "message": message}
    entry.update(context)
    if extra:
        entry.update(extra)
    print(f"[OK] {message} - {_describe(context)}")
    if report_dir:
        _write_jsonl(report_dir, OK_LOG_NAME, entry)
    return entry
