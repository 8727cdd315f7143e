"""Converting the output of external API linters into linter results."""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any, Iterable

from apilens.lint import LintMessage, Linter

_ERROR = "Error"
_WARNING = "Warning"

# (section, key, message type, path given as a dotted string)
_VALIDATOR_SECTIONS = (
    ("errors", "parameters-ibm", _ERROR, False),
    ("errors", "paths-ibm", _ERROR, False),
    ("errors", "paths", _ERROR, True),
    ("errors", "schema-ibm", _ERROR, False),
    ("errors", "form-data", _ERROR, True),
    ("errors", "walker-ibm", _ERROR, False),
    ("warnings", "operation-ids", _WARNING, True),
    ("warnings", "operations-shared", _WARNING, True),
    ("warnings", "refs", _WARNING, True),
    ("warnings", "schema-ibm", _WARNING, False),
    ("warnings", "paths-ibm", _WARNING, False),
    ("warnings", "walker-ibm", _WARNING, False),
    ("warnings", "circular-references-ibm", _WARNING, True),
    ("warnings", "operation", _WARNING, True),
    ("warnings", "responses", _WARNING, False),
    ("warnings", "parameters-ibm", _WARNING, False),
)

_SPECTRAL_SEPARATOR = re.compile(r"[]: *]")
_OCTAL = re.compile(r"[+-]?0[0-7_]+")


def _mapping(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def _validator_message(entry: dict, message_type: str, dotted: bool) -> LintMessage:
    path = entry.get("path")
    if dotted:
        keys = str(path or "").split(".")
    else:
        keys = [str(key) for key in path or []]
    return LintMessage(
        type=message_type,
        message=str(entry.get("message", "")),
        keys=keys,
        line=int(entry.get("line", 0) or 0),
    )


def messages_from_openapi_validator(data: dict | str | bytes) -> list[LintMessage]:
    """Build messages from the JSON results of openapi-validator."""
    if isinstance(data, (str, bytes)):
        data = json.loads(data)
    results = _mapping(data)
    return [
        _validator_message(entry, message_type, dotted)
        for section, key, message_type, dotted in _VALIDATOR_SECTIONS
        for entry in _mapping(results.get(section)).get(key) or []
        if isinstance(entry, dict)
    ]


def lint_openapi_validator(filename: str | Path) -> Linter:
    """Read an openapi-validator JSON result file into linter results."""
    data = Path(filename).read_bytes()
    return Linter(messages=messages_from_openapi_validator(data))


def _parse_line_number(text: str) -> int:
    try:
        if _OCTAL.fullmatch(text):
            return int(text.replace("_", ""), 8)
        return int(text, 0)
    except ValueError:
        return 0


def parse_spectral_output(lines: Iterable[str]) -> list[LintMessage]:
    """Build messages from lines of spectral's text output."""
    messages = []
    for line in lines:
        parts = _SPECTRAL_SEPARATOR.split(line, maxsplit=5)
        if len(parts) < 6:
            raise ValueError(f"malformed spectral output line: {line!r}")
        messages.append(
            LintMessage(
                type=parts[3],
                message=parts[5],
                line=_parse_line_number(parts[1]),
            )
        )
    return messages


def lint_spectral(filename: str | Path) -> Linter:
    """Read a spectral text result file into linter results."""
    lines = Path(filename).read_text(encoding="utf-8").splitlines()
    return Linter(messages=parse_spectral_output(lines))