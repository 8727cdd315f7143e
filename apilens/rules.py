"""API design rules for parameter names (AIP-122 and AIP-140)."""

from __future__ import annotations

import re
from dataclasses import dataclass, field as dataclass_field

_NAME_SUFFIX = "_name"

_ABBREVIATIONS = {
    "configuration": "config",
    "identifier": "id",
    "information": "info",
    "specification": "spec",
    "statistics": "stats",
}

_NUMBER_START = re.compile(r"^[0-9]")

_RESERVED_WORDS = frozenset(
    {
        "abstract", "and", "arguments", "as", "assert", "async", "await", "boolean",
        "break", "byte", "case", "catch", "char", "class", "const", "continue",
        "debugger", "def", "default", "del", "delete", "do", "double", "elif",
        "else", "enum", "eval", "except", "export", "extends", "false", "final",
        "finally", "float", "for", "from", "function", "global", "goto", "if",
        "implements", "import", "in", "instanceof", "int", "interface", "is",
        "lambda", "let", "long", "native", "new", "nonlocal", "not", "null", "or",
        "package", "pass", "private", "protected", "public", "raise", "return",
        "short", "static", "strictfp", "super", "switch", "synchronized", "this",
        "throw", "throws", "transient", "true", "try", "typeof", "var", "void",
        "volatile", "while", "with", "yield",
    }
)

_PREPOSITIONS = frozenset(
    {
        "after", "at", "before", "between", "but", "by", "except", "for", "from",
        "in", "including", "into", "of", "over", "since", "to", "toward", "under",
        "upon", "with", "within", "without",
    }
)


@dataclass
class Field:
    """A named field found in an API description, with its location."""

    name: str
    path: list[str] = dataclass_field(default_factory=list)


@dataclass
class RuleMessage:
    """A finding produced by a rule."""

    type: str
    message: str
    suggestion: str = ""
    path: list[str] = dataclass_field(default_factory=list)


def _is_delimiter(ch: str) -> bool:
    return ch in ("-", "_") or (ch != "" and ch.isspace())


def _is_upper(ch: str) -> bool:
    return "A" <= ch <= "Z" and ch != ""


def _is_lower(ch: str) -> bool:
    return "a" <= ch <= "z" and ch != ""


def _ascii_lower(ch: str) -> str:
    return ch.lower() if _is_upper(ch) else ch


def _snake_case(text: str) -> str:
    """Convert camel, kebab or spaced text to snake case."""
    s = text.strip()
    out: list[str] = []
    prev = curr = ""
    for nxt in s:
        if _is_delimiter(curr):
            if not _is_delimiter(prev):
                out.append("_")
        elif _is_upper(curr):
            if _is_lower(prev) or (_is_upper(prev) and _is_lower(nxt)):
                out.append("_")
            out.append(_ascii_lower(curr))
        elif curr:
            out.append(_ascii_lower(curr))
        prev, curr = curr, nxt
    if s:
        if _is_upper(curr) and _is_lower(prev):
            out.append("_")
        out.append(_ascii_lower(curr))
    return "".join(out)


def check_name_suffix(name: str) -> tuple[bool, str]:
    """Report whether a name ends in "_name", with the name stripped of it."""
    if name.endswith(_NAME_SUFFIX):
        return True, name[: -len(_NAME_SUFFIX)]
    return False, name


def aip122_driver(field: Field) -> list[RuleMessage]:
    """Apply all AIP-122 checks to a field."""
    messages = []
    found, suggestion = check_name_suffix(field.name)
    if found:
        messages.append(
            RuleMessage(
                type="Error",
                message='Message: Parameters must not use the suffix "_name"\n',
                suggestion=f"Suggestion: Rename field {field.name} to {suggestion}\n",
                path=field.path,
            )
        )
    return messages


def check_snake_case(field: str) -> tuple[bool, str]:
    """Report whether a name is lower snake case, with the suggested form."""
    snake = _snake_case(field).lower()
    return snake == field, snake


def check_abbreviation(field: str) -> tuple[bool, str]:
    """Report whether a name has a common abbreviation, with that abbreviation."""
    suggestion = _ABBREVIATIONS.get(field)
    if suggestion is not None:
        return True, suggestion
    return False, field


def check_numbers(field: str) -> bool:
    """Report whether any word of a name begins with a digit."""
    return any(_NUMBER_START.match(segment) for segment in field.split("_"))


def check_reserved_words(field: str) -> bool:
    """Report whether any word of a name is a reserved word."""
    return any(segment in _RESERVED_WORDS for segment in field.split("_"))


def check_prepositions(field: str) -> bool:
    """Report whether any word of a name is a preposition."""
    return any(segment in _PREPOSITIONS for segment in field.split("_"))


def aip140_driver(field: Field) -> list[RuleMessage]:
    """Apply all AIP-140 checks to a field."""
    name = field.name
    messages = []
    ok, suggestion = check_snake_case(name)
    if not ok:
        messages.append(
            RuleMessage(
                type="Error",
                message="Parameter names must follow case convention: lower_snake_case\n",
                suggestion=f"Rename field {name} to {suggestion}\n",
                path=field.path,
            )
        )
    found, suggestion = check_abbreviation(name)
    if found:
        messages.append(
            RuleMessage(
                type="Error",
                message="Parameters should use common abbreviations if applicable\n",
                suggestion=f"Rename field {name} to {suggestion}\n",
                path=field.path,
            )
        )
    if check_numbers(name):
        messages.append(
            RuleMessage(
                type="Error",
                message=f"Parameters must not begin with a number: {name}\n",
                path=field.path,
            )
        )
    if check_reserved_words(name):
        messages.append(
            RuleMessage(
                type="Error",
                message=f"Parameter names must not be reserved words: {name}\n",
                path=field.path,
            )
        )
    if check_prepositions(name):
        messages.append(
            RuleMessage(
                type="Error",
                message=f"Parameter must not include prepositions in their names: {name}\n",
                path=field.path,
            )
        )
    return messages