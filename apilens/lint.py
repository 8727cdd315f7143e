"""Applying the AIP naming rules to the parameters of OpenAPI descriptions."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator

from apilens.rules import Field, RuleMessage, aip122_driver, aip140_driver

_V2_METHODS = ("get", "put", "post", "delete", "patch")
_V3_METHODS = ("get", "post", "put", "patch", "delete")
_V2_PARAMETER_LOCATIONS = frozenset({"body", "formData", "header", "path", "query"})


@dataclass
class LintMessage:
    """A linter finding with its location in the document."""

    type: str
    message: str
    suggestion: str = ""
    keys: list[str] = field(default_factory=list)
    line: int = 0


@dataclass
class Linter:
    """The collected results of a linter run."""

    messages: list[LintMessage] = field(default_factory=list)


def _mapping(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def _is_reference(value: Any) -> bool:
    return isinstance(value, dict) and "$ref" in value


def _path_items(document: dict) -> Iterator[tuple[str, dict]]:
    for name, item in _mapping(document.get("paths")).items():
        if isinstance(name, str) and name.startswith("/") and isinstance(item, dict):
            yield name, item


def _operations(item: dict, methods: tuple[str, ...]) -> Iterator[tuple[str, dict]]:
    for method in methods:
        operation = item.get(method)
        if isinstance(operation, dict):
            yield method, operation


def _fields_v2(document: dict) -> Iterator[Field]:
    for path_name, item in _path_items(document):
        for method, operation in _operations(item, _V2_METHODS):
            prefix = ["paths", path_name, method, "parameters"]
            for index, parameter in enumerate(operation.get("parameters") or []):
                if not isinstance(parameter, dict) or _is_reference(parameter):
                    continue
                if parameter.get("in") in _V2_PARAMETER_LOCATIONS:
                    yield Field(
                        str(parameter.get("name", "")), [*prefix, str(index), "name"]
                    )


def _fields_v3(document: dict) -> Iterator[Field]:
    components = _mapping(document.get("components"))
    for name, parameter in _mapping(components.get("parameters")).items():
        if isinstance(parameter, dict) and not _is_reference(parameter):
            yield Field(
                str(parameter.get("name", "")),
                ["components", "parameters", str(name), "name"],
            )
    for path_name, item in _path_items(document):
        for method, operation in _operations(item, _V3_METHODS):
            keys = ["paths", path_name, method, "parameters", "name"]
            for parameter in operation.get("parameters") or []:
                if isinstance(parameter, dict) and not _is_reference(parameter):
                    yield Field(str(parameter.get("name", "")), list(keys))


def _to_lint_message(message: RuleMessage) -> LintMessage:
    return LintMessage(
        type=message.type,
        message=message.message,
        suggestion=message.suggestion,
        keys=list(message.path),
    )


def _lint(fields: Iterable[Field]) -> tuple[Linter, int]:
    messages = [
        _to_lint_message(message)
        for f in fields
        for message in (*aip122_driver(f), *aip140_driver(f))
    ]
    return Linter(messages=messages), len(messages)


def aip_lint_v2(document: dict) -> tuple[Linter, int]:
    """Apply the AIP rules to the parameters of an OpenAPI v2 description."""
    return _lint(_fields_v2(document))


def aip_lint_v3(document: dict) -> tuple[Linter, int]:
    """Apply the AIP rules to the parameters of an OpenAPI v3 description."""
    return _lint(_fields_v3(document))