"""Style checks that report missing descriptions and list paths."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Iterator

_NO_DESCRIPTION = "NODESCRIPTION"
_V2_METHODS = ("get", "post", "put", "delete")
_PARAMETER_LOCATIONS = frozenset({"body", "header", "formData", "query", "path"})


class Level(IntEnum):
    """Severity of a message."""

    UNKNOWN = 0
    INFO = 1
    WARNING = 2
    ERROR = 3
    FATAL = 4


@dataclass
class Message:
    """A message reported by a linter about a location in a document."""

    level: Level
    code: str
    text: str
    keys: list[str] = field(default_factory=list)


def _named_paths(document: dict) -> Iterator[tuple[str, Any]]:
    paths = document.get("paths") or {}
    for name, item in paths.items():
        if isinstance(name, str) and name.startswith("/"):
            yield name, item


def _warning(text: str, keys: list[str]) -> Message:
    return Message(Level.WARNING, _NO_DESCRIPTION, text, keys)


class DescriptionLinterV2:
    """Reports operations, parameters, responses and definitions without descriptions."""

    def __init__(self, document: dict):
        self.document = document

    def run(self) -> list[Message]:
        messages: list[Message] = []
        for name, item in _named_paths(self.document):
            if not isinstance(item, dict):
                continue
            for method in _V2_METHODS:
                operation = item.get(method)
                if isinstance(operation, dict):
                    messages.extend(
                        self._analyze_operation(["paths", name, method], operation)
                    )
        definitions = self.document.get("definitions") or {}
        for name, definition in definitions.items():
            if isinstance(definition, dict):
                messages.extend(
                    self._analyze_definition(["definitions", str(name)], definition)
                )
        return messages

    @staticmethod
    def _analyze_operation(keys: list[str], operation: dict) -> list[Message]:
        messages = []
        if not operation.get("description"):
            messages.append(_warning("Operation has no description.", keys))
        for parameter in operation.get("parameters") or []:
            if not isinstance(parameter, dict) or "$ref" in parameter:
                continue
            if parameter.get("in") in _PARAMETER_LOCATIONS and not parameter.get(
                "description"
            ):
                messages.append(
                    _warning(
                        "Parameter has no description.",
                        [*keys, "responses", str(parameter.get("name", ""))],
                    )
                )
        for code, response in (operation.get("responses") or {}).items():
            code = str(code)
            if code.startswith("x-") or not isinstance(response, dict):
                continue
            if "$ref" in response:
                continue
            schema = response.get("schema")
            if isinstance(schema, dict) and not schema.get("description"):
                messages.append(
                    _warning("Response has no description.", [*keys, "responses", code])
                )
        return messages

    @staticmethod
    def _analyze_definition(keys: list[str], definition: dict) -> list[Message]:
        messages = []
        if not definition.get("description"):
            messages.append(_warning("Definition has no description.", keys))
        for name, prop in (definition.get("properties") or {}).items():
            if isinstance(prop, dict) and not prop.get("description"):
                messages.append(
                    _warning("Property has no description.", [*keys, "properties", str(name)])
                )
        return messages


class DescriptionLinterV3:
    """Description checks for OpenAPI v3; it currently reports nothing."""

    def __init__(self, document: dict):
        self.document = document

    def run(self) -> list[Message]:
        return []


def check_paths(document: dict) -> list[Message]:
    """List every path of an OpenAPI v2 or v3 description as an info message."""
    return [
        Message(Level.INFO, "PATH", name, ["paths", name])
        for name, _ in _named_paths(document)
    ]