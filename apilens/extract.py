"""Collecting the vocabulary of OpenAPI v2, OpenAPI v3 and Discovery descriptions."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Iterator

from apilens.vocabulary import Vocabulary, WordCount

_V2_METHODS = ("get", "post", "put", "patch", "delete")
_V3_METHODS = ("get", "post", "put", "patch", "delete")
_V2_PARAMETER_LOCATIONS = frozenset({"body", "formData", "header", "path", "query"})


@dataclass
class _Counts:
    schemas: Counter = field(default_factory=Counter)
    operations: Counter = field(default_factory=Counter)
    parameters: Counter = field(default_factory=Counter)
    properties: Counter = field(default_factory=Counter)

    def vocabulary(self) -> Vocabulary:
        return Vocabulary(
            schemas=_word_counts(self.schemas),
            operations=_word_counts(self.operations),
            parameters=_word_counts(self.parameters),
            properties=_word_counts(self.properties),
        )


def _word_counts(counts: Counter) -> list[WordCount]:
    return [WordCount(word, counts[word]) for word in sorted(counts)]


def _mapping(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def _named(value: Any) -> Iterator[tuple[str, Any]]:
    for name, item in _mapping(value).items():
        yield str(name), item


def _path_items(document: dict) -> Iterator[dict]:
    for name, item in _named(document.get("paths")):
        if name.startswith("/") and isinstance(item, dict):
            yield item


def _operations(item: dict, methods: tuple[str, ...]) -> Iterator[dict]:
    for method in methods:
        operation = item.get(method)
        if isinstance(operation, dict):
            yield operation


def _count_operation_id(counts: _Counts, operation: dict) -> None:
    operation_id = operation.get("operationId")
    if operation_id:
        counts.operations[str(operation_id)] += 1


def _is_reference(value: Any) -> bool:
    return isinstance(value, dict) and "$ref" in value


def vocabulary_from_openapi_v2(document: dict) -> Vocabulary:
    """Collect the schema, operation, parameter and property names of an OpenAPI v2 description."""
    counts = _Counts()
    for name, schema in _named(document.get("definitions")):
        counts.schemas[name] += 1
        for prop, _ in _named(_mapping(schema).get("properties")):
            counts.properties[prop] += 1
    for item in _path_items(document):
        for operation in _operations(item, _V2_METHODS):
            _count_operation_id(counts, operation)
            for parameter in operation.get("parameters") or []:
                if not isinstance(parameter, dict) or _is_reference(parameter):
                    continue
                if parameter.get("in") in _V2_PARAMETER_LOCATIONS:
                    counts.parameters[str(parameter.get("name", ""))] += 1
    return counts.vocabulary()


def vocabulary_from_openapi_v3(document: dict) -> Vocabulary:
    """Collect the schema, operation, parameter and property names of an OpenAPI v3 description."""
    counts = _Counts()
    components = _mapping(document.get("components"))
    for _, parameter in _named(components.get("parameters")):
        if isinstance(parameter, dict) and not _is_reference(parameter):
            counts.parameters[str(parameter.get("name", ""))] += 1
    for name, schema in _named(components.get("schemas")):
        counts.schemas[name] += 1
        if isinstance(schema, dict) and not _is_reference(schema):
            for prop, _ in _named(schema.get("properties")):
                counts.properties[prop] += 1
    for name, _ in _named(components.get("responses")):
        counts.schemas[name] += 1
    for item in _path_items(document):
        for operation in _operations(item, _V3_METHODS):
            _count_operation_id(counts, operation)
            for parameter in operation.get("parameters") or []:
                if isinstance(parameter, dict) and not _is_reference(parameter):
                    counts.parameters[str(parameter.get("name", ""))] += 1
    return counts.vocabulary()


def _discovery_schema(counts: _Counts, schema: Any) -> None:
    for name, prop in _named(_mapping(schema).get("properties")):
        counts.properties[name] += 1
        _discovery_schema(counts, prop)


def _discovery_parameter(counts: _Counts, parameter: Any) -> None:
    for name, prop in _named(_mapping(parameter).get("properties")):
        counts.properties[name] += 1
        _discovery_schema(counts, prop)


def _discovery_method(counts: _Counts, method: Any) -> None:
    method = _mapping(method)
    method_id = method.get("id")
    if method_id:
        counts.operations[str(method_id)] += 1
    for name, parameter in _named(method.get("parameters")):
        counts.parameters[name] += 1
        _discovery_parameter(counts, parameter)


def _discovery_resource(counts: _Counts, resource: Any) -> None:
    resource = _mapping(resource)
    for name, method in _named(resource.get("methods")):
        counts.properties[name] += 1
        _discovery_method(counts, method)
    for _, child in _named(resource.get("resources")):
        _discovery_resource(counts, child)


def vocabulary_from_discovery(document: dict) -> Vocabulary:
    """Collect the schema, operation, parameter and property names of a Discovery document."""
    counts = _Counts()
    for name, parameter in _named(document.get("parameters")):
        counts.parameters[name] += 1
        _discovery_parameter(counts, parameter)
    for name, schema in _named(document.get("schemas")):
        counts.schemas[name] += 1
        _discovery_schema(counts, schema)
    for _, method in _named(document.get("methods")):
        _discovery_method(counts, method)
    for _, resource in _named(document.get("resources")):
        _discovery_resource(counts, resource)
    return counts.vocabulary()