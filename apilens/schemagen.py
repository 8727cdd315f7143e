"""Generating the JSON schema of OpenAPI v3 from the specification's object model."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Sequence

from apilens.specmodel import SchemaModel, SchemaObject, SchemaObjectField, new_schema_model

_log = logging.getLogger(__name__)

_DEFINITIONS = "#/definitions/"
_SPECIFICATION_EXTENSION = _DEFINITIONS + "specificationExtension"
_EXTENSION_PATTERN = "^x-"

_SPECIAL_DEFINITION_NAMES = {
    "OAuthFlows": "oauthFlows",
    "OAuthFlow": "oauthFlow",
    "XML": "xml",
    "ExternalDocumentation": "externalDocs",
}

_COMPONENT_NAME_PATTERN = r"^[a-zA-Z0-9\\.\\-_]+$"
_HEADER_NAME_PATTERN = r"^[a-zA-Z0-9!#\-\$%&'\*\+\\\.\^_`\|~]+"
_SCOPES_NAME_PATTERN = "^"

_OFFICIAL_SCHEMA = "http://json-schema.org/draft-04/schema#"
_OFFICIAL_PROPERTIES = (
    "title",
    "multipleOf",
    "maximum",
    "exclusiveMaximum",
    "minimum",
    "exclusiveMinimum",
    "maxLength",
    "minLength",
    "pattern",
    "maxItems",
    "minItems",
    "uniqueItems",
    "maxProperties",
    "minProperties",
    "required",
    "enum",
)

_SCHEMA_TITLE = "A JSON Schema for OpenAPI 3.0."
_SCHEMA_ID = "http://openapis.org/v3/schema.json#"


def lower_first(text: str) -> str:
    """Convert the first character of a string to lower case."""
    if not text:
        return ""
    return text[0].lower() + text[1:]


def pluralize(name: str) -> str:
    """The name of an object holding a map of the named type."""
    if name == "any":
        return "anys"
    if name.endswith("y"):
        return name[:-1] + "ies"
    if name.endswith("s"):
        return name + "Map"
    return name + "s"


def _ref(target: str) -> dict:
    return {"$ref": target}


def _array_of_schema() -> dict:
    return {
        "type": "array",
        "minItems": 1,
        "items": _ref(_DEFINITIONS + "schemaOrReference"),
    }


@dataclass
class SchemaBuilder:
    """Builds schemas for model objects, noting the union and map types they imply."""

    union_types: dict[str, tuple[str, str]] = field(default_factory=dict)
    map_types: dict[str, str] = field(default_factory=dict)

    def definition_name_for_type(self, type_name: str) -> str:
        """The definition reference for a type, noting union types."""
        name = _SPECIAL_DEFINITION_NAMES.get(type_name)
        if name is None:
            parts = type_name.split("OR")
            if len(parts) > 1:
                name = lower_first(parts[0]) + "Or" + parts[1]
                self.union_types[name] = (parts[0], parts[1])
            else:
                name = lower_first(type_name)
        return _DEFINITIONS + name

    def definition_name_for_map_of_type(self, type_name: str) -> str:
        """The definition reference for a map of a type, noting the map type."""
        parts = type_name.split("OR")
        if len(parts) > 1:
            element_name = lower_first(parts[0]) + "Or" + parts[1]
            self.union_types[element_name] = (parts[0], parts[1])
            map_name = pluralize(lower_first(parts[0])) + "Or" + pluralize(parts[1])
        else:
            element_name = lower_first(type_name)
            map_name = pluralize(element_name)
        self.map_types[map_name] = element_name
        return _DEFINITIONS + map_name

    def _value_schema(self, type_name: str) -> dict:
        if type_name in ("string", "boolean"):
            return {"type": type_name}
        if type_name == "primitive":
            return _ref(self.definition_name_for_type("Primitive"))
        return _ref(self.definition_name_for_type(type_name))

    def _field_schema(self, model_field: SchemaObjectField) -> dict:
        if model_field.is_array:
            return {
                "items": self._value_schema(model_field.type),
                "type": "array",
                "uniqueItems": True,
            }
        if model_field.is_map:
            return _ref(self.definition_name_for_map_of_type(model_field.type))
        return self._value_schema(model_field.type)

    @staticmethod
    def _pattern_name(model_object: SchemaObject, field_name: str) -> str:
        if model_object.name == "Scopes Object":
            name_pattern = _SCOPES_NAME_PATTERN
        elif model_object.name == "Headers Object":
            name_pattern = _HEADER_NAME_PATTERN
        else:
            name_pattern = _COMPONENT_NAME_PATTERN
        name = field_name.replace("{name}", name_pattern)
        name = name.replace("/{path}", "^/")
        name = name.replace("{expression}", "^")
        return name.replace("{property}", "^")

    def build_schema(self, model_object: SchemaObject) -> dict:
        """Build the JSON schema describing one model object."""
        schema: dict[str, Any] = {"type": "object"}
        if model_object.required_fields:
            schema["required"] = list(model_object.required_fields)
        schema["additionalProperties"] = False
        schema["description"] = model_object.description

        if model_object.fixed_fields:
            schema["properties"] = {
                model_field.name: self._field_schema(model_field)
                for model_field in model_object.fixed_fields
            }

        if model_object.patterned_fields:
            schema["patternProperties"] = {
                self._pattern_name(model_object, model_field.name): self._field_schema(
                    model_field
                )
                for model_field in model_object.patterned_fields
            }

        if model_object.extendable:
            patterns = schema.setdefault("patternProperties", {})
            patterns.setdefault(_EXTENSION_PATTERN, {})["$ref"] = _SPECIFICATION_EXTENSION
        elif _EXTENSION_PATTERN in schema.get("patternProperties", {}):
            print(f"INVALID EXTENSION SUPPORT {model_object.id}:{_EXTENSION_PATTERN}")

        return schema


def _add_implied_types(builder: SchemaBuilder, definitions: dict) -> None:
    for name in sorted(builder.union_types):
        if name not in definitions:
            first, second = builder.union_types[name]
            definitions[name] = {
                "oneOf": [
                    _ref(_DEFINITIONS + lower_first(first)),
                    _ref(_DEFINITIONS + lower_first(second)),
                ]
            }
    for name in sorted(builder.map_types):
        if name not in definitions:
            element = builder.map_types[name]
            if element == "string":
                value_schema: dict = {"type": "string"}
            else:
                value_schema = _ref(_DEFINITIONS + lower_first(element))
            definitions[name] = {"type": "object", "additionalProperties": value_schema}


def _add_fixed_definitions(definitions: dict) -> None:
    definitions["object"] = {"type": "object", "additionalProperties": True}
    definitions["any"] = {"additionalProperties": True}
    definitions["expression"] = {"type": "object", "additionalProperties": True}
    definitions["specificationExtension"] = {
        "description": "Any property starting with x- is valid.",
        "oneOf": [
            {"type": kind}
            for kind in ("null", "number", "boolean", "string", "object", "array")
        ],
    }
    definitions["defaultType"] = {
        "oneOf": [
            {"type": kind}
            for kind in ("null", "array", "object", "number", "boolean", "string")
        ]
    }


def _copy_header_from_parameter(definitions: dict) -> None:
    parameter = definitions.get("parameter")
    if parameter is None:
        return
    header = definitions.get("header")
    if header is None:
        raise ValueError("model has a parameter object but no header object")
    header["properties"] = {
        name: value
        for name, value in parameter.get("properties", {}).items()
        if name not in ("name", "in")
    }
    header["patternProperties"] = dict(parameter.get("patternProperties", {}))


def _complete_schema_definition(definitions: dict) -> None:
    schema_object = definitions.get("schema")
    if schema_object is None:
        raise ValueError("model has no schema object")
    properties = schema_object.setdefault("properties", {})
    for name in _OFFICIAL_PROPERTIES:
        properties[name] = _ref(f"{_OFFICIAL_SCHEMA}/properties/{name}")
    schema_object["additionalProperties"] = False
    properties["type"] = {"type": "string"}
    properties["allOf"] = _array_of_schema()
    properties["oneOf"] = _array_of_schema()
    properties["anyOf"] = _array_of_schema()
    properties["not"] = _ref(_DEFINITIONS + "schema")
    properties["items"] = {
        "anyOf": [_ref(_DEFINITIONS + "schemaOrReference"), _array_of_schema()]
    }
    properties["properties"] = {
        "type": "object",
        "additionalProperties": _ref(_DEFINITIONS + "schemaOrReference"),
    }
    properties["additionalProperties"] = {
        "oneOf": [_ref(_DEFINITIONS + "schemaOrReference"), {"type": "boolean"}]
    }
    properties["default"] = _ref(_DEFINITIONS + "defaultType")
    properties["description"] = {"type": "string"}
    properties["format"] = {"type": "string"}


def _fix_content_and_contact(definitions: dict) -> None:
    content = definitions.get("content")
    if content is not None:
        content["patternProperties"] = {"^": _ref(_DEFINITIONS + "mediaType")}
    contact = definitions.get("contact")
    if contact is not None:
        properties = contact.get("properties", {})
        if "email" in properties:
            properties["email"]["format"] = "email"
        if "url" in properties:
            properties["url"]["format"] = "uri"


def generate_schema(model: SchemaModel) -> dict:
    """Build the complete OpenAPI v3 JSON schema from the object model."""
    oas = model.object_with_id("oas")
    if oas is None:
        raise ValueError(
            "Unable to find OAS model. Has the source document structure changed?"
        )
    builder = SchemaBuilder()
    body = builder.build_schema(oas)
    schema: dict[str, Any] = {
        "$schema": _OFFICIAL_SCHEMA,
        "id": _SCHEMA_ID,
        "title": _SCHEMA_TITLE,
        **body,
    }

    definitions: dict[str, dict] = {}
    for model_object in model.objects:
        if model_object.id == "oas":
            continue
        name = "externalDocs" if model_object.id == "externalDocumentation" else model_object.id
        definitions[name] = builder.build_schema(model_object)
    schema["definitions"] = definitions

    _copy_header_from_parameter(definitions)
    _add_implied_types(builder, definitions)
    _add_fixed_definitions(definitions)
    _complete_schema_definition(definitions)
    _fix_content_and_contact(definitions)
    return schema


def _field_json(model_field: SchemaObjectField) -> dict:
    return {
        "name": model_field.name,
        "type": model_field.type,
        "is_array": model_field.is_array,
        "is_map": model_field.is_map,
        "description": model_field.description,
    }


def _model_json(model: SchemaModel) -> dict:
    return {
        "Objects": [
            {
                "name": obj.name,
                "id": obj.id,
                "description": obj.description,
                "extendable": obj.extendable,
                "required": list(obj.required_fields) or None,
                "fixed": [_field_json(f) for f in obj.fixed_fields] or None,
                "patterned": [_field_json(f) for f in obj.patterned_fields] or None,
            }
            for obj in model.objects
        ]
    }


def main(argv: Sequence[str] | None = None) -> int:
    """Read the specification text and write the model and the JSON schema."""
    parser = argparse.ArgumentParser(
        description="Generate the OpenAPI v3 JSON schema from the specification text."
    )
    parser.add_argument("source", nargs="?", default="3.1.0.md")
    parser.add_argument("--model-out", default="model.json")
    parser.add_argument("--schema-out", default="schema.json")
    args = parser.parse_args(argv)

    model = new_schema_model(args.source)
    Path(args.model_out).write_text(
        json.dumps(_model_json(model), indent=2), encoding="utf-8"
    )
    try:
        schema = generate_schema(model)
    except ValueError as exc:
        _log.error("%s", exc)
        print(exc, file=sys.stderr)
        return 1
    Path(args.schema_out).write_text(json.dumps(schema, indent=2) + "\n", encoding="utf-8")
    return 0