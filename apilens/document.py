"""Reading and writing OpenAPI descriptions in YAML or JSON form."""

from __future__ import annotations

from typing import Any

import yaml


class DocumentError(ValueError):
    """Raised when an API description cannot be read."""


def _text(data: bytes | str | None) -> str:
    if data is None:
        return ""
    if isinstance(data, bytes):
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DocumentError(str(exc)) from exc
    return data


def parse_document(data: bytes | str | None) -> Any:
    """Parse a YAML or JSON document and return its root value."""
    loader = yaml.SafeLoader(_text(data))
    try:
        node = loader.get_single_node()
        if node is None:
            raise DocumentError("document has no content")
        return loader.construct_document(node)
    except yaml.YAMLError as exc:
        raise DocumentError(str(exc)) from exc
    finally:
        loader.dispose()


def _mapping_root(data: bytes | str | None) -> dict:
    root = parse_document(data)
    if not isinstance(root, dict):
        raise DocumentError("document root is not a mapping")
    return root


def parse_openapi_v2(data: bytes | str | None) -> dict:
    """Parse an OpenAPI v2 description."""
    root = _mapping_root(data)
    if "swagger" not in root:
        raise DocumentError("Document missing required property: swagger")
    if not str(root["swagger"]).startswith("2.0"):
        raise DocumentError(f"unsupported swagger version: {root['swagger']}")
    return root


def parse_openapi_v3(data: bytes | str | None) -> dict:
    """Parse an OpenAPI v3 description."""
    root = _mapping_root(data)
    if "openapi" not in root:
        raise DocumentError("Document missing required property: openapi")
    if not str(root["openapi"]).startswith("3."):
        raise DocumentError(f"unsupported openapi version: {root['openapi']}")
    return root


def yaml_value(document: Any, comment: str = "") -> bytes:
    """Serialize a document as YAML, preceded by an optional comment."""
    body = yaml.safe_dump(
        document, sort_keys=False, default_flow_style=False, allow_unicode=True
    )
    header = ""
    if comment:
        lines = (
            line if line.startswith("#") else f"# {line}"
            for line in comment.splitlines()
        )
        header = "".join(f"{line}\n" for line in lines) + "\n"
    return (header + body).encode("utf-8")