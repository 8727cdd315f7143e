import pytest

from apilens.document import (
    DocumentError,
    parse_document,
    parse_openapi_v2,
    parse_openapi_v3,
    yaml_value,
)

PETSTORE_V2 = b"""swagger: "2.0"
info:
  version: 1.0.0
  title: Swagger Petstore
  license:
    name: MIT
host: petstore.example.com
basePath: /v1
paths:
  /pets:
    get:
      operationId: listPets
      responses:
        "200":
          description: A paged array of pets
"""

PETSTORE_V3 = b"""openapi: "3.0.0"
info:
  version: 1.0.0
  title: OpenAPI Petstore
paths:
  /pets:
    get:
      operationId: listPets
      responses:
        '200':
          description: A paged array of pets
"""


@pytest.mark.parametrize("data", [None, b"", b"   "], ids=["nil", "zero_bytes", "whitespace"])
@pytest.mark.parametrize("parse", [parse_openapi_v2, parse_openapi_v3, parse_document])
def test_parse_document_empty(parse, data):
    with pytest.raises(DocumentError) as info:
        parse(data)
    assert str(info.value) == "document has no content"


def test_parse_v2_petstore():
    document = parse_openapi_v2(PETSTORE_V2)
    assert document["info"]["title"] == "Swagger Petstore"


def test_parse_v3_petstore():
    document = parse_openapi_v3(PETSTORE_V3)
    assert document["info"]["title"] == "OpenAPI Petstore"


def test_parse_json_text():
    document = parse_openapi_v3('{"openapi": "3.0.1", "info": {"title": "T"}, "paths": {}}')
    assert document["info"]["title"] == "T"


def test_version_mismatch():
    with pytest.raises(DocumentError):
        parse_openapi_v2(PETSTORE_V3)
    with pytest.raises(DocumentError):
        parse_openapi_v3(PETSTORE_V2)


def test_non_mapping_root():
    with pytest.raises(DocumentError):
        parse_openapi_v3(b"- a\n- b\n")


def test_malformed_yaml():
    with pytest.raises(DocumentError):
        parse_document(b"a: [1, 2\n")


def test_yaml_value_round_trip():
    document = parse_openapi_v3(PETSTORE_V3)
    output = yaml_value(document, "generated")
    assert output.startswith(b"# generated\n")
    assert parse_document(output) == document


def test_yaml_value_preserves_key_order():
    output = yaml_value({"b": 1, "a": 2}, "")
    assert output == b"b: 1\na: 2\n"