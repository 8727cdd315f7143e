import pytest

from apilens.document import parse_openapi_v2, parse_openapi_v3
from apilens.extract import (
    vocabulary_from_discovery,
    vocabulary_from_openapi_v2,
    vocabulary_from_openapi_v3,
)
from apilens.vocabulary import Vocabulary, WordCount


def words(group):
    return [(wc.word, wc.count) for wc in group]


V2_TEXT = """
swagger: "2.0"
info:
  title: Swagger Petstore
  version: 1.0.0
paths:
  /pets:
    get:
      operationId: listPets
      parameters:
        - name: limit
          in: query
          type: integer
        - $ref: "#/parameters/shared"
    post:
      operationId: createPets
      parameters:
        - name: pet
          in: body
          schema:
            $ref: "#/definitions/Pet"
  /pets/{petId}:
    get:
      operationId: showPetById
      parameters:
        - name: petId
          in: path
          type: string
  x-extra:
    get:
      operationId: hidden
definitions:
  Pet:
    properties:
      id:
        type: integer
      name:
        type: string
  Error:
    properties:
      code:
        type: integer
"""


def test_v2_vocabulary_from_parsed_text():
    vocab = vocabulary_from_openapi_v2(parse_openapi_v2(V2_TEXT))
    assert words(vocab.schemas) == [("Error", 1), ("Pet", 1)]
    assert words(vocab.operations) == [
        ("createPets", 1),
        ("listPets", 1),
        ("showPetById", 1),
    ]
    assert words(vocab.parameters) == [("limit", 1), ("pet", 1), ("petId", 1)]
    assert words(vocab.properties) == [("code", 1), ("id", 1), ("name", 1)]


def test_v2_repeated_names_accumulate():
    operation = {"operationId": "op", "parameters": [{"name": "limit", "in": "query"}]}
    document = {"paths": {"/a": {"get": operation}, "/b": {"get": operation}}}
    vocab = vocabulary_from_openapi_v2(document)
    assert words(vocab.parameters) == [("limit", 2)]
    assert words(vocab.operations) == [("op", 2)]


def test_v2_empty_document_gives_empty_vocabulary():
    assert vocabulary_from_openapi_v2({"swagger": "2.0"}).is_empty()


def test_v2_skips_methods_outside_counted_set():
    document = {"paths": {"/a": {"head": {"operationId": "headOp"}}}}
    assert vocabulary_from_openapi_v2(document) == Vocabulary()


V3_TEXT = """
openapi: "3.0.0"
info:
  title: OpenAPI Petstore
  version: 1.0.0
paths:
  /pets:
    get:
      operationId: listPets
      parameters:
        - name: limit
          in: query
        - $ref: "#/components/parameters/Shared"
    patch:
      operationId: updatePets
components:
  parameters:
    Shared:
      name: shared_param
      in: query
    Linked:
      $ref: "#/components/parameters/Shared"
  schemas:
    Pet:
      properties:
        tag:
          type: string
    Pets:
      $ref: "#/components/schemas/Pet"
  responses:
    NotFound:
      description: missing
"""


def test_v3_vocabulary_from_parsed_text():
    vocab = vocabulary_from_openapi_v3(parse_openapi_v3(V3_TEXT))
    assert words(vocab.schemas) == [("NotFound", 1), ("Pet", 1), ("Pets", 1)]
    assert words(vocab.operations) == [("listPets", 1), ("updatePets", 1)]
    assert words(vocab.parameters) == [("limit", 1), ("shared_param", 1)]
    assert words(vocab.properties) == [("tag", 1)]


def test_v3_without_paths_or_components():
    assert vocabulary_from_openapi_v3({"openapi": "3.0.0"}).is_empty()


def test_v3_results_are_sorted_by_word():
    document = {
        "paths": {
            "/x": {
                "get": {"operationId": "zeta"},
                "post": {"operationId": "alpha"},
                "put": {"operationId": "Mid"},
            }
        }
    }
    vocab = vocabulary_from_openapi_v3(document)
    names = [wc.word for wc in vocab.operations]
    assert names == sorted(names)
    assert set(names) == {"zeta", "alpha", "Mid"}


DISCOVERY = {
    "kind": "discovery#restDescription",
    "parameters": {
        "fields": {"type": "string"},
        "filter": {"properties": {"expr": {"properties": {"depth": {}}}}},
    },
    "schemas": {
        "Api": {"properties": {"kind": {}, "items": {"properties": {"label": {}}}}},
    },
    "methods": {"getRest": {"id": "discovery.apis.getRest"}},
    "resources": {
        "apis": {
            "methods": {
                "list": {
                    "id": "discovery.apis.list",
                    "parameters": {"preferred": {}, "name": {}},
                }
            },
            "resources": {
                "nested": {"methods": {"get": {"id": "discovery.nested.get"}}}
            },
        }
    },
}


def test_discovery_vocabulary():
    vocab = vocabulary_from_discovery(DISCOVERY)
    assert words(vocab.schemas) == [("Api", 1)]
    assert words(vocab.operations) == [
        ("discovery.apis.getRest", 1),
        ("discovery.apis.list", 1),
        ("discovery.nested.get", 1),
    ]
    assert words(vocab.parameters) == [
        ("fields", 1),
        ("filter", 1),
        ("name", 1),
        ("preferred", 1),
    ]
    assert words(vocab.properties) == [
        ("depth", 1),
        ("expr", 1),
        ("get", 1),
        ("items", 1),
        ("kind", 1),
        ("label", 1),
        ("list", 1),
    ]


def test_discovery_empty_document():
    assert vocabulary_from_discovery({}) == Vocabulary()


@pytest.mark.parametrize(
    "extract, document",
    [
        (vocabulary_from_openapi_v2, parse_openapi_v2(V2_TEXT)),
        (vocabulary_from_openapi_v3, parse_openapi_v3(V3_TEXT)),
        (vocabulary_from_discovery, DISCOVERY),
    ],
)
def test_every_count_is_positive_and_words_unique(extract, document):
    vocab = extract(document)
    for group in (vocab.schemas, vocab.operations, vocab.parameters, vocab.properties):
        assert all(isinstance(wc, WordCount) and wc.count > 0 for wc in group)
        assert len({wc.word for wc in group}) == len(group)
    assert not vocab.is_empty()