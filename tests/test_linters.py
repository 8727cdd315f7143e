from apilens.linters import (
    DescriptionLinterV2,
    DescriptionLinterV3,
    Level,
    Message,
    check_paths,
)


def _undocumented_v2():
    return {
        "swagger": "2.0",
        "paths": {
            "/pets": {
                "delete": {"description": "Remove", "responses": {}},
                "get": {
                    "parameters": [
                        {"name": "limit", "in": "query", "type": "integer"},
                        {"name": "body", "in": "body", "description": "Payload"},
                        {"$ref": "#/parameters/shared"},
                    ],
                    "responses": {
                        "200": {"description": "ok", "schema": {"type": "array"}},
                        "default": {"$ref": "#/responses/error"},
                    },
                },
            },
            "x-extra": {"get": {}},
        },
        "definitions": {
            "Pet": {
                "properties": {
                    "id": {"type": "integer"},
                    "name": {"type": "string", "description": "Pet name"},
                }
            }
        },
    }


def test_v2_reports_missing_descriptions():
    messages = DescriptionLinterV2(_undocumented_v2()).run()
    assert [(m.text, m.keys) for m in messages] == [
        ("Operation has no description.", ["paths", "/pets", "get"]),
        ("Parameter has no description.", ["paths", "/pets", "get", "responses", "limit"]),
        ("Response has no description.", ["paths", "/pets", "get", "responses", "200"]),
        ("Definition has no description.", ["definitions", "Pet"]),
        ("Property has no description.", ["definitions", "Pet", "properties", "id"]),
    ]
    assert all(m.level is Level.WARNING and m.code == "NODESCRIPTION" for m in messages)


def test_v2_method_order_is_get_post_put_delete():
    document = {
        "paths": {
            "/a": {
                "delete": {"responses": {}},
                "put": {"responses": {}},
                "post": {"responses": {}},
                "get": {"responses": {}},
            }
        }
    }
    messages = DescriptionLinterV2(document).run()
    assert [m.keys[-1] for m in messages] == ["get", "post", "put", "delete"]


def test_v2_patch_is_not_checked():
    document = {"paths": {"/a": {"patch": {"responses": {}}}}}
    assert DescriptionLinterV2(document).run() == []


def test_v2_fully_documented():
    document = {
        "paths": {
            "/a": {
                "get": {
                    "description": "Read",
                    "parameters": [{"name": "q", "in": "query", "description": "Query"}],
                    "responses": {"200": {"description": "ok", "schema": {"description": "A"}}},
                }
            }
        },
        "definitions": {"A": {"description": "Thing"}},
    }
    assert DescriptionLinterV2(document).run() == []


def test_v3_reports_nothing():
    document = {"openapi": "3.0.0", "paths": {"/a": {"get": {}}}}
    assert DescriptionLinterV3(document).run() == []


def test_check_paths():
    document = {"paths": {"/pets": {}, "/pets/{petId}": {}, "x-ext": {}}}
    assert check_paths(document) == [
        Message(Level.INFO, "PATH", "/pets", ["paths", "/pets"]),
        Message(Level.INFO, "PATH", "/pets/{petId}", ["paths", "/pets/{petId}"]),
    ]


def test_check_paths_without_paths():
    assert check_paths({"openapi": "3.0.0"}) == []