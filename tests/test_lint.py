from apilens.lint import LintMessage, Linter, aip_lint_v2, aip_lint_v3
from apilens.rules import Field, aip122_driver, aip140_driver


def _expected(name, keys):
    return [
        LintMessage(type=m.type, message=m.message, suggestion=m.suggestion, keys=keys)
        for m in (*aip122_driver(Field(name, keys)), *aip140_driver(Field(name, keys)))
    ]


def _v2(paths):
    return {"swagger": "2.0", "paths": paths}


def test_v2_name_suffix_reported_with_location():
    doc = _v2({"/pets": {"get": {"parameters": [{"name": "author_name", "in": "query"}]}}})
    linter, count = aip_lint_v2(doc)
    keys = ["paths", "/pets", "get", "parameters", "0", "name"]
    assert linter.messages == _expected("author_name", keys)
    assert count == len(linter.messages)
    assert linter.messages[0].type == "Error"
    assert linter.messages[0].message == 'Message: Parameters must not use the suffix "_name"\n'
    assert linter.messages[0].suggestion == "Suggestion: Rename field author_name to author\n"


def test_v2_index_counts_references():
    doc = _v2(
        {
            "/pets": {
                "get": {
                    "parameters": [
                        {"$ref": "#/parameters/limit"},
                        {"name": "helloWorld", "in": "path"},
                    ]
                }
            }
        }
    )
    linter, count = aip_lint_v2(doc)
    assert count == len(linter.messages)
    assert count > 0
    assert all(
        m.keys == ["paths", "/pets", "get", "parameters", "1", "name"] for m in linter.messages
    )


def test_v2_clean_names_produce_nothing():
    doc = _v2({"/pets": {"get": {"parameters": [{"name": "limit", "in": "query"}]}}})
    linter, count = aip_lint_v2(doc)
    assert linter == Linter(messages=[])
    assert count == 0


def test_v2_method_order_put_before_post():
    bad = [{"name": "author_name", "in": "query"}]
    doc = _v2({"/pets": {"post": {"parameters": bad}, "put": {"parameters": bad}}})
    linter, _ = aip_lint_v2(doc)
    assert [m.keys[2] for m in linter.messages] == ["put", "post"]


def test_v2_unknown_location_ignored():
    doc = _v2({"/pets": {"get": {"parameters": [{"name": "author_name", "in": "cookie"}]}}})
    assert aip_lint_v2(doc) == (Linter(messages=[]), 0)


def test_v2_without_paths():
    assert aip_lint_v2({"swagger": "2.0"}) == (Linter(messages=[]), 0)


def test_v3_components_and_operations():
    doc = {
        "openapi": "3.0.0",
        "components": {"parameters": {"Author": {"name": "author_name", "in": "query"}}},
        "paths": {"/pets": {"get": {"parameters": [{"name": "author_name", "in": "query"}]}}},
    }
    linter, count = aip_lint_v3(doc)
    expected = _expected("author_name", ["components", "parameters", "Author", "name"])
    expected += _expected("author_name", ["paths", "/pets", "get", "parameters", "name"])
    assert linter.messages == expected
    assert count == len(expected)


def test_v3_method_order_post_before_put():
    bad = [{"name": "author_name", "in": "query"}]
    doc = {"openapi": "3.0.0", "paths": {"/a": {"put": {"parameters": bad}, "post": {"parameters": bad}}}}
    linter, _ = aip_lint_v3(doc)
    assert [m.keys[2] for m in linter.messages] == ["post", "put"]


def test_v3_references_skipped():
    doc = {
        "openapi": "3.0.0",
        "components": {"parameters": {"Ref": {"$ref": "#/components/parameters/X"}}},
        "paths": {"/a": {"get": {"parameters": [{"$ref": "#/components/parameters/X"}]}}},
    }
    assert aip_lint_v3(doc) == (Linter(messages=[]), 0)