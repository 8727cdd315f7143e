# apilens

apilens reads API descriptions (OpenAPI v2, OpenAPI v3 and Google Discovery
documents in YAML or JSON) and helps you judge their quality:

- check parameter names against API naming guidelines (AIP-122 and AIP-140),
- report OpenAPI v2 operations, parameters, responses and definitions that
  have no description, and list the paths a description declares,
- collect the *vocabulary* of an API (schema names, property names, operation
  ids and parameter names, with counts) and combine vocabularies with union,
  intersection and difference,
- follow how a vocabulary changes from one API version to the next,
- turn the results of the external linters openapi-validator and spectral
  into one common message format,
- find the line of a value at a given key path in a YAML description,
- derive a JSON Schema for OpenAPI 3 from the Markdown text of the
  specification.

Parsed descriptions are plain Python dictionaries and lists, as PyYAML's safe
loader produces them; every function that takes a `document` expects such a
mapping.

## Installation

```
pip install apilens
```

Python 3.10 or later is required. The only runtime dependency is PyYAML.

## Modules

| Module | What it does |
| --- | --- |
| `apilens.document` | `parse_document` reads YAML or JSON from bytes or text; `parse_openapi_v2` and `parse_openapi_v3` also check the `swagger` (`2.0…`) or `openapi` (`3.…`) version; `yaml_value(document, comment)` writes a document back as YAML bytes, with the comment as leading `#` lines. Empty input raises `DocumentError` ("document has no content"). |
| `apilens.rules` | Naming checks on a `Field` (name and key path): `aip122_driver` (no `_name` suffix) and `aip140_driver` (lower_snake_case, common abbreviations, no word starting with a digit, no reserved words, no prepositions). Each returns a list of `RuleMessage`. The single checks `check_name_suffix`, `check_snake_case`, `check_abbreviation`, `check_numbers`, `check_reserved_words` and `check_prepositions` are public too. |
| `apilens.lint` | `aip_lint_v2` and `aip_lint_v3` run the naming rules over the parameters of a document and return a `Linter` holding `LintMessage` items, together with the message count. |
| `apilens.lint_results` | `lint_openapi_validator(filename)` and `lint_spectral(filename)` read the result files of those tools into a `Linter`; `messages_from_openapi_validator` and `parse_spectral_output` do the same from data already in memory. A spectral line that cannot be split into its fields raises `ValueError`. |
| `apilens.linters` | `DescriptionLinterV2(document).run()` reports missing descriptions as `Message` items with a `Level`; `DescriptionLinterV3(document).run()` reports nothing yet; `check_paths` lists every path of a document as an `INFO` message. |
| `apilens.sourceinfo` | `find_node(filename, keys, token)` and `find_node_in_text(text, keys, token)` locate a value by its key path and return a `SourceNode` with its value and 1-based line and column (0 when nothing is found). |
| `apilens.extract` | `vocabulary_from_openapi_v2`, `vocabulary_from_openapi_v3` and `vocabulary_from_discovery` build a `Vocabulary` from a parsed document. |
| `apilens.vocabulary` | `Vocabulary` (with `is_empty()` and `term_count()`) and `WordCount`; `union`, `intersection`, `difference`, `filter_common`, `version_history` (producing a `VersionHistory` of `Version` entries), `write_csv` and `gather_files_from_directory`. |
| `apilens.specmodel` | `read_section` splits the specification Markdown into a tree of `Section`s; `schema_model_from_text` and `new_schema_model` read the object tables into a `SchemaModel` of `SchemaObject`s. |
| `apilens.schemagen` | `SchemaBuilder` and `generate_schema` build the JSON Schema from a `SchemaModel`; `main` is the command below. |

## Examples

Check a description for naming problems:

```python
from pathlib import Path

from apilens.document import parse_openapi_v3
from apilens.lint import aip_lint_v3

document = parse_openapi_v3(Path("petstore.yaml").read_bytes())
linter, count = aip_lint_v3(document)
print(f"{count} naming problems")
for message in linter.messages:
    print(message.keys, message.message.strip())
```

Compare the vocabularies of two versions of an API:

```python
from pathlib import Path

from apilens.document import parse_openapi_v2
from apilens.extract import vocabulary_from_openapi_v2
from apilens.vocabulary import difference, intersection, union, version_history

old = vocabulary_from_openapi_v2(parse_openapi_v2(Path("v1.yaml").read_bytes()))
new = vocabulary_from_openapi_v2(parse_openapi_v2(Path("v2.yaml").read_bytes()))

added = difference([new, old])      # words only the new version uses
shared = intersection([old, new])   # words both versions use, counts summed
everything = union([old, new])      # all words, counts summed

history = version_history([old, new], ["v1", "v2"], "petstore")
print(history.versions[0].new_term_count, history.versions[0].deleted_term_count)
```

Vocabularies keep their words sorted. `write_csv(vocabulary, filename)` writes
them as `group,"word",count` lines, to `vocabulary-operation.csv` when no file
name is given.

## Generating the OpenAPI 3 JSON Schema

Run the generator with the Markdown text of the specification:

```
apilens-schemagen [SOURCE] [--model-out PATH] [--schema-out PATH]
```

`SOURCE` defaults to `3.1.0.md`. The command prints the outline of the
document's sections, writes the parsed object model to `model.json` and the
resulting schema to `schema.json` (or to the paths given). It exits with
status 1 when the model has no `oas` object.

## What apilens does not do

- It does not compile descriptions into typed models or resolve `$ref`
  references; it works on the parsed mappings directly.
- It reads and writes no binary protocol buffer files. Linter results and
  vocabularies are returned as Python objects, and
  `gather_files_from_directory` only lists paths containing `vocabulary.pb`
  without reading them.
- It runs no external linters or plugins; `apilens.lint_results` only reads
  result files those tools have already written.
- Besides `apilens-schemagen` it has no command-line front end.

## Running the tests

```
pip install "apilens[test]"
pytest
```