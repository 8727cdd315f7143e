"""Word-frequency vocabularies of API descriptions and set operations on them."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from itertools import pairwise
from pathlib import Path
from typing import Iterator, Sequence

_CATEGORIES = ("schemas", "operations", "parameters", "properties")
_CSV_ORDER = ("schemas", "properties", "operations", "parameters")
_DEFAULT_CSV = "vocabulary-operation.csv"
_VOCABULARY_FILE = "vocabulary.pb"

_Tally = dict[str, dict[str, int]]


@dataclass
class WordCount:
    """A word and the number of times it occurs."""

    word: str
    count: int


@dataclass
class Vocabulary:
    """Words used for schemas, operations, parameters and properties."""

    schemas: list[WordCount] = field(default_factory=list)
    operations: list[WordCount] = field(default_factory=list)
    parameters: list[WordCount] = field(default_factory=list)
    properties: list[WordCount] = field(default_factory=list)

    def _groups(self) -> dict[str, list[WordCount]]:
        return {
            "schemas": self.schemas,
            "operations": self.operations,
            "parameters": self.parameters,
            "properties": self.properties,
        }

    def is_empty(self) -> bool:
        """Report whether the vocabulary holds no words at all."""
        return not any(self._groups().values())

    def term_count(self) -> int:
        """Count the distinct words of each group, summed over the groups."""
        return sum(len(words) for words in _tally(self).values())


@dataclass
class Version:
    """The terms added and removed between two versions of an API."""

    name: str
    new_terms: Vocabulary
    deleted_terms: Vocabulary
    new_term_count: int
    deleted_term_count: int


@dataclass
class VersionHistory:
    """The changes between successive versions of an API."""

    name: str
    versions: list[Version] = field(default_factory=list)


def _empty_tally() -> _Tally:
    return {category: {} for category in _CATEGORIES}


def _add(tally: _Tally, vocabulary: Vocabulary) -> None:
    for category, words in vocabulary._groups().items():
        counts = tally[category]
        for wc in words:
            counts[wc.word] = counts.get(wc.word, 0) + wc.count


def _tally(vocabulary: Vocabulary) -> _Tally:
    tally = _empty_tally()
    _add(tally, vocabulary)
    return tally


def _word_counts(counts: dict[str, int]) -> list[WordCount]:
    return [WordCount(word, counts[word]) for word in sorted(counts)]


def _vocabulary(tally: _Tally) -> Vocabulary:
    return Vocabulary(**{category: _word_counts(tally[category]) for category in _CATEGORIES})


def _require(vocabularies: Sequence[Vocabulary]) -> None:
    if not vocabularies:
        raise ValueError("at least one vocabulary is required")


def union(vocabularies: Sequence[Vocabulary]) -> Vocabulary:
    """Combine vocabularies, summing the counts of shared words."""
    tally = _empty_tally()
    for vocabulary in vocabularies:
        _add(tally, vocabulary)
    return _vocabulary(tally)


def intersection(vocabularies: Sequence[Vocabulary]) -> Vocabulary:
    """Keep only the words found in every vocabulary, summing their counts."""
    _require(vocabularies)
    tally = _tally(vocabularies[0])
    for other in vocabularies[1:]:
        narrowed = _empty_tally()
        for category, words in other._groups().items():
            current = tally[category]
            kept = narrowed[category]
            for wc in words:
                if wc.word in current:
                    kept[wc.word] = kept.get(wc.word, 0) + current[wc.word] + wc.count
        tally = narrowed
    return _vocabulary(tally)


def difference(vocabularies: Sequence[Vocabulary]) -> Vocabulary:
    """Keep only the words of the first vocabulary that none of the others has."""
    _require(vocabularies)
    tally = _tally(vocabularies[0])
    for other in vocabularies[1:]:
        for category, words in other._groups().items():
            current = tally[category]
            for wc in words:
                current.pop(wc.word, None)
    return _vocabulary(tally)


def filter_common(vocabularies: Sequence[Vocabulary]) -> list[Vocabulary]:
    """For each vocabulary, the words that no other vocabulary has."""
    return [
        difference([vocabulary, *vocabularies[:index], *vocabularies[index + 1:]])
        for index, vocabulary in enumerate(vocabularies)
    ]


def _version(old: Vocabulary, new: Vocabulary, new_name: str) -> Version:
    new_terms = difference([new, old])
    deleted_terms = difference([old, new])
    return Version(
        name=new_name,
        new_terms=new_terms,
        deleted_terms=deleted_terms,
        new_term_count=new_terms.term_count(),
        deleted_term_count=deleted_terms.term_count(),
    )


def version_history(
    vocabularies: Sequence[Vocabulary], version_names: Sequence[str], directory: str
) -> VersionHistory:
    """Compare each vocabulary with the one before it."""
    if len(version_names) < len(vocabularies):
        raise ValueError("a version name is required for every vocabulary")
    versions = [
        _version(old, new, new_name)
        for (old, new), new_name in zip(pairwise(vocabularies), version_names[1:])
    ]
    return VersionHistory(name=directory, versions=versions)


def write_csv(vocabulary: Vocabulary, filename: str | Path = "") -> None:
    """Write a vocabulary as lines of group, quoted word and frequency."""
    target = filename or _DEFAULT_CSV
    groups = vocabulary._groups()
    with open(target, "w", encoding="utf-8", newline="") as out:
        for category in _CSV_ORDER:
            for wc in groups[category]:
                out.write(f'{category},"{wc.word}",{int(wc.count)}\n')


def _walk(path: str) -> Iterator[str]:
    yield path
    if os.path.isdir(path) and not os.path.islink(path):
        for name in sorted(os.listdir(path)):
            yield from _walk(os.path.join(path, name))


def gather_files_from_directory(directory: str | Path) -> list[str]:
    """List the paths under a directory that contain "vocabulary.pb", in lexical order."""
    root = os.fspath(directory)
    os.lstat(root)
    return [path for path in _walk(root) if _VOCABULARY_FILE in path]