"""Reading the object model out of the Markdown text of the OpenAPI specification."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path

_log = logging.getLogger(__name__)

_LINK_PREFIX = re.compile(r"<a .*</a>(.*)")
_TITLE = re.compile(r"#+ (.*)")
_TITLE_WITH_LINK = re.compile(r"#+ <a .*</a>(.*)")
_MARKDOWN_LINK = re.compile(r"\[([^\]\[]*)\]\(([^)]*)\)")
_MAP_OF = re.compile(r"Mapstring,\[(.*)\]")
_MAP_OF_BRACKETED = re.compile(r"Map\[string,(.+)\]")
_OBJECT_ANCHOR = re.compile(r'#### <a name="(.*)Object"')

_REQUIRED_LABELS = ("**Required.** ", "**REQUIRED**.")
_HTTP_STATUS_PATTERN = "^([0-9X]{3})$"

# Positions of the "Specification" and "Schema" sections in the document.
_SPECIFICATION_INDEX = 4
_SCHEMA_INDEX = 8


@dataclass
class Section:
    """A section of a Markdown document and its subsections."""

    level: int
    text: str
    title: str = ""
    children: list[Section] = field(default_factory=list)

    def display(self, section: str = "") -> None:
        """Print the numbered outline of the subsections."""
        for index, child in enumerate(self.children):
            number = f"{section}.{index}" if section else str(index)
            print(f"{number:<12} {child.nice_title()}")
            child.display(number)

    def nice_title(self) -> str:
        """The title without its leading hashes and any leading anchor."""
        match = _TITLE_WITH_LINK.fullmatch(self.title) or _TITLE.fullmatch(self.title)
        return match.group(1) if match else ""


def read_section(text: str, level: int) -> Section:
    """Split text into a section, recursively dividing it at deeper headings."""
    title_pattern = re.compile("#" * level + " .*")
    subtitle_pattern = re.compile("#" * (level + 1) + " .*")
    section = Section(level=level, text=text)
    subsection = ""
    for index, line in enumerate(text.split("\n")):
        if index == 0 and title_pattern.fullmatch(line):
            section.title = line
        elif subtitle_pattern.fullmatch(line):
            if subsection:
                section.children.append(read_section(subsection, level + 1))
            subsection = line + "\n"
        else:
            subsection += line + "\n"
    if section.children:
        section.children.append(read_section(subsection, level + 1))
    return section


def strip_link(text: str) -> str:
    """Remove a leading HTML anchor, keeping the text that follows it."""
    match = _LINK_PREFIX.fullmatch(text)
    return match.group(1) if match else text


def remove_markdown_links(text: str) -> str:
    """Replace Markdown links with their link text."""
    return _MARKDOWN_LINK.sub(r"\1", text)


@dataclass
class SchemaObjectField:
    """A field of an object described by the specification."""

    name: str
    type: str
    is_array: bool = False
    is_map: bool = False
    description: str = ""


@dataclass
class SchemaObject:
    """An object described by the specification."""

    name: str
    id: str
    description: str = ""
    extendable: bool = False
    required_fields: list[str] = field(default_factory=list)
    fixed_fields: list[SchemaObjectField] = field(default_factory=list)
    patterned_fields: list[SchemaObjectField] = field(default_factory=list)


@dataclass
class SchemaModel:
    """The objects described by the specification."""

    objects: list[SchemaObject] = field(default_factory=list)

    def object_with_id(self, object_id: str) -> SchemaObject | None:
        """The first object with the given id, or None."""
        return next((obj for obj in self.objects if obj.id == object_id), None)


def _table_rows(text: str):
    for line in text.split("\n"):
        parts = line.replace(" \\| ", " OR ").split("|")
        if len(parts) > 1:
            yield parts


def _array_type(type_name: str, field_name: str) -> tuple[str, bool]:
    if not type_name:
        raise ValueError(f"missing type for field {field_name!r}")
    if type_name[0] == "[" and type_name[-1] == "]":
        return type_name[1:-1], True
    return type_name, False


def _description(parts: list[str]) -> str:
    description = remove_markdown_links(parts[-1].strip(" "))
    return description.replace("\n", " ")


def parse_fixed_fields(text: str, schema_object: SchemaObject) -> None:
    """Add the fields of a "Fixed Fields" table to an object."""
    for parts in _table_rows(text):
        field_name = strip_link(parts[0]).strip(" ")
        if field_name in ("Field Name", "---"):
            continue
        if len(parts) not in (3, 4):
            _log.error("ERROR: %r", parts)
        type_name = parts[1].replace("{expression}", "Expression").strip(" ")
        type_name = remove_markdown_links(type_name.replace("`", ""))
        type_name = type_name.replace(" ", "").replace("Object", "")
        type_name, is_array = _array_type(type_name, field_name)
        is_map = False
        match = _MAP_OF.fullmatch(type_name) or _MAP_OF_BRACKETED.fullmatch(type_name)
        if match:
            type_name = match.group(1)
            is_map = True
        description = _description(parts)
        if any(label in description for label in _REQUIRED_LABELS):
            valid = len(parts) != 4 or "Any" in parts[2]
            if valid:
                schema_object.required_fields.append(field_name)
            for label in _REQUIRED_LABELS:
                description = description.replace(label, "")
        schema_object.fixed_fields.append(
            SchemaObjectField(
                name=field_name,
                type=type_name,
                is_array=is_array,
                is_map=is_map,
                description=description,
            )
        )


def parse_patterned_fields(text: str, schema_object: SchemaObject) -> None:
    """Add the fields of a "Patterned Fields" table to an object."""
    for parts in _table_rows(text):
        field_name = remove_markdown_links(strip_link(parts[0]).strip(" "))
        if field_name == "HTTP Status Code":
            field_name = _HTTP_STATUS_PATTERN
        if field_name in ("Field Pattern", "---"):
            continue
        type_name = remove_markdown_links(parts[1].strip(" ").replace("`", ""))
        type_name = type_name.replace(" ", "").replace("Object", "")
        type_name = type_name.replace("{expression}", "Expression")
        type_name, is_array = _array_type(type_name, field_name)
        is_map = False
        match = _MAP_OF.fullmatch(type_name)
        if match:
            type_name = match.group(1)
            is_map = True
        schema_object.patterned_fields.append(
            SchemaObjectField(
                name=field_name,
                type=type_name,
                is_array=is_array,
                is_map=is_map,
                description=_description(parts),
            )
        )


def _schema_section(document: Section) -> Section:
    try:
        specification = document.children[_SPECIFICATION_INDEX]
        return specification.children[_SCHEMA_INDEX]
    except IndexError:
        raise ValueError("document has no Specification/Schema section") from None


def _schema_object(section: Section, object_id: str) -> SchemaObject:
    schema_object = SchemaObject(name=section.nice_title(), id=object_id)
    if section.children:
        description = remove_markdown_links(section.children[0].text)
        schema_object.description = description.strip(" \t\n").replace("\n", " ")
    schema_object.extendable = "Specification Extensions" in section.text
    for child in section.children:
        if child.nice_title() == "Fixed Fields":
            parse_fixed_fields(child.text, schema_object)
    for child in section.children:
        if child.nice_title() == "Patterned Fields":
            parse_patterned_fields(child.text, schema_object)
    return schema_object


def _model(document: Section) -> SchemaModel:
    objects = []
    for section in _schema_section(document).children:
        match = _OBJECT_ANCHOR.match(section.title)
        if match:
            objects.append(_schema_object(section, match.group(1)))
    return SchemaModel(objects=objects)


def schema_model_from_text(text: str) -> SchemaModel:
    """Build the object model from the Markdown text of the specification."""
    return _model(read_section(text, 1))


def new_schema_model(filename: str | Path) -> SchemaModel:
    """Read a specification file, print its outline and build its object model."""
    document = read_section(Path(filename).read_text(encoding="utf-8"), 1)
    document.display("")
    return _model(document)