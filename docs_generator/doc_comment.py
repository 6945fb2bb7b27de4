"""Parsing of PHP doc comment blocks into a description and typed tags.

A block is reduced to its text lines (delimiters and leading ``*`` markers
removed, blank lines dropped). Everything before the first ``@`` line is the
description; every later line without ``@`` continues the previous tag. Each
recognized tag decodes into one of the frozen records below. Unknown tags are
kept as :class:`UnknownTag` and ignored by consumers. Malformed tags never
raise: missing fields are simply empty.
"""

import re
from dataclasses import dataclass

from docs_generator.normalize_type import normalize_type

COMMENT_DELIMITERS = "/* \n\r\t"
INLINE_TAG_SPLIT_RE = re.compile(
    r"(?<=\s)(?=@(?:param|return|var|property-read|property-write|property"
    r"|throws|example|see|internal|event)\b)"
)


@dataclass(frozen=True)
class ParamTag:
    """``@param <type> $<name> <description>``."""

    type: str | None
    name: str
    description: str


@dataclass(frozen=True)
class ReturnTag:
    """``@return <type> <description>``."""

    type: str | None
    description: str


@dataclass(frozen=True)
class VarTag:
    """``@var <type>``."""

    type: str | None


@dataclass(frozen=True)
class PropertyTag:
    """``@property[-read|-write] <type> $<name> <description>``."""

    type: str | None
    name: str
    description: str
    readonly: bool = False


@dataclass(frozen=True)
class ThrowsTag:
    """``@throws <exception-name>``."""

    name: str


@dataclass(frozen=True)
class ExampleTag:
    """``@example <location> <description>``."""

    location: str
    description: str


@dataclass(frozen=True)
class SeeTag:
    """``@see <location> <description>``."""

    location: str
    description: str


@dataclass(frozen=True)
class InternalTag:
    """``@internal``."""


@dataclass(frozen=True)
class EventTag:
    """``@event <type> <name> <description>``."""

    type: str | None
    name: str
    description: str


@dataclass(frozen=True)
class UnknownTag:
    """Any tag outside the recognized vocabulary."""

    keyword: str
    value: str


Tag = (
    ParamTag
    | ReturnTag
    | VarTag
    | PropertyTag
    | ThrowsTag
    | ExampleTag
    | SeeTag
    | InternalTag
    | EventTag
    | UnknownTag
)


@dataclass(frozen=True)
class DocCommentBlock:
    """A parsed doc comment."""

    description: str = ""
    tags: tuple[Tag, ...] = ()

    @property
    def params(self) -> list[ParamTag]:
        return [t for t in self.tags if isinstance(t, ParamTag)]

    @property
    def return_tag(self) -> ReturnTag | None:
        returns = [t for t in self.tags if isinstance(t, ReturnTag)]
        return returns[-1] if returns else None

    @property
    def var_type(self) -> str | None:
        for t in reversed(self.tags):
            if isinstance(t, VarTag) and t.type:
                return t.type
        return None

    @property
    def properties(self) -> list[PropertyTag]:
        return [t for t in self.tags if isinstance(t, PropertyTag)]

    @property
    def throws(self) -> list[str]:
        """Exception names in order of first occurrence, without repeats."""
        seen: dict[str, None] = {}
        for t in self.tags:
            if isinstance(t, ThrowsTag) and t.name:
                seen.setdefault(t.name, None)
        return list(seen)

    @property
    def examples(self) -> list[ExampleTag]:
        return [t for t in self.tags if isinstance(t, ExampleTag)]

    @property
    def see(self) -> list[SeeTag]:
        return [t for t in self.tags if isinstance(t, SeeTag)]

    @property
    def internal(self) -> bool:
        return any(isinstance(t, InternalTag) for t in self.tags)

    @property
    def events(self) -> list[EventTag]:
        return [t for t in self.tags if isinstance(t, EventTag)]


EMPTY_BLOCK = DocCommentBlock()


def comment_lines(comment: str) -> list[str]:
    """Strip comment delimiters and line markers, dropping blank lines."""
    text = comment.strip(COMMENT_DELIMITERS)
    lines = []
    for line in text.splitlines():
        line = line.strip(" *").strip()
        if line:
            lines.append(line)
    if len(lines) == 1:
        lines = [p.strip() for p in INLINE_TAG_SPLIT_RE.split(lines[0]) if p.strip()]
    return lines


def parse_doc_comment(comment: str | None) -> DocCommentBlock:
    """Parse one doc comment block."""
    if not comment:
        return EMPTY_BLOCK

    lines = comment_lines(comment)

    description_lines: list[str] = []
    tag_lines: list[str] = []
    for line in lines:
        if line.startswith("@"):
            tag_lines.append(line)
        elif tag_lines:
            tag_lines[-1] += "\n" + line
        else:
            description_lines.append(line)

    tags = tuple(parse_tag_line(line) for line in tag_lines)
    return DocCommentBlock(description="\n".join(description_lines).strip(), tags=tags)


def parse_tag_line(line: str) -> Tag:
    """Decode a single tag line (including its continuation lines)."""
    parts = line.split(None, 1)
    keyword = parts[0] if parts else ""
    value = parts[1].strip() if len(parts) > 1 else ""

    if keyword == "@param":
        type_, name, description = _typed_name_fields(value)
        return ParamTag(type=type_, name=name, description=description)
    if keyword == "@return":
        fields = value.split(None, 1)
        return ReturnTag(
            type=normalize_type(fields[0]) if fields else None,
            description=fields[1].strip() if len(fields) > 1 else "",
        )
    if keyword == "@var":
        fields = value.split(None, 1)
        return VarTag(type=normalize_type(fields[0]) if fields else None)
    if keyword in ("@property", "@property-read", "@property-write"):
        type_, name, description = _typed_name_fields(value)
        return PropertyTag(
            type=type_,
            name=name,
            description=description,
            readonly=keyword == "@property-read",
        )
    if keyword == "@throws":
        fields = value.split(None, 1)
        return ThrowsTag(name=fields[0] if fields else "")
    if keyword == "@example":
        location, description = _location_fields(value)
        return ExampleTag(location=location, description=description)
    if keyword == "@see":
        location, description = _location_fields(value)
        return SeeTag(location=location, description=description)
    if keyword == "@internal":
        return InternalTag()
    if keyword == "@event":
        fields = value.split(None, 2)
        return EventTag(
            type=normalize_type(fields[0]) if fields else None,
            name=fields[1].strip() if len(fields) > 1 else "",
            description=fields[2].strip() if len(fields) > 2 else "",
        )
    return UnknownTag(keyword=keyword, value=value)


def _typed_name_fields(value: str) -> tuple[str | None, str, str]:
    """Split ``<type> $<name> <description>``; the type may be omitted."""
    fields = value.split(None, 2)
    if fields and fields[0].lstrip("&.").startswith("$"):
        # No type given: "$name description"
        fields = [""] + value.split(None, 1)
    type_ = normalize_type(fields[0]) if fields else None
    name = fields[1].lstrip("&.$") if len(fields) > 1 else ""
    description = fields[2].strip() if len(fields) > 2 else ""
    return type_, name, description


def _location_fields(value: str) -> tuple[str, str]:
    fields = value.split(None, 1)
    location = fields[0] if fields else ""
    description = fields[1].strip() if len(fields) > 1 else ""
    return location, description
