"""
Prompt template compiler and renderer.

Templates use a Handlebars-style mini-language. Source text is parsed once
into a small tree of nodes and checked against the request schema, so a
marker naming an undeclared field is a definition-time error rather than a
silent blank at call time.

Supported Syntax
================

    {{field}} / {{{field}}}            substitution (never HTML-escaped)
    {{this}} {{this.x}} {{@index}}     element access inside #each
    {{#if cond}} ... {{/if}}           conditional section
    {{else if cond}} / {{else}}        alternative branches
    {{#each arrayField}} ... {{/each}} per-element repetition
    {{media url=field}}                opaque media embed

A condition is a field path or `(eq path 'literal')`. Block tags standing
alone on a line consume that line, so templates can be laid out readably.
"""

import json
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Union

from .exceptions import DefinitionError
from .ports import MediaAttachment, RenderedPrompt
from .schema import FieldKind, FieldSpec, Schema

_TAG_RE = re.compile(r"\{\{\{\s*(.*?)\s*\}\}\}|\{\{\s*(.*?)\s*\}\}", re.DOTALL)
_PATH_RE = re.compile(r"^(?:this|@index|[A-Za-z_]\w*)(?:\.[A-Za-z_]\w*)*$")
_EQ_RE = re.compile(r"^\(\s*eq\s+(\S+)\s+(['\"])(.*?)\2\s*\)$")
_MEDIA_RE = re.compile(r"^media\s+url=(\S+)$")
_BLOCK_RE = re.compile(r"^(?:#if|#each|else|/if|/each)\b")


# Intermediate representation


@dataclass(frozen=True)
class Text:
    value: str


@dataclass(frozen=True)
class Var:
    path: tuple[str, ...]


@dataclass(frozen=True)
class Media:
    path: tuple[str, ...]


@dataclass(frozen=True)
class Truthy:
    path: tuple[str, ...]


@dataclass(frozen=True)
class Equals:
    path: tuple[str, ...]
    literal: str


Condition = Union[Truthy, Equals]


@dataclass(frozen=True)
class If:
    branches: tuple[tuple[Condition, tuple["Node", ...]], ...]
    otherwise: tuple["Node", ...]


@dataclass(frozen=True)
class Each:
    path: tuple[str, ...]
    body: tuple["Node", ...]


Node = Union[Text, Var, Media, If, Each]


# Parsing


@dataclass
class _Token:
    text: str | None = None
    tag: str | None = None


def _tokenize(source: str) -> list[_Token]:
    tokens: list[_Token] = []
    cursor = 0
    for match in _TAG_RE.finditer(source):
        if match.start() > cursor:
            tokens.append(_Token(text=source[cursor : match.start()]))
        tag = match.group(1) if match.group(1) is not None else match.group(2)
        tokens.append(_Token(tag=tag))
        cursor = match.end()
    if cursor < len(source):
        tokens.append(_Token(text=source[cursor:]))
    _strip_standalone(tokens)
    return tokens


def _strip_standalone(tokens: list[_Token]) -> None:
    """Drop the line of every block tag that stands alone on it."""
    last = len(tokens) - 1
    originals = [token.text for token in tokens]
    standalone: list[int] = []

    for i, token in enumerate(tokens):
        if token.tag is None or not _BLOCK_RE.match(token.tag):
            continue
        before = originals[i - 1] if i > 0 else None
        after = originals[i + 1] if i < last else None
        if i > 0 and before is None:
            continue
        if i < last and after is None:
            continue
        before_ok = (
            i == 0
            or re.search(r"\n[ \t]*\Z", before) is not None
            or (i == 1 and re.fullmatch(r"[ \t]*", before) is not None)
        )
        after_ok = (
            i == last
            or re.match(r"[ \t]*\r?\n", after) is not None
            or (i == last - 1 and re.fullmatch(r"[ \t]*", after) is not None)
        )
        if before_ok and after_ok:
            standalone.append(i)

    for i in standalone:
        if i > 0:
            tokens[i - 1].text = re.sub(r"[ \t]*\Z", "", tokens[i - 1].text)
        if i < last:
            tokens[i + 1].text = re.sub(r"\A[ \t]*(?:\r?\n)?", "", tokens[i + 1].text)


def _split_tag(tag: str) -> tuple[str, str]:
    parts = tag.split(None, 1)
    if not parts:
        return "", ""
    return parts[0], parts[1].strip() if len(parts) > 1 else ""


def _parse_path(expr: str) -> tuple[str, ...]:
    if not _PATH_RE.match(expr):
        raise DefinitionError(f"unsupported template expression {{{{{expr}}}}}")
    return tuple(expr.split("."))


def _parse_condition(expr: str) -> Condition:
    match = _EQ_RE.match(expr)
    if match is not None:
        return Equals(_parse_path(match.group(1)), match.group(3))
    if expr.startswith("("):
        raise DefinitionError(f"unsupported helper in condition {expr!r}")
    return Truthy(_parse_path(expr))


class _Parser:
    """Recursive-descent parser over the token list."""

    def __init__(self, source: str) -> None:
        self._tokens = _tokenize(source)
        self._pos = 0

    def parse(self) -> tuple[Node, ...]:
        nodes, _ = self._parse_until(())
        return nodes

    def _parse_until(self, stops: tuple[str, ...]) -> tuple[tuple[Node, ...], str]:
        nodes: list[Node] = []
        while self._pos < len(self._tokens):
            token = self._tokens[self._pos]
            self._pos += 1

            if token.tag is None:
                if token.text:
                    nodes.append(Text(token.text))
                continue

            tag = token.tag
            head, rest = _split_tag(tag)

            if head in ("else", "/if", "/each"):
                keyword = "else" if head == "else" else head
                if keyword in stops:
                    return tuple(nodes), tag
                raise DefinitionError(f"unexpected {{{{{tag}}}}}")

            if head == "#if":
                nodes.append(self._parse_if(rest))
            elif head == "#each":
                nodes.append(self._parse_each(rest))
            elif head.startswith("#") or head.startswith("/"):
                raise DefinitionError(f"unsupported block helper {{{{{tag}}}}}")
            elif head == "media":
                match = _MEDIA_RE.match(tag)
                if match is None:
                    raise DefinitionError(f"malformed media tag {{{{{tag}}}}}")
                nodes.append(Media(_parse_path(match.group(1))))
            else:
                nodes.append(Var(_parse_path(tag)))

        if stops:
            raise DefinitionError(f"unclosed block, expected one of {', '.join(stops)}")
        return tuple(nodes), ""

    def _parse_if(self, expr: str) -> If:
        if not expr:
            raise DefinitionError("{{#if}} requires a condition")
        branches: list[tuple[Condition, tuple[Node, ...]]] = []
        condition = _parse_condition(expr)
        otherwise: tuple[Node, ...] = ()

        while True:
            body, tag = self._parse_until(("else", "/if"))
            branches.append((condition, body))
            if tag == "/if":
                break
            if tag == "else":
                otherwise, _ = self._parse_until(("/if",))
                break
            # else if <cond>
            keyword, chained_expr = _split_tag(_split_tag(tag)[1])
            if keyword != "if" or not chained_expr:
                raise DefinitionError(f"malformed {{{{{tag}}}}}")
            condition = _parse_condition(chained_expr)

        return If(tuple(branches), otherwise)

    def _parse_each(self, expr: str) -> Each:
        if not expr:
            raise DefinitionError("{{#each}} requires an array field")
        path = _parse_path(expr)
        body, _ = self._parse_until(("/each",))
        return Each(path, body)


# Definition-time checking

_Shape = Union[Schema, FieldSpec]


@dataclass(frozen=True)
class _Scope:
    shape: _Shape
    in_each: bool


def _resolve_shape(path: tuple[str, ...], scope: _Scope) -> _Shape:
    dotted = ".".join(path)
    head, tail = path[0], path[1:]

    if head == "@index":
        if not scope.in_each or tail:
            raise DefinitionError("{{@index}} is only valid inside {{#each}}")
        return FieldSpec("@index", FieldKind.NUMBER)

    shape: _Shape = scope.shape
    names = tail if head == "this" else path
    for name in names:
        if isinstance(shape, FieldSpec):
            if shape.kind is not FieldKind.OBJECT or shape.fields is None:
                raise DefinitionError(f"{{{{{dotted}}}}}: {shape.kind.value} value has no field {name!r}")
            fields = shape.fields
        else:
            fields = shape
        found = fields.field(name)
        if found is None:
            raise DefinitionError(f"{{{{{dotted}}}}} references undeclared field {name!r}")
        shape = found
    return shape


def _check(nodes: Sequence[Node], scope: _Scope) -> None:
    for node in nodes:
        if isinstance(node, Text):
            continue
        if isinstance(node, Var):
            shape = _resolve_shape(node.path, scope)
            if isinstance(shape, FieldSpec) and shape.kind is FieldKind.MEDIA:
                raise DefinitionError(
                    f"media field {'.'.join(node.path)!r} must be embedded with {{{{media url=...}}}}"
                )
        elif isinstance(node, Media):
            shape = _resolve_shape(node.path, scope)
            if not isinstance(shape, FieldSpec) or shape.kind is not FieldKind.MEDIA:
                raise DefinitionError(f"{{{{media url={'.'.join(node.path)}}}}} needs a media field")
        elif isinstance(node, If):
            for condition, body in node.branches:
                _resolve_shape(condition.path, scope)
                _check(body, scope)
            _check(node.otherwise, scope)
        elif isinstance(node, Each):
            shape = _resolve_shape(node.path, scope)
            if not isinstance(shape, FieldSpec) or shape.kind is not FieldKind.ARRAY:
                raise DefinitionError(f"{{{{#each {'.'.join(node.path)}}}}} needs an array field")
            assert shape.items is not None
            _check(node.body, _Scope(shape.items, in_each=True))


# Rendering


@dataclass(frozen=True)
class _Frame:
    value: Any
    index: int | None = None


def _lookup(path: tuple[str, ...], frame: _Frame) -> Any:
    head = path[0]
    if head == "@index":
        return frame.index
    value = frame.value
    names = path[1:] if head == "this" else path
    for name in names:
        if not isinstance(value, Mapping):
            return None
        value = value.get(name)
    return value


def _truthy(value: Any) -> bool:
    if value is None or value is False:
        return False
    if isinstance(value, (str, list, tuple)):
        return len(value) > 0
    if isinstance(value, (int, float)):
        return value != 0
    return True


def _stringify(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return ",".join(_stringify(item) for item in value)
    if isinstance(value, Mapping):
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    return str(value)


def _holds(condition: Condition, frame: _Frame) -> bool:
    value = _lookup(condition.path, frame)
    if isinstance(condition, Equals):
        return value == condition.literal
    return _truthy(value)


def _emit(nodes: Sequence[Node], frame: _Frame, out: list[str | MediaAttachment]) -> None:
    for node in nodes:
        if isinstance(node, Text):
            out.append(node.value)
        elif isinstance(node, Var):
            out.append(_stringify(_lookup(node.path, frame)))
        elif isinstance(node, Media):
            uri = _lookup(node.path, frame)
            if uri:
                out.append(MediaAttachment.from_data_uri(uri))
        elif isinstance(node, If):
            for condition, body in node.branches:
                if _holds(condition, frame):
                    _emit(body, frame, out)
                    break
            else:
                _emit(node.otherwise, frame, out)
        elif isinstance(node, Each):
            items = _lookup(node.path, frame) or ()
            for index, item in enumerate(items):
                _emit(node.body, _Frame(item, index), out)


def _merge(parts: list[str | MediaAttachment]) -> tuple[str | MediaAttachment, ...]:
    merged: list[str | MediaAttachment] = []
    for part in parts:
        if isinstance(part, str):
            if not part:
                continue
            if merged and isinstance(merged[-1], str):
                merged[-1] = merged[-1] + part
                continue
        merged.append(part)
    return tuple(merged)


@dataclass(frozen=True)
class PromptTemplate:
    """
    A template compiled against its request schema.

    Immutable once compiled; safe to share between concurrent dispatches.
    """

    source: str
    schema: Schema
    nodes: tuple[Node, ...]

    @classmethod
    def compile(cls, source: str, schema: Schema) -> "PromptTemplate":
        """
        Parse `source` and check every marker against `schema`.

        Raises:
            DefinitionError: On malformed tags, unbalanced blocks, or
                markers that reference undeclared fields
        """
        nodes = _Parser(source).parse()
        _check(nodes, _Scope(schema, in_each=False))
        return cls(source=source, schema=schema, nodes=nodes)

    def render(self, request: Mapping[str, Any]) -> RenderedPrompt:
        """
        Render against a request instance that passed schema validation.

        Absent optional fields render as empty output for their section.
        """
        out: list[str | MediaAttachment] = []
        _emit(self.nodes, _Frame(request), out)
        return RenderedPrompt(parts=_merge(out))


def render(template: PromptTemplate, request: Mapping[str, Any]) -> RenderedPrompt:
    """Render `template` with `request`; see PromptTemplate.render."""
    return template.render(request)
