"""
URI template expansion (RFC 6570, levels 1 through 4).

Templates mix literal text with ``{...}`` expressions:

    UriTemplate("users/{id}").expand({"id": "42"})               -> "users/42"
    UriTemplate("search{?q,page}").expand({"q": "a b"})          -> "search?q=a%20b"
    UriTemplate("files{/path*}").expand({"path": ["a", "b c"]})  -> "files/a/b%20c"

Values are strings, lists of strings, or mappings of strings to strings.
Undefined variables (absent or ``None``) expand to nothing, and variables the
template never references are ignored.
"""
import logging
import re
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Tuple, Union
from urllib.parse import quote

from ..errors import UriTemplateError

logger = logging.getLogger("fetch_request.uri_template")

RESERVED = ":/?#[]@!$&'()*+,;="

_VARNAME = re.compile(r"^(?:[A-Za-z0-9_]|%[0-9A-Fa-f]{2})+(?:\.(?:[A-Za-z0-9_]|%[0-9A-Fa-f]{2})+)*$")
_PREFIX = re.compile(r"^[1-9][0-9]{0,3}$")
_PCT_TRIPLET = re.compile(r"(%[0-9A-Fa-f]{2})")

# Operators reserved by RFC 6570 for future extensions
_FUTURE_OPERATORS = "=,!@|"


@dataclass(frozen=True)
class _Operator:
    first: str
    separator: str
    named: bool
    if_empty: str
    allow_reserved: bool


_OPERATORS = {
    "": _Operator("", ",", False, "", False),
    "+": _Operator("", ",", False, "", True),
    "#": _Operator("#", ",", False, "", True),
    ".": _Operator(".", ".", False, "", False),
    "/": _Operator("/", "/", False, "", False),
    ";": _Operator(";", ";", True, "", False),
    "?": _Operator("?", "&", True, "=", False),
    "&": _Operator("&", "&", True, "=", False),
}


@dataclass(frozen=True)
class VarSpec:
    name: str
    prefix: Optional[int] = None
    explode: bool = False


@dataclass(frozen=True)
class Expression:
    operator: str
    variables: Tuple[VarSpec, ...]


def _encode(value: str, allow_reserved: bool) -> str:
    """Percent-encode ``value`` as UTF-8, keeping unreserved (and optionally reserved) characters."""
    if not allow_reserved:
        return quote(value, safe="")
    # Reserved expansion passes existing %XX triplets through untouched.
    parts = _PCT_TRIPLET.split(value)
    return "".join(
        part if _PCT_TRIPLET.fullmatch(part) else quote(part, safe=RESERVED)
        for part in parts
    )


def _is_undefined(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, (list, tuple, Mapping)):
        return len(value) == 0
    return False


class UriTemplate:
    """A parsed URI template."""

    def __init__(self, template: str):
        if not isinstance(template, str):
            raise TypeError(f"template must be a str, got {type(template).__name__}")
        self._template = template
        self._parts: List[Union[str, Expression]] = self._parse(template)

    @property
    def template(self) -> str:
        return self._template

    @property
    def variable_names(self) -> List[str]:
        """Names referenced by the template, in order of first appearance."""
        names: List[str] = []
        for part in self._parts:
            if isinstance(part, Expression):
                for spec in part.variables:
                    if spec.name not in names:
                        names.append(spec.name)
        return names

    @staticmethod
    def _parse(template: str) -> List[Union[str, Expression]]:
        parts: List[Union[str, Expression]] = []
        pos = 0
        while pos < len(template):
            open_at = template.find("{", pos)
            close_at = template.find("}", pos)
            if close_at != -1 and (open_at == -1 or close_at < open_at):
                raise UriTemplateError(template, close_at, "unmatched '}'")
            if open_at == -1:
                parts.append(_encode(template[pos:], allow_reserved=True))
                break

            if open_at > pos:
                parts.append(_encode(template[pos:open_at], allow_reserved=True))
            close_at = template.find("}", open_at)
            if close_at == -1:
                raise UriTemplateError(template, open_at, "unclosed expression")
            parts.append(UriTemplate._parse_expression(template, open_at, template[open_at + 1:close_at]))
            pos = close_at + 1
        return parts

    @staticmethod
    def _parse_expression(template: str, position: int, body: str) -> Expression:
        if not body:
            raise UriTemplateError(template, position, "empty expression")
        if "{" in body:
            raise UriTemplateError(template, position, "nested '{'")

        operator = ""
        if body[0] in "+#./;?&":
            operator, body = body[0], body[1:]
        elif body[0] in _FUTURE_OPERATORS:
            raise UriTemplateError(template, position, f"unsupported operator {body[0]!r}")

        specs = []
        for raw in body.split(","):
            explode = raw.endswith("*")
            if explode:
                raw = raw[:-1]
            prefix: Optional[int] = None
            if ":" in raw:
                raw, _, prefix_text = raw.partition(":")
                if explode or not _PREFIX.match(prefix_text):
                    raise UriTemplateError(template, position, f"invalid prefix modifier {prefix_text!r}")
                prefix = int(prefix_text)
            if not _VARNAME.match(raw):
                raise UriTemplateError(template, position, f"invalid variable name {raw!r}")
            specs.append(VarSpec(name=raw, prefix=prefix, explode=explode))
        return Expression(operator=operator, variables=tuple(specs))

    def expand(self, variables: Optional[Mapping[str, Any]] = None) -> str:
        """Expand the template against ``variables``."""
        variables = variables or {}
        return "".join(
            part if isinstance(part, str) else self._expand_expression(part, variables)
            for part in self._parts
        )

    def _expand_expression(self, expression: Expression, variables: Mapping[str, Any]) -> str:
        op = _OPERATORS[expression.operator]
        pieces: List[str] = []
        for spec in expression.variables:
            value = variables.get(spec.name)
            if _is_undefined(value):
                continue
            pieces.append(self._expand_variable(spec, value, op))

        if not pieces:
            return ""
        return op.first + op.separator.join(pieces)

    def _expand_variable(self, spec: VarSpec, value: Any, op: _Operator) -> str:
        encode = lambda text: _encode(str(text), op.allow_reserved)  # noqa: E731

        if not isinstance(value, (list, tuple, Mapping)):
            value = str(value)

        if isinstance(value, str):
            if spec.prefix is not None:
                value = value[:spec.prefix]
            if op.named:
                return spec.name + (op.if_empty if value == "" else "=" + encode(value))
            return encode(value)

        if spec.prefix is not None:
            raise UriTemplateError(
                self._template, 0, f"prefix modifier applied to composite value {spec.name!r}"
            )

        if isinstance(value, Mapping):
            pairs = [(str(k), str(v)) for k, v in value.items()]
            if spec.explode:
                return op.separator.join(
                    encode(k) + (op.if_empty if v == "" and op.named else "=" + encode(v))
                    for k, v in pairs
                )
            joined = ",".join(f"{encode(k)},{encode(v)}" for k, v in pairs)
        else:
            items = [str(item) for item in value]
            if spec.explode:
                if op.named:
                    return op.separator.join(
                        spec.name + (op.if_empty if item == "" else "=" + encode(item))
                        for item in items
                    )
                return op.separator.join(encode(item) for item in items)
            joined = ",".join(encode(item) for item in items)

        if op.named:
            return spec.name + "=" + joined
        return joined

    def __repr__(self) -> str:
        return f"UriTemplate({self._template!r})"

    def __str__(self) -> str:
        return self._template


def expand_template(template: Union[str, UriTemplate], variables: Optional[Mapping[str, Any]] = None) -> str:
    """Parse ``template`` if needed and expand it against ``variables``."""
    if not isinstance(template, UriTemplate):
        template = UriTemplate(template)
    expanded = template.expand(variables)
    logger.debug(f"expand_template: {template.template!r} -> {expanded!r}")
    return expanded
