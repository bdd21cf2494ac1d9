"""
Syntax nodes for bridge declarations and the extern blocks built from them

Nodes are immutable. Generators derive new declarations by cloning an
existing node with dataclasses.replace() and editing its attribute list.
"""

import re
from dataclasses import dataclass, field

from .constants import CXX_NAME_ATTRIBUTE, RUST_KEYWORDS
from .errors import OverrideValueError, SyntaxEmbedError

_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*\Z")

INDENT = "    "


def is_identifier(name: str) -> bool:
    """Check that a name is usable as a plain identifier on both sides"""
    if not isinstance(name, str) or name == "_":
        return False
    return bool(_IDENTIFIER.match(name)) and name not in RUST_KEYWORDS


def quote_string(value: str) -> str:
    """Render a Rust string literal"""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    escaped = escaped.replace("\n", "\\n").replace("\r", "\\r").replace("\t", "\\t")
    return f'"{escaped}"'


@dataclass(frozen=True)
class Span:
    """Source location of a node (1-based line and column)"""
    line: int
    column: int

    def is_valid(self) -> bool:
        return self.line >= 1 and self.column >= 1

    def __str__(self):
        return f"{self.line}:{self.column}"


@dataclass(frozen=True)
class AttributeValue:
    """Right hand side of a name-value attribute"""
    kind: str  # "str", "int" or "path"
    text: str

    @classmethod
    def string(cls, value: str) -> "AttributeValue":
        return cls("str", value)

    def __str__(self):
        if self.kind == "str":
            return quote_string(self.text)
        return self.text


@dataclass(frozen=True)
class Attribute:
    """An outer attribute such as #[cxx_name = "foo"] or #[doc(hidden)]"""
    path: str
    value: AttributeValue | None = None
    args: tuple[str, ...] = ()
    span: Span | None = None

    @classmethod
    def name_value(cls, path: str, value: str) -> "Attribute":
        return cls(path, value=AttributeValue.string(value))

    def __str__(self):
        if self.value is not None:
            return f"#[{self.path} = {self.value}]"
        if self.args:
            return f"#[{self.path}({', '.join(self.args)})]"
        return f"#[{self.path}]"


def attribute_find_path(attrs, path: str) -> int | None:
    """Return the index of the first attribute with the given path"""
    for index, attr in enumerate(attrs):
        if attr.path == path:
            return index
    return None


def attribute_take_path(attrs, path: str) -> tuple[Attribute | None, tuple[Attribute, ...]]:
    """Remove the first attribute with the given path

    Returns:
        The removed attribute (or None) and the remaining attributes
    """
    index = attribute_find_path(attrs, path)
    if index is None:
        return None, tuple(attrs)
    return attrs[index], tuple(attrs[:index]) + tuple(attrs[index + 1:])


def attribute_string_value(attr: Attribute) -> str:
    """Return the string literal of a name-value attribute"""
    if attr.value is None:
        raise OverrideValueError(f"Attribute `{attr.path}` has no value", span=attr.span)
    if attr.value.kind != "str":
        raise OverrideValueError(
            f"Attribute `{attr.path}` expects a string literal, got `{attr.value}`",
            span=attr.span,
        )
    return attr.value.text


# Types

@dataclass(frozen=True)
class PathType:
    """A (possibly generic) path such as i32, super::MyObject or Pin<&mut T>"""
    segments: tuple[str, ...]
    generics: tuple = ()

    @property
    def name(self) -> str:
        return self.segments[-1]

    def __str__(self):
        text = "::".join(self.segments)
        if self.generics:
            text += "<" + ", ".join(str(arg) for arg in self.generics) + ">"
        return text


@dataclass(frozen=True)
class RefType:
    inner: object
    mutable: bool = False
    lifetime: str | None = None

    def __str__(self):
        lifetime = f"{self.lifetime} " if self.lifetime else ""
        mutability = "mut " if self.mutable else ""
        return f"&{lifetime}{mutability}{self.inner}"


@dataclass(frozen=True)
class PtrType:
    inner: object
    mutable: bool = False

    def __str__(self):
        return f"*{'mut' if self.mutable else 'const'} {self.inner}"


@dataclass(frozen=True)
class TupleType:
    elements: tuple = ()

    def __str__(self):
        if len(self.elements) == 1:
            return f"({self.elements[0]},)"
        return "(" + ", ".join(str(element) for element in self.elements) + ")"


@dataclass(frozen=True)
class SliceType:
    inner: object

    def __str__(self):
        return f"[{self.inner}]"


# Declarations

@dataclass(frozen=True)
class FunctionArg:
    name: str
    ty: object

    def __str__(self):
        return f"{self.name}: {self.ty}"


@dataclass(frozen=True)
class ForeignFunction:
    """A function declaration inside an extern block"""
    ident: str
    args: tuple[FunctionArg, ...] = ()
    return_type: object | None = None
    attrs: tuple[Attribute, ...] = ()
    unsafe: bool = False
    span: Span | None = None

    @property
    def receiver(self) -> FunctionArg | None:
        if self.args and self.args[0].name == "self":
            return self.args[0]
        return None

    def signature(self) -> str:
        args = ", ".join(str(arg) for arg in self.args)
        text = f"{'unsafe ' if self.unsafe else ''}fn {self.ident}({args})"
        if self.return_type is not None:
            text += f" -> {self.return_type}"
        return text + ";"

    def render(self, indent: int = 0) -> str:
        pad = INDENT * indent
        lines = [f"{pad}{attr}" for attr in self.attrs]
        lines.append(f"{pad}{self.signature()}")
        return "\n".join(lines)


@dataclass(frozen=True)
class TypeAlias:
    """A `type X;` or `type X = path;` item inside an extern block"""
    ident: str
    target: object | None = None
    attrs: tuple[Attribute, ...] = ()
    span: Span | None = None

    def render(self, indent: int = 0) -> str:
        pad = INDENT * indent
        lines = [f"{pad}{attr}" for attr in self.attrs]
        target = f" = {self.target}" if self.target is not None else ""
        lines.append(f"{pad}type {self.ident}{target};")
        return "\n".join(lines)


@dataclass(frozen=True)
class IncludeMacro:
    """An include!(...) item, target kept as written ("a.h" or <A>)"""
    target: str
    attrs: tuple[Attribute, ...] = ()
    span: Span | None = None

    @property
    def ident(self) -> str:
        return f"include!({self.target})"

    def render(self, indent: int = 0) -> str:
        pad = INDENT * indent
        lines = [f"{pad}{attr}" for attr in self.attrs]
        lines.append(f"{pad}include!({self.target});")
        return "\n".join(lines)


@dataclass(frozen=True)
class ExternBlock:
    """An [unsafe] extern "ABI" { ... } block"""
    abi: str
    items: tuple = ()
    unsafe: bool = False
    span: Span | None = None
    attrs: tuple[Attribute, ...] = ()

    def validate(self, filename: str | None = None) -> "ExternBlock":
        """Check the block can be embedded in a generated module

        Raises:
            SyntaxEmbedError: for the first item that cannot be embedded
        """
        if not self.abi or '"' in self.abi or "\n" in self.abi:
            raise SyntaxEmbedError(f"Invalid extern ABI {self.abi!r}", span=self.span, filename=filename)

        for item in self.items:
            if not isinstance(item, ForeignFunction):
                raise SyntaxEmbedError(
                    f"Expected a foreign function declaration, got {type(item).__name__}",
                    span=self.span, filename=filename,
                )
            if item.span is not None and not item.span.is_valid():
                raise SyntaxEmbedError(
                    f"Malformed span {item.span} on declaration `{item.ident}`",
                    filename=filename,
                )
            if not is_identifier(item.ident):
                raise SyntaxEmbedError(
                    f"`{item.ident}` is not a valid function name", span=item.span, filename=filename
                )
            for position, arg in enumerate(item.args):
                if arg.name == "self" and position == 0:
                    continue
                if not is_identifier(arg.name):
                    raise SyntaxEmbedError(
                        f"`{arg.name}` is not a valid parameter name in `{item.ident}`",
                        span=item.span, filename=filename,
                    )
            # Exposed symbol names end up verbatim in the C++ sources
            for attr in item.attrs:
                if attr.path != CXX_NAME_ATTRIBUTE:
                    continue
                if attr.value is None or attr.value.kind != "str" or not is_identifier(attr.value.text):
                    raise SyntaxEmbedError(
                        f"`{attr.value}` is not a valid exposed name for `{item.ident}`",
                        span=item.span, filename=filename,
                    )
        return self

    def render(self, indent: int = 0) -> str:
        pad = INDENT * indent
        lines = [f"{pad}{attr}" for attr in self.attrs]
        lines.append(f"{pad}{'unsafe ' if self.unsafe else ''}extern {quote_string(self.abi)} {{")
        for item in self.items:
            lines.append(item.render(indent + 1))
        lines.append(f"{pad}}}")
        return "\n".join(lines)

    def __str__(self):
        return self.render()


@dataclass(frozen=True)
class BridgeModule:
    """Parsed contents of a bridge source file"""
    blocks: tuple[ExternBlock, ...] = field(default_factory=tuple)
    name: str | None = None
    visibility: str = "private"
    attrs: tuple[Attribute, ...] = ()
