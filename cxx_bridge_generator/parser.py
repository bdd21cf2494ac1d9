"""
Parser for bridge declaration sources

Builds syntax nodes from text such as::

    #[cxx_qt::bridge]
    pub mod qobject {
        unsafe extern "RustQt" {
            #[qinvokable]
            #[cxx_name = "sayHi"]
            fn say_hi(self: &MyObject, string: &QString, number: i32);
        }
    }
"""

import re
from pathlib import Path

from lark import Lark, Token, Tree

from .errors import DeclarationError
from .syntax import (
    Attribute,
    AttributeValue,
    BridgeModule,
    ExternBlock,
    ForeignFunction,
    FunctionArg,
    IncludeMacro,
    PathType,
    PtrType,
    RefType,
    SliceType,
    Span,
    TupleType,
    TypeAlias,
)

_GRAMMAR_PATH = Path(__file__).with_name("grammar.lark")
_GRAMMAR_SRC = _GRAMMAR_PATH.read_text()

_PARSER = Lark(
    _GRAMMAR_SRC,
    parser="lalr",
    lexer="basic",
    start=["start", "foreign_fn"],
    propagate_positions=True,
    maybe_placeholders=False,
)


def parse_bridge(source: str) -> BridgeModule:
    """Parse a bridge source into its extern blocks

    Raises:
        lark.exceptions.UnexpectedInput: if the source is not valid bridge syntax
    """
    tree = _PARSER.parse(source, start="start")
    return _build_bridge(tree)


def parse_foreign_function(source: str) -> ForeignFunction:
    """Parse a single foreign function declaration"""
    tree = _PARSER.parse(source, start="foreign_fn")
    return _build_foreign_fn(tree)


_ESCAPE = re.compile(r"\\(?:u\{([0-9A-Fa-f_]{1,8})\}|x([0-9A-Fa-f]{2})|\n\s*|(.))", re.DOTALL)

_SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "\\": "\\",
    "\"": "\"",
    "'": "'",
    "0": "\0",
}


def _decode_string_token(tok: Token) -> str:
    """Unescape a Rust string literal token"""
    span = Span(line=tok.line, column=tok.column)

    def unescape(match) -> str:
        unicode, byte, char = match.groups()
        if unicode is not None:
            code = int(unicode.replace("_", ""), 16) if unicode.strip("_") else -1
            if code < 0 or code > 0x10FFFF or 0xD800 <= code <= 0xDFFF:
                raise DeclarationError(f"Invalid unicode escape `{match.group(0)}`", span=span)
            return chr(code)
        if byte is not None:
            if int(byte, 16) > 0x7F:
                raise DeclarationError(f"Out of range escape `{match.group(0)}`", span=span)
            return chr(int(byte, 16))
        if char is None:
            # Line continuation
            return ""
        if char not in _SIMPLE_ESCAPES:
            raise DeclarationError(f"Unknown character escape `{match.group(0)}`", span=span)
        return _SIMPLE_ESCAPES[char]

    return _ESCAPE.sub(unescape, tok.value[1:-1])


def _name(node: Tree | Token) -> str:
    if isinstance(node, Tree):
        data = node.data
        if isinstance(data, Token):
            return data.value
        return data
    return node.type


def _loc(tree: Tree) -> Span:
    meta = tree.meta
    return Span(line=meta.line, column=meta.column)


def _trees(tree: Tree, kind: str | None = None) -> list[Tree]:
    return [
        child for child in tree.children
        if isinstance(child, Tree) and (kind is None or _name(child) == kind)
    ]


def _tokens(tree: Tree, kind: str) -> list[Token]:
    return [child for child in tree.children if isinstance(child, Token) and child.type == kind]


def _build_bridge(tree: Tree) -> BridgeModule:
    children = _trees(tree)
    if children and _name(children[0]) == "bridge_module":
        module = children[0]
        name = _tokens(module, "NAME")[0].value
        blocks = tuple(_build_extern_block(block) for block in _trees(module, "extern_block"))
        return BridgeModule(
            blocks=blocks,
            name=name,
            visibility="pub" if _tokens(module, "PUB") else "private",
            attrs=_build_attributes(module),
        )
    return BridgeModule(blocks=tuple(_build_extern_block(block) for block in children))


def _build_extern_block(tree: Tree) -> ExternBlock:
    abi = _decode_string_token(_tokens(tree, "STRING")[0])
    items = []
    for item in _trees(tree):
        kind = _name(item)
        if kind == "foreign_fn":
            items.append(_build_foreign_fn(item))
        elif kind == "type_alias":
            items.append(_build_type_alias(item))
        elif kind == "include_macro":
            items.append(_build_include(item))

    return ExternBlock(
        abi=abi,
        items=tuple(items),
        unsafe=bool(_tokens(tree, "UNSAFE")),
        span=_loc(tree),
        attrs=_build_attributes(tree),
    )


def _build_type_alias(tree: Tree) -> TypeAlias:
    types = [child for child in _trees(tree) if not _name(child).startswith("attr_")]
    return TypeAlias(
        ident=_tokens(tree, "NAME")[0].value,
        target=_build_type(types[0]) if types else None,
        attrs=_build_attributes(tree),
        span=_loc(tree),
    )


def _build_include(tree: Tree) -> IncludeMacro:
    # include ! ( target ) with any spacing
    text = _tokens(tree, "INCLUDE")[0].value
    target = text[text.index("(") + 1:text.rindex(")")].strip()
    return IncludeMacro(target=target, attrs=_build_attributes(tree), span=_loc(tree))


def _build_foreign_fn(tree: Tree) -> ForeignFunction:
    attrs = []
    args = []
    return_type = None
    for child in _trees(tree):
        kind = _name(child)
        if kind.startswith("attr_"):
            attrs.append(_build_attribute(child))
        elif kind == "fn_args":
            args = [_build_fn_arg(arg) for arg in _trees(child)]
        elif kind == "ret_type":
            return_type = _build_type(_trees(child)[0])

    return ForeignFunction(
        ident=_tokens(tree, "NAME")[0].value,
        args=tuple(args),
        return_type=return_type,
        attrs=tuple(attrs),
        unsafe=bool(_tokens(tree, "UNSAFE")),
        span=_loc(tree),
    )


def _build_fn_arg(tree: Tree) -> FunctionArg:
    type_node = _trees(tree)[-1]
    if _name(tree) == "receiver":
        return FunctionArg(name="self", ty=_build_type(type_node))
    return FunctionArg(name=_tokens(tree, "NAME")[0].value, ty=_build_type(type_node))


def _build_attributes(tree: Tree) -> tuple[Attribute, ...]:
    return tuple(_build_attribute(child) for child in _trees(tree) if _name(child).startswith("attr_"))


def _build_attribute(tree: Tree) -> Attribute:
    kind = _name(tree)
    span = _loc(tree)

    if kind == "attr_doc":
        # `/// text` is sugar for #[doc = " text"]
        text = _tokens(tree, "DOC_COMMENT")[0].value[3:].rstrip("\r")
        return Attribute("doc", value=AttributeValue.string(text), span=span)

    children = _trees(tree)
    path = _build_path(children[0])

    if kind == "attr_name_value":
        return Attribute(path, value=_build_attr_value(children[-1]), span=span)

    if kind == "attr_list":
        return Attribute(path, args=tuple(_build_attr_arg(arg) for arg in children[1:]), span=span)

    return Attribute(path, span=span)


def _build_attr_arg(tree: Tree) -> str:
    if _name(tree) == "attr_arg_value":
        children = _trees(tree)
        return f"{_build_path(children[0])} = {_build_attr_value(children[-1])}"
    return _build_path(tree)


def _build_attr_value(tree: Tree) -> AttributeValue:
    kind = _name(tree)
    if kind == "str_value":
        return AttributeValue("str", _decode_string_token(tree.children[0]))
    if kind == "int_value":
        return AttributeValue("int", tree.children[0].value)
    return AttributeValue("path", _build_path(_trees(tree)[0]))


def _build_path(tree: Tree) -> str:
    return "::".join(tok.value for tok in _tokens(tree, "NAME"))


def _build_type(tree: Tree):
    kind = _name(tree)
    children = _trees(tree)

    if kind == "ref_type":
        lifetime = _tokens(tree, "LIFETIME")
        return RefType(
            inner=_build_type(children[-1]),
            mutable=bool(_tokens(tree, "MUT")),
            lifetime=lifetime[0].value if lifetime else None,
        )
    if kind == "ptr_type":
        return PtrType(inner=_build_type(children[-1]), mutable=bool(_tokens(tree, "MUT")))
    if kind == "path_type":
        segments = tuple(tok.value for tok in _tokens(children[0], "NAME"))
        generics = ()
        if len(children) > 1:
            generics = tuple(_build_type(arg) for arg in _trees(children[1]))
        return PathType(segments=segments, generics=generics)
    if kind == "paren_type":
        return _build_type(children[0])
    if kind in ("tuple_type", "one_tuple"):
        return TupleType(elements=tuple(_build_type(element) for element in children))
    if kind == "slice_type":
        return SliceType(inner=_build_type(children[0]))

    raise ValueError(f"Unexpected type node '{kind}'")
