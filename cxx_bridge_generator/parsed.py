"""
Parsed declaration records consumed by the fragment generators
"""

from dataclasses import dataclass, field, replace
from enum import Enum

from .constants import CPP_QT_ABI, INHERIT_ATTRIBUTE, PIN_TYPE, QINVOKABLE_ATTRIBUTE, RUST_QT_ABI
from .errors import DeclarationError
from .naming import CombinedIdent
from .syntax import ExternBlock, ForeignFunction, PathType, RefType, attribute_take_path


class Safety(Enum):
    """Whether declarations inside an extern block may be safe to call"""
    SAFE = "safe"
    UNSAFE = "unsafe"

    @classmethod
    def of_block(cls, block: ExternBlock) -> "Safety":
        # An `unsafe extern` block is the author vouching for its contents
        return cls.SAFE if block.unsafe else cls.UNSAFE


class ParsedQtSpecifier(Enum):
    """C++ method specifiers requested through attributes"""
    FINAL = "cxx_final"
    OVERRIDE = "cxx_override"
    VIRTUAL = "cxx_virtual"


@dataclass
class ParsedFunctionParameter:
    ident: str
    ty: object


def _check_safety(method: ForeignFunction, safety: Safety, what: str, abi: str):
    if safety is Safety.UNSAFE and not method.unsafe:
        raise DeclarationError(
            f'{what} must be marked as unsafe or wrapped in an `unsafe extern "{abi}"` block!',
            span=method.span,
        )


def _parse_receiver(method: ForeignFunction) -> tuple[str, bool]:
    """Return the QObject type and mutability of a self: &T / Pin<&mut T> receiver"""
    receiver = method.receiver
    if receiver is None:
        raise DeclarationError(
            f"Expected `{method.ident}` to have a self receiver as its first parameter",
            span=method.span,
        )

    ty = receiver.ty
    if isinstance(ty, RefType) and not ty.mutable and isinstance(ty.inner, PathType):
        return ty.inner.name, False

    if (
        isinstance(ty, PathType)
        and ty.name == PIN_TYPE
        and len(ty.generics) == 1
        and isinstance(ty.generics[0], RefType)
        and ty.generics[0].mutable
        and isinstance(ty.generics[0].inner, PathType)
    ):
        return ty.generics[0].inner.name, True

    raise DeclarationError(
        f"Expected the receiver of `{method.ident}` to be &T or Pin<&mut T>, got `{ty}`",
        span=method.span,
    )


def _parse_parameters(method: ForeignFunction) -> list[ParsedFunctionParameter]:
    return [ParsedFunctionParameter(ident=arg.name, ty=arg.ty) for arg in method.args[1:]]


@dataclass
class ParsedMethod:
    """A Rust method exposed to C++ from an extern "RustQt" block"""
    method: ForeignFunction
    qobject_ident: str
    mutable: bool = False
    safe: bool = True
    parameters: list[ParsedFunctionParameter] = field(default_factory=list)
    specifiers: set[ParsedQtSpecifier] = field(default_factory=set)
    is_qinvokable: bool = False

    @classmethod
    def parse(cls, method: ForeignFunction, safety: Safety) -> "ParsedMethod":
        _check_safety(method, safety, "Invokables", RUST_QT_ABI)
        qobject_ident, mutable = _parse_receiver(method)

        attrs = method.attrs
        invokable, attrs = attribute_take_path(attrs, QINVOKABLE_ATTRIBUTE)
        specifiers = set()
        for specifier in ParsedQtSpecifier:
            found, attrs = attribute_take_path(attrs, specifier.value)
            if found is not None:
                specifiers.add(specifier)
        method = replace(method, attrs=attrs)

        return cls(
            method=method,
            qobject_ident=qobject_ident,
            mutable=mutable,
            safe=not method.unsafe,
            parameters=_parse_parameters(method),
            specifiers=specifiers,
            is_qinvokable=invokable is not None,
        )


@dataclass
class ParsedInheritedMethod:
    """A C++ base class method re-exposed to Rust from an extern "C++Qt" block"""
    method: ForeignFunction
    qobject_ident: str
    mutable: bool = False
    safe: bool = True
    parameters: list[ParsedFunctionParameter] = field(default_factory=list)
    name: CombinedIdent = field(init=False)
    wrapper: CombinedIdent = field(init=False)

    def __post_init__(self):
        self.name = CombinedIdent.from_rust_function(self.method.attrs, self.method.ident)
        self.wrapper = CombinedIdent.wrapper_from_inherited(self.name)

    @classmethod
    def parse(cls, method: ForeignFunction, safety: Safety) -> "ParsedInheritedMethod":
        _check_safety(method, safety, "Inherited methods", CPP_QT_ABI)
        qobject_ident, mutable = _parse_receiver(method)
        _, attrs = attribute_take_path(method.attrs, INHERIT_ATTRIBUTE)
        method = replace(method, attrs=attrs)

        return cls(
            method=method,
            qobject_ident=qobject_ident,
            mutable=mutable,
            safe=not method.unsafe,
            parameters=_parse_parameters(method),
        )

    def wrapper_ident(self) -> str:
        """The C++ name of the wrapper exposing this method to Rust"""
        return self.wrapper.cpp
