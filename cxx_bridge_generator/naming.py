"""
Naming resolution for declarations exposed on both sides of the bridge

Every declaration gets a CombinedIdent, the pair of names it is known by in
C++ and in Rust. Defaults follow the convention of each language: camelCase
for C++ and snake_case for Rust. The cxx_name / rust_name attributes pin a
side to a literal name.
"""

from dataclasses import dataclass

from .case_converter import to_camel_case, to_snake_case
from .constants import (
    CXX_NAME_ATTRIBUTE,
    INHERIT_SUFFIX_CPP,
    INHERIT_SUFFIX_RUST,
    RUST_NAME_ATTRIBUTE,
    WRAPPER_SUFFIX_CPP,
    WRAPPER_SUFFIX_RUST,
)
from .errors import OverrideValueError
from .syntax import attribute_find_path, attribute_string_value


@dataclass(frozen=True)
class NamingOverride:
    """Validated cxx_name / rust_name overrides of a declaration"""
    cxx_name: str | None = None
    rust_name: str | None = None

    @classmethod
    def from_attributes(cls, attrs) -> "NamingOverride":
        """Extract the overrides, ignoring any that are not string literals"""
        return cls(
            cxx_name=_find_override(attrs, CXX_NAME_ATTRIBUTE),
            rust_name=_find_override(attrs, RUST_NAME_ATTRIBUTE),
        )


def _find_override(attrs, path: str) -> str | None:
    index = attribute_find_path(attrs, path)
    if index is None:
        return None
    try:
        return attribute_string_value(attrs[index])
    except OverrideValueError:
        # A malformed override falls back to the default naming
        return None


@dataclass(frozen=True)
class CombinedIdent:
    """The C++ and Rust names of one declaration"""
    cpp: str
    rust: str

    @classmethod
    def resolve(cls, ident: str, overrides: NamingOverride | None = None) -> "CombinedIdent":
        """Resolve the names of a Rust-authored declaration

        rust: rust_name, else ident as is when cxx_name is given, else snake_case
        cpp:  cxx_name, else ident as is when rust_name is given, else camelCase
        """
        overrides = overrides or NamingOverride()
        cpp = to_camel_case(ident)
        rust = to_snake_case(ident)

        if overrides.cxx_name is not None:
            cpp = overrides.cxx_name
            rust = ident

        if overrides.rust_name is not None:
            rust = overrides.rust_name
            if overrides.cxx_name is None:
                cpp = ident

        return cls(cpp=cpp, rust=rust)

    @classmethod
    def from_rust_function(cls, attrs, ident: str) -> "CombinedIdent":
        """Resolve the names of a function from its attributes"""
        return cls.resolve(ident, NamingOverride.from_attributes(attrs))

    @classmethod
    def wrapper_from_invokable(cls, ident: "CombinedIdent") -> "CombinedIdent":
        """Names of the wrapper through which C++ calls a Rust method"""
        return cls(
            cpp=f"{ident.cpp}{WRAPPER_SUFFIX_CPP}",
            rust=f"{ident.rust}{WRAPPER_SUFFIX_RUST}",
        )

    @classmethod
    def wrapper_from_inherited(cls, ident: "CombinedIdent") -> "CombinedIdent":
        """Names of the wrapper through which Rust calls an inherited C++ method"""
        return cls(
            cpp=f"{ident.cpp}{INHERIT_SUFFIX_CPP}",
            rust=f"{ident.rust}{INHERIT_SUFFIX_RUST}",
        )


@dataclass(frozen=True)
class MethodName:
    """Names for the parts of a method (which could be a Q_INVOKABLE)"""
    name: CombinedIdent
    wrapper: CombinedIdent

    @classmethod
    def from_function(cls, function) -> "MethodName":
        name = CombinedIdent.from_rust_function(function.attrs, function.ident)
        return cls(name=name, wrapper=CombinedIdent.wrapper_from_invokable(name))

    @classmethod
    def from_method(cls, parsed) -> "MethodName":
        """Names of a ParsedMethod"""
        return cls.from_function(parsed.method)
