"""
Code generation of cxx bridge fragments for parsed declarations
"""

from dataclasses import replace

from .constants import CPP_ABI, CXX_NAME_ATTRIBUTE, PIN_TYPE, RUST_ABI
from .errors import DuplicateWrapperNameError
from .fragments import GeneratedRustFragment, RustFragmentPair
from .naming import MethodName
from .syntax import (
    Attribute,
    ExternBlock,
    PathType,
    RefType,
    attribute_find_path,
    attribute_take_path,
)

DOC_HIDDEN = Attribute("doc", args=("hidden",))


class CodeGenerator:
    """Generates cxx bridge fragments from parsed declarations"""

    def __init__(self, filename: str | None = None):
        # Source file reported in embedding errors
        self.filename = filename

    def generate_methods(self, invokables) -> GeneratedRustFragment:
        """Generate extern "Rust" wrappers exposing Rust methods to C++

        Raises:
            SyntaxEmbedError: if a declaration cannot be embedded in its extern block
        """
        generated = GeneratedRustFragment()

        for invokable in invokables:
            idents = MethodName.from_method(invokable)

            # Remove any cxx_name attribute on the original method
            # as the bridge has to use the wrapper ident
            _, attrs = attribute_take_path(invokable.method.attrs, CXX_NAME_ATTRIBUTE)
            original_method = replace(
                invokable.method,
                attrs=(DOC_HIDDEN, Attribute.name_value(CXX_NAME_ATTRIBUTE, idents.wrapper.cpp)) + attrs,
            )

            # extern "Rust" blocks never need to be unsafe
            fragment = RustFragmentPair(
                cxx_bridge=[ExternBlock(abi=RUST_ABI, items=(original_method,), span=invokable.method.span)],
                implementation=[],
            )

            generated.cxx_mod_contents.extend(fragment.cxx_bridge_as_items(self.filename))
            generated.cxx_qt_mod_contents.extend(fragment.implementation_as_items())

        return generated

    def generate_inherited_methods(self, methods) -> GeneratedRustFragment:
        """Generate extern "C++" declarations re-exposing inherited C++ methods to Rust

        Safe methods get an `unsafe extern "C++"` block around a plain fn,
        unsafe methods a plain block around an `unsafe fn`.
        """
        blocks = []

        for method in methods:
            wrapper_ident = method.wrapper_ident()

            _, attrs = attribute_take_path(method.method.attrs, CXX_NAME_ATTRIBUTE)
            original_method = replace(
                method.method,
                attrs=(Attribute.name_value(CXX_NAME_ATTRIBUTE, wrapper_ident),) + attrs,
                unsafe=not method.safe,
            )

            block = ExternBlock(
                abi=CPP_ABI,
                items=(original_method,),
                unsafe=method.safe,
                span=method.method.span,
            )
            blocks.append(block.validate(self.filename))

        return GeneratedRustFragment(cxx_mod_contents=blocks)


def _owner(function) -> str | None:
    """Type a method is declared on, ignoring references and Pin"""
    receiver = function.receiver
    if receiver is None:
        return None
    ty = receiver.ty
    while True:
        if isinstance(ty, RefType):
            ty = ty.inner
        elif isinstance(ty, PathType) and ty.name == PIN_TYPE and len(ty.generics) == 1:
            ty = ty.generics[0]
        else:
            return str(ty)


class OutputBuilder:
    """Builds the final bridge module"""

    @staticmethod
    def check_unique_symbols(items):
        """Reject two declarations exposing the same symbol on the same type"""
        seen = {}
        for block in items:
            for function in getattr(block, "items", ()):
                index = attribute_find_path(function.attrs, CXX_NAME_ATTRIBUTE)
                symbol = function.ident
                if index is not None and function.attrs[index].value is not None:
                    symbol = function.attrs[index].value.text
                key = (_owner(function), symbol)
                if key in seen:
                    owner = f"{key[0]}::" if key[0] else ""
                    raise DuplicateWrapperNameError(
                        f"Duplicate bridge symbol `{owner}{symbol}` exposed by "
                        f"`{seen[key]}` and `{function.ident}`"
                    )
                seen[key] = function.ident

    @staticmethod
    def build(module_name: str, fragment: GeneratedRustFragment, visibility: str = "pub") -> str:
        """Build the generated Rust source for one bridge"""
        OutputBuilder.check_unique_symbols(fragment.cxx_mod_contents)

        vis = "pub " if visibility == "pub" else ""
        parts = [
            "#[cxx::bridge]",
            f"{vis}mod {module_name} {{",
        ]
        if fragment.cxx_mod_contents:
            parts.append("\n\n".join(item.render(1) for item in fragment.cxx_mod_contents))
        parts.append("}")

        # Implementation items live next to the bridge, outside of it
        if fragment.cxx_qt_mod_contents:
            parts.append("")
            parts.append(f"{vis}mod cxx_qt_{module_name} {{")
            parts.append("\n\n".join(item.render(1) for item in fragment.cxx_qt_mod_contents))
            parts.append("}")

        return "\n".join(parts) + "\n"
