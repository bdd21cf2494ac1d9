"""
Generated fragment containers handed to the output builder
"""

from dataclasses import dataclass, field
from enum import Enum

from .constants import CPP_ABI, RUST_ABI
from .syntax import ExternBlock


class Region(Enum):
    """Destination of a generated item"""
    # extern "Rust": implemented in Rust, callable from C++
    NATIVE_CALLABLE = "native-callable"
    # extern "C++": implemented in C++, callable from Rust
    MANAGED_CALLABLE = "managed-callable"
    IMPLEMENTATION = "implementation"

    @classmethod
    def of(cls, item) -> "Region":
        if isinstance(item, ExternBlock):
            if item.abi == RUST_ABI:
                return cls.NATIVE_CALLABLE
            if item.abi == CPP_ABI:
                return cls.MANAGED_CALLABLE
        return cls.IMPLEMENTATION


@dataclass
class RustFragmentPair:
    """Items generated for one declaration"""
    cxx_bridge: list = field(default_factory=list)
    implementation: list = field(default_factory=list)

    def cxx_bridge_as_items(self, filename: str | None = None) -> list[ExternBlock]:
        """Bridge items, checked to be embeddable in the bridge module"""
        return [block.validate(filename) for block in self.cxx_bridge]

    def implementation_as_items(self) -> list:
        return list(self.implementation)


@dataclass
class GeneratedRustFragment:
    """Bridge and implementation items for a whole generation run"""
    cxx_mod_contents: list = field(default_factory=list)
    cxx_qt_mod_contents: list = field(default_factory=list)

    def append(self, other: "GeneratedRustFragment"):
        self.cxx_mod_contents.extend(other.cxx_mod_contents)
        self.cxx_qt_mod_contents.extend(other.cxx_qt_mod_contents)

    def regions(self) -> list[Region]:
        """Region of each bridge item, in order"""
        return [Region.of(item) for item in self.cxx_mod_contents]
