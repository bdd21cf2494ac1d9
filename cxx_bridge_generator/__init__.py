"""
cxx bridge generator - Generate cxx bridge fragments from RustQt declarations
"""

from .generator import BridgeGenerator
from .case_converter import Case, convert, to_camel_case, to_snake_case
from .naming import CombinedIdent, MethodName, NamingOverride
from .parsed import ParsedFunctionParameter, ParsedInheritedMethod, ParsedMethod, ParsedQtSpecifier, Safety
from .parser import parse_bridge, parse_foreign_function
from .fragments import GeneratedRustFragment, Region, RustFragmentPair
from .code_generators import CodeGenerator, OutputBuilder
from .errors import DeclarationError, DuplicateWrapperNameError, OverrideValueError, SyntaxEmbedError

__version__ = "0.1.0"

__all__ = [
    "BridgeGenerator",
    "Case",
    "convert",
    "to_camel_case",
    "to_snake_case",
    "CombinedIdent",
    "MethodName",
    "NamingOverride",
    "ParsedFunctionParameter",
    "ParsedInheritedMethod",
    "ParsedMethod",
    "ParsedQtSpecifier",
    "Safety",
    "parse_bridge",
    "parse_foreign_function",
    "GeneratedRustFragment",
    "Region",
    "RustFragmentPair",
    "CodeGenerator",
    "OutputBuilder",
    "DeclarationError",
    "DuplicateWrapperNameError",
    "OverrideValueError",
    "SyntaxEmbedError",
]
