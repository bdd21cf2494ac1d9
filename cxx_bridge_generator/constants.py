"""
Constants shared by the naming resolver and the fragment generators
"""

# Naming override attributes
CXX_NAME_ATTRIBUTE = "cxx_name"
RUST_NAME_ATTRIBUTE = "rust_name"

# Marker attributes recognised on bridge declarations
QINVOKABLE_ATTRIBUTE = "qinvokable"
QSIGNAL_ATTRIBUTE = "qsignal"
INHERIT_ATTRIBUTE = "inherit"

# Suffixes appended to resolved names for the synthesized wrapper symbols
WRAPPER_SUFFIX_CPP = "Wrapper"
WRAPPER_SUFFIX_RUST = "_wrapper"
INHERIT_SUFFIX_CPP = "CxxQtInherit"
INHERIT_SUFFIX_RUST = "_cxx_qt_inherit"

# ABI strings of the extern blocks found in bridge sources
RUST_QT_ABI = "RustQt"
CPP_QT_ABI = "C++Qt"

# ABI strings of the extern blocks emitted into the cxx bridge
RUST_ABI = "Rust"
CPP_ABI = "C++"

# Smart pointer wrapping a mutable receiver
PIN_TYPE = "Pin"

# Default name of the generated bridge module
DEFAULT_MODULE_NAME = "ffi"

# Rust keywords that cannot be used as plain identifiers
RUST_KEYWORDS = {
    'as', 'async', 'await', 'break', 'const', 'continue', 'crate', 'dyn',
    'else', 'enum', 'extern', 'false', 'fn', 'for', 'if', 'impl', 'in',
    'let', 'loop', 'match', 'mod', 'move', 'mut', 'pub', 'ref', 'return',
    'self', 'Self', 'static', 'struct', 'super', 'trait', 'true', 'type',
    'unsafe', 'use', 'where', 'while',
}
