"""
Main bridge generator orchestration
"""

import sys
from pathlib import Path

from .case_converter import to_snake_case
from .code_generators import CodeGenerator, OutputBuilder
from .constants import CPP_QT_ABI, DEFAULT_MODULE_NAME, INHERIT_ATTRIBUTE, QSIGNAL_ATTRIBUTE, RUST_QT_ABI
from .errors import DeclarationError, SyntaxEmbedError
from .fragments import GeneratedRustFragment
from .parsed import ParsedInheritedMethod, ParsedMethod, Safety
from .parser import parse_bridge
from .syntax import BridgeModule, ForeignFunction, attribute_find_path, is_identifier


class BridgeGenerator:
    """Main orchestrator for generating cxx bridges from bridge sources"""

    def __init__(self):
        # Generated sources by output file name
        self.generated_bridges = {}
        self.source_file = None

    def _clear_state(self):
        """Clear all accumulated state for a new generation run"""
        self.generated_bridges.clear()
        self.source_file = None

    def _warn(self, function, message: str):
        location = f"{self.source_file}:{function.span}" if self.source_file else str(function.span)
        print(f"Warning: {location}: {message}", file=sys.stderr)

    def _is_function(self, item) -> bool:
        """Warn about and reject items other than function declarations"""
        if isinstance(item, ForeignFunction):
            return True
        self._warn(item, f"skipping `{item.ident}`, only function declarations are generated")
        return False

    def classify(self, module: BridgeModule) -> tuple[list[ParsedMethod], list[ParsedInheritedMethod]]:
        """Sort the declarations of a bridge into methods and inherited methods"""
        methods = []
        inherited = []

        for block in module.blocks:
            safety = Safety.of_block(block)

            if block.abi == RUST_QT_ABI:
                for function in block.items:
                    if not self._is_function(function):
                        continue
                    # Signals are generated elsewhere
                    if attribute_find_path(function.attrs, QSIGNAL_ATTRIBUTE) is not None:
                        self._warn(function, f"skipping signal `{function.ident}`")
                        continue
                    methods.append(ParsedMethod.parse(function, safety))

            elif block.abi == CPP_QT_ABI:
                for function in block.items:
                    if not self._is_function(function):
                        continue
                    if attribute_find_path(function.attrs, INHERIT_ATTRIBUTE) is None:
                        self._warn(function, f"skipping `{function.ident}`, only #[inherit] methods are supported")
                        continue
                    inherited.append(ParsedInheritedMethod.parse(function, safety))

            else:
                location = f"{self.source_file}:" if self.source_file else ""
                print(f'Warning: {location}{block.span}: skipping extern "{block.abi}" block', file=sys.stderr)

        return methods, inherited

    def generate_bridge(self, source: str, module_name: str | None = None,
                        visibility: str = "pub") -> tuple[str, str]:
        """Generate the bridge module for one bridge source

        Returns:
            The module name and the generated Rust source
        """
        module = parse_bridge(source)

        name = module_name or module.name
        if not name:
            name = to_snake_case(Path(self.source_file).stem) if self.source_file else DEFAULT_MODULE_NAME
            if not is_identifier(name):
                print(f"Warning: '{name}' is not a valid module name, using '{DEFAULT_MODULE_NAME}'",
                      file=sys.stderr)
                name = DEFAULT_MODULE_NAME

        methods, inherited = self.classify(module)

        code_generator = CodeGenerator(self.source_file)
        fragment = GeneratedRustFragment()
        fragment.append(code_generator.generate_inherited_methods(inherited))
        fragment.append(code_generator.generate_methods(methods))

        return name, OutputBuilder.build(name, fragment, visibility)

    def generate(self, bridge_files: list[tuple[str, str | None]], output: str = None,
                 visibility: str = "pub", ignore_missing: bool = False) -> dict[str, str]:
        """Generate cxx bridges from bridge source file(s)

        Args:
            bridge_files: List of (source file, module name or None) pairs
            output: Optional output directory (prints to stdout if not specified)
            visibility: "pub" or "private" visibility of the generated modules
            ignore_missing: Warn instead of failing on missing source files
        """
        self._clear_state()

        for bridge_file, module_name in bridge_files:
            if not Path(bridge_file).exists():
                if ignore_missing:
                    print(f"Warning: Bridge file not found: {bridge_file}", file=sys.stderr)
                    continue
                print(f"Error: Bridge file not found: {bridge_file}", file=sys.stderr)
                raise FileNotFoundError(f"Bridge file not found: {bridge_file}")

            self.source_file = bridge_file
            print(f"Processing: {bridge_file} -> {module_name or '<declared module>'}")

            try:
                name, code = self.generate_bridge(Path(bridge_file).read_text(), module_name, visibility)
            except (DeclarationError, SyntaxEmbedError) as e:
                location = f":{e.span}" if getattr(e, "span", None) is not None else ""
                print(f"Error in {bridge_file}{location}: {e}", file=sys.stderr)
                raise

            file_name = f"{name}.rs"
            if file_name in self.generated_bridges:
                raise ValueError(f"Bridge module '{name}' is generated by more than one source file")
            self.generated_bridges[file_name] = code

        if not self.generated_bridges:
            attempted = ", ".join(pair[0] for pair in bridge_files)
            raise RuntimeError(f"No bridge files could be processed successfully. Files attempted: {attempted}.")

        if output:
            output_path = Path(output)
            output_path.mkdir(parents=True, exist_ok=True)
            for file_name, code in self.generated_bridges.items():
                bridge_path = output_path / file_name
                bridge_path.write_text(code)
                print(f"Generated bridge: {bridge_path}")
        else:
            for code in self.generated_bridges.values():
                print(code)

        return dict(self.generated_bridges)
