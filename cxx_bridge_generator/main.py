#!/usr/bin/env python3
"""
CLI entry point for the cxx bridge generator
Generates #[cxx::bridge] modules from RustQt bridge declarations
"""

import argparse
import os
import sys

from lark.exceptions import UnexpectedInput

# Add parent directory to sys.path for direct execution
if __name__ == '__main__' and __package__ is None:
    sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from cxx_bridge_generator.config import parse_config_file
from cxx_bridge_generator.errors import DeclarationError, DuplicateWrapperNameError, SyntaxEmbedError
from cxx_bridge_generator.generator import BridgeGenerator


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Generate cxx bridge declarations from RustQt bridge sources",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s --config bridges.xml --output src/generated
  %(prog)s -C bridges.xml
        """
    )

    parser.add_argument(
        "-C", "--config",
        metavar="CONFIG_FILE",
        required=True,
        help="XML configuration file listing the bridge sources to process"
    )

    parser.add_argument(
        "-o", "--output",
        metavar="DIRECTORY",
        help="Output directory for generated Rust files (default: print to stdout)"
    )

    parser.add_argument(
        "--ignore-missing",
        action="store_true",
        help="Continue processing even if some bridge files are not found (default: fail on missing files)"
    )

    args = parser.parse_args(argv)

    try:
        config = parse_config_file(args.config)
    except (ValueError, FileNotFoundError) as e:
        print(f"Error reading config file: {e}", file=sys.stderr)
        sys.exit(1)

    if not config.bridge_files:
        print("Error: No bridges found in config file", file=sys.stderr)
        sys.exit(1)

    try:
        generator = BridgeGenerator()
        generator.generate(
            config.bridge_files,
            output=args.output,
            visibility=config.visibility,
            ignore_missing=args.ignore_missing,
        )
    except (DeclarationError, SyntaxEmbedError, DuplicateWrapperNameError, UnexpectedInput) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        import traceback
        print(f"Error: {e}", file=sys.stderr)
        traceback.print_exc(file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
