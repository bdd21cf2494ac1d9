"""
XML configuration file parsing for the bridge generator
"""

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field

from .syntax import is_identifier

VISIBILITIES = ("pub", "private")


@dataclass
class BridgeConfig:
    """Configuration for bridge generation"""
    bridge_files: list[tuple[str, str | None]] = field(default_factory=list)
    visibility: str = "pub"


def parse_config_file(config_path):
    """Parse XML configuration file and return BridgeConfig object"""
    try:
        tree = ET.parse(config_path)
        root = tree.getroot()

        if root.tag != "bridges":
            raise ValueError(f"Expected root element 'bridges', got '{root.tag}'")

        config = BridgeConfig()

        # Visibility of the generated modules (default to "pub")
        config.visibility = root.get("visibility", "pub").strip().lower()
        if config.visibility not in VISIBILITIES:
            raise ValueError(
                f"Invalid visibility value '{config.visibility}'. Must be 'pub' or 'private'."
            )

        for bridge in root.findall("bridge"):
            path = bridge.get("file")
            if not path:
                raise ValueError("Bridge element missing 'file' attribute")

            # Module name is optional, the bridge source may declare its own
            module = bridge.get("module")
            if module is not None:
                module = module.strip()
                if not is_identifier(module):
                    raise ValueError(f"Bridge module name '{module}' is not a valid identifier")

            config.bridge_files.append((path.strip(), module))

        return config

    except ET.ParseError as e:
        raise ValueError(f"XML parsing error: {e}")
    except FileNotFoundError:
        raise FileNotFoundError(f"Configuration file not found: {config_path}")
