"""TOML config loading for pratt.toml."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path

CONFIG_NAME = "pratt.toml"


@dataclass
class ParseConfig:
    allow_trailing: bool = False


@dataclass
class OutputConfig:
    color: bool = True


@dataclass
class PrattConfig:
    parse: ParseConfig = field(default_factory=ParseConfig)
    output: OutputConfig = field(default_factory=OutputConfig)


def find_config(start_path: Path | None = None) -> Path:
    """Walk up directories to find pratt.toml. Raises FileNotFoundError."""
    path = (start_path or Path.cwd()).resolve()
    if path.is_file():
        path = path.parent
    while True:
        candidate = path / CONFIG_NAME
        if candidate.exists():
            return candidate
        parent = path.parent
        if parent == path:
            raise FileNotFoundError(f"No {CONFIG_NAME} found in any parent directory")
        path = parent


def load_config(path: Path) -> PrattConfig:
    """Parse a pratt.toml file into a PrattConfig."""
    with open(path, "rb") as f:
        data = tomllib.load(f)

    config = PrattConfig()

    if "parse" in data:
        prs = data["parse"]
        config.parse = ParseConfig(
            allow_trailing=prs.get("allow_trailing", False),
        )

    if "output" in data:
        out = data["output"]
        config.output = OutputConfig(
            color=out.get("color", True),
        )

    return config


def default_config(start_path: Path | None = None) -> PrattConfig:
    """Load the nearest pratt.toml, or the defaults when there is none."""
    try:
        return load_config(find_config(start_path))
    except FileNotFoundError:
        return PrattConfig()
