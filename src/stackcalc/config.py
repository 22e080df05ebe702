"""TOML config loading for stackcalc.toml."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path

CONFIG_NAME = "stackcalc.toml"


@dataclass
class OutputConfig:
    color: bool = True


@dataclass
class RunConfig:
    trace: bool = False


@dataclass
class StackCalcConfig:
    output: OutputConfig = field(default_factory=OutputConfig)
    run: RunConfig = field(default_factory=RunConfig)


def find_config(start_path: Path | None = None) -> Path:
    """Walk up directories to find stackcalc.toml. Raises FileNotFoundError."""
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


def load_config(path: Path) -> StackCalcConfig:
    """Parse a stackcalc.toml file into a StackCalcConfig."""
    with open(path, "rb") as f:
        data = tomllib.load(f)

    config = StackCalcConfig()

    if "output" in data:
        out = data["output"]
        config.output = OutputConfig(
            color=out.get("color", True),
        )

    if "run" in data:
        run = data["run"]
        config.run = RunConfig(
            trace=run.get("trace", False),
        )

    return config


def load_default_config(start_path: Path | None = None) -> StackCalcConfig:
    """Load the nearest stackcalc.toml, or the defaults if there is none."""
    try:
        return load_config(find_config(start_path))
    except FileNotFoundError:
        return StackCalcConfig()
