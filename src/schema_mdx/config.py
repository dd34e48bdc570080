"""Generation options and their TOML representation."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal

try:
    import tomllib
except ModuleNotFoundError:  # pragma: no cover - python<3.11
    import tomli as tomllib

from schema_mdx.errors import ConfigurationError
from schema_mdx.schema import resolve_path

Granularity = Literal["entity", "file"]
GRANULARITIES = ("entity", "file")
CONFIG_TABLE = "generate"


@dataclass
class GenerateConfig:
    """Options for generating documents from a single schema."""

    input: str | None
    output: str | None
    cwd: str | None = None

    def validate(self) -> None:
        if not self.input:
            raise ConfigurationError("an input schema is required", details={"option": "input"})
        if not self.output:
            raise ConfigurationError(
                "an output directory is required", details={"option": "output"}
            )

    @property
    def output_dir(self) -> Path:
        return resolve_path(self.output or "", self.cwd)


@dataclass
class FilesConfig:
    """Options for generating documents from several glob expanded inputs."""

    input: list[str] = field(default_factory=list)
    output: str | None = None
    per: str = "entity"
    cwd: str | None = None

    def validate(self) -> None:
        if isinstance(self.input, str):
            self.input = [self.input]
        if not self.input:
            raise ConfigurationError(
                "at least one input pattern is required", details={"option": "input"}
            )
        if not self.output:
            raise ConfigurationError(
                "an output directory is required", details={"option": "output"}
            )
        if self.per not in GRANULARITIES:
            raise ConfigurationError(
                f"'per' must be one of {', '.join(GRANULARITIES)}, got '{self.per}'",
                details={"option": "per", "value": self.per},
            )

    @property
    def output_dir(self) -> Path:
        return resolve_path(self.output or "", self.cwd)


def load_config(path: str | Path) -> dict[str, Any]:
    """Read the ``[generate]`` table of a TOML file.

    Relative ``cwd`` values are resolved against the file's directory, which
    is also the default ``cwd``.
    """
    config_path = Path(path)
    try:
        with config_path.open("rb") as handle:
            data = tomllib.load(handle)
    except FileNotFoundError as err:
        raise ConfigurationError(
            f"config file '{config_path}' does not exist", details={"path": str(config_path)}
        ) from err
    except tomllib.TOMLDecodeError as err:
        raise ConfigurationError(
            f"invalid TOML in '{config_path}': {err}", details={"path": str(config_path)}
        ) from err

    table = data.get(CONFIG_TABLE, {})
    if not isinstance(table, dict):
        raise ConfigurationError(
            f"config '{CONFIG_TABLE}' must be a table", details={"path": str(config_path)}
        )

    values: dict[str, Any] = {}
    for key in ("output", "per", "cwd"):
        if key in table:
            if not isinstance(table[key], str):
                raise ConfigurationError(
                    f"config '{key}' must be a string", details={"option": key}
                )
            values[key] = table[key]

    if "input" in table:
        raw_input = table["input"]
        if isinstance(raw_input, str):
            raw_input = [raw_input]
        if not isinstance(raw_input, list) or not all(isinstance(item, str) for item in raw_input):
            raise ConfigurationError(
                "config 'input' must be a string or a list of strings", details={"option": "input"}
            )
        values["input"] = raw_input

    base = config_path.resolve().parent
    values["cwd"] = str(resolve_path(values.get("cwd", "."), base))
    return values
