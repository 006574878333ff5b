"""Load and validate the GitBook configuration file (.gitbook.yaml).

Expected shape:

    root: ./
    structure:
      readme: README.md
      summary: SUMMARY.md
    format: markdown   # optional

`root`, `structure.readme` and `structure.summary` are required and must be
non-empty strings. Anything else raises ConfigMalformed; a missing file raises
ConfigMissing.
"""
from __future__ import annotations
import pathlib
import typing as t
import yaml  # type: ignore

CONFIG_NAME = ".gitbook.yaml"
DEFAULT_FORMAT = "markdown"


class ConfigError(Exception):
    """Base class for configuration problems."""


class ConfigMissing(ConfigError):
    pass


class ConfigMalformed(ConfigError):
    pass


class StructureConfig(t.NamedTuple):
    readme: str
    summary: str


class GitBookConfig(t.NamedTuple):
    root: str
    structure: StructureConfig
    format: str | None = None

    @property
    def effective_format(self) -> str:
        return self.format or DEFAULT_FORMAT


def _required_str(mapping: dict, key: str, field: str, source: str) -> str:
    value = mapping.get(key)
    if not value:
        raise ConfigMalformed(f'Missing "{field}" field in {source}')
    if not isinstance(value, str):
        raise ConfigMalformed(f'Field "{field}" in {source} must be a string')
    return value


def parse_config(text: str, source: str = CONFIG_NAME) -> GitBookConfig:
    try:
        data = yaml.safe_load(text)
    except (yaml.YAMLError, ValueError, RecursionError) as e:
        raise ConfigMalformed(f"Failed to parse {source}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigMalformed(f"{source} must contain a mapping at the top level")

    root = _required_str(data, "root", "root", source)
    structure = data.get("structure")
    if not structure:
        raise ConfigMalformed(f'Missing "structure" field in {source}')
    if not isinstance(structure, dict):
        raise ConfigMalformed(f'Field "structure" in {source} must be a mapping')
    readme = _required_str(structure, "readme", "structure.readme", source)
    summary = _required_str(structure, "summary", "structure.summary", source)

    fmt = data.get("format")
    if fmt is not None and not isinstance(fmt, str):
        raise ConfigMalformed(f'Field "format" in {source} must be a string')
    return GitBookConfig(root, StructureConfig(readme, summary), fmt)


def load_config(root: pathlib.Path | str, name: str = CONFIG_NAME) -> GitBookConfig:
    path = pathlib.Path(root) / name
    if not path.is_file():
        raise ConfigMissing(f"{name} not found")
    return parse_config(path.read_text(encoding="utf-8"), source=name)
