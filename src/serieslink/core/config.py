"""
Configuration loading.

Settings for a sync run live in an immutable ``SyncConfig``; defaults for
newly published documents live in ``PublishDefaults``. Both are plain values
passed into the functions that use them.

Resolution order for the config file:
  1. Explicit path (``--config``)
  2. ``.serieslink.yaml`` in the current directory
  3. Global config file (``~/.config/serieslink/config.yaml``)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from enum import Enum
from pathlib import Path
from typing import Any

import yaml

from serieslink.core.errors import ConfigError

LOCAL_CONFIG_NAME = ".serieslink.yaml"


class MarkerStyle(Enum):
    """How the managed link block is delimited inside a body."""

    SENTINEL = "sentinel"
    HEADING = "heading"


class MissingPolicy(Enum):
    """What to do when a title has no published counterpart."""

    SKIP = "skip"
    STRICT = "strict"


def _check_template(key: str, template: Any, **sample: str) -> None:
    """Raise ConfigError unless template formats with exactly the given fields."""
    if not isinstance(template, str):
        raise ConfigError(f"{key}: expected a string, got {template!r}")
    try:
        template.format(**sample)
    except (KeyError, IndexError, ValueError) as e:
        fields_ = ", ".join("{" + name + "}" for name in sample)
        raise ConfigError(f"{key}: only {fields_} may be used, got {template!r} ({e})") from None


@dataclass(frozen=True)
class SyncConfig:
    """Settings for a link synchronization run."""

    marker_style: MarkerStyle = MarkerStyle.SENTINEL
    start_marker: str = "<!-- START_SERIES -->"
    end_marker: str = "<!-- END_SERIES -->"
    heading: str = "{series} シリーズ記事："
    url_template: str = "https://qiita.com/items/{id}"
    numbered: bool = False
    missing_policy: MissingPolicy = MissingPolicy.SKIP
    resolve_inline: bool = True

    def __post_init__(self) -> None:
        _check_template("url_template", self.url_template, id="x")
        _check_template("heading", self.heading, series="x")
        if not str(self.start_marker).strip() or not str(self.end_marker).strip():
            raise ConfigError("start_marker and end_marker must not be empty")
        if self.marker_style is MarkerStyle.HEADING and not self.heading.strip():
            raise ConfigError("heading: required when marker_style is heading")

    @property
    def strict(self) -> bool:
        return self.missing_policy is MissingPolicy.STRICT

    def heading_for(self, series: str) -> str:
        return self.heading.format(series=series)

    def url_for(self, article_id: Any) -> str:
        return self.url_template.format(id=article_id)

    def with_overrides(self, **overrides: Any) -> SyncConfig:
        """Return a copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes) if changes else self


@dataclass(frozen=True)
class PublishDefaults:
    """Front matter given to a draft published for the first time."""

    title: str = "No Title"
    tags: tuple[str, ...] = ("default",)
    private: bool = False
    updated_at: str | None = None
    id: str | None = None
    organization_url_name: str | None = None
    slide: bool = False
    ignore_publish: bool = False
    timestamp_field: str = "local_updated_at"

    def as_metadata(self, now: str) -> dict[str, Any]:
        """Build the default metadata map in the order it is written out."""
        return {
            "title": self.title,
            "tags": list(self.tags),
            "private": self.private,
            "updated_at": self.updated_at,
            "local_updated_at": now,
            "id": self.id,
            "organization_url_name": self.organization_url_name,
            "slide": self.slide,
            "ignorePublish": self.ignore_publish,
        }


def get_global_config_path() -> Path:
    """Return the path to the global config file.

    Respects XDG_CONFIG_HOME if set, otherwise defaults to
    ~/.config/serieslink/config.yaml.
    """
    xdg_config_home = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config_home:
        base = Path(xdg_config_home)
    else:
        base = Path.home() / ".config"
    return base / "serieslink" / "config.yaml"


def find_config_file(explicit: Path | None = None) -> Path | None:
    """Locate the config file to use, or None when there is none."""
    if explicit is not None:
        return Path(explicit)

    local = Path.cwd() / LOCAL_CONFIG_NAME
    if local.is_file():
        return local

    global_path = get_global_config_path()
    if global_path.is_file():
        return global_path

    return None


def _read_yaml(path: Path) -> dict[str, Any]:
    if not path.is_file():
        return {}
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError):
        return {}
    return data if isinstance(data, dict) else {}


def _coerce_enum(enum_cls: type[Enum], key: str, value: Any) -> Enum:
    try:
        return enum_cls(str(value).lower())
    except ValueError:
        choices = ", ".join(m.value for m in enum_cls)
        raise ConfigError(f"{key}: expected one of {choices}, got {value!r}") from None


def config_from_dict(data: dict[str, Any]) -> SyncConfig:
    """Build a SyncConfig from a mapping, ignoring unknown keys."""
    section = data.get("links", data)
    if not isinstance(section, dict):
        raise ConfigError("links: expected a mapping")

    known = {f.name for f in fields(SyncConfig)}
    values: dict[str, Any] = {k: v for k, v in section.items() if k in known}

    if "marker_style" in values:
        values["marker_style"] = _coerce_enum(MarkerStyle, "marker_style", values["marker_style"])
    if "missing_policy" in values:
        values["missing_policy"] = _coerce_enum(
            MissingPolicy, "missing_policy", values["missing_policy"]
        )
    for key in ("numbered", "resolve_inline"):
        if key in values:
            values[key] = bool(values[key])

    return SyncConfig(**values)


def load_config(path: Path | None = None) -> SyncConfig:
    """Load the sync configuration.

    Args:
        path: Explicit config file (falls back to local, then global config)

    Returns:
        SyncConfig with file values applied over the defaults

    Raises:
        ConfigError: If a value in the file is invalid
    """
    config_path = find_config_file(path)
    if config_path is None:
        return SyncConfig()
    return config_from_dict(_read_yaml(config_path))


def load_publish_defaults(path: Path | None = None) -> PublishDefaults:
    """Load publish defaults from the ``publish`` section of the config file."""
    config_path = find_config_file(path)
    if config_path is None:
        return PublishDefaults()

    section = _read_yaml(config_path).get("publish", {})
    if not isinstance(section, dict):
        raise ConfigError("publish: expected a mapping")

    known = {f.name for f in fields(PublishDefaults)}
    values = {k: v for k, v in section.items() if k in known}
    if "tags" in values:
        tags = values["tags"]
        values["tags"] = tuple(tags) if isinstance(tags, list) else (str(tags),)
    return PublishDefaults(**values)
