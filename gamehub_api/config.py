"""
Build configuration: where sources live, where output goes, and the
values the registry rewrites every component with.

Values come from three layers, later ones winning:
    1. the defaults declared on BuildConfig
    2. an optional JSON file (``--config``)
    3. explicit overrides (CLI flags)

``GAMEHUB_BUILD_TIMESTAMP`` fills in ``timestamp`` when no layer sets it.
"""

from __future__ import annotations

import json
import os
import re
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator


ROOT = Path(__file__).resolve().parents[1]
TIMESTAMP_ENV = "GAMEHUB_BUILD_TIMESTAMP"

_PATH_FIELDS = (
    "xml_source",
    "custom_components_file",
    "containers_file",
    "imagefs_file",
    "defaults_file",
    "execution_config_file",
    "output_dir",
)


class BuildConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    cdn_base_url: str = Field(
        default="https://cdn.example.com/components",
        min_length=1,
    )
    logo_url: str = Field(
        default="https://cdn.example.com/assets/logo.png",
        min_length=1,
    )

    xml_source: Path = Path("data/sp_winemu_all_components12.xml")
    custom_components_file: Path = Path("data/custom_components.json")
    containers_file: Path = Path("data/containers.json")
    imagefs_file: Path = Path("data/imagefs.json")
    defaults_file: Path = Path("data/defaults.json")
    execution_config_file: Path = Path("data/execution_config.json")
    output_dir: Path = Path(".")

    github_repo: str | None = None       # release check is skipped when unset
    github_release: str = "Components"

    timestamp: str | None = None         # fixed Unix time for timed documents

    @field_validator("cdn_base_url")
    @classmethod
    def _strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("timestamp")
    @classmethod
    def _timestamp_digits(cls, v: str | None) -> str | None:
        if v is not None and not re.fullmatch(r"[0-9]+", v):
            raise ValueError("timestamp must be a decimal Unix time")
        return v

    def resolved(self, base_dir: Path) -> BuildConfig:
        """Return a copy with every relative path anchored at *base_dir*."""
        updates = {}
        for name in _PATH_FIELDS:
            p: Path = getattr(self, name)
            if not p.is_absolute():
                updates[name] = base_dir / p
        return self.model_copy(update=updates)


def load_config(
    path: Path | None = None,
    *,
    base_dir: Path | None = None,
    **overrides,
) -> BuildConfig:
    """Build a BuildConfig from defaults, an optional JSON file and overrides.

    Relative paths resolve against *base_dir*, falling back to the config
    file's directory, then the repository root.  ``None`` overrides are
    ignored so CLI flags that were not given do not clobber file values.
    """
    values: dict = {}
    if path is not None:
        path = Path(path)
        values.update(json.loads(path.read_text(encoding="utf-8")))
    values.update({k: v for k, v in overrides.items() if v is not None})

    if values.get("timestamp") is None:
        env_ts = os.environ.get(TIMESTAMP_ENV)
        if env_ts:
            values["timestamp"] = env_ts

    config = BuildConfig(**values)
    if base_dir is None:
        base_dir = path.parent if path is not None else ROOT
    return config.resolved(Path(base_dir))
