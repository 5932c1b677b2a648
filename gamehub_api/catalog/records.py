"""Raw source records — the only way untyped catalog data becomes a Component.

Both sources are validated into pydantic models first, then converted by
``to_component``.  Coercions (numeric file_size → string, version defaults)
happen here and nowhere else.
"""

from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict, StrictInt, field_validator

from .models import Component


class _Record(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: StrictInt
    name: str
    type: StrictInt
    file_name: str = ""
    file_md5: str = ""
    file_size: str = ""
    blurb: str | None = None
    gpu_range: str | None = None
    is_steam: int | None = None

    @field_validator("file_size", mode="before")
    @classmethod
    def _size_as_string(cls, v):
        if v is None:
            return ""
        if isinstance(v, bool):
            raise ValueError("file_size must be a number or string")
        if isinstance(v, float) and not (math.isfinite(v) and v.is_integer()):
            raise ValueError("file_size must be a whole number of bytes")
        if isinstance(v, (int, float)):
            return str(int(v))
        return v

    @field_validator("name")
    @classmethod
    def _name_required(cls, v: str) -> str:
        if not v:
            raise ValueError("name must not be empty")
        return v


class CatalogEntry(_Record):
    """The ``entry`` object of one component blob in the bulk catalog XML."""

    version: str | None = None
    version_code: int | None = None
    download_url: str | None = None
    logo: str | None = None
    display_name: str | None = None


class OverrideEntry(_Record):
    """One record of the hand-maintained custom_components.json."""

    version: str
    version_code: int | None = None
    display_name: str | None = None


def to_component(record: CatalogEntry | OverrideEntry) -> Component:
    """Convert a validated record into a Component.

    download_url and logo carry whatever the source said; the registry
    replaces both on registration.
    """
    if isinstance(record, OverrideEntry):
        # empty display names fall back to the name for hand-written entries
        display_name = record.display_name or record.name
        download_url = ""
        logo = ""
    else:
        # the catalog keeps empty display names as they are
        display_name = record.display_name if record.display_name is not None else ""
        download_url = record.download_url or ""
        logo = record.logo or ""

    return Component(
        id=record.id,
        name=record.name,
        type=record.type,
        version=record.version or "1.0.0",
        version_code=record.version_code or 1,
        file_name=record.file_name,
        file_md5=record.file_md5,
        file_size=record.file_size,
        download_url=download_url,
        logo=logo,
        display_name=display_name,
        blurb=record.blurb or None,
        gpu_range=record.gpu_range or None,
        is_steam=record.is_steam,
    )
