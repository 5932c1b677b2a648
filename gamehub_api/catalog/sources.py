"""Source loader — reads the catalog XML, the override file and the reference JSON."""

from __future__ import annotations

import html
import json
import logging
import re
from dataclasses import dataclass
from pathlib import Path

from pydantic import ValidationError

from gamehub_api.config import BuildConfig
from .models import (
    COMPONENT_TYPES, Component, Container, Controller, Defaults,
    ExecutionConfig, ExecutionContext, Imagefs, SubData,
)
from .records import CatalogEntry, OverrideEntry, to_component


log = logging.getLogger("gamehub.sources")

# <string name="...">{json}</string>, the JSON blob may span lines
_STRING_ELEMENT = re.compile(r'<string name="([^"]*)">(\{.*?\})</string>', re.DOTALL)


class SourceError(Exception):
    """Raised when a source file cannot be read or lacks required data."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = str(path)
        self.reason = reason
        super().__init__(f"{self.path}: {reason}")


@dataclass
class BuildSources:
    """Everything one build pass reads, in registration order."""

    components: list[Component]
    containers: list[Container]
    imagefs: Imagefs
    defaults: Defaults
    execution_config: ExecutionConfig
    catalog_count: int = 0
    custom_count: int = 0


# ── Component sources ──────────────────────────────────────────────

def parse_xml_content(content: str) -> list[Component]:
    """Extract components from the text of a shared-preferences catalog XML.

    Entries with malformed JSON, a missing id/name, or a type outside 1..7
    are skipped with a warning.
    """
    components: list[Component] = []

    for match in _STRING_ELEMENT.finditer(content):
        element_name = match.group(1)
        blob = html.unescape(match.group(2))

        try:
            wrapper = json.loads(blob)
        except json.JSONDecodeError:
            log.warning(
                "Malformed JSON for component %r, add it to the custom components file if needed",
                element_name,
            )
            continue

        entry = wrapper.get("entry") if isinstance(wrapper, dict) else None
        if not isinstance(entry, dict):
            continue

        try:
            record = CatalogEntry.model_validate(entry)
        except ValidationError as exc:
            log.warning("Skipping catalog entry %r: %d invalid field(s)",
                        element_name, exc.error_count())
            continue

        if record.type not in COMPONENT_TYPES:
            log.warning("Skipping component with invalid type: %s (type=%d)",
                        record.name, record.type)
            continue

        components.append(to_component(record))

    return components


def parse_xml_file(path: Path) -> list[Component]:
    try:
        content = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise SourceError(path, f"Read error: {exc}") from exc
    return parse_xml_content(content)


def parse_custom_components(path: Path) -> list[Component]:
    """Load hand-maintained override components.  A missing file means none."""
    path = Path(path)
    if not path.exists():
        log.info("Custom components file not found: %s", path)
        return []

    raw = _read_json(path)
    if not isinstance(raw, dict) or not isinstance(raw.get("components"), list):
        raise SourceError(path, "expected an object with a 'components' list")

    components: list[Component] = []
    for i, item in enumerate(raw["components"]):
        try:
            record = OverrideEntry.model_validate(item)
        except ValidationError as exc:
            raise SourceError(path, f"components[{i}]: {exc}") from exc
        if record.type not in COMPONENT_TYPES:
            raise SourceError(path, f"components[{i}]: invalid type {record.type}")
        components.append(to_component(record))
    return components


# ── Reference data ─────────────────────────────────────────────────

def _read_json(path: Path):
    try:
        return json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise SourceError(path, f"Parse error: {exc}") from exc
    except OSError as exc:
        raise SourceError(path, f"Read error: {exc}") from exc


def _parse_sub_data(data: dict | None) -> SubData | None:
    if data is None:
        return None
    return SubData(
        sub_file_name=data["sub_file_name"],
        sub_download_url=data["sub_download_url"],
        sub_file_md5=data["sub_file_md5"],
    )


def _parse_container(data: dict) -> Container:
    return Container(
        id=data["id"],
        name=data["name"],
        version=data["version"],
        version_code=data["version_code"],
        file_name=data["file_name"],
        file_md5=data["file_md5"],
        file_size=str(data["file_size"]),
        download_url=data["download_url"],
        logo=data["logo"],
        display_name=data.get("display_name", ""),
        framework=data["framework"],
        framework_type=data["framework_type"],
        is_steam=data.get("is_steam", 0),
        sub_data=_parse_sub_data(data.get("sub_data")),
        sub_data_listed="sub_data" in data,
    )


def _parse_imagefs(data: dict) -> Imagefs:
    return Imagefs(
        id=data["id"],
        name=data["name"],
        version=data["version"],
        version_code=data["version_code"],
        file_name=data["file_name"],
        file_md5=data["file_md5"],
        file_size=str(data["file_size"]),
        download_url=data["download_url"],
        logo=data["logo"],
        display_name=data.get("display_name", ""),
        upgrade_msg=data.get("upgrade_msg", ""),
        blurb=data.get("blurb", ""),
    )


def _parse_context(data: dict) -> ExecutionContext:
    return ExecutionContext(
        params=list(data["params"]),
        script_id=data["script_id"],
        timestamp=data["timestamp"],
    )


def _parse_defaults(data: dict) -> Defaults:
    return Defaults(
        dxvk=data["dxvk"],
        vkd3d=data["vkd3d"],
        steam_client=data["steamClient"],
        container=data["container"],
        generic_component_ids=list(data.get("genericComponentIds", [])),
        qualcomm_component_ids=list(data.get("qualcommComponentIds", [])),
        generic_context=_parse_context(data["genericContext"]),
        qualcomm_context=_parse_context(data["qualcommContext"]),
    )


def _parse_execution_config(data: dict) -> ExecutionConfig:
    controller = data["controller"]
    return ExecutionConfig(
        box64_translations=dict(data["translations"]["box64"]),
        fex_translations=dict(data["translations"]["fex"]),
        controller=Controller(
            dinput=controller["dinput"],
            xinput=controller["xinput"],
            xbox_layout=controller["xboxLayout"],
            vibration=controller["vibration"],
        ),
        audio_driver=data["audio_driver"],
        cpu_limitations=data["cpu_limitations"],
        video_memory=data["video_memory"],
        directx_panel=data["directx_panel"],
        launch_windowed_mode=data["launch_windowed_mode"],
        start_param=data["start_param"],
        environment=data["environment"],
    )


def _parse_with(path: Path, parser, data):
    try:
        return parser(data)
    except (KeyError, TypeError, ValueError) as exc:
        raise SourceError(path, f"Missing/invalid field: {exc}") from exc


def load_containers(path: Path) -> list[Container]:
    raw = _read_json(path)
    if not isinstance(raw, list):
        raise SourceError(path, "expected a list of containers")
    return [_parse_with(path, _parse_container, c) for c in raw]


def load_imagefs(path: Path) -> Imagefs:
    return _parse_with(path, _parse_imagefs, _read_json(path))


def load_defaults(path: Path) -> Defaults:
    return _parse_with(path, _parse_defaults, _read_json(path))


def load_execution_config(path: Path) -> ExecutionConfig:
    return _parse_with(path, _parse_execution_config, _read_json(path))


def load_sources(config: BuildConfig) -> BuildSources:
    """Read every source named in *config*.

    Catalog components come first and override components after, which is
    the order the registry resolves duplicate ids in.
    """
    catalog = parse_xml_file(config.xml_source)
    log.info("Found %d components from XML", len(catalog))

    custom = parse_custom_components(config.custom_components_file)
    log.info("Found %d custom components", len(custom))

    containers = load_containers(config.containers_file)
    log.info("Loaded %d containers", len(containers))

    return BuildSources(
        components=catalog + custom,
        containers=containers,
        imagefs=load_imagefs(config.imagefs_file),
        defaults=load_defaults(config.defaults_file),
        execution_config=load_execution_config(config.execution_config_file),
        catalog_count=len(catalog),
        custom_count=len(custom),
    )
