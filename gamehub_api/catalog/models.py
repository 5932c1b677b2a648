"""Catalog dataclasses — typed representations of components and reference data."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum


class ComponentType(IntEnum):
    BOX64_FEX = 1
    GPU_DRIVERS = 2
    DXVK = 3
    VKD3D = 4
    GAMES = 5
    LIBRARIES = 6
    STEAM = 7


@dataclass(frozen=True)
class TypeMeta:
    name: str
    display_name: str
    manifest: str                       # file name under components/


COMPONENT_TYPE_META: dict[int, TypeMeta] = {
    ComponentType.BOX64_FEX: TypeMeta("box64", "Box64 Emulators", "box64_manifest"),
    ComponentType.GPU_DRIVERS: TypeMeta("drivers", "GPU Drivers", "drivers_manifest"),
    ComponentType.DXVK: TypeMeta("dxvk", "DXVK Layers", "dxvk_manifest"),
    ComponentType.VKD3D: TypeMeta("vkd3d", "VKD3D Proton", "vkd3d_manifest"),
    ComponentType.GAMES: TypeMeta("games", "Game Patches", "games_manifest"),
    ComponentType.LIBRARIES: TypeMeta("libraries", "System Libraries", "libraries_manifest"),
    ComponentType.STEAM: TypeMeta("steam", "Steam Components", "steam_manifest"),
}

COMPONENT_TYPES: tuple[int, ...] = tuple(int(t) for t in ComponentType)


@dataclass(frozen=True)
class Component:
    id: int
    name: str
    type: int                           # ComponentType value, 1..7
    version: str
    version_code: int
    file_name: str
    file_md5: str                       # 32-char hex
    file_size: str                      # bytes, as a decimal string
    download_url: str
    logo: str
    display_name: str = ""
    blurb: str | None = None
    gpu_range: str | None = None
    is_steam: int | None = None


@dataclass(frozen=True)
class SubData:
    sub_file_name: str
    sub_download_url: str
    sub_file_md5: str


@dataclass(frozen=True)
class Container:
    """Wine/Proton build. Ids do not share a namespace with components."""

    id: int
    name: str
    version: str
    version_code: int
    file_name: str
    file_md5: str
    file_size: str
    download_url: str
    logo: str
    display_name: str
    framework: str                      # "X64" | "arm64X" | "X86"
    framework_type: str                 # "stable" | "proton" | "experimental"
    is_steam: int                       # 0 | 1 | 2
    sub_data: SubData | None = None
    sub_data_listed: bool = False       # source had a sub_data key, even if null


@dataclass(frozen=True)
class Imagefs:
    id: int
    name: str
    version: str
    version_code: int
    file_name: str
    file_md5: str
    file_size: str
    download_url: str
    logo: str
    display_name: str
    upgrade_msg: str
    blurb: str


@dataclass(frozen=True)
class ExecutionContext:
    params: list
    script_id: int
    timestamp: int


@dataclass(frozen=True)
class Defaults:
    dxvk: int
    vkd3d: int
    steam_client: int
    container: int                      # container id, not a component id
    generic_component_ids: list[int] = field(default_factory=list)
    qualcomm_component_ids: list[int] = field(default_factory=list)
    generic_context: ExecutionContext | None = None
    qualcomm_context: ExecutionContext | None = None


@dataclass(frozen=True)
class Controller:
    dinput: bool
    xinput: bool
    xbox_layout: bool
    vibration: bool


@dataclass(frozen=True)
class ExecutionConfig:
    box64_translations: dict[str, str]
    fex_translations: dict[str, str]
    controller: Controller
    audio_driver: int
    cpu_limitations: int
    video_memory: int
    directx_panel: int
    launch_windowed_mode: int
    start_param: str
    environment: str


@dataclass(frozen=True)
class ComponentOrigin:
    """Where a registered component came from, before URL rewriting."""

    id: int
    name: str
    original_download_url: str
    asset_name: str                     # file expected on the release


@dataclass
class ValidationResult:
    """Every violation found by validate_registry, in check order."""
    errors: list[str]

    @property
    def valid(self) -> bool:
        return len(self.errors) == 0
