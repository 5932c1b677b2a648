"""
Release asset check — every registered component must exist as an asset on
the GitHub release its rewritten download_url points at.

Asset names come from the ``gh`` CLI; when it is missing or not
authenticated the check is skipped rather than failed.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass, field

from gamehub_api.catalog import ComponentOrigin, ComponentRegistry


log = logging.getLogger("gamehub.release")


@dataclass
class AssetCheck:
    missing: list[ComponentOrigin] = field(default_factory=list)
    total: int = 0                      # 0 means the check was skipped

    @property
    def skipped(self) -> bool:
        return self.total == 0

    @property
    def ok(self) -> bool:
        return not self.missing


def list_release_assets(repo: str, release: str) -> set[str]:
    """Asset names on *release* of *repo*, or an empty set if gh is unusable."""
    try:
        result = subprocess.run(
            ["gh", "release", "view", release, "--repo", repo,
             "--json", "assets", "--jq", ".assets[].name"],
            capture_output=True,
            text=True,
            check=False,
        )
    except FileNotFoundError:
        log.warning("Could not fetch release assets: gh CLI not found")
        return set()

    if result.returncode != 0:
        log.warning("Could not fetch release assets (gh exited %d): %s",
                    result.returncode, result.stderr.strip())
        return set()

    return {line for line in result.stdout.strip().splitlines() if line}


def find_missing_assets(registry: ComponentRegistry, assets: set[str]) -> AssetCheck:
    if not assets:
        return AssetCheck()

    origins = registry.get_all_origins()
    missing = [o for o in origins if o.asset_name not in assets]
    return AssetCheck(missing=missing, total=len(origins))


def upload_instructions(check: AssetCheck, repo: str, release: str) -> list[str]:
    """Shell commands that fetch the missing files and upload them."""
    lines = ["mkdir -p /tmp/missing_components && cd /tmp/missing_components", ""]
    for origin in check.missing:
        url = origin.original_download_url.replace(" ", "%20")
        lines.append(f"# {origin.name} (ID: {origin.id})")
        lines.append(f'curl -L -o "{origin.asset_name}" "{url}"')
        lines.append("")

    files = " ".join(f'"{o.asset_name}"' for o in check.missing)
    lines.append(f"gh release upload {release} {files} --repo {repo}")
    return lines
