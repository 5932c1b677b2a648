"""
GameHub API build — entry point.

Usage:
    python -m gamehub_api build                    # generate all documents
    python -m gamehub_api build --output dist --timestamp 1700000000
    python -m gamehub_api validate                 # check sources only

Options:
    --config FILE           JSON file overriding BuildConfig defaults
    --output DIR            output root (default: config output_dir)
    --timestamp TS          fixed Unix timestamp for timed documents
    --skip-release-check    do not ask gh for the release asset list
    --verbose               debug logging
"""

import logging
import sys
from pathlib import Path

from pydantic import ValidationError

USAGE = (
    "Usage: python -m gamehub_api {build|validate} [--config FILE] [--output DIR] "
    "[--timestamp TS] [--skip-release-check] [--verbose]"
)

_VALUE_FLAGS = ("--config", "--output", "--timestamp")
_BOOL_FLAGS = ("--skip-release-check", "--verbose")


def _parse_args(args: list[str]) -> tuple[str, dict, set]:
    cmd = "build"
    values: dict[str, str] = {}
    flags: set[str] = set()
    i = 0
    if args and not args[0].startswith("--"):
        cmd = args[0]
        i = 1
    while i < len(args):
        a = args[i]
        if a in _VALUE_FLAGS and i + 1 < len(args):
            values[a] = args[i + 1]
            i += 2
        elif a in _BOOL_FLAGS:
            flags.add(a)
            i += 1
        else:
            raise SystemExit(f"Unknown or incomplete option: {a}\n{USAGE}")
    return cmd, values, flags


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    cmd, values, flags = _parse_args(args)

    logging.basicConfig(
        level=logging.DEBUG if "--verbose" in flags else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    from gamehub_api.build import BuildError, build, validate_sources
    from gamehub_api.catalog import SourceError
    from gamehub_api.config import load_config
    from gamehub_api.generators import GenerationError
    from gamehub_api.release import upload_instructions

    if cmd not in ("build", "validate"):
        print(f"Unknown command: {cmd}")
        print(USAGE)
        return 1

    try:
        config = load_config(
            Path(values["--config"]) if "--config" in values else None,
            timestamp=values.get("--timestamp"),
        )
        if "--output" in values:
            config = config.model_copy(update={"output_dir": Path(values["--output"]).resolve()})
    except (OSError, ValueError, ValidationError) as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 1

    try:
        if cmd == "validate":
            return 0 if validate_sources(config).valid else 1
        build(config, check_release="--skip-release-check" not in flags)
    except BuildError as exc:
        print(f"Build failed: {exc}", file=sys.stderr)
        if exc.asset_check is not None and config.github_repo:
            print("These files must be uploaded to the release before deployment:", file=sys.stderr)
            for line in upload_instructions(exc.asset_check, config.github_repo, config.github_release):
                print(f"  {line}", file=sys.stderr)
        return 1
    except (SourceError, GenerationError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
