"""GameHub API build — merges component catalogs and emits the static API documents."""

__version__ = "0.1.0"
