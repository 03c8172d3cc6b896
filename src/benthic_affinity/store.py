"""Tiered data directory for workflow inputs and outputs.

Manages read/write of data files organized into tiers by who produces them:
  - prepared/: Observation tables from the upstream spatial-matching stage
  - reference/: Species list and species trait reference tables
  - derived/: Computed outputs, always recomputed (summaries, metadata, HTML site)

JSON files are wrapped in a metadata envelope recording the source and the
time they were written. CSV tables keep their native format and the same
metadata lives in a sidecar ``.meta.json`` file next to them.
"""

from __future__ import annotations

import json
import shutil
from datetime import UTC, datetime
from pathlib import Path  # noqa: TC003 - used at runtime, not just annotations
from typing import Any

import pandas as pd


class DataStore:
    """Manages read/write of workflow data files with provenance metadata."""

    def __init__(self, base_dir: Path) -> None:
        self.base = base_dir
        self.prepared = base_dir / "prepared"
        self.reference = base_dir / "reference"
        self.derived = base_dir / "derived"

    def read(self, path: Path) -> Any:
        """Read data payload from a metadata-enveloped JSON file.

        Returns the ``data`` field, or None if the file doesn't exist.
        """
        full = self._resolve(path)
        if not full.exists():
            return None
        with full.open() as f:
            envelope: dict[str, Any] = json.load(f)
        return envelope.get("data", envelope)

    def read_raw(self, path: Path) -> dict[str, Any] | None:
        """Read the full envelope (meta + data) from a JSON file."""
        full = self._resolve(path)
        if not full.exists():
            return None
        with full.open() as f:
            result: dict[str, Any] = json.load(f)
        return result

    def write(self, path: Path, data: Any, source: str, **params: Any) -> Path:
        """Write data wrapped in a metadata envelope.

        Args:
            path: Relative path under base_dir (e.g. ``derived/summary.json``).
            data: Payload to store under the ``data`` key.
            source: Producer identifier (e.g. ``"habitat-summarizer"``).
            **params: Extra metadata fields (row counts, input files, etc.).

        Returns:
            Absolute path of the written file.
        """
        full = self._resolve(path)
        full.parent.mkdir(parents=True, exist_ok=True)

        envelope = {"meta": self._meta(source, params), "data": data}
        with full.open("w") as f:
            json.dump(envelope, f, indent=2)

        return full

    def write_table(
        self,
        path: Path,
        rows: list[dict[str, Any]],
        columns: list[str],
        source: str,
        **params: Any,
    ) -> Path:
        """Write rows to a CSV table with sidecar metadata.

        Columns are written in the given order. ``None`` values become empty
        cells and values are written as they are (no dtype coercion).

        Args:
            path: Relative destination path (e.g. ``derived/summary.csv``).
            rows: Row dicts keyed by column name.
            columns: Column order for the header.
            source: Producer identifier.
            **params: Extra metadata fields.

        Returns:
            Absolute path of the written table.
        """
        full = self._resolve(path)
        full.parent.mkdir(parents=True, exist_ok=True)

        unknown = sorted({key for row in rows for key in row} - set(columns))
        if unknown:
            msg = f"Row keys not in the table columns: {', '.join(unknown)}"
            raise ValueError(msg)

        frame = pd.DataFrame(rows, columns=columns, dtype=object)
        frame.to_csv(full, index=False, na_rep="")

        self._write_sidecar(full, self._meta(source, {"rows": len(rows), **params}))
        return full

    def read_table(self, path: Path) -> list[dict[str, str]] | None:
        """Read a CSV table as a list of string-valued row dicts.

        Returns None if the table doesn't exist.
        """
        full = self._resolve(path)
        if not full.exists():
            return None
        frame = pd.read_csv(full, dtype=str, keep_default_na=False)
        records: list[dict[str, str]] = frame.to_dict("records")
        return records

    def import_file(self, path: Path, src: Path, source: str, **params: Any) -> Path:
        """Copy an externally produced file into the store with sidecar metadata.

        Used to bring the upstream observation, species-list and trait tables
        into their tiers without touching their contents.

        Args:
            path: Relative destination path (e.g. ``prepared/observations.csv``).
            src: Source file to copy into the store.
            source: Producer identifier.
            **params: Extra metadata fields.

        Returns:
            Absolute path of the stored file.
        """
        full = self._resolve(path)
        full.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(src, full)
        self._write_sidecar(full, self._meta(source, {"original_path": str(src), **params}))
        return full

    def file_path(self, path: Path) -> Path | None:
        """Return the absolute path of a stored file, or None if missing."""
        full = self._resolve(path)
        return full if full.exists() else None

    def read_meta(self, path: Path) -> dict[str, Any]:
        """Read metadata from either a JSON envelope or a sidecar .meta.json."""
        full = self._resolve(path)
        sidecar = full.with_suffix(full.suffix + ".meta.json")
        if sidecar.exists():
            with sidecar.open() as f:
                result: dict[str, Any] = json.load(f)
            return result.get("meta", {})

        # Fall back to embedded metadata in JSON files
        if full.suffix == ".json" and full.exists():
            with full.open() as f:
                envelope: dict[str, Any] = json.load(f)
            return envelope.get("meta", {})

        return {}

    def _resolve(self, path: Path) -> Path:
        full = self.base / path if not path.is_absolute() else path
        try:
            full.resolve().relative_to(self.base.resolve())
        except ValueError:
            msg = f"Path escapes store base directory: {path}"
            raise ValueError(msg) from None
        return full

    @staticmethod
    def _meta(source: str, params: dict[str, Any]) -> dict[str, Any]:
        meta: dict[str, Any] = {
            "source": source,
            "written_at": datetime.now(UTC).isoformat(),
        }
        if params:
            meta.update(params)
        return meta

    @staticmethod
    def _write_sidecar(full: Path, meta: dict[str, Any]) -> None:
        meta_path = full.with_suffix(full.suffix + ".meta.json")
        with meta_path.open("w") as f:
            json.dump({"meta": meta}, f, indent=2)
