"""Helpers for downloading reference files and tracking cache metadata."""

from __future__ import annotations

import hashlib
import json
import os
import tempfile
from pathlib import Path
from typing import Any, Mapping, Optional

import requests

METADATA_SUFFIX = ".meta.json"


def sha256sum(path: Path) -> str:
    """Compute the SHA256 checksum for a file."""
    digest = hashlib.sha256()
    with path.open("rb") as handle:
        for chunk in iter(lambda: handle.read(1024 * 1024), b""):
            digest.update(chunk)
    return digest.hexdigest()


def metadata_path(path: Path) -> Path:
    return path.with_name(path.name + METADATA_SUFFIX)


def read_metadata(path: Path) -> Mapping[str, Any]:
    """Load metadata JSON attached to a file, returning an empty mapping on failure."""
    if not path.exists():
        return {}
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError:
        return {}


def write_metadata(path: Path, payload: Mapping[str, Any]) -> None:
    """Persist metadata next to the file to skip redundant downloads."""
    path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")


def needs_download(target: Path, expected_sha: Optional[str]) -> bool:
    """Determine whether the file must be re-downloaded."""
    if not target.exists():
        return True
    if not expected_sha:
        return False
    return sha256sum(target) != expected_sha


def download_stream(url: str, dest: Path) -> None:
    """Stream a remote file to disk atomically."""
    dest.parent.mkdir(parents=True, exist_ok=True)
    with requests.get(url, stream=True, timeout=60) as response:
        response.raise_for_status()
        with tempfile.NamedTemporaryFile(delete=False, dir=dest.parent) as tmp:
            for chunk in response.iter_content(chunk_size=8192):
                if chunk:
                    tmp.write(chunk)
    os.replace(tmp.name, dest)


def read_json(path: Path) -> Any:
    """Read a UTF-8 JSON document, naming the file when it is malformed."""
    if not path.exists():
        raise FileNotFoundError(f"Missing reference file {path}. Run `python main.py fetch` or add it manually.")
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Malformed JSON in {path}: {exc}") from exc


def write_json(path: Path, payload: Any) -> None:
    """Write ``payload`` with two-space indentation and a trailing newline, keeping key order."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")


__all__ = [
    "METADATA_SUFFIX",
    "download_stream",
    "metadata_path",
    "needs_download",
    "read_json",
    "read_metadata",
    "sha256sum",
    "write_json",
    "write_metadata",
]
