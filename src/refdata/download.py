"""Download helper for the public reference tables (UCD scripts, ISO-639-3 registry)."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

from .config import REMOTE_SOURCES, RemoteSource
from .io import download_stream, metadata_path, needs_download, read_metadata, sha256sum, write_metadata


def fetch_source(raw_root: Path, source: RemoteSource, force: bool = False) -> Path:
    """
    Download one reference file into ``raw_root`` unless it is already cached.

    Parameters
    ----------
    raw_root:
        Directory used to store reference files (default: ``data/raw``).
    source:
        Remote location and local file name.
    force:
        If True, overwrite the cached copy even when its checksum matches.

    Returns
    -------
    Path
        Location of the downloaded file.
    """
    target = raw_root / source["file_name"]
    meta_path = metadata_path(target)
    meta = read_metadata(meta_path)
    expected_sha = meta.get("sha256")

    if force or needs_download(target, expected_sha):
        print(f"[fetch] Downloading {source['url']}")
        try:
            download_stream(source["url"], target)
        except Exception as exc:
            raise RuntimeError(
                f"Failed to download {source['file_name']} from {source['url']}. "
                "Check your network connection or place the file manually."
            ) from exc
        updated = dict(meta)
        updated["url"] = source["url"]
        updated["sha256"] = sha256sum(target)
        write_metadata(meta_path, updated)
    else:
        print(f"[fetch] {source['file_name']} present; skipping download.")
    return target


def fetch_reference_data(
    raw_root: Path,
    sources: Iterable[RemoteSource] = REMOTE_SOURCES,
    force: bool = False,
) -> List[Path]:
    """Fetch every remote reference table into ``raw_root``."""
    raw_root.mkdir(parents=True, exist_ok=True)
    return [fetch_source(raw_root, source, force=force) for source in sources]


__all__ = ["fetch_reference_data", "fetch_source"]
