"""Parsers for the raw reference files and package manifests."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .config import (
    CORPUS_INDEX_FILE,
    DECLARATIONS_FILE,
    PACKAGE_MANIFEST,
    REGISTRY_FILE,
    SPEAKERS_FILE,
    TRIGRAMS_FILE,
)
from .helpers import ensure_mapping, optional_str, safe_sequence, to_int
from .io import read_json
from .records import CorpusEntry, LanguageType, PackageDescriptor, ReferenceData, RegistryEntry

_LANGUAGE_TYPES: Mapping[str, LanguageType] = {"L": "living", "S": "special"}
_REQUIRED_COLUMNS = ("Id", "Language_Type", "Ref_Name")


def load_registry(path: Path) -> Tuple[RegistryEntry, ...]:
    """Parse the SIL ``iso-639-3.tab`` table into registry entries, keeping file order."""
    if not path.exists():
        raise FileNotFoundError(f"Missing ISO-639-3 registry {path}. Run `python main.py fetch` to download it.")

    lines = path.read_text(encoding="utf-8-sig").splitlines()
    if not lines:
        raise ValueError(f"Empty ISO-639-3 registry {path}")

    header = lines[0].split("\t")
    missing = [column for column in _REQUIRED_COLUMNS if column not in header]
    if missing:
        raise ValueError(f"Registry {path} lacks columns: {', '.join(missing)}")
    code_idx = header.index("Id")
    type_idx = header.index("Language_Type")
    name_idx = header.index("Ref_Name")

    entries: List[RegistryEntry] = []
    for line_no, line in enumerate(lines[1:], start=2):
        if not line.strip():
            continue
        fields = line.split("\t")
        if len(fields) <= max(code_idx, type_idx, name_idx):
            raise ValueError(f"Malformed registry row {line_no} in {path}: {line!r}")
        entries.append(
            RegistryEntry(
                code=fields[code_idx].strip(),
                name=fields[name_idx].strip(),
                type=_LANGUAGE_TYPES.get(fields[type_idx].strip(), "other"),
            )
        )
    return tuple(entries)


def load_speakers(path: Path) -> Dict[str, int]:
    """Load the ``code -> speaker count`` table."""
    raw = ensure_mapping(read_json(path))
    return {str(code): to_int(count) for code, count in raw.items()}


def load_corpus_index(path: Path) -> Dict[str, CorpusEntry]:
    """Load declaration metadata keyed by declaration identifier."""
    raw = ensure_mapping(read_json(path))
    index: Dict[str, CorpusEntry] = {}
    for key, row in raw.items():
        data = ensure_mapping(row)
        index[str(key)] = CorpusEntry(
            key=str(key),
            iso=optional_str(data.get("iso")),
            code=optional_str(data.get("code")),
            name=str(data.get("name") or ""),
        )
    return index


def load_declarations(path: Path) -> Dict[str, Mapping[str, Any]]:
    raw = ensure_mapping(read_json(path))
    return {str(key): ensure_mapping(value) for key, value in raw.items()}


def load_trigrams(path: Path) -> Dict[str, Tuple[str, ...]]:
    """Load trigram lists ordered most-frequent first."""
    raw = ensure_mapping(read_json(path))
    return {str(key): tuple(safe_sequence(value)) for key, value in raw.items()}


def load_reference_data(raw_root: Path) -> ReferenceData:
    """Read every reference file under ``raw_root``."""
    print(f"[refdata] Loading reference data from {raw_root}")
    return ReferenceData(
        registry=load_registry(raw_root / REGISTRY_FILE),
        speakers=load_speakers(raw_root / SPEAKERS_FILE),
        corpus_index=load_corpus_index(raw_root / CORPUS_INDEX_FILE),
        declarations=load_declarations(raw_root / DECLARATIONS_FILE),
        trigrams=load_trigrams(raw_root / TRIGRAMS_FILE),
    )


def load_package_descriptor(path: Path) -> Optional[PackageDescriptor]:
    """Read a package manifest; returns None for packages without a threshold."""
    data = ensure_mapping(read_json(path))
    name = optional_str(data.get("name"))
    if name is None:
        raise ValueError(f"Package manifest {path} has no name")

    threshold_raw = data.get("threshold")
    if not threshold_raw:
        return None
    threshold = to_int(threshold_raw)
    if threshold < -1:
        raise ValueError(f"Package {name} has invalid threshold {threshold}; use -1 to disable filtering.")

    return PackageDescriptor(
        name=name,
        threshold=threshold,
        included_languages=frozenset(safe_sequence(data.get("includedlanguages"))),
        description=str(data.get("description") or ""),
        author=_author_string(data.get("author")),
        repository=_repository_url(data.get("repository")),
        license=str(data.get("license") or ""),
        directory=path.parent,
    )


def discover_packages(packages_root: Path) -> List[PackageDescriptor]:
    """Return descriptors for every visible package directory, sorted by directory name."""
    if not packages_root.is_dir():
        raise FileNotFoundError(f"Missing packages directory {packages_root}")

    descriptors: List[PackageDescriptor] = []
    for base in sorted(packages_root.iterdir()):
        if base.name.startswith(".") or not base.is_dir():
            continue
        manifest = base / PACKAGE_MANIFEST
        if not manifest.exists():
            continue
        descriptor = load_package_descriptor(manifest)
        if descriptor is None:
            print(f"[refdata] Skipping {base.name}: no threshold configured.")
            continue
        descriptors.append(descriptor)
    return descriptors


def _author_string(value: Any) -> str:
    if isinstance(value, Mapping):
        parts = [str(value.get("name") or "")]
        if value.get("email"):
            parts.append(f"<{value['email']}>")
        if value.get("url"):
            parts.append(f"({value['url']})")
        return " ".join(part for part in parts if part)
    return str(value or "")


def _repository_url(value: Any) -> str:
    if isinstance(value, Mapping):
        return str(value.get("url") or "")
    return str(value or "")


__all__ = [
    "discover_packages",
    "load_corpus_index",
    "load_declarations",
    "load_package_descriptor",
    "load_reference_data",
    "load_registry",
    "load_speakers",
    "load_trigrams",
]
