"""Shared reference data for the build tests."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Dict, List, Tuple

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from src.refdata.config import COMPOSITE_SCRIPTS, BuildConfig
from src.refdata.records import CorpusEntry, ReferenceData, RegistryEntry
from src.unicode.table import ScriptTable

SCRIPT_RANGES: Dict[str, List[Tuple[int, int]]] = {
    "Common": [(0x0000, 0x0040), (0x005B, 0x0060), (0x007B, 0x00BF)],
    "Latin": [(0x0041, 0x005A), (0x0061, 0x007A), (0x00C0, 0x024F)],
    "Inherited": [(0x0300, 0x036F)],
    "Cyrillic": [(0x0400, 0x04FF)],
    "Oriya": [(0x0B01, 0x0B77)],
    "Telugu": [(0x0C00, 0x0C7F)],
    "Hiragana": [(0x3041, 0x3096)],
    "Katakana": [(0x30A1, 0x30FA)],
    "Han": [(0x4E00, 0x9FFF)],
}

SCRIPTS_TXT = """# Scripts-15.1.0.txt
# Sample of the UCD script property file.

0000..0040    ; Common # Cc  [65] <control-0000>..COMMERCIAL AT
005B..0060    ; Common # Ps   [6] LEFT SQUARE BRACKET..GRAVE ACCENT
007B..00BF    ; Common # Ps  [69] LEFT CURLY BRACKET..INVERTED QUESTION MARK
0041..005A    ; Latin # L&  [26] LATIN CAPITAL LETTER A..LATIN CAPITAL LETTER Z
0061..007A    ; Latin # L&  [26] LATIN SMALL LETTER A..LATIN SMALL LETTER Z
00C0..00FF    ; Latin # L&  [64] LATIN CAPITAL LETTER A WITH GRAVE..LATIN SMALL LETTER Y WITH DIAERESIS
0100..024F    ; Latin # L& [336] LATIN CAPITAL LETTER A WITH MACRON..LATIN SMALL LETTER Y WITH STROKE
0300..036F    ; Inherited # Mn [112] COMBINING GRAVE ACCENT..COMBINING LATIN SMALL LETTER X
0400..04FF    ; Cyrillic # L& [256] CYRILLIC CAPITAL LETTER IE WITH GRAVE..CYRILLIC SMALL LETTER HA WITH STROKE
0B01..0B77    ; Oriya # Mn [119] ORIYA SIGN CANDRABINDU..ORIYA FRACTION THREE SIXTEENTHS
0C00..0C7F    ; Telugu # Mn [128] TELUGU SIGN COMBINING CANDRABINDU ABOVE..TELUGU SIGN TUUMU
3041..3096    ; Hiragana # Lo  [86] HIRAGANA LETTER SMALL A..HIRAGANA LETTER SMALL KE
30A1..30FA    ; Katakana # Lo  [90] KATAKANA LETTER SMALL A..KATAKANA LETTER VO
4E00..9FFF    ; Han # Lo [20992] CJK UNIFIED IDEOGRAPH-4E00..CJK UNIFIED IDEOGRAPH-9FFF
"""

REGISTRY_TAB = "\n".join(
    [
        "Id\tPart2b\tPart2t\tPart1\tScope\tLanguage_Type\tRef_Name\tComment",
        "aaa\t\t\t\tI\tL\tAlpha\t",
        "bbb\t\t\t\tI\tL\tBeta\t",
        "cmn\t\t\t\tI\tL\tMandarin Chinese\t",
        "deu\tger\tdeu\tde\tI\tL\tGerman\t",
        "eng\teng\teng\ten\tI\tL\tEnglish\t",
        "fas\tper\tfas\tfa\tM\tL\tPersian\t",
        "jpn\tjpn\tjpn\tja\tI\tL\tJapanese\t",
        "lat\tlat\tlat\tla\tI\tA\tLatin\t",
        "nnn\t\t\t\tI\tL\tNameless\t",
        "ori\tori\tori\tor\tI\tL\tOdia\t",
        "pes\t\t\t\tI\tL\tIranian Persian\t",
        "qaa\t\t\t\tI\tS\tReserved for local use\t",
        "rus\trus\trus\tru\tI\tL\tRussian\t",
        "ukr\tukr\tukr\tuk\tI\tL\tUkrainian\t",
        "xyz\t\t\t\tI\tL\tLostish\t",
        "yue\t\t\t\tI\tL\tYue Chinese\t",
    ]
)

SPEAKERS = {
    "aaa": 5,
    "bbb": 5,
    "cmn": 900,
    "deu": 76,
    "eng": 1000,
    "jpn": 128,
    "ori": 35,
    "pes": 50,
    "prs": 10,
    "rus": 150,
    "ukr": 40,
    "xyz": 2_000_000,
    "yue": 60,
}

CORPUS_INDEX = {
    "aaa": {"iso": "aaa", "code": None, "name": "Alpha"},
    "bbb": {"iso": "bbb", "code": None, "name": "Beta"},
    "cmn_hans": {"iso": "cmn", "code": None, "name": "Chinese, Mandarin (Simplified)"},
    "cmn_hant": {"iso": "cmn", "code": None, "name": "Chinese, Mandarin (Traditional)"},
    "deu": {"iso": "deu", "code": None, "name": "German (1996)"},
    "deu_1901": {"iso": "deu", "code": None, "name": "German (1901)"},
    "eng": {"iso": "eng", "code": None, "name": "English"},
    "jpn": {"iso": "jpn", "code": None, "name": "Japanese"},
    "nnn": {"iso": None, "code": "nnn", "name": "Nameless"},
    "rus": {"iso": "rus", "code": None, "name": "Russian"},
    "ukr": {"iso": "ukr", "code": None, "name": "Ukrainian"},
    "yue": {"iso": "yue", "code": None, "name": "Cantonese"},
}

DECLARATIONS = {
    "aaa": {"article": [{"para": "alpha alpha alpha"}]},
    "bbb": {"preamble": {"para": "beta " * 400}},
    "cmn_hans": {"preamble": {"para": "鉴于对人类家庭"}},
    "cmn_hant": {"preamble": {"para": "鑑於對人類家庭"}},
    "deu": {"note": [{"para": "Alle Menschen sind frei"}], "article": [{"para": "und gleich an Würde"}]},
    "deu_1901": {"preamble": {"para": "Da die Anerkennung der angeborenen Würde"}},
    "eng": {
        "preamble": {"para": "Whereas recognition of the inherent dignity"},
        "article": [{"para": "All human beings are born free"}],
    },
    "jpn": {"preamble": {"para": "ひらがなカタカナ"}},
    "nnn": {"preamble": {"para": "nameless text"}},
    "rus": {"preamble": {"para": "Принимая во внимание"}},
    "ukr": {"preamble": {"para": "Беручи до уваги"}},
    "yue": {"preamble": {"para": "鑑於對人類家庭"}},
}

TRIGRAMS = {
    "aaa": ["alp", "lph"],
    "bbb": ["bet", "eta"],
    "deu": ["en ", "er ", "der"],
    "eng": ["the", "he ", " th"],
    "nnn": ["nam", "ame"],
    "rus": [" пр", "при"],
}

PACKAGES = {
    "franc": {
        "name": "franc",
        "threshold": -1,
        "description": "Detect the language of text",
        "author": "Titus Wormer <tituswormer@gmail.com> (https://wooorm.com)",
        "repository": "https://github.com/wooorm/franc",
        "license": "MIT",
    },
    "franc-min": {
        "name": "franc-min",
        "threshold": 100,
        "description": "Detect the language of text",
    },
    "franc-curated": {
        "name": "franc-curated",
        "threshold": -1,
        "includedlanguages": ["deu", "aaa", "ori"],
        "description": "Detect a curated set of languages",
    },
    "franc-draft": {
        "name": "franc-draft",
        "description": "Not built yet",
    },
}


def make_reference_data() -> ReferenceData:
    registry = []
    for line in REGISTRY_TAB.splitlines()[1:]:
        fields = line.split("\t")
        kind = {"L": "living", "S": "special"}.get(fields[5], "other")
        registry.append(RegistryEntry(code=fields[0], name=fields[6], type=kind))  # type: ignore[arg-type]
    index = {
        key: CorpusEntry(key=key, iso=row["iso"], code=row["code"], name=row["name"])
        for key, row in CORPUS_INDEX.items()
    }
    return ReferenceData(
        registry=tuple(registry),
        speakers=dict(SPEAKERS),
        corpus_index=index,
        declarations=DECLARATIONS,
        trigrams={key: tuple(values) for key, values in TRIGRAMS.items()},
    )


def write_reference_tree(root: Path) -> Tuple[Path, Path]:
    """Write the sample reference files and package manifests; returns (raw_root, packages_root)."""
    raw_root = root / "raw"
    (raw_root / "udhr").mkdir(parents=True, exist_ok=True)
    (raw_root / "Scripts.txt").write_text(SCRIPTS_TXT, encoding="utf-8")
    (raw_root / "iso-639-3.tab").write_text(REGISTRY_TAB + "\n", encoding="utf-8")
    (raw_root / "speakers.json").write_text(json.dumps(SPEAKERS), encoding="utf-8")
    (raw_root / "udhr" / "index.json").write_text(json.dumps(CORPUS_INDEX, ensure_ascii=False), encoding="utf-8")
    (raw_root / "udhr" / "declarations.json").write_text(
        json.dumps(DECLARATIONS, ensure_ascii=False), encoding="utf-8"
    )
    (raw_root / "trigrams.json").write_text(json.dumps(TRIGRAMS, ensure_ascii=False), encoding="utf-8")

    packages_root = root / "packages"
    for name, manifest in PACKAGES.items():
        package_dir = packages_root / name
        package_dir.mkdir(parents=True, exist_ok=True)
        (package_dir / "package.json").write_text(json.dumps(manifest), encoding="utf-8")
    return raw_root, packages_root


@pytest.fixture
def scripts() -> ScriptTable:
    return ScriptTable(SCRIPT_RANGES, COMPOSITE_SCRIPTS)


@pytest.fixture
def reference_data() -> ReferenceData:
    return make_reference_data()


@pytest.fixture
def config() -> BuildConfig:
    return BuildConfig()


@pytest.fixture
def reference_tree(tmp_path: Path) -> Tuple[Path, Path]:
    return write_reference_tree(tmp_path)
