from .config import BuildConfig
from .download import fetch_reference_data
from .loader import discover_packages, load_package_descriptor, load_reference_data
from .records import CorpusEntry, LanguageInfo, PackageDescriptor, ReferenceData, RegistryEntry

__all__ = [
    "BuildConfig",
    "CorpusEntry",
    "LanguageInfo",
    "PackageDescriptor",
    "ReferenceData",
    "RegistryEntry",
    "discover_packages",
    "fetch_reference_data",
    "load_package_descriptor",
    "load_reference_data",
]
