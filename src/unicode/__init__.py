"""Unicode script tables and usage measurement."""

from .table import ScriptTable, parse_scripts_file
from .usage import script_usage

__all__ = ["ScriptTable", "parse_scripts_file", "script_usage"]
