"""Source parsing into declaration trees."""

from lintratchet.parsing.base import Attribute, Declaration
from lintratchet.parsing.treesitter import (
    LANGUAGE_SPECS,
    ParsedFile,
    build_declarations,
    language_for_path,
    parse_file,
    parse_source,
)

__all__ = [
    "Attribute",
    "Declaration",
    "LANGUAGE_SPECS",
    "ParsedFile",
    "build_declarations",
    "language_for_path",
    "parse_file",
    "parse_source",
]
