"""LPML: decoder for a YAML-flavoured configuration language."""

from .decoder import decode, decode_file
from .document import Document, Page, paginate
from .errors import LPMLError, LPMLReferenceError, LPMLStructureError
from .merge import FileSource, LocalFileSource
from .settings import DecoderSettings, get_settings, reset_settings_cache
from .values import (
    Null,
    Value,
    VBool,
    VFloat,
    VInt,
    VList,
    VMapping,
    VNull,
    VString,
    from_python,
    to_python,
)
from .repl import LPMLRepl

__all__ = [
    "decode",
    "decode_file",
    "Document",
    "Page",
    "paginate",
    "FileSource",
    "LocalFileSource",
    "DecoderSettings",
    "get_settings",
    "reset_settings_cache",
    "Null",
    "Value",
    "VBool",
    "VFloat",
    "VInt",
    "VList",
    "VMapping",
    "VNull",
    "VString",
    "from_python",
    "to_python",
    "LPMLError",
    "LPMLReferenceError",
    "LPMLStructureError",
    "LPMLRepl",
]
