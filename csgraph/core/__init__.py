"""
Core module: data models, exceptions, configuration and the database reader.

Models (models.py):
    - Symbol: A function definition or call site, tagged by SymbolKind
    - Definition: A function definition and the distinct names it calls
    - FileRecord: The definitions found in one source file
    - CscopeDatabase: Header, trailer and file records of one database

Exceptions (exceptions.py):
    - CsgraphError: Base exception for all csgraph errors
    - MalformedHeaderError: Input is not a cscope database
    - DatabaseReadError: Database file could not be opened

Reader (reader/):
    - read_database(): Parse bytes already in memory
    - load_database(): Map a file and parse it
"""

from csgraph.core.config import ReaderOptions, get_default_db_path
from csgraph.core.exceptions import (
    CsgraphError,
    DatabaseReadError,
    MalformedHeaderError,
)
from csgraph.core.models import (
    CscopeDatabase,
    Definition,
    FileRecord,
    Header,
    Symbol,
    SymbolKind,
    Trailer,
)
from csgraph.core.reader import load_database, read_database
from csgraph.core.symbols import SymbolTable

__all__ = [
    # Models
    "Symbol",
    "SymbolKind",
    "Definition",
    "FileRecord",
    "Header",
    "Trailer",
    "CscopeDatabase",
    "SymbolTable",
    # Exceptions
    "CsgraphError",
    "MalformedHeaderError",
    "DatabaseReadError",
    # Reader
    "ReaderOptions",
    "get_default_db_path",
    "load_database",
    "read_database",
]
