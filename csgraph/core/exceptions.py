"""csgraph custom exceptions."""


class CsgraphError(Exception):
    """Base exception for csgraph errors."""


class MalformedHeaderError(CsgraphError):
    """The database does not start with a usable cscope header."""


class DatabaseReadError(CsgraphError):
    """The database file could not be opened or mapped."""
