"""sqltpl: typed-placeholder SQL query templating for Python."""

from sqltpl._build import build_query
from sqltpl.builder import QueryBuilder
from sqltpl.database import Database
from sqltpl.dialect import Dialect
from sqltpl.escape import CallableEscaper, DialectEscaper, Escaper, create_escaper
from sqltpl.exceptions import ArgumentError, EscapeError, PlaceholderTypeError, SqltplError
from sqltpl.parser.tokenizer import PlaceholderKind
from sqltpl.sentinel import skip

__all__ = [
    "ArgumentError",
    "CallableEscaper",
    "Database",
    "Dialect",
    "DialectEscaper",
    "EscapeError",
    "Escaper",
    "PlaceholderKind",
    "PlaceholderTypeError",
    "QueryBuilder",
    "SqltplError",
    "build_query",
    "create_escaper",
    "skip",
]
