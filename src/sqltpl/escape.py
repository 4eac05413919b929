"""エスケープ処理: ドライバのエスケープ関数への委譲と方言別の既定実装."""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, runtime_checkable

from sqltpl.dialect import Dialect
from sqltpl.exceptions import EscapeError

# MySQL real_escape_string と同じ置換表
_BACKSLASH_ESCAPES = {
    "\0": "\\0",
    "\n": "\\n",
    "\r": "\\r",
    "\\": "\\\\",
    "'": "\\'",
    '"': '\\"',
    "\x1a": "\\Z",
}


@runtime_checkable
class Escaper(Protocol):
    """エスケープ処理のインターフェース.

    前後の引用符は付与しない。
    """

    def escape(self, value: str) -> str:
        """文字列を SQL 文字列リテラル内に埋め込める形にエスケープする."""
        ...


class DialectEscaper:
    """Dialect の規則に従うエスケープ処理.

    MySQL では ``real_escape_string`` と同じ文字をバックスラッシュでエスケープする。
    それ以外の方言（SQLite, PostgreSQL, Oracle）では単一引用符を二重化する。

    Examples:
        >>> DialectEscaper(Dialect.MYSQL).escape("O'Reilly")
        "O\\\\'Reilly"
        >>> DialectEscaper(Dialect.SQLITE).escape("O'Reilly")
        "O''Reilly"

    """

    def __init__(self, dialect: Dialect = Dialect.MYSQL) -> None:
        self.dialect = dialect
        self._table = str.maketrans(_BACKSLASH_ESCAPES) if dialect.quote_escape == "\\" else None

    def __repr__(self) -> str:
        return f"DialectEscaper({self.dialect})"

    def escape(self, value: str) -> str:
        """文字列をエスケープする.

        Raises:
            EscapeError: 引用符二重化の方言で NUL 文字を含む場合

        """
        if self._table is not None:
            return value.translate(self._table)
        if "\0" in value:
            msg = f"NUL character cannot be embedded in a {self.dialect.dialect_id} literal"
            raise EscapeError(msg)
        return value.replace("'", "''")


class CallableEscaper:
    """ドライバ提供のエスケープ関数をラップする.

    pymysql の ``Connection.escape_string`` のように bytes を返す関数にも対応する。
    """

    def __init__(self, func: Callable[[str], str | bytes]) -> None:
        self._func = func

    def escape(self, value: str) -> str:
        """ラップした関数でエスケープする."""
        result = self._func(value)
        if isinstance(result, (bytes, bytearray)):
            return bytes(result).decode("utf-8")
        return result


def create_escaper(
    escaper: Escaper | Callable[[str], str | bytes] | None = None,
    *,
    dialect: Dialect | None = None,
) -> Escaper:
    """エスケープ処理を生成する.

    Args:
        escaper: Escaper インスタンス、Callable、または None（dialect から生成）
        dialect: RDBMS 方言（省略時は MYSQL）

    Returns:
        Escaper プロトコルを満たすオブジェクト

    Raises:
        TypeError: escaper が Escaper でも Callable でもない場合

    """
    if escaper is None:
        return DialectEscaper(dialect if dialect is not None else Dialect.MYSQL)
    if isinstance(escaper, Escaper):
        return escaper
    if callable(escaper):
        return CallableEscaper(escaper)
    msg = f"Cannot create escaper from {escaper!r}. Provide an Escaper or a callable."
    raise TypeError(msg)
