"""Dialect enum: RDBMS ごとの文字列リテラル規則."""

from __future__ import annotations

from enum import Enum


class Dialect(Enum):
    """RDBMS ごとの SQL 方言.

    MYSQL のみバックスラッシュで引用符をエスケープする。
    """

    SQLITE = "sqlite"
    POSTGRESQL = "postgresql"
    MYSQL = "mysql"
    ORACLE = "oracle"

    @property
    def dialect_id(self) -> str:
        """方言識別子を返す."""
        return self.value

    @property
    def quote_escape(self) -> str:
        """文字列リテラル内で単一引用符をエスケープする文字を返す.

        MySQL はバックスラッシュ（``\\'``）、それ以外は引用符の二重化（``''``）。
        PostgreSQL は standard_conforming_strings が既定で有効なため、
        バックスラッシュはエスケープ文字として機能しない。
        """
        match self:
            case Dialect.MYSQL:
                return "\\"
            case _:
                return "'"

    @classmethod
    def from_module(cls, module: str) -> Dialect | None:
        """ドライバのモジュール名から Dialect を判定する.

        Args:
            module: 接続オブジェクトのクラスが属するモジュール名

        Returns:
            判定できた Dialect、または None

        """
        if "sqlite3" in module:
            return cls.SQLITE
        if "psycopg" in module:
            return cls.POSTGRESQL
        if "pymysql" in module or "MySQLdb" in module:
            return cls.MYSQL
        if "oracledb" in module:
            return cls.ORACLE
        return None
