"""Database: DB 接続に紐付いた QueryBuilder."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from sqltpl.builder import QueryBuilder
from sqltpl.dialect import Dialect
from sqltpl.escape import CallableEscaper, DialectEscaper, Escaper
from sqltpl.sentinel import skip

logger = logging.getLogger(__name__)


class Database:
    """DB 接続のエスケープ規則でクエリを組み立てる.

    接続オブジェクトが ``escape_string`` を持つ場合（pymysql, mysqlclient）は
    それに委譲し、持たない場合は検出した Dialect の既定規則でエスケープする。
    クエリの実行は行わない。

    Examples:
        >>> db = Database(pymysql.connect(...))
        >>> sql = db.build_query(
        ...     "SELECT * FROM users WHERE name = '?' {AND block = ?d}",
        ...     ["Jack", db.skip()],
        ... )

    """

    def __init__(
        self,
        connection: Any,
        *,
        dialect: Dialect | None = None,
    ) -> None:
        """初期化.

        Args:
            connection: DB 接続オブジェクト（PEP 249 DB-API 2.0 準拠）
            dialect: RDBMS 方言（None の場合は自動検出を試みる）

        """
        self._connection = connection
        self._dialect = dialect if dialect is not None else self._detect_dialect()
        self._builder = QueryBuilder(self._create_escaper())

    @property
    def dialect(self) -> Dialect | None:
        """使用中の RDBMS 方言."""
        return self._dialect

    @property
    def escaper(self) -> Escaper:
        """使用中のエスケープ処理."""
        return self._builder.escaper

    def build_query(self, template: str, args: Sequence[Any] = ()) -> str:
        """テンプレートを展開する.

        Raises:
            ArgumentError: プレースホルダに対応する引数が不足している場合
            PlaceholderTypeError: 値がプレースホルダ種別に適合しない場合

        """
        return self._builder.build(template, args)

    def skip(self) -> Any:
        """条件ブロックを省略させるマーカーを返す."""
        return skip()

    def _create_escaper(self) -> Escaper:
        """接続オブジェクトからエスケープ処理を選ぶ."""
        escape_string = getattr(self._connection, "escape_string", None)
        if callable(escape_string):
            logger.debug("using escape_string of %s", type(self._connection).__name__)
            return CallableEscaper(escape_string)
        if self._dialect is None:
            logger.warning(
                "could not detect dialect of %s; falling back to MySQL escaping rules. "
                "Pass dialect= explicitly.",
                type(self._connection).__module__,
            )
            return DialectEscaper(Dialect.MYSQL)
        return DialectEscaper(self._dialect)

    def _detect_dialect(self) -> Dialect | None:
        """Connection オブジェクトから Dialect を自動検出する."""
        module = type(self._connection).__module__
        dialect = Dialect.from_module(module)
        logger.debug("detected dialect %s from module %s", dialect, module)
        return dialect
