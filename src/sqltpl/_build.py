"""build_query 便利関数."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Any

from sqltpl.builder import QueryBuilder

if TYPE_CHECKING:
    from sqltpl.dialect import Dialect
    from sqltpl.escape import Escaper


def build_query(
    template: str,
    args: Sequence[Any] = (),
    *,
    escaper: Escaper | Callable[[str], str | bytes] | None = None,
    dialect: Dialect | None = None,
) -> str:
    """SQL テンプレートを展開する便利関数.

    Args:
        template: SQL テンプレート
        args: プレースホルダに順に割り当てる引数
        escaper: Escaper インスタンスまたはエスケープ関数
        dialect: RDBMS 方言（escaper 省略時に使用。省略時は MYSQL）

    Returns:
        展開後の SQL

    Raises:
        ArgumentError: プレースホルダに対応する引数が不足している場合
        PlaceholderTypeError: 値がプレースホルダ種別に適合しない場合
        ValueError: escaper と dialect を同時に指定した場合

    """
    builder = QueryBuilder(escaper, dialect=dialect)
    return builder.build(template, args)
