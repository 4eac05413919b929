"""スキップマーカー（条件ブロック省略の指示値）."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, final


@final
class _Skip:
    """条件ブロックを省略させるためのマーカー型.

    インスタンスはモジュール内の1つだけで、``skip()`` 経由でのみ取得できる。
    文字列ではないため、利用者のデータと偶然一致することはない。
    """

    __slots__ = ()

    def __repr__(self) -> str:
        return "<sqltpl.skip>"

    def __copy__(self) -> _Skip:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> _Skip:
        return self

    def __reduce__(self) -> str:
        return "_SKIP"


_SKIP = _Skip()


def skip() -> Any:
    """条件ブロックを省略させるマーカーを返す.

    引数リストにこの値を含めると、``?`` を含む条件ブロック ``{...}`` が
    ブロックごと除去される。

    Examples:
        >>> from sqltpl import build_query, skip
        >>> build_query("SELECT * FROM t {WHERE id = ?}", [skip()])
        'SELECT * FROM t '

    """
    return _SKIP


def is_skip(value: Any) -> bool:
    """値がスキップマーカーか判定する."""
    return value is _SKIP


def contains_skip(args: Iterable[Any]) -> bool:
    """引数リストにスキップマーカーが含まれるか判定する."""
    return any(arg is _SKIP for arg in args)
