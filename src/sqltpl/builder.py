"""QueryBuilder: 型付きプレースホルダと条件ブロックを持つ SQL テンプレートの展開."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from sqltpl.coercion import format_float, is_sequence, to_float, to_int, to_text
from sqltpl.escape import create_escaper
from sqltpl.exceptions import ArgumentError, PlaceholderTypeError
from sqltpl.parser.tokenizer import (
    Block,
    Literal,
    Placeholder,
    PlaceholderKind,
    Segment,
    count_placeholders,
    tokenize,
)
from sqltpl.sentinel import contains_skip, is_skip, skip

if TYPE_CHECKING:
    from sqltpl.dialect import Dialect
    from sqltpl.escape import Escaper

logger = logging.getLogger(__name__)

_MISSING = object()


@dataclass(frozen=True)
class RenderedBlock:
    """プレースホルダ置換済みの条件ブロック."""

    block: Block
    """元の条件ブロック."""

    text: str
    """置換済みの内側テキスト."""


class QueryBuilder:
    """SQL テンプレートを展開する.

    展開は2段階で行う。

    1. プレースホルダ置換: ``?`` ``?d`` ``?f`` ``?a`` ``?#`` を左から順に
       引数で置き換える。
    2. 条件ブロック解決: ``{...}`` を内側テキストに展開するか、
       スキップマーカーがあればブロックごと除去する。

    Examples:
        >>> builder = QueryBuilder()
        >>> builder.build("SELECT name FROM users WHERE id = ?d", ["42"])
        'SELECT name FROM users WHERE id = 42'
        >>> builder.build("SELECT * FROM t {WHERE id = ?}", [builder.skip()])
        'SELECT * FROM t '

    """

    def __init__(
        self,
        escaper: Escaper | Callable[[str], str | bytes] | None = None,
        *,
        dialect: Dialect | None = None,
    ) -> None:
        """初期化.

        Args:
            escaper: Escaper インスタンスまたはエスケープ関数（省略時は dialect から生成）
            dialect: RDBMS 方言（escaper 省略時のみ使用。省略時は MYSQL）

        Raises:
            ValueError: escaper と dialect を同時に指定した場合

        """
        if escaper is not None and dialect is not None:
            msg = "escaper and dialect cannot be specified together"
            raise ValueError(msg)
        self.escaper = create_escaper(escaper, dialect=dialect)

    def build(self, template: str, args: Sequence[Any] = ()) -> str:
        """テンプレートを展開する.

        Args:
            template: SQL テンプレート
            args: プレースホルダに順に割り当てる引数

        Returns:
            展開後の SQL

        Raises:
            ArgumentError: プレースホルダに対応する引数が不足している場合
            PlaceholderTypeError: 値がプレースホルダ種別に適合しない場合

        """
        args = tuple(args)
        segments = tokenize(template)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "template has %d placeholders, %d arguments given",
                count_placeholders(segments),
                len(args),
            )
        rendered = self._substitute(segments, args)
        sql = self._resolve_blocks(rendered, drop=contains_skip(args))
        logger.debug("built query: %s", sql)
        return sql

    @staticmethod
    def skip() -> Any:
        """条件ブロックを省略させるマーカーを返す."""
        return skip()

    def _substitute(
        self, segments: list[Segment], args: tuple[Any, ...]
    ) -> list[str | RenderedBlock]:
        """プレースホルダを引数で置換する（第1段階）.

        引数はイテレータで1度だけ前から消費する。
        """
        cursor = iter(args)
        position = 0
        rendered: list[str | RenderedBlock] = []
        for seg in segments:
            if isinstance(seg, Block):
                parts: list[str] = []
                for inner in seg.segments:
                    if isinstance(inner, Literal):
                        parts.append(inner.text)
                    else:
                        position += 1
                        value = self._next_arg(cursor, inner, position)
                        parts.append(self._render(inner, value, in_block=True))
                rendered.append(RenderedBlock(seg, "".join(parts)))
            elif isinstance(seg, Literal):
                rendered.append(seg.text)
            else:
                position += 1
                value = self._next_arg(cursor, seg, position)
                rendered.append(self._render(seg, value, in_block=False))
        return rendered

    @staticmethod
    def _next_arg(cursor: Iterator[Any], placeholder: Placeholder, position: int) -> Any:
        value = next(cursor, _MISSING)
        if value is _MISSING:
            msg = (
                f"missing argument for placeholder #{position} "
                f"{placeholder.kind.marker!r} at offset {placeholder.start}"
            )
            raise ArgumentError(msg)
        return value

    def _resolve_blocks(self, rendered: list[str | RenderedBlock], *, drop: bool) -> str:
        """条件ブロックを展開または除去する（第2段階）.

        Args:
            rendered: 第1段階の結果
            drop: 引数リストにスキップマーカーが含まれるか

        """
        parts: list[str] = []
        for item in rendered:
            if isinstance(item, str):
                parts.append(item)
            elif drop and item.block.has_placeholder:
                logger.debug("dropped conditional block at offset %d", item.block.start)
            else:
                parts.append(item.text)
        return "".join(parts)

    def _render(self, placeholder: Placeholder, value: Any, *, in_block: bool) -> str:
        """プレースホルダ種別に従って値を文字列化する."""
        if is_skip(value):
            if in_block:
                return ""
            msg = (
                f"skip marker passed to placeholder {placeholder.kind.marker!r} "
                f"outside a conditional block (offset {placeholder.start})"
            )
            raise PlaceholderTypeError(msg)

        match placeholder.kind:
            case PlaceholderKind.INT:
                return str(to_int(value))
            case PlaceholderKind.FLOAT:
                return format_float(to_float(value))
            case PlaceholderKind.ARRAY:
                if not is_sequence(value):
                    msg = f"expected array for placeholder ?a, got {type(value).__name__}"
                    raise PlaceholderTypeError(msg)
                return self._escape_list(value)
            case PlaceholderKind.IDENTIFIER:
                if is_sequence(value):
                    return self._escape_list(value)
                return self._escape(value)
            case _:
                if value is None:
                    return "NULL"
                if isinstance(value, bool):
                    return "1" if value else "0"
                return self._escape(value)

    def _escape_list(self, values: Sequence[Any]) -> str:
        return ", ".join(self._escape(v) for v in values)

    def _escape(self, value: Any) -> str:
        return self.escaper.escape(to_text(value))
