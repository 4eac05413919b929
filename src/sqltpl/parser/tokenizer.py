"""テンプレートの字句解析: リテラル・プレースホルダ・条件ブロック."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

# プレースホルダパターン
# ?  : 既定（NULL / 真偽値 / エスケープ済み文字列）
# ?d : 整数
# ?f : 浮動小数点数
# ?a : 配列（カンマ区切り）
# ?# : 識別子または識別子リスト
PLACEHOLDER_PATTERN = re.compile(r"\?([dfa#]?)")

# 条件ブロックパターン（入れ子なし、最初の '}' で閉じる）
BLOCK_PATTERN = re.compile(r"\{([^}]*)\}")


class PlaceholderKind(Enum):
    """プレースホルダ種別."""

    DEFAULT = ""
    INT = "d"
    FLOAT = "f"
    ARRAY = "a"
    IDENTIFIER = "#"

    @property
    def marker(self) -> str:
        """テンプレート上の表記を返す."""
        return "?" + self.value


@dataclass(frozen=True)
class Literal:
    """プレースホルダを含まないテキスト."""

    text: str
    """テキスト."""

    start: int
    """元文字列内の開始位置."""

    end: int
    """元文字列内の終了位置."""


@dataclass(frozen=True)
class Placeholder:
    """プレースホルダトークン."""

    kind: PlaceholderKind
    """種別."""

    start: int
    """元文字列内の開始位置."""

    end: int
    """元文字列内の終了位置."""


@dataclass(frozen=True)
class Block:
    """条件ブロック ``{...}``."""

    raw: str
    """置換前の内側テキスト（波括弧を含まない）."""

    segments: tuple[Literal | Placeholder, ...]
    """内側のセグメント."""

    start: int
    """元文字列内の開始位置（'{' の位置）."""

    end: int
    """元文字列内の終了位置（'}' の次）."""

    @property
    def has_placeholder(self) -> bool:
        """置換前のテキストに '?' を含むか."""
        return "?" in self.raw


Segment = Literal | Placeholder | Block


def tokenize(template: str) -> list[Segment]:
    """テンプレートをセグメントに分割する.

    条件ブロックを先にマッチし、ブロック内外それぞれでプレースホルダを
    抽出する。対応の取れない波括弧はリテラルとして扱う。

    Args:
        template: SQL テンプレート

    Returns:
        Literal / Placeholder / Block のリスト（出現順）

    """
    segments: list[Segment] = []
    pos = 0
    for m in BLOCK_PATTERN.finditer(template):
        segments.extend(_split_placeholders(template, pos, m.start()))
        inner = tuple(_split_placeholders(template, m.start(1), m.end(1)))
        segments.append(Block(raw=m.group(1), segments=inner, start=m.start(), end=m.end()))
        pos = m.end()
    segments.extend(_split_placeholders(template, pos, len(template)))
    return segments


def count_placeholders(segments: list[Segment]) -> int:
    """セグメント列に含まれるプレースホルダ数を返す."""
    count = 0
    for seg in segments:
        if isinstance(seg, Placeholder):
            count += 1
        elif isinstance(seg, Block):
            count += sum(1 for s in seg.segments if isinstance(s, Placeholder))
    return count


def _split_placeholders(template: str, start: int, end: int) -> list[Literal | Placeholder]:
    """指定範囲をリテラルとプレースホルダに分割する."""
    result: list[Literal | Placeholder] = []
    pos = start
    for m in PLACEHOLDER_PATTERN.finditer(template, start, end):
        if m.start() > pos:
            result.append(Literal(template[pos : m.start()], pos, m.start()))
        result.append(Placeholder(PlaceholderKind(m.group(1)), m.start(), m.end()))
        pos = m.end()
    if pos < end:
        result.append(Literal(template[pos:end], pos, end))
    return result
