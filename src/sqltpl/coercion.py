"""引数値の型変換.

引数値は None / bool / int / float / Decimal / str / bytes と、
それらスカラーのシーケンスのいずれかとして扱う。数値への変換は
文字列先頭の数値部分だけを読む寛容な規則に従う（``"12abc"`` → 12）。
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping, Sequence
from decimal import Decimal
from typing import Any

from sqltpl.exceptions import PlaceholderTypeError

# 先頭の数値部分: 空白, 符号, 整数部/小数部, 指数部
NUMERIC_PREFIX_PATTERN = re.compile(
    r"[ \t\n\r\v\f]*"
    r"([+-]?(?:\d+(?:\.\d*)?|\.\d+))"
    r"([eE][+-]?\d+)?"
)

_TEXT_TYPES = (str, bytes, bytearray)

# 整数の最大桁数（int と str の相互変換の既定上限と同じ）
MAX_INT_DIGITS = 4300
_INT_LIMIT = 10**MAX_INT_DIGITS


def is_sequence(value: Any) -> bool:
    """値がプレースホルダ用のシーケンス（リスト相当）か判定する.

    文字列とバイト列はシーケンスとして扱わない。
    """
    return isinstance(value, Sequence) and not isinstance(value, _TEXT_TYPES)


def to_int(value: Any) -> int:
    """値を整数に変換する（``?d`` 用）.

    Args:
        value: 変換対象の値

    Returns:
        変換後の整数。数値として読めない文字列や None は 0。

    Raises:
        PlaceholderTypeError: シーケンス・マッピング等、変換できない型の場合、
            または整数部が MAX_INT_DIGITS 桁を超える場合

    Examples:
        >>> to_int("12abc")
        12
        >>> to_int("3.7")
        3
        >>> to_int("abc")
        0

    """
    if value is None:
        return 0
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return _check_int_size(value, "?d")
    if isinstance(value, float):
        _require_finite(value, "?d")
        return int(value)
    if isinstance(value, Decimal):
        return _decimal_to_int(value)
    if isinstance(value, _TEXT_TYPES):
        text = _as_text(value)
        m = NUMERIC_PREFIX_PATTERN.match(text)
        if m is None:
            return 0
        try:
            number = Decimal(m.group(1) + (m.group(2) or ""))
        except ArithmeticError as e:
            msg = f"cannot convert {m.group(0).strip()!r} for placeholder ?d"
            raise PlaceholderTypeError(msg) from e
        return _decimal_to_int(number)
    msg = f"cannot convert {type(value).__name__} for placeholder ?d"
    raise PlaceholderTypeError(msg)


def to_float(value: Any) -> float:
    """値を浮動小数点数に変換する（``?f`` 用）.

    Raises:
        PlaceholderTypeError: シーケンス・マッピング等、変換できない型の場合

    """
    if value is None:
        return 0.0
    if isinstance(value, (bool, int, float, Decimal)):
        try:
            return float(value)
        except OverflowError as e:
            msg = "number too large for placeholder ?f"
            raise PlaceholderTypeError(msg) from e
    if isinstance(value, _TEXT_TYPES):
        m = NUMERIC_PREFIX_PATTERN.match(_as_text(value))
        if m is None:
            return 0.0
        return float(m.group(1) + (m.group(2) or ""))
    msg = f"cannot convert {type(value).__name__} for placeholder ?f"
    raise PlaceholderTypeError(msg)


def format_float(value: float) -> str:
    """浮動小数点数を SQL に埋め込む10進表記にする.

    整数値は小数部なしで表記する（``2.0`` → ``"2"``）。

    Raises:
        PlaceholderTypeError: NaN または無限大の場合

    """
    _require_finite(value, "?f")
    text = repr(value)
    if text.endswith(".0"):
        text = text[:-2]
    return text


def to_text(value: Any) -> str:
    """スカラー値をエスケープ前の文字列にする.

    True は ``"1"``、False と None は空文字列になる。

    Raises:
        PlaceholderTypeError: シーケンス・マッピング等、スカラーでない場合

    """
    if value is None or value is False:
        return ""
    if value is True:
        return "1"
    if isinstance(value, _TEXT_TYPES):
        return _as_text(value)
    if isinstance(value, int):
        return str(_check_int_size(value, "?"))
    if isinstance(value, float):
        return format_float(value)
    if isinstance(value, Decimal):
        _require_finite(value, "?")
        return str(value)
    if is_sequence(value) or isinstance(value, Mapping):
        msg = f"expected scalar value, got {type(value).__name__}"
        raise PlaceholderTypeError(msg)
    msg = f"unsupported value type: {type(value).__name__}"
    raise PlaceholderTypeError(msg)


def _as_text(value: str | bytes | bytearray) -> str:
    if isinstance(value, str):
        return value
    try:
        return bytes(value).decode("utf-8")
    except UnicodeDecodeError as e:
        msg = f"bytes value is not valid UTF-8: {e.reason} at position {e.start}"
        raise PlaceholderTypeError(msg) from e


def _decimal_to_int(value: Decimal) -> int:
    """Decimal を整数部の桁数を制限して切り捨てる."""
    _require_finite(value, "?d")
    if value.is_zero():
        return 0
    if value.adjusted() >= MAX_INT_DIGITS:
        msg = f"integer for placeholder ?d exceeds {MAX_INT_DIGITS} digits"
        raise PlaceholderTypeError(msg)
    return int(value)


def _check_int_size(value: int, placeholder: str) -> int:
    if abs(value) >= _INT_LIMIT:
        msg = f"integer for placeholder {placeholder} exceeds {MAX_INT_DIGITS} digits"
        raise PlaceholderTypeError(msg)
    return value


def _require_finite(value: float | Decimal, placeholder: str) -> None:
    if isinstance(value, Decimal):
        finite = value.is_finite()
    else:
        finite = math.isfinite(value)
    if not finite:
        msg = f"non-finite number {value!r} for placeholder {placeholder}"
        raise PlaceholderTypeError(msg)
