"""sqltpl例外クラス."""


class SqltplError(Exception):
    """sqltplの基底例外."""


class ArgumentError(SqltplError, LookupError):
    """プレースホルダに対応する引数が不足している."""


class PlaceholderTypeError(SqltplError, TypeError):
    """値がプレースホルダ種別に適合しない."""


class EscapeError(SqltplError, ValueError):
    """値をエスケープできない."""
