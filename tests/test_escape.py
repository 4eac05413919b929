"""エスケープ処理のテスト."""

from __future__ import annotations

import pytest

from sqltpl import CallableEscaper, Dialect, DialectEscaper, Escaper, create_escaper
from sqltpl.exceptions import EscapeError


class TestDialectEscaperBackslash:
    """バックスラッシュエスケープ方言（MySQL 互換）."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("O'Reilly", "O\\'Reilly"),
            ('say "hi"', 'say \\"hi\\"'),
            ("C:\\path", "C:\\\\path"),
            ("a\nb\rc", "a\\nb\\rc"),
            ("nul\0", "nul\\0"),
            ("ctrl\x1az", "ctrl\\Zz"),
            ("plain", "plain"),
        ],
    )
    def test_mysql(self, value: str, expected: str) -> None:
        assert DialectEscaper(Dialect.MYSQL).escape(value) == expected

    def test_no_surrounding_quotes(self) -> None:
        escaped = DialectEscaper().escape("abc")
        assert escaped == "abc"

    def test_default_dialect_is_mysql(self) -> None:
        assert DialectEscaper().dialect is Dialect.MYSQL


class TestDialectEscaperQuoteDoubling:
    """単一引用符二重化方言（SQLite, PostgreSQL, Oracle）."""

    @pytest.mark.parametrize("dialect", [Dialect.SQLITE, Dialect.POSTGRESQL, Dialect.ORACLE])
    def test_single_quote_doubled(self, dialect: Dialect) -> None:
        assert DialectEscaper(dialect).escape("O'Reilly") == "O''Reilly"

    def test_postgresql_doubles_quote(self) -> None:
        assert DialectEscaper(Dialect.POSTGRESQL).escape("it's") == "it''s"

    def test_postgresql_backslash_before_quote(self) -> None:
        """バックスラッシュ直後の引用符でもリテラルを閉じない."""
        escaped = DialectEscaper(Dialect.POSTGRESQL).escape("\\' OR 1=1 --")
        assert escaped == "\\'' OR 1=1 --"

    def test_backslash_untouched(self) -> None:
        assert DialectEscaper(Dialect.SQLITE).escape("C:\\path") == "C:\\path"

    @pytest.mark.parametrize("dialect", [Dialect.SQLITE, Dialect.POSTGRESQL, Dialect.ORACLE])
    def test_nul_rejected(self, dialect: Dialect) -> None:
        with pytest.raises(EscapeError, match=dialect.dialect_id):
            DialectEscaper(dialect).escape("a\0b")


class TestCallableEscaper:
    """ドライバのエスケープ関数のラップ."""

    def test_str_result(self) -> None:
        escaper = CallableEscaper(lambda s: s.upper())
        assert escaper.escape("abc") == "ABC"

    def test_bytes_result_decoded(self) -> None:
        escaper = CallableEscaper(lambda s: s.encode("utf-8"))
        assert escaper.escape("日本") == "日本"


class TestCreateEscaper:
    """create_escaper ファクトリ."""

    def test_none_returns_mysql_dialect_escaper(self) -> None:
        escaper = create_escaper()
        assert isinstance(escaper, DialectEscaper)
        assert escaper.dialect is Dialect.MYSQL

    def test_none_with_dialect(self) -> None:
        escaper = create_escaper(dialect=Dialect.SQLITE)
        assert isinstance(escaper, DialectEscaper)
        assert escaper.dialect is Dialect.SQLITE

    def test_escaper_instance_returned_as_is(self) -> None:
        original = DialectEscaper(Dialect.ORACLE)
        assert create_escaper(original) is original

    def test_custom_escaper_protocol(self) -> None:
        class Upper:
            def escape(self, value: str) -> str:
                return value.upper()

        upper = Upper()
        assert isinstance(upper, Escaper)
        assert create_escaper(upper) is upper

    def test_callable_wrapped(self) -> None:
        escaper = create_escaper(str.lower)
        assert isinstance(escaper, CallableEscaper)
        assert escaper.escape("ABC") == "abc"

    def test_invalid_escaper(self) -> None:
        with pytest.raises(TypeError, match="Cannot create escaper"):
            create_escaper(42)
