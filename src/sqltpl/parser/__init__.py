"""テンプレートパーサーパッケージ."""

from sqltpl.parser.tokenizer import Block, Literal, Placeholder, PlaceholderKind, tokenize

__all__ = ["Block", "Literal", "Placeholder", "PlaceholderKind", "tokenize"]
