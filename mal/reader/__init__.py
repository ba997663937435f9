from mal.reader.parser import lex, read_str, TokenStream

__all__ = ("lex", "read_str", "TokenStream")
