"""
Parsers from annotated dataclasses.

Attach a grammar fragment to each field with `typing.Annotated`, then `build`
a parser for the type. Parsing fills in a fresh instance field by field.
"""

from .parsing.capture import Conversion, Capturer
from .parsing.compiler import compile_structure
from .parsing.interface import (
	CompileError, ParseError, UnexpectedTokenError, TrailingInputError, LexicalError, NestingTooDeepError, BindError,
)
from .runtime import Parser, build
from .scanning.interface import END_OF_TOKENS, Lexer, Position, ScannerBlocked, Token
from .scanning.lexicon import Lexicon, DEFAULT_LEXICON
from .scanning.stream import elide, mapper, unquote, upper
