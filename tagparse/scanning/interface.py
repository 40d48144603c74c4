"""
Scanning Interface Definitions.

The parsing engine never looks at characters. It consumes tokens, and it does
not care where they come from. Any object satisfying the `Lexer` interface can
feed it, and so can a plain iterable of `Token` objects.
"""
from abc import ABC, abstractmethod
from typing import NamedTuple, Optional, Iterable

END_OF_TOKENS = '<END>' # An agreed artificial "end-of-text" token kind.
# Note that lexers should NEVER emit the above kind except for the final token.

class Position(NamedTuple):
	line: int
	column: int
	offset: int
	filename: Optional[str] = None
	
	def __str__(self):
		prefix = '' if self.filename is None else self.filename+':'
		return "%s%d:%d"%(prefix, self.line, self.column)

class Token(NamedTuple):
	kind: str
	text: str
	position: Position
	
	def is_end(self) -> bool: return self.kind == END_OF_TOKENS

class ScannerBlocked(ValueError):
	"""
	Raised if a lexer gets stuck: no pattern matches at the given position.
	"""
	def __init__(self, position:Position):
		super().__init__(position)
		self.position = position

class Lexer(ABC):
	"""
	A lexer knows the set of token kinds it can produce (so that grammars may
	be checked against it) and can turn text into a stream of tokens.
	"""
	
	@abstractmethod
	def symbols(self) -> set:
		""" Return the set of token kinds this lexer may emit, not counting END_OF_TOKENS. """
	
	@abstractmethod
	def scan(self, text:str, *, filename:str=None) -> Iterable[Token]:
		""" Yield tokens; the last one should be of kind END_OF_TOKENS. """
