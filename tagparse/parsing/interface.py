"""
Parsing Interface Definitions: mainly, the ways things go wrong.

Compilation problems are always fatal to building a parser. Parse problems
are fatal to that one parse. Everything is a ValueError, so a caller that
does not care about the details has one thing to catch.
"""

from ..scanning.interface import Token
from ..support import failureprone

class CompileError(ValueError):
	"""
	The grammar attached to a structure type cannot be compiled.
	`owner` is the type, `field` the offending field's name (if known),
	and `annotation` the text of that field's grammar annotation.
	"""
	def __init__(self, cause:str, *, owner:type=None, field:str=None, annotation:str=None):
		super().__init__(cause, owner, field, annotation)
		self.cause, self.owner, self.field, self.annotation = cause, owner, field, annotation
	
	def __str__(self):
		where = []
		if self.owner is not None: where.append(self.owner.__qualname__)
		if self.field is not None: where.append(self.field)
		text = '.'.join(where)+": "+self.cause if where else self.cause
		if self.annotation is not None: text += " (in annotation %r)"%self.annotation
		return text

class ParseError(ValueError):
	"""
	`token` is where things went wrong; `expected` is a sorted tuple of
	descriptions of what would have been acceptable there.
	"""
	def __init__(self, message:str, token:Token, expected=()):
		super().__init__(message, token)
		self.message = message
		self.token = token
		self.expected = tuple(sorted(expected))
	
	@property
	def position(self): return self.token.position
	
	def describe(self) -> str:
		if not self.expected: return self.message
		return "%s (expected %s)"%(self.message, " or ".join(self.expected))

	def __str__(self): return "%s: %s"%(self.position, self.describe())

	def explain(self, source:str) -> str:
		""" Produce a multi-line report with the offending line of `source` illustrated. """
		text = failureprone.SourceText(source, filename=self.position.filename)
		return text.complaint(self.position, len(self.token.text), self.describe())

class UnexpectedTokenError(ParseError):
	""" Nothing in the grammar could match at the furthest point reached. """

class TrailingInputError(ParseError):
	""" The grammar matched, but tokens remain and the whole input was required. """

class LexicalError(ParseError):
	""" The lexer got stuck before the parse could finish. """

class NestingTooDeepError(ParseError):
	"""
	The input nests structures more deeply than the Python stack allows.
	Each level of `@@` costs a few levels of recursion, so the practical limit
	is roughly a quarter of `sys.getrecursionlimit()`.
	"""

class BindError(ParseError):
	"""
	A capture matched, but its text could not be converted for the target
	field: for example "abc" into an `int`. This always fails the parse.
	"""
	def __init__(self, message:str, token:Token, field:str):
		super().__init__(message, token)
		self.field = field
