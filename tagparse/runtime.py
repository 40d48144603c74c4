"""
The convenient front door: build a parser for a structure type, then parse with it.

	parser = tagparse.build(Config)
	config = parser.parse(text)

Building compiles the type's grammar (once per type, process-wide) and checks
it against the lexer's token kinds. A `Parser` holds no per-parse state, so
one may be shared freely.

The engine recurses once per level of grammar nesting, so input which nests
too deeply for the Python stack fails with a NestingTooDeepError.
"""

import warnings
from typing import Iterable

from .parsing import compiler
from .parsing.engine import Engine
from .parsing.interface import UnexpectedTokenError, TrailingInputError, LexicalError, NestingTooDeepError
from .scanning.interface import Lexer, ScannerBlocked, Token
from .scanning.lexicon import DEFAULT_LEXICON
from .scanning.stream import TokenBuffer, elide as elide_filter

BLOCKED = '<BLOCKED>' # Token kind reported with a LexicalError.

class Parser:
	"""
	Options:
		lexer: anything satisfying the scanning.interface.Lexer protocol.
		elide: token kinds to drop from the stream before parsing.
		maps: token filters, such as from scanning.stream.unquote(...), applied in order.
		trace: a writable text stream; if given, structure attempts are logged there.
	
	Building warns about any literal in the grammar which the lexer (and
	filters) would not produce as a single token, since it could never match.
	"""
	def __init__(self, cls:type, *, lexer:Lexer=DEFAULT_LEXICON, elide=(), maps=(), trace=None):
		self.cls = cls
		self.lexer = lexer
		self.structure = compiler.compile_structure(cls)
		compiler.check_symbols(self.structure, lexer.symbols())
		self.__filters = ([elide_filter(*elide)] if elide else []) + list(maps)
		self.trace = trace
		for literal in compiler.unscannable_literals(self.structure, self.__scan_literal):
			owner, field, annotation = literal.provenance
			warnings.warn("%s.%s: literal %s is never scanned as a single token, so it cannot match (in annotation %r)"%(
				owner.__qualname__, field, literal, annotation
			), stacklevel=2)

	def __repr__(self): return "<Parser for %s>"%self.cls.__qualname__

	def __scan_literal(self, text):
		tokens = self.__filtered(self.lexer.scan(text))
		return [token for token in tokens if not token.is_end()]

	def __filtered(self, tokens):
		for each_token in self.__filters: tokens = each_token(tokens)
		return tokens

	def ebnf(self) -> str:
		""" The grammar, one production per structure type. """
		return "\n".join(s.production() for s in compiler.reachable(self.structure))

	def parse(self, source, target=None, *, filename:str=None):
		""" Parse all of `source` (str, bytes, or a readable file) into `target` or a fresh instance. """
		text = _read(source)
		return self.__run(self.lexer.scan(text, filename=filename), target, True, text)[0]

	def parse_prefix(self, source, target=None, *, filename:str=None):
		""" Parse as much of `source` as the grammar wants. Returns (instance, first unconsumed token). """
		text = _read(source)
		return self.__run(self.lexer.scan(text, filename=filename), target, False, text)

	def parse_tokens(self, tokens:Iterable[Token], target=None):
		return self.__run(tokens, target, True)[0]

	def parse_tokens_prefix(self, tokens:Iterable[Token], target=None):
		return self.__run(tokens, target, False)

	def __run(self, tokens, target, whole:bool, text:str=None):
		buffer = TokenBuffer(self.__filtered(tokens))
		engine = Engine(buffer, self.trace)
		try:
			result = engine.attempt(self.structure, 0)
			if result is None:
				token = buffer[max(engine.furthest, 0)]
				raise UnexpectedTokenError(_unexpected(token), token, engine.expected)
			end, frame = result
			if whole and not buffer[end].is_end():
				if engine.furthest > end: token, expected = buffer[engine.furthest], engine.expected
				else: token, expected = buffer[end], (engine.expected if engine.furthest == end else ())
				raise TrailingInputError(_unexpected(token), token, expected)
			return engine.populate(self.structure, 0, end, frame, target), buffer[end]
		except ScannerBlocked as ex:
			offset = ex.position.offset
			stuck = text[offset] if text is not None and offset < len(text) else ''
			raise LexicalError("no token matches %r"%stuck, Token(BLOCKED, stuck, ex.position)) from ex
		except RecursionError:
			token = buffer[max(engine.furthest, 0)]
			raise NestingTooDeepError("nesting too deep", token) from None

def build(cls:type, **options) -> Parser:
	""" Compile the grammar for `cls` into a reusable parser. See `Parser` for the options. """
	return Parser(cls, **options)

def _read(source) -> str:
	if isinstance(source, str): return source
	if isinstance(source, (bytes, bytearray)): return bytes(source).decode('utf-8')
	if hasattr(source, 'read'): return _read(source.read())
	raise TypeError("cannot parse from %r"%type(source))

def _unexpected(token:Token) -> str:
	if token.is_end(): return "unexpected end of input"
	return "unexpected %s %r"%(token.kind, token.text)
