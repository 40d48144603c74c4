"""
The annotation language: a grammar for grammars.

A field annotation is a fragment of grammar. The notation is:

	"text" or 'text'    match a token with exactly that text
	"text":Kind         ... which must also be of the given kind
	Kind                match any token of the given kind
	a b c               sequence
	a | b | c           ordered choice: the first alternative to match wins
	( ... )             grouping
	[ ... ]  or  x?     optional
	{ ... }  or  x*     zero or more
	x+                  one or more
	@x                  capture what x matched into this field
	@@                  capture a nested structure of this field's type

A fragment may begin with `|`, which makes it an alternative to everything
that came before it in the same structure.

This module knows only syntax. It produces expression nodes with the
captures left unbound: `Capture(child, None)`, and `Capture(Reference(None), None)`
for the `@@` form. The compiler fills in the semantics.

The annotations are themselves scanned with a `Lexicon`, which seems only fair.
"""

from typing import NamedTuple

from .expression import Literal, TokenKind, Sequence, Alternation, Option, Repetition, Group, Capture, Reference
from .interface import CompileError
from ..scanning.interface import END_OF_TOKENS, ScannerBlocked
from ..scanning.lexicon import Lexicon
from ..scanning.stream import unescape

PUNCTUATION = '{}[]()|:?*+'
CLOSERS = {'(': ')', '[': ']', '{': '}'}

LEX = Lexicon("annotation")
LEX.ignore(r'\s+')
LEX.token('name', r'[A-Za-z_][A-Za-z0-9_]*')
LEX.token_map('literal', r'"(?:[^"\\]|\\.)*"', lambda text:unescape(text[1:-1]))
LEX.token_map('literal', r"'(?:[^'\\]|\\.)*'", lambda text:unescape(text[1:-1]))
LEX.token('@@', r'@@')
LEX.token('@', r'@')
for _p in PUNCTUATION: LEX.token(_p, '\\'+_p)

class Fragment(NamedTuple):
	"""
	`alternative` tells if the fragment began with a `|`, so continuing the
	enclosing structure's grammar as a new alternative.
	"""
	alternative: bool
	expression: object

def parse_fragment(annotation:str) -> Fragment:
	""" Parse one field's annotation. Raises CompileError (without field details). """
	try: tokens = list(LEX.scan(annotation))
	except ScannerBlocked as ex:
		raise CompileError("unexpected character %r at column %d"%(annotation[ex.position.offset], ex.position.column)) from None
	return _FragmentParser(tokens).fragment()

class _FragmentParser:
	""" Plain recursive descent, one method per level of precedence. """
	def __init__(self, tokens):
		self.tokens = tokens
		self.index = 0

	def peek(self) -> str: return self.tokens[self.index].kind

	def take(self):
		token = self.tokens[self.index]
		self.index += 1
		return token

	def fragment(self) -> Fragment:
		alternative = self.peek() == '|'
		if alternative: self.take()
		if self.peek() == END_OF_TOKENS: raise CompileError("empty grammar fragment")
		expression = self.alternatives()
		kind = self.peek()
		if kind != END_OF_TOKENS:
			raise CompileError("unexpected %r at column %d"%(kind, self.tokens[self.index].position.column))
		return Fragment(alternative, expression)

	def alternatives(self):
		branches = [self.sequence()]
		while self.peek() == '|':
			self.take()
			branches.append(self.sequence())
		if len(branches) == 1: return branches[0]
		return Alternation(tuple(branches))

	def sequence(self):
		terms = []
		while self.peek() not in ('|', ')', ']', '}', END_OF_TOKENS):
			terms.append(self.term())
		if not terms:
			token = self.tokens[self.index]
			if token.kind in CLOSERS.values(): raise CompileError("unexpected %r at column %d"%(token.kind, token.position.column))
			raise CompileError("empty alternative at column %d"%token.position.column)
		if len(terms) == 1: return terms[0]
		return Sequence(tuple(terms))

	def term(self):
		if self.peek() == '@@':
			self.take()
			node = Capture(Reference(None), None)
		elif self.peek() == '@':
			self.take()
			if self.peek() in ('@', '@@'): raise CompileError("'@' may not capture a capture")
			node = Capture(self.atom(), None)
		else:
			node = self.atom()
		kind = self.peek()
		if kind == '?':
			self.take()
			return Option(node)
		if kind == '*':
			self.take()
			return Repetition(node)
		if kind == '+':
			self.take()
			return Sequence((node, Repetition(node)))
		return node

	def atom(self):
		token = self.take()
		if token.kind == 'literal':
			if self.peek() != ':': return Literal(token.text)
			self.take()
			if self.peek() != 'name': raise CompileError("expected a token kind after ':' following %r"%token.text)
			return Literal(token.text, self.take().text)
		if token.kind == 'name': return TokenKind(token.text)
		if token.kind in CLOSERS:
			closer = CLOSERS[token.kind]
			if self.peek() == closer: raise CompileError("empty group %r at column %d"%(token.kind+closer, token.position.column))
			inside = self.alternatives()
			if self.peek() != closer:
				raise CompileError("unterminated group: %r at column %d has no matching %r"%(token.kind, token.position.column, closer))
			self.take()
			if token.kind == '[': return Option(inside)
			if token.kind == '{': return Repetition(inside)
			return Group(inside)
		if token.kind == END_OF_TOKENS: raise CompileError("grammar fragment ends unexpectedly")
		raise CompileError("unexpected %r at column %d"%(token.kind, token.position.column))
