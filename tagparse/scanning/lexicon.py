"""
Hook regular expression patterns up to token kinds.

This is a deliberately small lexer: each rule is an ordinary Python regular
expression. At each position the longest match wins; among equally long
matches, the higher `rank` wins, and after that the earlier definition.
Zero-width matches are never accepted.
"""

import re
from typing import Callable, Iterator, NamedTuple, Optional

from .interface import END_OF_TOKENS, Lexer, Position, ScannerBlocked, Token

class _Rule(NamedTuple):
	kind: Optional[str] # None means "ignore what matches".
	regex: re.Pattern
	fn: Optional[Callable[[str], str]]
	rank: int

class Lexicon(Lexer):
	def __init__(self, name="Lexicon"):
		self.name = name
		self.__rules = []
	
	def __repr__(self): return "<%s %s>"%(type(self).__name__, self.name)
	
	def __install(self, kind, pattern, fn, rank):
		regex = re.compile(pattern)
		if regex.match(''):
			raise ValueError("Pattern %r for %s matches the empty string."%(pattern, kind or 'ignore'))
		self.__rules.append(_Rule(kind, regex, fn, rank))
	
	def token(self, kind:str, pattern:str, *, rank=0):
		""" This says every member of the pattern has token kind=kind and text=matched text. """
		assert kind != END_OF_TOKENS
		self.__install(kind, pattern, None, rank)
	
	def token_map(self, kind:str, pattern:str, fn:Callable[[str], str], *, rank=0):
		""" Every member of the pattern has token kind=kind and text=fn(matched text). """
		assert kind != END_OF_TOKENS
		self.__install(kind, pattern, fn, rank)
	
	def ignore(self, pattern:str, *, rank=0):
		""" Tell the scanner to skip over what matches the pattern. """
		self.__install(None, pattern, None, rank)
	
	def symbols(self) -> set:
		return {rule.kind for rule in self.__rules if rule.kind is not None}
	
	def scan(self, text:str, *, filename:str=None) -> Iterator[Token]:
		size, offset, line, line_start = len(text), 0, 1, 0
		while offset < size:
			position = Position(line, offset - line_start + 1, offset, filename)
			best, best_key = None, None
			for index, rule in enumerate(self.__rules):
				match = rule.regex.match(text, offset)
				if match is None or match.end() == offset: continue
				key = (match.end(), rule.rank, -index)
				if best_key is None or key > best_key: best, best_key = (rule, match), key
			if best is None: raise ScannerBlocked(position)
			rule, match = best
			lexeme = match.group()
			if rule.kind is not None:
				yield Token(rule.kind, lexeme if rule.fn is None else rule.fn(lexeme), position)
			breaks = lexeme.count('\n')
			if breaks:
				line += breaks
				line_start = offset + lexeme.rindex('\n') + 1
			offset = match.end()
		yield Token(END_OF_TOKENS, '', Position(line, offset - line_start + 1, offset, filename))


def _default_lexicon():
	lexicon = Lexicon("default")
	lexicon.ignore(r'\s+')
	lexicon.ignore(r'//[^\n]*')
	lexicon.ignore(r'/\*(?:[^*]|\*(?!/))*\*/')
	lexicon.token('Ident', r'[A-Za-z_][A-Za-z0-9_]*')
	lexicon.token('Int', r'0[xX][0-9a-fA-F]+|[0-9]+')
	lexicon.token('Float', r'(?:[0-9]+\.[0-9]*|\.[0-9]+)(?:[eE][-+]?[0-9]+)?|[0-9]+[eE][-+]?[0-9]+')
	lexicon.token('String', r'"(?:[^"\\\n]|\\.)*"')
	lexicon.token('Char', r"'(?:[^'\\\n]|\\.)*'")
	lexicon.token('Punct', r'[^\sA-Za-z0-9_]', rank=-1)
	return lexicon

DEFAULT_LEXICON = _default_lexicon()
