"""
The parsing engine backtracks, but lexers only go forward. A `TokenBuffer`
reconciles the two: it pulls tokens lazily from any iterable and remembers
them, so a cursor (a plain index) can be saved and later resumed.

This module also supplies the token filters which sit between a lexer and
the buffer: eliding uninteresting kinds, and rewriting token text.
"""

import string
from typing import Callable, Iterable, Iterator

from .interface import END_OF_TOKENS, Position, Token

class TokenBuffer:
	def __init__(self, tokens:Iterable[Token]):
		self.__source = iter(tokens)
		self.__tokens = []
		self.__exhausted = False
	
	def __pull(self, index:int):
		while len(self.__tokens) <= index and not self.__exhausted:
			try: token = next(self.__source)
			except StopIteration:
				self.__tokens.append(Token(END_OF_TOKENS, '', self.__end_position()))
				self.__exhausted = True
			else:
				self.__tokens.append(token)
				if token.kind == END_OF_TOKENS: self.__exhausted = True
	
	def __end_position(self) -> Position:
		if not self.__tokens: return Position(1, 1, 0)
		line, column, offset, filename = self.__tokens[-1].position
		width = len(self.__tokens[-1].text)
		return Position(line, column + width, offset + width, filename)
	
	def __getitem__(self, index:int) -> Token:
		"""
		Return the token at the given cursor. Reading past the end of the
		stream keeps returning the end token, so callers need no bounds checks.
		"""
		self.__pull(index)
		return self.__tokens[min(index, len(self.__tokens) - 1)]
	
	def texts(self, start:int, stop:int) -> list:
		""" The text of each token consumed between two cursors. """
		self.__pull(stop)
		return [token.text for token in self.__tokens[start:stop]]
	
	def span(self, start:int, stop:int) -> list:
		self.__pull(stop)
		return self.__tokens[start:stop]


def elide(*kinds:str) -> Callable[[Iterable[Token]], Iterator[Token]]:
	""" Build a filter which drops tokens of the given kinds from the stream. """
	dropped = frozenset(kinds)
	def each_token(tokens):
		return (token for token in tokens if token.kind not in dropped)
	return each_token

def mapper(fn:Callable[[Token], Token], *kinds:str) -> Callable[[Iterable[Token]], Iterator[Token]]:
	"""
	Build a filter which passes tokens of the given kinds through `fn`.
	With no kinds given, every token (except the end token) goes through `fn`.
	"""
	selected = frozenset(kinds)
	def each_token(tokens):
		for token in tokens:
			if token.kind != END_OF_TOKENS and (not selected or token.kind in selected): yield fn(token)
			else: yield token
	return each_token

def unquote(*kinds:str):
	""" Strip the quotes from string-like tokens and interpret backslash escapes. """
	def strip(token:Token) -> Token:
		return token._replace(text=unescape(token.text[1:-1]))
	return mapper(strip, *(kinds or ('String', 'Char')))

def upper(*kinds:str):
	""" Case-fold the text of the selected tokens to upper case. """
	return mapper(lambda token:token._replace(text=token.text.upper()), *kinds)

_ESCAPES = {'n': '\n', 't': '\t', 'r': '\r', '0': '\0', 'b': '\b', 'f': '\f', 'v': '\v', 'a': '\a'}

def unescape(text:str) -> str:
	pieces, i = [], 0
	while i < len(text):
		c = text[i]
		if c == '\\' and i + 1 < len(text):
			c = text[i+1]
			if c == "u" and all(h in string.hexdigits for h in text[i+2:i+6]) and i + 6 <= len(text):
				pieces.append(chr(int(text[i+2:i+6], 16)))
				i += 6
				continue
			pieces.append(_ESCAPES.get(c, c))
			i += 2
		else:
			pieces.append(c)
			i += 1
	return ''.join(pieces)
