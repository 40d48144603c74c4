"""
The parsing engine: ordered-choice backtracking over a token buffer.

Every node-matching method has the same shape: given a cursor (an index into
the token buffer) and a frame, return the cursor just past what the node
matched, or None if it did not match. A failed match must leave the frame
as it found it; that is the whole of the backtracking discipline.

The frame is a list of pending captures: (binder, start, payload) triples.
For a text capture the payload is the cursor where the capture stopped; for
a nested structure it is that structure's own (end, frame). Nothing is
converted, and nothing is written into any output object, until the
structure that owns the frame has matched completely. So a failed
alternative can neither leave half-built output behind nor complain about
text it would never have kept.

Methods are named for the node types they handle and dispatched by the
name of the node's class, in the style of a tree pass. The table of methods
is built once per engine, because every level of grammar nesting costs a
level of Python recursion and an extra dispatching call would double that.
"""

from .capture import STRUCT
from .expression import Structure, Literal, TokenKind, Sequence, Alternation, Option, Repetition, Group, Capture
from ..scanning.stream import TokenBuffer

NODE_TYPES = (Literal, TokenKind, Sequence, Alternation, Option, Repetition, Group, Capture)

class Engine:
	"""
	One engine per parse. It remembers the furthest point any leaf reached
	and what would have been acceptable there, for the sake of error messages.
	"""
	def __init__(self, tokens:TokenBuffer, trace=None):
		self.tokens = tokens
		self.trace = trace
		self.furthest = -1
		self.expected = set()
		self.__depth = 0
		self.__methods = {t: getattr(self, t.__name__) for t in NODE_TYPES}

	def match(self, node, cursor:int, frame:list):
		return self.__methods[type(node)](node, cursor, frame)

	def attempt(self, structure:Structure, cursor:int):
		""" Match a whole structure. On success, return the new cursor and the frame of pending captures. """
		if self.trace is not None: self.__log("%s? at %s"%(structure.name, self.tokens[cursor].position))
		self.__depth += 1
		frame = []
		try: end = self.__methods[type(structure.expression)](structure.expression, cursor, frame)
		finally: self.__depth -= 1
		if end is None:
			if self.trace is not None: self.__log("%s failed"%structure.name)
			return None
		if self.trace is not None: self.__log("%s matched %d token(s)"%(structure.name, end - cursor))
		return end, frame

	def populate(self, structure:Structure, cursor:int, end:int, frame:list, target=None):
		"""
		Convert a successful attempt's captures and write them into `target`,
		or into a fresh instance. Every capture is converted before anything
		is written, so a BindError leaves `target` as it was.
		"""
		values = [(binder, self.__convert(binder, start, payload)) for binder, start, payload in frame]
		if target is None: target = structure.instantiate()
		for binder, value in values: binder.apply(target, value)
		for name, field in structure.automatic.items():
			if name == 'pos': setattr(target, field, self.tokens[cursor].position)
			elif name == 'end_pos': setattr(target, field, self.tokens[end].position)
			else: setattr(target, field, self.tokens.span(cursor, end))
		return target

	def __convert(self, binder, start, payload):
		if binder.kind == STRUCT:
			structure, end, nested = payload
			return self.populate(structure, start, end, nested)
		return binder.value(self.tokens.texts(start, payload), self.tokens[start])

	def __log(self, message):
		print("  "*self.__depth + message, file=self.trace)

	def __fail(self, node, cursor):
		if cursor > self.furthest:
			self.furthest = cursor
			self.expected = set()
		if cursor == self.furthest: self.expected.add(str(node))
		return None

	def Literal(self, node, cursor, frame):
		token = self.tokens[cursor]
		if token.text == node.text and (node.kind is None or token.kind == node.kind) and not token.is_end():
			return cursor + 1
		return self.__fail(node, cursor)

	def TokenKind(self, node, cursor, frame):
		if self.tokens[cursor].kind == node.name: return cursor + 1
		return self.__fail(node, cursor)

	def Sequence(self, node, cursor, frame):
		mark, methods = len(frame), self.__methods
		for child in node.children:
			cursor = methods[type(child)](child, cursor, frame)
			if cursor is None:
				del frame[mark:]
				return None
		return cursor

	def Alternation(self, node, cursor, frame):
		methods = self.__methods
		for child in node.children:
			end = methods[type(child)](child, cursor, frame)
			if end is not None: return end
		return None

	def Option(self, node, cursor, frame):
		end = self.__methods[type(node.child)](node.child, cursor, frame)
		return cursor if end is None else end

	def Repetition(self, node, cursor, frame):
		method = self.__methods[type(node.child)]
		while True:
			mark = len(frame)
			end = method(node.child, cursor, frame)
			if end is None: return cursor
			if end == cursor:
				# Matched nothing: going around again would never stop.
				del frame[mark:]
				return cursor
			cursor = end

	def Group(self, node, cursor, frame):
		return self.__methods[type(node.child)](node.child, cursor, frame)

	def Capture(self, node, cursor, frame):
		binder = node.binder
		if binder.kind == STRUCT:
			structure = node.child.structure
			result = self.attempt(structure, cursor)
			if result is None: return None
			end, nested = result
			frame.append((binder, cursor, (structure, end, nested)))
			return end
		end = self.__methods[type(node.child)](node.child, cursor, frame)
		if end is None: return None
		if end == cursor: return end # An empty match has nothing to capture.
		frame.append((binder, cursor, end))
		return end
