"""
The grammar compiler: from annotated dataclasses to expression trees.

A structure type is a dataclass. Its grammar is the sequence of its fields'
annotation fragments, in declaration order, where a fragment beginning with
`|` opens a new alternative for the whole structure. For instance:

	@dataclass
	class Value:
		string: Annotated[str, "@String"] = None
		number: Annotated[float, "| @Float"] = None

Compiling proceeds in two steps per field. The metagrammar module turns the
annotation text into an expression with unbound captures. Then `_FieldBinding` walks
that expression, checks each capture against the field's declared type, and
resolves `@@` by compiling the field's (element) type in turn.

Compiled structures are cached process-wide, keyed by type. Recursion between
types is broken by entering a placeholder `Structure` in a private table
before compiling its fields; references point at the placeholder, which is
complete by the time anything parses with it. The private table is published
to the cache only once the whole compilation succeeds.
"""

import dataclasses, threading, typing

from . import capture
from .capture import Binder, Conversion
from .expression import (
	Literal, TokenKind, Sequence, Alternation, Option, Repetition, Group, Capture, Reference,
	Provenance, Field, Structure,
)
from .interface import CompileError
from .metagrammar import parse_fragment
from ..scanning.interface import Position, ScannerBlocked, Token
from ..support.foundation import transitive_closure, breadth_first

VERBOSE = False

_CACHE = {}
_LOCK = threading.RLock()

def compile_structure(cls:type) -> Structure:
	""" Return the compiled grammar for a structure type, compiling it (and its dependencies) if need be. """
	with _LOCK:
		if cls in _CACHE: return _CACHE[cls]
		pending = {}
		root = _Compilation(pending).structure(cls)
		_check_left_recursion(pending)
		_CACHE.update(pending)
		if VERBOSE:
			for structure in pending.values():
				print("Compiled %s: %d grammar field(s)."%(structure.name, len(structure.fields)))
				for field in structure.fields: print("  %s: %s"%(field.name, field.annotation))
		return root

def reachable(root:Structure) -> list:
	""" All structures the given one may refer to (itself included, and first). """
	return breadth_first([root], lambda s:_references(s.expression))

def check_symbols(root:Structure, symbols):
	"""
	Make sure every token kind the grammar mentions is one the lexer can produce.
	This is a separate step because the same types may be used with different lexers.
	"""
	symbols = frozenset(symbols)
	for structure in reachable(root):
		for node in _walk(structure.expression):
			if isinstance(node, TokenKind): name = node.name
			elif isinstance(node, Literal) and node.kind is not None: name = node.kind
			else: continue
			if name not in symbols:
				cause = "unknown token kind %r; the lexer knows %s"%(name, ', '.join(sorted(symbols)))
				owner, field, annotation = node.provenance
				raise CompileError(cause, owner=owner, field=field, annotation=annotation)

def unscannable_literals(root:Structure, scan):
	"""
	Yield the literals which `scan` cannot turn into exactly one matching token.
	`scan` takes a text and returns its tokens, not counting the end token.
	The default lexicon has one-character punctuation, for instance,
	so a literal like "==" can never match with it.
	"""
	seen = set()
	for structure in reachable(root):
		for node in _walk(structure.expression):
			if not isinstance(node, Literal) or (node.text, node.kind) in seen: continue
			seen.add((node.text, node.kind))
			try: tokens = scan(node.text)
			except ScannerBlocked: tokens = []
			if len(tokens) == 1 and tokens[0].text == node.text and node.kind in (None, tokens[0].kind): continue
			yield node


class _Compilation:
	def __init__(self, pending:dict):
		self.pending = pending

	def structure(self, cls) -> Structure:
		if cls in _CACHE: return _CACHE[cls]
		if cls in self.pending: return self.pending[cls]
		if not capture.is_structure(cls): raise CompileError("%r is not a dataclass"%(cls,))
		structure = self.pending[cls] = Structure(cls)
		try: hints = typing.get_type_hints(cls, localns={cls.__name__: cls}, include_extras=True)
		except NameError as ex: raise CompileError("cannot resolve type hints: %s"%ex, owner=cls) from None
		fields, branches = [], []
		for f in dataclasses.fields(cls):
			annotation, conversion, base = _split_annotated(hints[f.name])
			if f.init: structure.zeros[f.name] = _zero(f, base)
			if annotation is None:
				_note_automatic(structure, f.name, base)
				continue
			try:
				alternative, expression = parse_fragment(annotation)
			except CompileError as ex:
				raise CompileError(ex.cause, owner=cls, field=f.name, annotation=annotation) from None
			if alternative and not branches:
				raise CompileError("a leading '|' needs some grammar before it", owner=cls, field=f.name, annotation=annotation)
			binder, target = _binder(f.name, base, conversion)
			expression = _FieldBinding(self, Provenance(cls, f.name, annotation), binder, target, base)(expression)
			fields.append(Field(f.name, annotation))
			if alternative or not branches: branches.append([])
			branches[-1].append(expression)
		if not fields: raise CompileError("no field carries a grammar annotation", owner=cls)
		alternatives = tuple(map(_sequence, branches))
		structure.fields = tuple(fields)
		structure.expression = alternatives[0] if len(alternatives) == 1 else Alternation(alternatives)
		return structure


class _FieldBinding:
	""" Binds the captures in one field's fragment, and checks that they make sense. """
	def __init__(self, compilation:_Compilation, provenance:Provenance, binder:Binder, target, base):
		self.compilation = compilation
		self.provenance = provenance
		self.binder = binder
		self.target = target
		self.base = base

	def complain(self, cause):
		owner, field, annotation = self.provenance
		return CompileError(cause, owner=owner, field=field, annotation=annotation)

	def __call__(self, node, repeated=False, capturing=False):
		if isinstance(node, Literal): return node._replace(provenance=self.provenance)
		if isinstance(node, TokenKind): return node._replace(provenance=self.provenance)
		if isinstance(node, (Sequence, Alternation)):
			return type(node)(tuple(self(child, repeated, capturing) for child in node.children))
		if isinstance(node, Repetition): return Repetition(self(node.child, True, capturing))
		if isinstance(node, (Option, Group)): return type(node)(self(node.child, repeated, capturing))
		if isinstance(node, Capture): return self.capture(node, repeated, capturing)
		raise AssertionError(node)

	def capture(self, node:Capture, repeated:bool, capturing:bool):
		binder = self.binder
		if capturing: raise self.complain("a capture may not appear inside another capture")
		if binder is None: raise self.complain("cannot capture into a field of type %s"%_type_name(self.base))
		if repeated and not binder.accumulate and binder.kind != capture.BOOL:
			raise self.complain("capture into single-valued field is repeated; declare the field as a list")
		if isinstance(node.child, Reference):
			if binder.kind != capture.STRUCT:
				raise self.complain("'@@' needs a dataclass-typed field, not %s"%_type_name(self.base))
			return Capture(Reference(self.compilation.structure(self.target)), binder)
		if binder.kind == capture.STRUCT:
			raise self.complain("a dataclass-typed field can only be captured with '@@'")
		return Capture(self(node.child, repeated, True), binder)


def _sequence(parts:list):
	""" Sequence of the parts, splicing in the members of any which are sequences themselves. """
	flat = []
	for part in parts: flat.extend(part.children if isinstance(part, Sequence) else [part])
	return flat[0] if len(flat) == 1 else Sequence(tuple(flat))

def _split_annotated(hint):
	""" Returns (annotation text or None, Conversion or None, underlying type). """
	if typing.get_origin(hint) is not typing.Annotated: return None, None, hint
	annotation = next((m for m in hint.__metadata__ if isinstance(m, str)), None)
	conversion = next((m for m in hint.__metadata__ if isinstance(m, Conversion)), None)
	return annotation, conversion, hint.__origin__

def _binder(name, base, conversion):
	""" Returns (binder or None, the type each capture produces a value of). """
	element = capture.sequence_element(capture.unwrap_optional(base))
	target = capture.unwrap_optional(base if element is None else element)
	decision = capture.strategy(target, conversion)
	if decision is None: return None, target
	kind, convert = decision
	return Binder(name, kind, element is not None, convert), target

def _zero(f:dataclasses.Field, base):
	if f.default is not dataclasses.MISSING: return lambda: f.default
	if f.default_factory is not dataclasses.MISSING: return f.default_factory
	if capture.sequence_element(capture.unwrap_optional(base)) is not None: return list
	if base in (str, bool, int, float): return base
	return _none

def _none(): return None

def _note_automatic(structure:Structure, name:str, base):
	if name in ('pos', 'end_pos') and capture.unwrap_optional(base) is Position:
		structure.automatic[name] = name
	elif name == 'tokens' and capture.sequence_element(base) is Token:
		structure.automatic[name] = name

def _type_name(tp) -> str:
	return getattr(tp, '__qualname__', None) or str(tp)


def _walk(node):
	""" Yield every node of an expression (not descending through references). """
	yield node
	if isinstance(node, (Sequence, Alternation)):
		for child in node.children: yield from _walk(child)
	elif isinstance(node, (Option, Repetition, Group, Capture)):
		yield from _walk(node.child)

def _references(expression) -> list:
	return [node.structure for node in _walk(expression) if isinstance(node, Reference)]

def _leading(node, nullable:dict):
	"""
	Returns a pair: whether the node can match without consuming a token,
	and the set of structures it can enter before consuming one.
	"""
	if isinstance(node, Reference): return nullable[node.structure], {node.structure}
	if isinstance(node, Sequence):
		refs = set()
		for child in node.children:
			empty, more = _leading(child, nullable)
			refs |= more
			if not empty: return False, refs
		return True, refs
	if isinstance(node, Alternation):
		refs, empty = set(), False
		for child in node.children:
			e, more = _leading(child, nullable)
			refs |= more
			empty = empty or e
		return empty, refs
	if isinstance(node, (Option, Repetition)): return True, _leading(node.child, nullable)[1]
	if isinstance(node, (Group, Capture)): return _leading(node.child, nullable)
	return False, set()

def _check_left_recursion(pending:dict):
	"""
	A structure that can get back to itself without consuming any input
	would recurse forever at parse time. This finds such cycles.
	"""
	everything = breadth_first(pending.values(), lambda s:_references(s.expression))
	nullable = {s:False for s in everything}
	changed = True
	while changed:
		changed = False
		for s in everything:
			if not nullable[s] and _leading(s.expression, nullable)[0]:
				nullable[s] = changed = True
	def successors(s): return _leading(s.expression, nullable)[1]
	for s in pending.values():
		if s in transitive_closure(successors(s), successors):
			raise CompileError("left recursion: %s can refer back to itself without consuming any input"%s.name, owner=s.cls)
