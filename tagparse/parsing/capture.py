"""
Capture binding: how matched text becomes field values.

There is a small closed set of strategies, selected once (when the grammar is
compiled) from the declared type of the target field:

	string   -- the matched token texts, concatenated.
	bool     -- True. The text does not matter.
	int      -- standard integer parsing (with 0x/0o/0b prefixes honored).
	float    -- standard floating-point parsing.
	custom   -- a user-supplied conversion of the list of matched texts.
	struct   -- a nested structure, parsed by reference (the `@@` form).

Any of these may also accumulate: a `list[...]` field gets one new element
per successful capture, in match order. Otherwise the field is simply set.

Conversion waits until the enclosing structure has matched entirely, so an
alternative that fails for other reasons never reports a conversion problem.
A failure is still reported at the token where the capture began; see the engine.
"""

import dataclasses, types, typing
from typing import Any, Callable, NamedTuple, Optional, Protocol, runtime_checkable

from .interface import BindError
from ..scanning.interface import Token

STRING, BOOL, INT, FLOAT, CUSTOM, STRUCT = 'string', 'bool', 'int', 'float', 'custom', 'struct'

class Conversion(NamedTuple):
	"""
	Put one of these in the `Annotated[...]` metadata of a field to convert
	captured text with a function of your own. The function receives the list
	of matched token texts and returns the value to store (or append).
	Raise ValueError or TypeError to reject the input.
	"""
	fn: Callable[[list], Any]

@runtime_checkable
class Capturer(Protocol):
	"""
	A type with a `capture` method is custom-convertible: a fresh instance is
	made with no arguments, then told about the matched texts.
	"""
	def capture(self, values:list) -> None: ...

class Binder(NamedTuple):
	field: str
	kind: str
	accumulate: bool
	convert: Callable[[list], Any]

	def value(self, values:list, token:Token):
		""" Convert, or explain why not. `token` is where the capture began. """
		try: return self.convert(values)
		except (ValueError, TypeError) as ex:
			text = ''.join(map(str, values))
			raise BindError("cannot capture %r into %s field %r: %s"%(text, self.kind, self.field, ex), token, self.field) from ex

	def apply(self, instance, value):
		if self.accumulate:
			existing = getattr(instance, self.field)
			if existing is None: setattr(instance, self.field, [value])
			else: existing.append(value)
		else:
			setattr(instance, self.field, value)


def is_structure(tp) -> bool:
	return isinstance(tp, type) and dataclasses.is_dataclass(tp)

def unwrap_optional(hint):
	""" Optional[X] is X, for the purpose of deciding how to capture. """
	if typing.get_origin(hint) in (typing.Union, types.UnionType):
		members = [a for a in typing.get_args(hint) if a is not type(None)]
		if len(members) == 1: return members[0]
	return hint

def sequence_element(hint) -> Optional[Any]:
	""" Return X if the hint is list[X] (or typing.List[X]), else None. """
	if typing.get_origin(hint) is list:
		args = typing.get_args(hint)
		return args[0] if args else str
	if hint is list: return str
	return None

def strategy(tp, conversion:Optional[Conversion]):
	"""
	Decide the capture strategy for (the element type of) a field.
	Returns (kind, convert), or None if nothing can be captured into `tp`.
	"""
	tp = unwrap_optional(tp)
	if conversion is not None: return CUSTOM, conversion.fn
	if tp is str: return STRING, ''.join
	if tp is bool: return BOOL, _true
	if tp is int: return INT, _to_int
	if tp is float: return FLOAT, _to_float
	if not isinstance(tp, type) or typing.get_origin(tp) is not None: return None
	if issubclass(tp, Capturer): return CUSTOM, _capturer(tp)
	if is_structure(tp): return STRUCT, None # The engine builds nested instances itself.
	return None

def _true(values): return True

def _to_int(values):
	text = ''.join(values)
	try: return int(text, 0)
	except ValueError: return int(text, 10) # For leading zeros, which base-zero refuses.

def _to_float(values): return float(''.join(values))

def _capturer(tp):
	def convert(values):
		it = tp()
		it.capture(list(values))
		return it
	return convert
