"""
Grammar expression trees: the compiled form of grammar annotations.

Every node is an immutable tuple, so a compiled tree may be shared freely
between parses (and threads). The one exception to tuple-ness is the
`Structure`, which stands for a whole annotated type: it must exist before
its own expression is compiled, because the expression may refer back to it.
Once compilation finishes, nothing ever changes it again.

The str() of any node is written back in the annotation language, which is
handy for error messages and for looking at what the compiler made of things.
"""

from typing import NamedTuple, Optional

from .capture import Binder

class Provenance(NamedTuple):
	""" Where a node came from, for the sake of error messages. """
	owner: type
	field: str
	annotation: str

class Literal(NamedTuple):
	""" Matches one token with exactly this text (and, optionally, this kind). """
	text: str
	kind: Optional[str] = None
	provenance: Optional[Provenance] = None

	def __str__(self):
		quoted = '"%s"'%self.text.replace('\\', '\\\\').replace('"', '\\"')
		return quoted if self.kind is None else quoted+':'+self.kind

class TokenKind(NamedTuple):
	""" Matches one token of this kind. """
	name: str
	provenance: Optional[Provenance] = None

	def __str__(self): return self.name

class Sequence(NamedTuple):
	children: tuple

	def __str__(self): return ' '.join(_inner(c) for c in self.children)

class Alternation(NamedTuple):
	children: tuple

	def __str__(self): return ' | '.join(map(str, self.children))

class Option(NamedTuple):
	child: object

	def __str__(self): return '[ %s ]'%self.child

class Repetition(NamedTuple):
	child: object

	def __str__(self): return '{ %s }'%self.child

class Group(NamedTuple):
	child: object

	def __str__(self): return '( %s )'%self.child

class Capture(NamedTuple):
	""" On success of the child, bind what it matched according to the binder. """
	child: object
	binder: Binder

	def __str__(self):
		if isinstance(self.child, Reference): return '@@'
		return '@'+_inner(self.child)

class Reference(NamedTuple):
	""" Recursion into the grammar of a (possibly the same) structure type. """
	structure: "Structure"

	def __str__(self): return self.structure.name

def _inner(node) -> str:
	""" Render a child node, bracketing it if it would otherwise read wrongly. """
	if isinstance(node, (Sequence, Alternation)) and len(node.children) > 1: return '( %s )'%node
	return str(node)


class Field(NamedTuple):
	""" One grammar-annotated field, as declared. """
	name: str
	annotation: str

class Structure:
	"""
	The compiled grammar for one structure (dataclass) type.
	`zeros` maps each constructor argument to a factory for its zero value.
	`automatic` maps 'pos', 'end_pos', and 'tokens' to the field that receives
	each of those (if the type declares one).
	"""

	def __init__(self, cls:type):
		self.cls = cls
		self.name = cls.__name__
		self.fields = ()
		self.expression = None
		self.zeros = {}
		self.automatic = {}

	def __repr__(self): return "<Structure %s>"%self.name

	def instantiate(self):
		return self.cls(**{name:zero() for name, zero in self.zeros.items()})

	def production(self) -> str:
		return "%s = %s ."%(self.name, self.expression)
