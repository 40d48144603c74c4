"""
A four-function calculator, with exponents and unary minus.

Precedence comes from the nesting of the types: an Expression is a sum of
Terms, a Term is a product of Factors, and so on down to a Value. Ordered
choice handles the rest. There is no left recursion anywhere: repetition
takes its place.
"""

from dataclasses import dataclass
from typing import Annotated, Optional

import tagparse

@dataclass
class Value:
	number: Annotated[Optional[float], "@(Float | Int)"] = None
	negated: Annotated[Optional["Value"], "| '-' @@"] = None
	subexpression: Annotated[Optional["Expression"], "| '(' @@ ')'"] = None

	def evaluate(self) -> float:
		if self.number is not None: return self.number
		if self.negated is not None: return -self.negated.evaluate()
		return self.subexpression.evaluate()

@dataclass
class Factor:
	base: Annotated[Value, "@@"]
	exponent: Annotated[Optional["Factor"], "[ '^' @@ ]"] = None

	def evaluate(self) -> float:
		if self.exponent is None: return self.base.evaluate()
		return self.base.evaluate() ** self.exponent.evaluate()

@dataclass
class OpFactor:
	operator: Annotated[str, "@('*' | '/')"]
	factor: Annotated[Factor, "@@"]

@dataclass
class Term:
	left: Annotated[Factor, "@@"]
	right: Annotated[list[OpFactor], "@@*"]

	def evaluate(self) -> float:
		result = self.left.evaluate()
		for op in self.right:
			if op.operator == '*': result *= op.factor.evaluate()
			else: result /= op.factor.evaluate()
		return result

@dataclass
class OpTerm:
	operator: Annotated[str, "@('+' | '-')"]
	term: Annotated[Term, "@@"]

@dataclass
class Expression:
	left: Annotated[Term, "@@"]
	right: Annotated[list[OpTerm], "@@*"]

	def evaluate(self) -> float:
		result = self.left.evaluate()
		for op in self.right:
			if op.operator == '+': result += op.term.evaluate()
			else: result -= op.term.evaluate()
		return result

parser = tagparse.build(Expression)

def calculate(text:str) -> float:
	return parser.parse(text).evaluate()

if __name__ == '__main__':
	import sys
	for line in sys.stdin:
		if not line.strip(): continue
		try: print(calculate(line))
		except tagparse.ParseError as ex: print(ex.explain(line), file=sys.stderr)
