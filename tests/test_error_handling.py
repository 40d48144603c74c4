import unittest
from dataclasses import dataclass
from typing import Annotated

import tagparse
from tagparse import LexicalError, Lexicon, ParseError, Position, UnexpectedTokenError


@dataclass
class Call:
	function: Annotated[str, "@Ident '('"]
	arguments: Annotated[list[int], "[ @Int { ',' @Int } ] ')'"]

@dataclass
class Pair:
	left: Annotated[str, "@Ident"]
	right: Annotated[str, "@Ident"]

class TestParseErrors(unittest.TestCase):
	def test_01_expected_set(self):
		with self.assertRaises(UnexpectedTokenError) as context:
			tagparse.build(Call).parse('f(1 2)')
		ex = context.exception
		self.assertEqual('2', ex.token.text)
		self.assertEqual(('")"', '","'), ex.expected)
		self.assertEqual("unexpected Int '2' (expected \")\" or \",\")", ex.describe())
		self.assertEqual("1:5: " + ex.describe(), str(ex))
	
	def test_02_is_a_value_error(self):
		with self.assertRaises(ValueError):
			tagparse.build(Call).parse('f(')
	
	def test_03_explain(self):
		source = 'g(1,\n  2 3)'
		with self.assertRaises(ParseError) as context:
			tagparse.build(Call).parse(source, filename='call.txt')
		ex = context.exception
		self.assertEqual(Position(2, 5, 9, 'call.txt'), ex.position)
		self.assertEqual(
			'call.txt: line 2, column 5: unexpected Int \'3\' (expected ")" or ",")\n'
			' >>>   2 3)\n'
			'         ^ near here',
			ex.explain(source),
		)
	
	def test_04_end_of_input(self):
		with self.assertRaises(UnexpectedTokenError) as context:
			tagparse.build(Call).parse('f')
		self.assertTrue(context.exception.token.is_end())
		self.assertTrue(context.exception.describe().startswith('unexpected end of input'))

class TestLexicalErrors(unittest.TestCase):
	def test_01_blocked(self):
		lexer = Lexicon()
		lexer.ignore(r'\s+')
		lexer.token('Ident', r'\w+')
		parser = tagparse.build(Pair, lexer=lexer)
		self.assertEqual(Pair('a', 'b'), parser.parse('a b'))
		with self.assertRaises(LexicalError) as context:
			parser.parse('a $b')
		self.assertEqual(Position(1, 3, 2), context.exception.position)
		self.assertIn("'$'", context.exception.message)
	
	def test_02_elide(self):
		lexer = Lexicon()
		lexer.ignore(r'\s+')
		lexer.token('Ident', r'\w+')
		lexer.token('Comment', r'#[^\n]*')
		parser = tagparse.build(Pair, lexer=lexer, elide=['Comment'])
		self.assertEqual(Pair('a', 'b'), parser.parse('a # not this\nb'))


if __name__ == '__main__':
	unittest.main()
