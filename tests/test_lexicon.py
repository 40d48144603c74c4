import unittest
from tagparse.scanning.interface import END_OF_TOKENS, Position, ScannerBlocked
from tagparse.scanning.lexicon import Lexicon, DEFAULT_LEXICON


def kinds_and_texts(lexicon, text):
	return [(t.kind, t.text) for t in lexicon.scan(text)]

class TestDefaultLexicon(unittest.TestCase):
	def test_00_smoke_test(self):
		self.assertEqual([(END_OF_TOKENS, '')], kinds_and_texts(DEFAULT_LEXICON, ''))
		self.assertEqual([(END_OF_TOKENS, '')], kinds_and_texts(DEFAULT_LEXICON, '  \n // nothing here\n'))
	
	def test_01_kinds(self):
		for text, kind in [
			('abc', 'Ident'),
			('_x9', 'Ident'),
			('42', 'Int'),
			('0x1F', 'Int'),
			('3.25', 'Float'),
			('.5', 'Float'),
			('1e9', 'Float'),
			('"hi \\" there"', 'String'),
			("'c'", 'Char'),
			('=', 'Punct'),
		]:
			with self.subTest(text=text):
				self.assertEqual([(kind, text), (END_OF_TOKENS, '')], kinds_and_texts(DEFAULT_LEXICON, text))
	
	def test_02_longest_match(self):
		self.assertEqual(
			[('Ident', 'a'), ('Punct', '/'), ('Ident', 'b'), (END_OF_TOKENS, '')],
			kinds_and_texts(DEFAULT_LEXICON, 'a / /* comment */ b'),
		)
	
	def test_03_positions(self):
		tokens = list(DEFAULT_LEXICON.scan('a\n  bb c', filename='x.txt'))
		self.assertEqual(Position(1, 1, 0, 'x.txt'), tokens[0].position)
		self.assertEqual(Position(2, 3, 4, 'x.txt'), tokens[1].position)
		self.assertEqual(Position(2, 6, 7, 'x.txt'), tokens[2].position)
		self.assertEqual(Position(2, 7, 8, 'x.txt'), tokens[3].position)
		self.assertEqual('x.txt:2:3', str(tokens[1].position))
	
	def test_04_symbols(self):
		self.assertEqual({'Ident', 'Int', 'Float', 'String', 'Char', 'Punct'}, DEFAULT_LEXICON.symbols())

class TestLexicon(unittest.TestCase):
	def test_01_rank_breaks_ties(self):
		s = Lexicon()
		s.ignore(r'\s+')
		s.token('word', r'\w+') # The digits are included in the \w shorthand,
		s.token('number', r'\d+', rank=1) # but the higher rank makes numbers stand out.
		self.assertEqual(
			[('word', 'abc'), ('number', '123'), ('word', 'def456'), (END_OF_TOKENS, '')],
			kinds_and_texts(s, ' abc 123 def456 '),
		)
	
	def test_02_earlier_definition_breaks_remaining_ties(self):
		s = Lexicon()
		s.token('keyword', r'if|else')
		s.token('word', r'[a-z]+')
		s.ignore(r' ')
		self.assertEqual(['keyword', 'word', 'keyword'], [t.kind for t in s.scan('if iffy else')][:3])
	
	def test_03_token_map(self):
		s = Lexicon()
		s.token_map('upper', r'[a-z]+', str.upper)
		self.assertEqual([('upper', 'ABC'), (END_OF_TOKENS, '')], kinds_and_texts(s, 'abc'))
	
	def test_04_blocked(self):
		s = Lexicon()
		s.token('a', 'a')
		with self.assertRaises(ScannerBlocked) as context:
			list(s.scan('aab'))
		self.assertEqual(Position(1, 3, 2), context.exception.position)
	
	def test_05_empty_pattern_is_refused(self):
		s = Lexicon()
		with self.assertRaises(ValueError):
			s.token('nothing', 'x*')


if __name__ == '__main__':
	unittest.main()
