import unittest
from tagparse.scanning.interface import END_OF_TOKENS, Position, Token
from tagparse.scanning.lexicon import DEFAULT_LEXICON
from tagparse.scanning.stream import TokenBuffer, elide, mapper, unquote, upper


def tok(kind, text, offset=0):
	return Token(kind, text, Position(1, offset+1, offset))

class TestTokenBuffer(unittest.TestCase):
	def test_01_rewind(self):
		buffer = TokenBuffer(DEFAULT_LEXICON.scan('a b c'))
		self.assertEqual('c', buffer[2].text)
		self.assertEqual('a', buffer[0].text)
		self.assertEqual(['a', 'b'], buffer.texts(0, 2))
		self.assertEqual(['b', 'c'], [t.text for t in buffer.span(1, 3)])
	
	def test_02_reading_past_the_end(self):
		buffer = TokenBuffer(DEFAULT_LEXICON.scan('a'))
		self.assertTrue(buffer[1].is_end())
		self.assertTrue(buffer[7].is_end())
	
	def test_03_end_is_synthesized(self):
		buffer = TokenBuffer([tok('x', 'abc')])
		self.assertEqual(END_OF_TOKENS, buffer[1].kind)
		self.assertEqual(Position(1, 4, 3), buffer[1].position)
		self.assertTrue(TokenBuffer([])[0].is_end())
	
	def test_04_lazy(self):
		pulled = []
		def source():
			for token in [tok('x', 'a'), tok('x', 'b', 2)]:
				pulled.append(token.text)
				yield token
		buffer = TokenBuffer(source())
		self.assertEqual([], pulled)
		buffer[0]
		self.assertEqual(['a'], pulled)

class TestFilters(unittest.TestCase):
	def test_01_elide(self):
		tokens = [tok('x', 'a'), tok('comment', '#'), tok('x', 'b')]
		self.assertEqual(['a', 'b'], [t.text for t in elide('comment')(tokens)])
	
	def test_02_unquote(self):
		tokens = list(unquote()(DEFAULT_LEXICON.scan(r'"a\"b\n" ' + r"'A'")))
		self.assertEqual(['a"b\n', 'A', ''], [t.text for t in tokens])
		self.assertEqual('String', tokens[0].kind)
	
	def test_03_upper_only_selected_kinds(self):
		tokens = list(upper('Ident')(DEFAULT_LEXICON.scan('select "x"')))
		self.assertEqual(['SELECT', '"x"', ''], [t.text for t in tokens])
	
	def test_04_mapper_leaves_end_alone(self):
		tokens = list(mapper(lambda t:t._replace(text='!'))(DEFAULT_LEXICON.scan('a b')))
		self.assertEqual(['!', '!', ''], [t.text for t in tokens])


if __name__ == '__main__':
	unittest.main()
