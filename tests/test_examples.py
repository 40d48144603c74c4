"""
The programs in the example directory double as integration tests.
"""
import importlib.util, os, sys, unittest

import tagparse

EXAMPLE = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'example')

def load_example(name):
	spec = importlib.util.spec_from_file_location('example_'+name, os.path.join(EXAMPLE, name+'.py'))
	module = sys.modules[spec.name] = importlib.util.module_from_spec(spec)
	spec.loader.exec_module(module)
	return module

class TestCalculator(unittest.TestCase):
	@classmethod
	def setUpClass(cls):
		cls.calculator = load_example('calculator')
	
	def test_01_arithmetic(self):
		for text, value in [
			('1', 1),
			('1 + 2 * 3', 7),
			('(1 + 2) * 3', 9),
			('2 ^ 3 ^ 2', 512),
			('1 - -2', 3),
			('10 / 4', 2.5),
			('1 - 2 - 3', -4),
			('10 + .5', 10.5),
		]:
			with self.subTest(text=text):
				self.assertEqual(value, self.calculator.calculate(text))
	
	def test_02_errors(self):
		for text in ['', '1 +', '(1', '1 2', '* 3']:
			with self.subTest(text=text):
				with self.assertRaises(tagparse.ParseError):
					self.calculator.calculate(text)

class TestINI(unittest.TestCase):
	@classmethod
	def setUpClass(cls):
		cls.ini = load_example('ini')
	
	def test_01_load(self):
		text = '''
			global = 1
			[server]
			host = "example.com" // comment
			port = 8080
			[empty]
		'''
		self.assertEqual(
			{'global': 1.0, 'server': {'host': 'example.com', 'port': 8080.0}, 'empty': {}},
			self.ini.load(text),
		)
	
	def test_02_positions(self):
		result = self.ini.parser.parse('a = 1\nb = "x"', filename='demo.ini')
		self.assertEqual(tagparse.Position(2, 1, 6, 'demo.ini'), result.properties[1].pos)
	
	def test_03_error(self):
		with self.assertRaises(tagparse.ParseError) as context:
			self.ini.load('[server]\nhost "x"', filename='bad.ini')
		self.assertEqual('bad.ini', context.exception.position.filename)
		self.assertEqual(2, context.exception.position.line)


if __name__ == '__main__':
	unittest.main()
