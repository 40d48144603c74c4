"""
INI files: sections of key = value properties, with optional properties
before the first section. Strings are unquoted on the way in.
"""

from dataclasses import dataclass
from typing import Annotated, Optional

import tagparse

@dataclass
class Value:
	string: Annotated[Optional[str], "@String"] = None
	number: Annotated[Optional[float], "| @(Float | Int)"] = None

	def unwrap(self):
		return self.string if self.number is None else self.number

@dataclass
class Property:
	key: Annotated[str, "@Ident '='"]
	value: Annotated[Value, "@@"]
	pos: tagparse.Position = None

@dataclass
class Section:
	name: Annotated[str, "'[' @Ident ']'"]
	properties: Annotated[list[Property], "@@*"]

	def as_dict(self) -> dict:
		return {p.key: p.value.unwrap() for p in self.properties}

@dataclass
class INI:
	properties: Annotated[list[Property], "@@*"]
	sections: Annotated[list[Section], "@@*"]

	def as_dict(self) -> dict:
		result = {p.key: p.value.unwrap() for p in self.properties}
		for section in self.sections: result[section.name] = section.as_dict()
		return result

parser = tagparse.build(INI, maps=[tagparse.unquote('String')])

def load(text:str, filename:str=None) -> dict:
	return parser.parse(text, filename=filename).as_dict()
