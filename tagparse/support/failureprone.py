"""
This module is all about easing over the process to display where things go wrong.

Tokens already know their line and column, so the only thing missing from an
error report is the offending line itself. The `SourceText` finds it, and the
`illustration` function draws a picture: the line, then a caret under the
place of interest, then a caption.

Line breaks are a funny thing. Unix calls for \\n. Apple prior to OSX called
for \\r. DOS and its descendants call for \\r\\n. The lexer counts only \\n
when it numbers lines, so that is the convention here as well.
"""

from ..scanning.interface import Position

def illustration(single_line:str, start:int, width:int=0, *, prefix='', caption="near here") -> str:
	""" Builds up a picture of where something appears in a line of text. Useful for polite error messages. """
	blanks = ''.join(c if c == '\t' else ' ' for c in prefix + single_line[:start])
	underline_width = max(1, min(width, len(single_line)-start))
	underline = '^'*underline_width
	return prefix + single_line.rstrip() + '\n' + blanks + underline +" "+caption

class SourceText:
	""" Wrapper for source text: participates in half-respectable error-display with context. """
	def __init__(self, content:str, filename:str=None):
		self.content = content
		self.filename = filename
		self.__lines = None

	def line_of_text(self, row:int) -> str:
		""" Rows count from one, the same as token positions. """
		if self.__lines is None: self.__lines = self.content.split('\n')
		if 1 <= row <= len(self.__lines): return self.__lines[row-1]
		return ''

	def _format_message(self, position:Position, message):
		prefix = "At" if self.filename is None else str(self.filename)+":"
		return "%s line %d, column %d: %s" % (prefix, position.line, position.column, message)

	def complaint(self, position:Position, width:int, message:str) -> str:
		reference = self._format_message(position, message)
		line = self.line_of_text(position.line)
		illustrated = illustration(line, position.column - 1, width, prefix=' >>> ')
		return "%s\n%s"%(reference, illustrated)

