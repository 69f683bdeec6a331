# Text -> infix token sequence.

from collections import OrderedDict
import math
import re

import zops
from zexpr import Expr
from ztok import Tok

class ParseError (ValueError):
	def __init__ (self, msg, pos = None):
		ValueError.__init__ (self, msg if pos is None else f'{msg} at position {pos}')

		self.pos = pos

_TOKENS = OrderedDict ([ # order is priority
	('ESC',   r'\\'),
	('MINUS', r'-'),
	('NUM',   r'(?P<num>[\d.]+)(?P<numi>i)?'),
	('CPLX',  r'\[(?P<re>[^,\]]*),(?P<im>[^\]]*)\]'),
	('PI',    r'pi'),
	('I',     r'i'),
	('E',     r'e'),
	('VAR',   r'z'),
	('CHAR',  r'.'),
])

_CONSTS      = {'PI': Tok ('#', math.pi), 'I': Tok ('#', 1j), 'E': Tok ('#', math.e)}

_rec_tokens  = re.compile ('|'.join (f'(?P<{tok}>{pat})' for tok, pat in _TOKENS.items ()), re.S)
_rec_kw_end  = re.compile (r'[\\\-+*/^{(\[]') # escaped keyword runs up to the next one of these
_rec_spaces  = re.compile (r'\s+')

def _lookup (name, pos):
	try:
		return Tok (zops.lookup (name))
	except KeyError:
		raise ParseError (f'unknown operation {name!r}', pos) from None

def _float (text, pos, what):
	try:
		return float (text)
	except ValueError:
		raise ParseError (f'invalid {what} {text!r}', pos) from None

#...............................................................................................
def tokenize (text):
	text = _rec_spaces.sub ('', text)
	toks = []
	pos  = 0

	while pos < len (text):
		m   = _rec_tokens.match (text, pos)
		tok = m.lastgroup
		end = m.end ()

		if tok == 'ESC':
			m2 = _rec_kw_end.search (text, pos + 1)

			if not m2:
				raise ParseError ('unterminated keyword', pos)

			end = m2.start ()

			toks.append (_lookup (text [pos + 1 : end], pos))

		elif tok == 'MINUS':
			toks.append (Tok ('neg') if not pos or text [pos - 1] in '({' else Tok ('-'))

		elif tok == 'NUM':
			num = m.group ('num')

			if num.count ('.') > 1:
				raise ParseError (f'malformed number {num!r}', pos)

			val = _float (num, pos, 'number')

			toks.append (Tok ('#', complex (0, val) if m.group ('numi') else val))

		elif tok == 'CPLX':
			toks.append (Tok ('#', complex (_float (m.group ('re'), pos, 'real part'), _float (m.group ('im'), pos, 'imaginary part'))))

		elif tok in _CONSTS:
			toks.append (_CONSTS [tok])

		elif tok == 'VAR':
			toks.append (Tok.Var)

		elif text [pos] == '[':
			raise ParseError ('unterminated complex literal', pos)

		else:
			toks.append (_lookup (text [pos], pos))

		pos = end

	return toks

def parse_infix (text):
	return Expr (tokenize (text), postfix = False)
