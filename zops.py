# Operation metadata: names, precedence, token kind, numeric functions and derivative rules.

from collections import namedtuple
import cmath
from types import MappingProxyType

Op = namedtuple ('Op', 'tag name prec kind func deriv')

BINOP = 'binop'
FUNC  = 'func'
BRACK = 'brack'

#...............................................................................................
def _re (z):   return complex (z.real)
def _im (z):   return complex (z.imag)
def _abs (z):  return complex (abs (z))
def _arg (z):  return complex (cmath.phase (z))
def _conj (z): return z.conjugate ()
def _sec (z):  return 1 / cmath.cos (z)
def _csc (z):  return 1 / cmath.sin (z)
def _cot (z):  return 1 / cmath.tan (z)

# derivative rules are infix text in the argument z, f'(g) is obtained by substituting g for z
_OPS = [
	# tag      name     prec  kind   func                     deriv
	('(',      '(',     4,    BRACK, None,                    None),
	(')',      ')',     4,    BRACK, None,                    None),
	('+',      '+',     0,    BINOP, lambda a, b: a + b,      None),
	('-',      '-',     0,    BINOP, lambda a, b: a - b,      None),
	('*',      '*',     1,    BINOP, lambda a, b: a * b,      None),
	('/',      '/',     1,    BINOP, lambda a, b: a / b,      None),
	('^',      '^',     2,    BINOP, lambda a, b: a ** b,     None),
	('neg',    'neg',   1,    FUNC,  lambda z: -z,            None), # differentiated structurally
	('re',     're',    3,    FUNC,  _re,                     None),
	('im',     'im',    3,    FUNC,  _im,                     None),
	('abs',    'abs',   3,    FUNC,  _abs,                    None),
	('arg',    'arg',   3,    FUNC,  _arg,                    None),
	('conj',   'conj',  3,    FUNC,  _conj,                   None),
	('exp',    'exp',   3,    FUNC,  cmath.exp,               '\\exp(z)'),
	('log',    'log',   3,    FUNC,  cmath.log,               '1/z'),
	('cos',    'cos',   3,    FUNC,  cmath.cos,               '-\\sin(z)'),
	('sin',    'sin',   3,    FUNC,  cmath.sin,               '\\cos(z)'),
	('tan',    'tan',   3,    FUNC,  cmath.tan,               '\\sec(z)^2'),
	('sec',    'sec',   3,    FUNC,  _sec,                    '\\sec(z)*\\tan(z)'),
	('csc',    'csc',   3,    FUNC,  _csc,                    '-\\csc(z)*\\cot(z)'),
	('cot',    'cot',   3,    FUNC,  _cot,                    '-\\csc(z)^2'),
	('acos',   'acos',  3,    FUNC,  cmath.acos,              '-1/(1-z^2)^0.5'),
	('asin',   'asin',  3,    FUNC,  cmath.asin,              '1/(1-z^2)^0.5'),
	('atan',   'atan',  3,    FUNC,  cmath.atan,              '1/(1+z^2)'),
	('cosh',   'cosh',  3,    FUNC,  cmath.cosh,              '\\sinh(z)'),
	('sinh',   'sinh',  3,    FUNC,  cmath.sinh,              '\\cosh(z)'),
	('tanh',   'tanh',  3,    FUNC,  cmath.tanh,              '1/\\cosh(z)^2'),
	('acosh',  'acosh', 3,    FUNC,  cmath.acosh,             '1/((z-1)^0.5*(z+1)^0.5)'),
	('asinh',  'asinh', 3,    FUNC,  cmath.asinh,             '1/(z^2+1)^0.5'),
	('atanh',  'atanh', 3,    FUNC,  cmath.atanh,             '1/(1-z^2)'),
	('deriv',  'deriv', 3,    FUNC,  None,                    None), # marker, replaced by zdiff.expand_derivatives
]

OPS      = MappingProxyType ({o [0]: Op (*o) for o in _OPS})
BINOPS   = frozenset (tag for tag, op in OPS.items () if op.kind == BINOP)
FUNCS    = frozenset (tag for tag, op in OPS.items () if op.kind == FUNC)

# lexemes and escaped keyword names -> tag
NAMES    = MappingProxyType ({**{op.name: tag for tag, op in OPS.items ()}, '{': '(', '}': ')'})

#...............................................................................................
def lookup (name):
	return NAMES [name]

def prec (tag):
	return OPS [tag].prec

def kind (tag):
	return OPS [tag].kind

def func (tag):
	return OPS [tag].func

def deriv_rule (tag):
	return OPS [tag].deriv
