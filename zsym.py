# Write out postfix expressions as parseable infix text and convert between postfix expressions and SymPy expressions.

import sympy as sp

import zops
from zexpr import Expr, check_postfix, to_postfix
from ztok import Tok, const2text

Z = sp.Symbol ('z')

_SPT_FUNCS = {
	'neg'  : lambda a: -a,
	're'   : sp.re,
	'im'   : sp.im,
	'abs'  : sp.Abs,
	'arg'  : sp.arg,
	'conj' : sp.conjugate,
	'exp'  : sp.exp,
	'log'  : sp.log,
	'cos'  : sp.cos,
	'sin'  : sp.sin,
	'tan'  : sp.tan,
	'sec'  : sp.sec,
	'csc'  : sp.csc,
	'cot'  : sp.cot,
	'acos' : sp.acos,
	'asin' : sp.asin,
	'atan' : sp.atan,
	'cosh' : sp.cosh,
	'sinh' : sp.sinh,
	'tanh' : sp.tanh,
	'acosh': sp.acosh,
	'asinh': sp.asinh,
	'atanh': sp.atanh,
	'deriv': lambda a: sp.diff (a, Z),
}

_SPT2TAG = {func: tag for tag, func in _SPT_FUNCS.items () if isinstance (func, type)}

#...............................................................................................
def _fltoint (num):
	return int (num) if num.is_integer () else num

def _spt_num (val):
	re  = _fltoint (val.real)
	im  = _fltoint (val.imag)
	spt = sp.Integer (re) if isinstance (re, int) else sp.Float (re)

	if im:
		spt = spt + (sp.Integer (im) if isinstance (im, int) else sp.Float (im)) * sp.I

	return spt

def expr2nat (expr): # postfix -> fully bracketed infix text which parse_infix reads back
	expr  = check_postfix (to_postfix (expr))
	stack = []

	for tok in expr:
		if tok.is_const:
			stack.append (const2text (tok.val))

		elif tok.is_var:
			stack.append ('z')

		elif tok.is_func:
			arg = stack.pop ()

			stack.append (f'(-{arg})' if tok.op == 'neg' else f'\\{tok.name}({arg})')

		else:
			rhs = stack.pop ()
			lhs = stack.pop ()

			stack.append (f'({lhs}{tok.name}{rhs})')

	text = stack [-1]

	return text [1:-1] if expr [-1].is_binop else text

def expr2spt (expr): # postfix -> SymPy expression in z
	stack = []

	for tok in check_postfix (to_postfix (expr)):
		if tok.is_const:
			stack.append (_spt_num (tok.val))

		elif tok.is_var:
			stack.append (Z)

		elif tok.is_func:
			stack.append (_SPT_FUNCS [tok.op] (stack.pop ()))

		else:
			rhs = stack.pop ()
			lhs = stack.pop ()

			stack.append (zops.func (tok.op) (lhs, rhs))

	return stack [0]

def spt2expr (spt): # SymPy expression in z -> postfix
	def convert (spt):
		if spt == Z:
			return [Tok.Var]

		if not spt.free_symbols:
			return [Tok ('#', complex (spt))]

		if isinstance (spt, (sp.Add, sp.Mul)):
			op   = '+' if isinstance (spt, sp.Add) else '*'
			toks = convert (spt.args [0])

			for arg in spt.args [1:]:
				toks.extend (convert (arg) + [Tok (op)])

			return toks

		if isinstance (spt, sp.Pow):
			return convert (spt.base) + convert (spt.exp) + [Tok ('^')]

		if isinstance (spt, sp.Derivative):
			toks = convert (spt.expr)

			for var, count in spt.variable_count:
				if var != Z:
					raise TypeError (f'cannot convert derivative with respect to {var}')

				toks.extend ([Tok ('deriv')] * count)

			return toks

		tag = _SPT2TAG.get (spt.func)

		if tag is None or len (spt.args) != 1:
			raise TypeError (f'cannot convert {spt!r}')

		return convert (spt.args [0]) + [Tok (tag)]

	return Expr (convert (sp.sympify (spt)), postfix = True)
