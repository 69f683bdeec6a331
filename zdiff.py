# Symbolic differentiation of postfix expressions with respect to z.
#
# Works directly on [begin, end) ranges of the postfix token sequence, the operands of an operation are located with
# zexpr.subexpr_start. Results are built as plain token lists through the _add, _sub, _mul, _div, _pow and _neg builders
# which drop additive zeros and multiplicative ones so that the derivative does not fill up with trivial terms. Ranges
# are processed from an explicit work stack, long operator chains do not recurse.

import cmath

import zops
import zlex
from zexpr import Expr, check_postfix, subexpr_start, to_postfix
from ztok import Tok

class DifferentiationError (ValueError): pass

_MAX_DEPTH = 256 # maximum nesting of function applications
_RULES     = {} # compiled derivative rules {'tag': (tok, ...), ...}

_NEG       = Tok ('neg')
_LOG       = Tok ('log')

def set_max_depth (depth):
	global _MAX_DEPTH

	if depth < 1:
		raise ValueError (f'invalid maximum depth {depth!r}')

	_MAX_DEPTH = depth

def get_max_depth ():
	return _MAX_DEPTH

#...............................................................................................
def _const (toks): # value of single constant token list, None otherwise
	return toks [0].val if len (toks) == 1 and toks [0].is_const else None

def _is_zero (toks):
	return _const (toks) == 0

def _is_one (toks):
	return _const (toks) == 1

def _neg (a):
	val = _const (a)

	if val is not None:
		return [Tok ('#', -val)]
	elif a [-1].op == 'neg': # -(-g) -> g
		return a [:-1]

	return a + [_NEG]

def _add (a, b):
	if _is_zero (a):
		return b
	elif _is_zero (b):
		return a

	return a + b + [Tok ('+')]

def _sub (a, b):
	if _is_zero (b):
		return a
	elif _is_zero (a):
		return _neg (b)

	return a + b + [Tok ('-')]

def _mul (a, b):
	if _is_zero (a) or _is_zero (b):
		return [Tok.Zero]
	elif _is_one (a):
		return b
	elif _is_one (b):
		return a

	return a + b + [Tok ('*')]

def _div (a, b):
	if _is_zero (a):
		return [Tok.Zero]
	elif _is_one (b):
		return a

	return a + b + [Tok ('/')]

def _pow (a, b):
	if _is_zero (b):
		return [Tok.One]
	elif _is_one (b):
		return a

	return a + b + [Tok ('^')]

#...............................................................................................
def _rule (tok): # postfix derivative rule of function in terms of variable z, compiled from infix text on first use
	rule = _RULES.get (tok.op)

	if rule is None:
		text = zops.deriv_rule (tok.op)

		if text is None:
			raise DifferentiationError (f'derivative not found for {str (tok)!r}')

		rule = _RULES [tok.op] = tuple (to_postfix (zlex.parse_infix (text)))

	return rule

def _subst (rule, arg): # f' (g) from f' (z)
	out = []

	for tok in rule:
		if tok.is_var:
			out.extend (arg)
		else:
			out.append (tok)

	return out

def _diff_func (e, begin, end, opers, derivs): # (f (g))' = g' * f' (g)
	tok = e [end - 1]

	if tok.op == 'neg':
		return _neg (derivs [0])

	rule = _rule (tok)

	if not derivs: # bare constant or variable argument
		return [Tok.Zero] if e [begin].is_const else list (rule)

	return _mul (derivs [0], _subst (rule, e [begin : end - 1]))

def _diff_addsub (op, f, g, df, dg):
	return _add (df, dg) if op == '+' else _sub (df, dg)

def _diff_mul (op, f, g, df, dg):
	return _add (_mul (df, g), _mul (dg, f))

def _diff_div (op, f, g, df, dg):
	if _const (g) is not None:
		return _mul (df, _div ([Tok.One], g))

	return _div (_sub (_mul (df, g), _mul (dg, f)), _mul (g, g))

def _diff_pow (op, f, g, df, dg): # (f^g)' = g * f^(g - 1) * f' + f^g * ln (f) * g'
	fc = _const (f)
	gc = _const (g)

	if _is_zero (df):
		term1 = [Tok.Zero]

	else:
		gm1   = [Tok ('#', gc - 1)] if gc is not None else g + [Tok.One, Tok ('-')]
		term1 = _mul (_mul (g, _pow (f, gm1)), df)

	if _is_zero (dg):
		term2 = [Tok.Zero]

	else:
		lnf   = [Tok ('#', cmath.log (fc))] if fc is not None else f + [_LOG]
		term2 = _mul (_mul (_pow (f, g), lnf), dg)

	return _add (term1, term2)

_DIFF_BINOPS = {
	'+': _diff_addsub,
	'-': _diff_addsub,
	'*': _diff_mul,
	'/': _diff_div,
	'^': _diff_pow,
}

def _diff_binop (e, begin, end, opers, derivs):
	if not derivs: # 0^g
		return [Tok.Zero]

	op       = e [end - 1].op
	(_, mid) = opers [0]

	return _DIFF_BINOPS [op] (op, e [begin : mid], e [mid : end - 1], *derivs)

def _operands (e, begin, end): # ranges of the operands whose derivatives are needed, in order
	tok = e [end - 1]

	if tok.is_func:
		if tok.op != 'neg':
			_rule (tok) # missing rule fails before the argument is looked at

			if end - begin == 2: # f (c), f (z)
				return ()

		return ((begin, end - 1),)

	if tok.is_binop:
		mid = subexpr_start (e, end - 1)

		if tok.op == '^' and _is_zero (e [begin : mid]):
			return ()

		return ((begin, mid), (mid, end - 1))

	return ()

def _diff (e, begin, end):
	work = [(begin, end, 0, None)] # (begin, end, function nesting depth, operand ranges once scheduled)
	outs = [] # derivatives of finished ranges in order of completion

	while work:
		begin, end, depth, opers = work.pop ()

		if opers is None:
			if depth > _MAX_DEPTH:
				raise DifferentiationError (f'functions nested deeper than {_MAX_DEPTH} levels')

			tok   = e [end - 1]
			opers = _operands (e, begin, end)
			sub   = depth + 1 if tok.is_func else depth

			work.append ((begin, end, depth, opers))
			work.extend ((b, en, sub, None) for b, en in reversed (opers))

			continue

		tok    = e [end - 1]
		derivs = outs [len (outs) - len (opers):]

		del outs [len (outs) - len (opers):]

		if tok.is_var:
			outs.append ([Tok.One])
		elif tok.is_const:
			outs.append ([Tok.Zero])
		elif tok.is_func:
			outs.append (_diff_func (e, begin, end, opers, derivs))
		elif tok.is_binop:
			outs.append (_diff_binop (e, begin, end, opers, derivs))
		else:
			raise DifferentiationError (f'cannot differentiate {str (tok)!r}')

	return outs [0]

def _checked_postfix (expr):
	expr = to_postfix (expr)

	try:
		return check_postfix (expr)
	except ValueError as e:
		raise DifferentiationError (f'malformed postfix expression, {e}') from None

#...............................................................................................
def differentiate (expr):
	expr = _checked_postfix (expr)

	if any (tok.op == 'deriv' for tok in expr):
		expr = expand_derivatives (expr)

	return Expr (_diff (expr, 0, len (expr)), postfix = True)

def expand_derivatives (expr): # replace every application of the 'deriv' marker with the derivative of its argument, innermost first
	expr = _checked_postfix (expr)
	out  = []

	for tok in expr:
		if tok.op != 'deriv':
			out.append (tok)

		else:
			start = subexpr_start (out, len (out))
			arg   = Expr (out [start:], postfix = True)

			del out [start:]

			out.extend (differentiate (arg))

	return Expr (out, postfix = True)
