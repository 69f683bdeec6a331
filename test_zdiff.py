#!/usr/bin/env python
# python 3.6+

# Symbolic differentiation, checked structurally, against central differences and against SymPy.

import cmath
import unittest

import sympy as sp

import zdiff
from ztok import Tok
from zexpr import Expr, subexpr_start, to_postfix
from zlex import parse_infix
from zeval import evaluate
from zdiff import DifferentiationError, differentiate, expand_derivatives
from zsym import Z, expr2spt

p = lambda s: to_postfix (parse_infix (s))
d = lambda s: str (differentiate (p (s)))
C = lambda v: Tok ('#', v)

_PTS = (0.5 + 0.25j, 1.3 + 0.2j, -0.7 + 0.4j, 0.3 - 1.1j) # off the real axis and clear of branch cuts and poles

def _trivial (toks, *vals):
	return len (toks) == 1 and toks [0].is_const and toks [0].val in vals

class Test (unittest.TestCase):
	def _check_numeric (self, s, pts = _PTS, h = 1e-6):
		x  = p (s)
		dx = differentiate (x)

		for z in pts:
			fd = (evaluate (x, z + h) - evaluate (x, z - h)) / (2 * h)
			dv = evaluate (dx, z)

			self.assertLess (abs (dv - fd), 1e-5 * max (1, abs (dv)), f'd/dz {s} at {z}: {dx}')

	def _check_simplified (self, e):
		for i, tok in enumerate (e):
			if not tok.is_binop:
				continue

			mid   = subexpr_start (e, i)
			start = subexpr_start (e, mid)
			f, g  = e [start : mid], e [mid : i]

			if tok.op == '+':
				self.assertFalse (_trivial (f, 0) or _trivial (g, 0), str (e))
			elif tok.op == '-':
				self.assertFalse (_trivial (f, 0) or _trivial (g, 0), str (e))
			elif tok.op == '*':
				self.assertFalse (_trivial (f, 0, 1) or _trivial (g, 0, 1), str (e))
			elif tok.op == '/':
				self.assertFalse (_trivial (f, 0) or _trivial (g, 1), str (e))
			elif tok.op == '^':
				self.assertFalse (_trivial (g, 0, 1), str (e))

	def test_basic (self):
		self.assertEqual (d ('z'), '[1]')
		self.assertEqual (d ('3'), '[0]')
		self.assertEqual (d ('[1,2]'), '[0]')
		self.assertEqual (d ('pi*e'), '[0]')
		self.assertEqual (d ('z+3'), '[1]')
		self.assertEqual (d ('z*1'), '[1]')
		self.assertEqual (d ('z^1'), '[1]')
		self.assertEqual (d ('z^0'), '[0]')
		self.assertEqual (d ('3*z'), '[3]')
		self.assertEqual (d ('z*z'), '[z z +]')
		self.assertEqual (d ('z^2'), '[2 z *]')
		self.assertEqual (d ('z^3'), '[3 z 2 ^ *]')
		self.assertEqual (d ('z/2'), '[1 2 /]')
		self.assertEqual (d ('1/z'), '[[-1,0] z z * /]')
		self.assertEqual (d ('z^z'), '[z z z 1 - ^ * z z ^ z log * +]')
		self.assertEqual (d ('0^z'), '[0]')
		self.assertEqual (d ('z-\\sin(z)'), '[1 z cos -]')
		self.assertEqual (differentiate (p ('3-z')), Expr ([C (-1)]))
		self.assertEqual (differentiate (p ('-z')), Expr ([C (-1)]))
		self.assertEqual (differentiate (p ('2^z')), Expr ([C (2), Tok ('@'), Tok ('^'), C (cmath.log (2)), Tok ('*')]))

	def test_functions (self):
		self.assertEqual (d ('\\sin(z)'), '[z cos]')
		self.assertEqual (d ('\\cos(z)'), '[z sin neg]')
		self.assertEqual (d ('\\exp(z)'), '[z exp]')
		self.assertEqual (d ('\\log(z)'), '[1 z /]')
		self.assertEqual (d ('\\tan(z)'), '[z sec 2 ^]')
		self.assertEqual (d ('\\sec(z)'), '[z sec z tan *]')
		self.assertEqual (d ('\\cosh(z)'), '[z sinh]')
		self.assertEqual (d ('\\sinh(z)'), '[z cosh]')
		self.assertEqual (d ('\\atan(z)'), '[1 1 z 2 ^ + /]')
		self.assertEqual (d ('\\sin(3)'), '[0]')
		self.assertEqual (d ('\\exp(pi*i)'), '[0]')
		self.assertEqual (d ('\\sin(z^2)'), '[2 z * z 2 ^ cos *]')
		self.assertEqual (d ('\\exp(2*z)'), '[2 2 z * exp *]')
		self.assertEqual (d ('\\sin(\\cos(z))'), '[z sin neg z cos cos *]')
		self.assertEqual (d ('-\\sin(z)'), '[z cos neg]')
		self.assertEqual (d ('-\\cos(z)'), '[z sin]')
		self.assertEqual (d ('\\neg(z^2)'), '[2 z * neg]')

	def test_errors (self):
		self.assertRaises (DifferentiationError, differentiate, p ('\\re(z)'))
		self.assertRaises (DifferentiationError, differentiate, p ('\\re(3)'))
		self.assertRaises (DifferentiationError, differentiate, p ('z*\\abs(z)'))
		self.assertRaises (DifferentiationError, differentiate, p ('\\conj(z)+1'))
		self.assertRaises (DifferentiationError, differentiate, Expr ([Tok ('+')]))
		self.assertRaises (DifferentiationError, differentiate, Expr ([Tok ('@'), Tok ('@')]))
		self.assertRaises (DifferentiationError, differentiate, Expr ([Tok ('@'), Tok ('(')]))
		self.assertRaises (DifferentiationError, differentiate, Expr ())
		self.assertRaises (DifferentiationError, expand_derivatives, Expr ([Tok ('deriv')]))
		self.assertRaises (SyntaxError, differentiate, parse_infix ('(z'))
		self.assertTrue (issubclass (DifferentiationError, ValueError))

	def test_infix_input (self):
		self.assertEqual (differentiate (parse_infix ('z^2')), p ('2*z'))
		self.assertTrue (differentiate (parse_infix ('z^2')).postfix)

	def test_expand_derivatives (self):
		self.assertEqual (str (expand_derivatives (p ('\\deriv(z^2)'))), '[2 z *]')
		self.assertEqual (str (expand_derivatives (p ('\\deriv(z^2)+1'))), '[2 z * 1 +]')
		self.assertEqual (str (expand_derivatives (p ('\\deriv(\\deriv(z^3))'))), '[2 z * 3 *]')
		self.assertEqual (str (expand_derivatives (p ('z*\\deriv(\\sin(z))'))), '[z z cos *]')
		self.assertEqual (expand_derivatives (p ('z+1')), p ('z+1'))
		self.assertEqual (d ('\\deriv(z^3)'), '[2 z * 3 *]')
		self.assertEqual (evaluate (expand_derivatives (p ('\\deriv(z^2)')), 3), 6)
		self.assertTrue (expand_derivatives (parse_infix ('\\deriv(z)')).postfix)

	def test_simplified (self):
		for s in ('z^2', 'z^z', '\\sin(z)*\\cos(z)', '(z^2+1)/(z-1)', '\\exp(\\sin(z^2))', '3*z^4-2*z+7', 'z*\\log(z)', '2^z*z', '\\tan(z)^3'):
			self._check_simplified (differentiate (p (s)))

	def test_numeric (self):
		for s in ('z^2', '\\sin(z)', 'z*z', 'z/(2+i)', 'z/\\sin(z)', 'z^z', '2^z', 'e^z', '-z^3+2*z-1', '[1,2]*z^3', '1/z',
				'\\exp(z)', '\\log(z)', '\\cos(z)', '\\tan(z)', '\\sec(z)', '\\csc(z)', '\\cot(z)',
				'\\acos(z)', '\\asin(z)', '\\atan(z)', '\\cosh(z)', '\\sinh(z)', '\\tanh(z)', '\\acosh(z)', '\\asinh(z)', '\\atanh(z)',
				'\\sin(z)*\\cos(z)', '\\sin(z)/(z+3)', '(z^2+1)^(z/2)', '\\exp(\\sin(z^2))', '\\log(z^2+1)*\\atan(z)',
				'1/(1+\\exp(-z))', '\\tan(2*z)^3', '\\acos(z/2)+\\asinh(3*z)', '\\sec(z)*\\csc(z)-\\cot(z^2)', '-\\cos(z)*(-z)'):
			self._check_numeric (s)

	def test_second_derivative (self):
		for s in ('z^4', '\\sin(z)*z', '\\exp(z^2)', 'z^z'):
			x   = p (s)
			d2  = differentiate (differentiate (x))
			d2x = expand_derivatives (p (f'\\deriv(\\deriv({s}))'))

			for z in _PTS:
				self.assertLess (abs (evaluate (d2, z) - evaluate (d2x, z)), 1e-9 * max (1, abs (evaluate (d2, z))))

	def test_sympy (self):
		for s in ('\\sin(z)*\\cos(z)', 'z^3-2*z', '\\exp(z^2)', '\\log(z)*z', 'z^z', '\\tan(z)', '\\atan(z)/z', '\\sinh(z)^2', '(z+1)/(z-2)'):
			x   = p (s)
			dx  = differentiate (x)
			ref = sp.diff (expr2spt (x), Z)

			for z in _PTS:
				dv = evaluate (dx, z)
				rv = complex (ref.subs (Z, z).evalf ())

				self.assertLess (abs (dv - rv), 1e-9 * max (1, abs (rv)), f'd/dz {s} at {z}: {dx} vs {ref}')

	def test_max_depth (self):
		nest  = lambda n: p ('\\sin(' * n + 'z' + ')' * n)
		depth = zdiff.get_max_depth ()

		self.assertEqual (depth, 256)
		self.assertRaises (DifferentiationError, differentiate, nest (300))

		self.assertEqual (len (differentiate (nest (50))), 2 + sum (k + 2 for k in range (2, 51)))

		try:
			zdiff.set_max_depth (5)

			self.assertEqual (d ('\\sin(\\sin(\\sin(z)))'), '[z cos z sin cos * z sin sin cos *]')
			self.assertRaises (DifferentiationError, differentiate, nest (10))

		finally:
			zdiff.set_max_depth (depth)

		self.assertEqual (zdiff.get_max_depth (), 256)
		self.assertRaises (ValueError, zdiff.set_max_depth, 0)
		self.assertEqual (zdiff.get_max_depth (), 256)

	def test_long_chains (self):
		self.assertEqual (evaluate (differentiate (p ('+'.join (['z'] * 1000)))), 1000)
		self.assertEqual (evaluate (differentiate (p ('-'.join (['z'] * 1000)))), -998)
		self.assertEqual (evaluate (differentiate (p ('*'.join (['z'] * 300))), 1), 300)
		self.assertEqual (evaluate (differentiate (p ('z*(' * 499 + 'z' + ')' * 499)), 1), 500)

		dv = evaluate (differentiate (p ('+'.join (f'{k}*z^{k}' for k in range (1, 300)))), 0.5)
		rv = sum (k * k * 0.5 ** (k - 1) for k in range (1, 300))

		self.assertLess (abs (dv - rv), 1e-9 * abs (rv))

		try:
			zdiff.set_max_depth (5)

			self.assertEqual (evaluate (differentiate (p ('+'.join (['\\sin(z)'] * 500))), 0), 500)

		finally:
			zdiff.set_max_depth (256)

if __name__ == '__main__':
	unittest.main ()
