#!/usr/bin/env python3
# python 3.6+

# Command line front end: parse, convert, differentiate and evaluate expressions in z.

import getopt
import os
import sys

import zdiff
import zlex
import zsym
from zeval import evaluate

_VERSION = '0.1.0'

_HELP    = f'usage: zcalc [options] expression' '''

  -h, --help          - Show help information
  -v, --version       - Show version string
  -p, --postfix       - Print postfix form of expression
  -d, --diff          - Differentiate with respect to z, repeat for higher derivatives
  -e, --eval=VALUE    - Evaluate at z = VALUE, VALUE may be any constant expression like 1+2i or [1,2]
  -s, --sympy         - Print SymPy form of result
  --maxdepth=N        - Maximum nesting of functions for differentiation
  --debug             - Dump intermediate token sequences to stderr

Functions are written as escaped keywords, e.g. '\\sin(z)^2 + [1,2]*z', put -- before an expression
which starts with a minus sign.
'''.lstrip ()

_ZCALC_DEBUG = os.environ.get ('ZCALC_DEBUG')

def _debug (*args):
	if _ZCALC_DEBUG:
		print (*args, file = sys.stderr)

def _eval_point (value): # -e VALUE, a constant expression
	infix = zlex.parse_infix (value)

	if any (tok.is_var for tok in infix):
		raise zlex.ParseError (f'evaluation point {value!r} must not contain z', value.find ('z'))

	return evaluate (infix)

def _run (text, opts):
	ndiffs  = sum (1 for o, _ in opts if o in {'-d', '--diff'})
	value   = next ((a for o, a in opts if o in {'-e', '--eval'}), None)
	z       = None if value is None else _eval_point (value)
	infix   = zlex.parse_infix (text)
	expr    = infix.postfix_expr ()

	_debug ('z:      ', z)
	_debug ('infix:  ', infix)
	_debug ('postfix:', expr)

	if any (tok.op == 'deriv' for tok in expr):
		expr = zdiff.expand_derivatives (expr)

		_debug ('expand: ', expr)

	for i in range (ndiffs):
		expr = zdiff.differentiate (expr)

		_debug (f'diff {i + 1}: ', expr)

	if ('-p', '') in opts or ('--postfix', '') in opts or ndiffs:
		print (expr)

	if ('-s', '') in opts or ('--sympy', '') in opts:
		print (zsym.expr2spt (expr))

	if z is not None:
		print (evaluate (expr, z))

#...............................................................................................
def main (argv = None):
	global _ZCALC_DEBUG

	try:
		opts, args = getopt.gnu_getopt (sys.argv [1:] if argv is None else argv, 'hvpde:s', ['help', 'version', 'postfix', 'diff', 'eval=', 'sympy', 'maxdepth=', 'debug'])
	except getopt.GetoptError as e:
		print (f'error: {e}', file = sys.stderr)
		return 2

	if ('--help', '') in opts or ('-h', '') in opts:
		print (_HELP)
		return 0

	if ('--version', '') in opts or ('-v', '') in opts:
		print (_VERSION)
		return 0

	if ('--debug', '') in opts:
		_ZCALC_DEBUG = '1'

	if len (args) != 1:
		print (_HELP, file = sys.stderr)
		return 2

	depth    = zdiff.get_max_depth ()
	maxdepth = next ((a for o, a in opts if o == '--maxdepth'), os.environ.get ('ZCALC_MAXDEPTH'))

	try:
		if maxdepth is not None:
			try:
				zdiff.set_max_depth (int (maxdepth))
			except ValueError:
				print (f'error: invalid maximum depth {maxdepth!r}', file = sys.stderr)
				return 2

		try:
			_run (args [0], opts)

		except (SyntaxError, ArithmeticError, ValueError, RecursionError) as e: # ParseError and DifferentiationError are ValueErrors, EvaluationError is an ArithmeticError
			print (f'error: {e}', file = sys.stderr)
			return 1

	finally:
		zdiff.set_max_depth (depth)

	return 0

if __name__ == '__main__':
	sys.exit (main ())
