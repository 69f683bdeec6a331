# Numeric evaluation of postfix expressions at a value of z.

import zops
from zexpr import to_postfix

class EvaluationError (ArithmeticError): pass

def _pop (stack, tok):
	if not stack:
		raise EvaluationError (f'missing operand for {str (tok)!r}')

	return stack.pop ()

def evaluate (expr, z = 0):
	expr  = to_postfix (expr)
	z     = complex (z)
	stack = []

	for tok in expr:
		if tok.is_const:
			stack.append (tok.val)

		elif tok.is_var:
			stack.append (z)

		elif tok.is_func:
			func = zops.func (tok.op)

			if func is None:
				raise EvaluationError (f'cannot evaluate {str (tok)!r}, expand derivatives first')

			stack.append (complex (func (_pop (stack, tok))))

		elif tok.is_binop:
			rhs = _pop (stack, tok)
			lhs = _pop (stack, tok)

			stack.append (complex (zops.func (tok.op) (lhs, rhs)))

		else:
			raise EvaluationError (f'unexpected token {str (tok)!r} in postfix expression')

	if len (stack) != 1:
		raise EvaluationError (f'postfix expression leaves {len (stack)} values')

	return stack [0]
