# Expression as a sequence of tokens in infix or postfix order, infix -> postfix conversion and postfix subexpression bounds.

class Expr (list):
	def __init__ (self, toks = (), postfix = True):
		list.__init__ (self, toks)

		self.postfix = postfix

	def __repr__ (self):
		return f'Expr ({list.__repr__ (self)}, postfix = {self.postfix})'

	def __str__ (self):
		return render (self)

	def copy (self):
		return Expr (self, self.postfix)

	def sub (self, begin, end): # new expression of same order from [begin, end)
		return Expr (self [begin : end], self.postfix)

	def postfix_expr (self):
		return to_postfix (self)

#...............................................................................................
def render (expr):
	return f'[{" ".join (str (tok) for tok in expr)}]'

def to_postfix (expr): # shunting-yard
	if expr.postfix:
		return expr.copy ()

	out   = []
	stack = []

	for tok in expr:
		if tok.is_var or tok.is_const:
			out.append (tok)

		elif tok.is_func or tok.is_open:
			stack.append (tok)

		elif tok.is_binop:
			prec = tok.prec

			while stack and not stack [-1].is_open and stack [-1].prec >= prec: # >= for left associativity
				out.append (stack.pop ())

			stack.append (tok)

		elif tok.is_close:
			while stack and not stack [-1].is_open:
				out.append (stack.pop ())

			if not stack:
				raise SyntaxError ('mismatched brackets')

			stack.pop ()

			if stack and stack [-1].is_func: # f (...)
				out.append (stack.pop ())

	while stack:
		tok = stack.pop ()

		if tok.is_open:
			raise SyntaxError ('mismatched brackets')

		out.append (tok)

	return Expr (out, postfix = True)

def subexpr_start (expr, end): # start of smallest self-contained postfix subexpression ending just before end
	need  = 1
	start = end

	while need:
		start -= 1

		if start < 0:
			raise ValueError ('malformed postfix expression')

		tok = expr [start]

		if tok.is_func:
			need += 1
		elif tok.is_binop:
			need += 2
		elif not (tok.is_var or tok.is_const):
			raise ValueError (f'unexpected token {str (tok)!r} in postfix expression')

		need -= 1

	return start

def check_postfix (expr): # verify operand count invariant of postfix sequence
	count = 0

	for tok in expr:
		if tok.is_var or tok.is_const:
			count += 1

		elif tok.is_func:
			if count < 1:
				raise ValueError (f'missing operand for {str (tok)!r}')

		elif tok.is_binop:
			if count < 2:
				raise ValueError (f'missing operand for {str (tok)!r}')

			count -= 1

		else:
			raise ValueError (f'unexpected token {str (tok)!r} in postfix expression')

	if count != 1:
		raise ValueError (f'postfix expression leaves {count} values')

	return expr # convenience
