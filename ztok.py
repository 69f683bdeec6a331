# Tokens of a math expression in the complex variable z, tuple based.
#
# ('@',)             - the variable z
# ('#', complex)     - constant value, the only token with a payload
# ('+',) ... ('^',)  - binary operations: '+', '-', '*', '/', '^'
# ('sin',) ...       - unary functions by name: 'neg', 're', 'im', 'abs', 'arg', 'conj', 'exp', 'log', trig / hyperbolic families, 'deriv'
# ('(',), (')',)     - open and close brackets, '{' and '}' are read as these

import zops

#...............................................................................................
class Tok (tuple):
	is_var    = False
	is_const  = False
	is_binop  = False
	is_func   = False
	is_brack  = False
	is_open   = False
	is_close  = False

	_KIND2CLS = {}

	def __new__ (cls, op, *args):
		if op == '@':
			cls = Tok_Var
		elif op == '#':
			cls = Tok_Const

		else:
			try:
				cls = Tok._KIND2CLS [zops.kind (op)]
			except KeyError:
				raise ValueError (f'unknown operation {op!r}') from None

		return cls._new (op, *args)

	@classmethod
	def _new (cls, op):
		return tuple.__new__ (cls, (op,))

	def __getnewargs__ (self): # for copy and pickle
		return tuple (self)

	def __repr__ (self):
		return f'Tok{tuple.__repr__ (self)}'

	def __str__ (self):
		return self.name

	name = property (lambda self: zops.OPS [self.op].name)
	prec = property (lambda self: zops.prec (self.op))
	op   = property (lambda self: self [0])

class Tok_Var (Tok):
	is_var = True
	name   = 'z'
	prec   = None

class Tok_Const (Tok):
	is_const = True
	prec     = None

	@classmethod
	def _new (cls, op, val):
		return tuple.__new__ (cls, ('#', complex (val)))

	val  = property (lambda self: self [1])
	name = property (lambda self: const2text (self [1]))

class Tok_BinOp (Tok):
	is_binop = True

class Tok_Func (Tok):
	is_func = True

class Tok_Brack (Tok):
	is_brack = True
	is_open  = property (lambda self: self [0] == '(')
	is_close = property (lambda self: self [0] == ')')

Tok._KIND2CLS.update ({zops.BINOP: Tok_BinOp, zops.FUNC: Tok_Func, zops.BRACK: Tok_Brack})

#...............................................................................................
def _real2text (x):
	if x == int (x) and abs (x) < 1e15:
		return str (int (x))

	return repr (x)

def const2text (val): # display text of a constant, written so that the tokenizer reads it back as the same constant if possible
	val = complex (val)
	re  = val.real
	im  = val.imag

	if re != re or im != im or abs (re) == float ('inf') or abs (im) == float ('inf'):
		return f'[{re!r},{im!r}]'

	if not im and re >= 0:
		text = _real2text (re)

		if 'e' not in text:
			return text

	elif not re and im > 0:
		text = _real2text (im)

		if 'e' not in text:
			return f'{text}i'

	return f'[{_real2text (re)},{_real2text (im)}]'

Tok.Var    = Tok ('@')
Tok.Zero   = Tok ('#', 0)
Tok.One    = Tok ('#', 1)
Tok.NegOne = Tok ('#', -1)
