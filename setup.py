#!/usr/bin/env python3

import setuptools

setuptools.setup (
  name                          = "zcalc",
  version                       = "0.1.0",
  license                       = 'BSD',
  keywords                      = "Math complex postfix RPN differentiation",
  description                   = "Parse, evaluate and symbolically differentiate expressions in one complex variable",
  long_description              = "zcalc reads a textual math expression in the complex variable z, converts it to postfix (reverse Polish) order, "
    "evaluates it numerically at a given z and differentiates it symbolically using the chain, product, quotient and power rules "
    "with removal of trivial zero and one terms. Expressions can be converted to and from SymPy.",
  long_description_content_type = "text/plain",
  py_modules                    = ['zops', 'ztok', 'zlex', 'zexpr', 'zeval', 'zdiff', 'zsym', 'zcalc'],
  entry_points                  = {'console_scripts': ['zcalc = zcalc:main']},
  classifiers                   = [
    'Intended Audience :: Education',
    'Intended Audience :: Science/Research',
    'License :: OSI Approved :: BSD License',
    'Operating System :: OS Independent',
    'Programming Language :: Python',
    'Programming Language :: Python :: 3',
    'Programming Language :: Python :: 3 :: Only',
    'Topic :: Scientific/Engineering',
    'Topic :: Scientific/Engineering :: Mathematics',
  ],
  install_requires              = ['sympy>=1.4'],
  python_requires               = '>=3.6',
)
