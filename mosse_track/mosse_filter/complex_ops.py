''' Elementwise complex arithmetic over paired real/imaginary planes.

 A spectrum is kept as two real arrays instead of one complex array, the same
 layout cv.dft(..., flags=cv.DFT_COMPLEX_OUTPUT) produces as two channels.
'''
import warnings
from collections import namedtuple

import numpy as np

from mosse_track.mosse_filter.errors import NumericalDegeneracy, ShapeMismatch

eps = 1e-5


class ComplexPlane(namedtuple('ComplexPlane', 'real imag')):
	__slots__ = ()

	@property
	def shape(self):
		return self.real.shape


def as_complex(x):
	if isinstance(x, ComplexPlane):
		return x
	x = np.asarray(x, dtype=np.float64)
	return ComplexPlane(x, np.zeros_like(x))


def _check_shapes(a, b):
	if a.shape != b.shape:
		raise ShapeMismatch("Operand shapes differ: {} != {}".format(a.shape, b.shape))


def complex_mul(a, b):
	_check_shapes(a, b)
	ar, ai = a
	br, bi = b
	return ComplexPlane(ar * br - ai * bi, ar * bi + ai * br)


def complex_div(a, b, eps=eps):
	"""
		Elementwise a / b.

		Cells where |b|^2 <= eps are treated as numerically zero: their
		quotient is 0 and a NumericalDegeneracy warning is emitted.
	"""
	_check_shapes(a, b)
	ar, ai = a
	br, bi = b
	denominator = br * br + bi * bi
	degenerate = denominator <= eps
	if degenerate.any():
		warnings.warn("{} of {} cells have a zero denominator".format(int(degenerate.sum()), degenerate.size), NumericalDegeneracy, stacklevel=2)
	safe = np.where(degenerate, 1.0, denominator)
	real = np.where(degenerate, 0.0, (ar * br + ai * bi) / safe)
	imag = np.where(degenerate, 0.0, (ai * br - ar * bi) / safe)
	return ComplexPlane(real, imag)


def conjugate(a):
	return ComplexPlane(a.real, -a.imag)


def scale(a, factor):
	return ComplexPlane(a.real * factor, a.imag * factor)


def complex_add(a, b):
	_check_shapes(a, b)
	return ComplexPlane(a.real + b.real, a.imag + b.imag)


def complex_matmul(a, b):
	# Matrix product, not elementwise: inner dimensions must agree
	if a.shape[-1] != b.shape[0]:
		raise ShapeMismatch("Cannot multiply {} by {}".format(a.shape, b.shape))
	ar, ai = a
	br, bi = b
	return ComplexPlane(ar @ br - ai @ bi, ar @ bi + ai @ br)
