''' 2D discrete Fourier transform by multiplication with a precomputed basis.

 The tracking window never changes size, so the basis is computed once per
 track and every transform afterwards is two dense matrix products:

   X = F_H . x . F_W                      (forward)
   x = conj(F_H) . X . conj(F_W) / (H W)  (inverse)

 F_H and F_W are the row and column factors of the (H*W) x (H*W) basis
 F_H (x) F_W, which is never materialised.
'''
from collections import namedtuple

import numpy as np

from mosse_track.mosse_filter.complex_ops import ComplexPlane, as_complex, complex_matmul, conjugate, scale
from mosse_track.mosse_filter.errors import ShapeMismatch


FourierMatrix = namedtuple('FourierMatrix', 'shape rows cols')


def _basis(n):
	k = np.arange(n)
	angle = -2 * np.pi * np.outer(k, k) / n
	return ComplexPlane(np.cos(angle), np.sin(angle))


def calculate_fourier_matrix(shape):
	height, width = shape
	if height <= 0 or width <= 0:
		raise ShapeMismatch("Fourier basis needs a positive shape, got {}".format(shape))
	return FourierMatrix((height, width), _basis(height), _basis(width))


def _check(x, fourier_matrix):
	if tuple(x.shape) != fourier_matrix.shape:
		raise ShapeMismatch("Input {} does not match basis {}".format(tuple(x.shape), fourier_matrix.shape))


def dft(x, fourier_matrix):
	"""
		Forward transform of a real array or a ComplexPlane.

		:rtype: ComplexPlane
	"""
	x = as_complex(x)
	_check(x, fourier_matrix)
	return complex_matmul(complex_matmul(fourier_matrix.rows, x), fourier_matrix.cols)


def idft(x, fourier_matrix):
	"""
		Inverse transform, exact inverse of dft() up to rounding.

		:rtype: ComplexPlane
	"""
	x = as_complex(x)
	_check(x, fourier_matrix)
	height, width = fourier_matrix.shape
	out = complex_matmul(complex_matmul(conjugate(fourier_matrix.rows), x), conjugate(fourier_matrix.cols))
	return scale(out, 1.0 / (height * width))
