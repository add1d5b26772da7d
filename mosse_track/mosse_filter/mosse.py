''' MOSSE tracking

 Correlation-filter tracker described in [1]. The filter is kept as a
 numerator / denominator pair (Ai, Bi) in the frequency domain and blended
 with every new observation by an exponential moving average.

 [1] David S. Bolme et al. "Visual Object Tracking using Adaptive Correlation Filters"
     http://www.cs.colostate.edu/~draper/papers/bolme_cvpr10.pdf
'''
import logging
from collections import namedtuple

import numpy as np

from mosse_track.mosse_filter.complex_ops import complex_add, complex_div, complex_mul, conjugate, scale
from mosse_track.mosse_filter.dft import calculate_fourier_matrix, dft, idft
from mosse_track.mosse_filter.errors import InvalidBoundingBox, ShapeMismatch
from mosse_track.mosse_filter.gauss import SIGMA, gauss
from mosse_track.mosse_filter.peak import find_displacement, linear_mapping, peak_to_sidelobe_ratio
from mosse_track.utils.cv_utils import crop, pre_process, random_warp, to_grayscale

LEARNING_RATE = 0.125


def clamp(x, lower, upper):
	return max(lower, min(x, upper))


class BoundingBox(namedtuple('BoundingBox', 'xmin ymin width height')):
	__slots__ = ()

	@classmethod
	def from_rect(cls, rect):
		if isinstance(rect, cls):
			return rect
		xmin, ymin, width, height = rect
		return cls(int(xmin), int(ymin), int(width), int(height))

	@property
	def center(self):
		return self.ymin + self.height / 2, self.xmin + self.width / 2

	def check_inside(self, frame_shape):
		frame_height, frame_width = frame_shape
		if self.width <= 0 or self.height <= 0:
			raise InvalidBoundingBox("Box {} has non-positive size".format(tuple(self)))
		if self.xmin < 0 or self.ymin < 0 or self.xmin + self.width > frame_width or self.ymin + self.height > frame_height:
			raise InvalidBoundingBox("Box {} lies outside the {}x{} frame".format(tuple(self), frame_width, frame_height))
		return self


def shift_box(box, dy, dx, frame_shape, template_shape):
	"""
		Move the box by (dy, dx) and clip it to the frame.

		Near the border the returned box can be smaller than the template; it
		regains the template size once it moves back inside.
	"""
	frame_height, frame_width = frame_shape
	height, width = template_shape
	xmin = clamp(box.xmin + dx, 0, frame_width)
	ymin = clamp(box.ymin + dy, 0, frame_height)
	new_box = BoundingBox(xmin, ymin, min(width, frame_width - xmin), min(height, frame_height - ymin))
	if new_box.width <= 0 or new_box.height <= 0:
		raise InvalidBoundingBox("Box collapsed to {} at the frame border".format(tuple(new_box)))
	return new_box


class MosseTracker:
	"""
		Single-target tracker.

		Track-lifetime constants: fourier_matrix, gauss_fourier, template_shape,
		frame_shape, sigma, learning_rate.
		Per-frame state: box, Ai, Bi (plus last_response and psr for callers
		that want a confidence measure).
	"""

	def __init__(self, frame, rect, sigma=SIGMA, learning_rate=LEARNING_RATE, num_pretrain=0, rotate=False, preprocess=pre_process, rng=None):
		self.sigma = sigma
		self.learning_rate = learning_rate
		self.preprocess = preprocess

		frame_gray = to_grayscale(frame)
		self.frame_shape = frame_gray.shape
		box = BoundingBox.from_rect(rect).check_inside(self.frame_shape)
		self.template_shape = (box.height, box.width)

		fi = crop(frame_gray, box)
		g = crop(self._get_gauss_response(box), box)

		# The window is always the same size so the basis is calculated once.
		self.fourier_matrix = calculate_fourier_matrix(self.template_shape)
		self.gauss_fourier = dft(g, self.fourier_matrix)

		Ai, Bi = self._pre_training(fi, num_pretrain, rotate, rng)
		self.Ai = scale(Ai, learning_rate)
		self.Bi = scale(Bi, learning_rate)
		self.box = box
		self.last_response = None
		self.psr = 0.0
		logging.info("MOSSE initialized on %s, window %dx%d", tuple(box), box.width, box.height)

	def _get_gauss_response(self, box):
		"""Full-frame gaussian centred on the box, so the crop keeps its offset."""
		return gauss(self.frame_shape, box.center, self.sigma)

	def _pre_training(self, fi, num_pretrain, rotate, rng):
		"""
			Initial numerator and denominator.

			Ai comes from the preprocessed crop, Bi from the raw one; the extra
			pre-training terms (if any) use the preprocessed crop for both.
		"""
		G = self.gauss_fourier
		F_proc = dft(self.preprocess(fi), self.fourier_matrix)
		F_raw = dft(fi, self.fourier_matrix)
		Ai = complex_mul(G, conjugate(F_proc))
		Bi = complex_mul(F_raw, conjugate(F_raw))
		if num_pretrain > 0 and rotate and rng is None:
			rng = np.random.default_rng()
		for _ in range(num_pretrain):
			if rotate:
				F = dft(self.preprocess(random_warp(fi, rng)), self.fourier_matrix)
			else:
				F = F_proc
			Ai = complex_add(Ai, complex_mul(G, conjugate(F)))
			Bi = complex_add(Bi, complex_mul(F, conjugate(F)))
		return Ai, Bi

	def _observe(self, frame_gray, box):
		return dft(self.preprocess(crop(frame_gray, box, self.template_shape)), self.fourier_matrix)

	def correlate(self, Fi):
		"""Normalized response of the current filter to the spectrum Fi."""
		Hi = complex_div(self.Ai, self.Bi)
		gi = idft(complex_mul(Hi, Fi), self.fourier_matrix)
		return linear_mapping(gi.real)

	def next(self, frame):
		"""
			Locate the target in the next frame and adapt the filter to it.

			:rtype: BoundingBox
		"""
		frame_gray = to_grayscale(frame)
		if frame_gray.shape != self.frame_shape:
			raise ShapeMismatch("Frame {} differs from the first frame {}".format(frame_gray.shape, self.frame_shape))
		rate = self.learning_rate

		resp = self.correlate(self._observe(frame_gray, self.box))
		dy, dx = find_displacement(resp)
		box = shift_box(self.box, dy, dx, self.frame_shape, self.template_shape)

		# Train on the new position
		Fi = self._observe(frame_gray, box)
		Ai = complex_add(scale(complex_mul(self.gauss_fourier, conjugate(Fi)), rate), scale(self.Ai, 1 - rate))
		Bi = complex_add(scale(complex_mul(Fi, conjugate(Fi)), rate), scale(self.Bi, 1 - rate))

		self.box, self.Ai, self.Bi = box, Ai, Bi
		self.last_response = resp
		self.psr = peak_to_sidelobe_ratio(resp)
		logging.debug("MOSSE shift dy=%d dx=%d -> %s (PSR %.2f)", dy, dx, tuple(box), self.psr)
		return box


def init(frame, rect, **kwargs):
	"""Start tracking rect = (xmin, ymin, width, height) on frame."""
	return MosseTracker(frame, rect, **kwargs)
