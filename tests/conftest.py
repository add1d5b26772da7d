import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from mosse_track.sample_generator.GaussianSpot import GaussianSpot


@pytest.fixture
def rng():
	return np.random.default_rng(0)


@pytest.fixture
def spot_frames():
	"""Factory: frames of a gaussian spot on a flat background, moving at speed per frame."""

	def make(n, width=96, height=96, center=(48, 48), speed=(0, 0), sigma=1.5, bg_color=40.0):
		spot = GaussianSpot(width, height, sigma, center, speed, amplitude=200)
		frames = []
		for _ in range(n):
			frames.append(spot.draw_rectangle(np.full((height, width), bg_color)))
			spot.calculate_next_position()
		return frames

	return make


@pytest.fixture
def square_frame():
	"""Uniform bright square at (50, 50, 20, 20) on a black 120x120 frame."""
	frame = np.zeros((120, 120))
	frame[50:70, 50:70] = 255
	return frame
