import numpy as np
import pytest

from mosse_track.utils.cv_utils import crop, pre_process, random_warp, to_grayscale, window_func_2d


def test_grayscale_passthrough():
	frame = np.arange(12, dtype=np.uint8).reshape(3, 4)
	gray = to_grayscale(frame)
	assert gray.dtype == np.float64
	np.testing.assert_array_equal(gray, frame)


def test_grayscale_from_bgr():
	frame = np.zeros((4, 4, 3), dtype=np.uint8)
	frame[..., 0] = 255  # pure blue
	gray = to_grayscale(frame)
	assert gray.shape == (4, 4)
	assert gray[0, 0] == pytest.approx(0.114 * 255, abs=1)


def test_grayscale_from_bgra_float():
	frame = np.full((2, 3, 4), 100.0)
	np.testing.assert_allclose(to_grayscale(frame), np.full((2, 3), 100.0), atol=1e-3)


def test_grayscale_rejects_odd_shapes():
	with pytest.raises(ValueError):
		to_grayscale(np.zeros((2, 2, 2)))


def test_window_tapers_to_zero():
	win = window_func_2d(8, 10)
	assert win.shape == (8, 10)
	assert win[0].max() == 0.0 and win[:, -1].max() == 0.0
	assert win.max() <= 1.0


def test_pre_process(rng):
	img = rng.uniform(0, 255, size=(16, 24))
	out = pre_process(img)
	assert out.shape == img.shape
	np.testing.assert_array_equal(out, pre_process(img))
	assert np.abs(out[0]).max() == 0.0


def test_crop_and_resize():
	frame = np.arange(100.0).reshape(10, 10)
	np.testing.assert_array_equal(crop(frame, (2, 3, 4, 5)), frame[3:8, 2:6])
	clipped = crop(frame, (8, 0, 4, 4), shape=(4, 4))
	assert clipped.shape == (4, 4)


def test_random_warp_is_seeded():
	img = np.random.default_rng(1).uniform(0, 255, size=(20, 20))
	a = random_warp(img, np.random.default_rng(5))
	b = random_warp(img, np.random.default_rng(5))
	assert a.shape == img.shape
	np.testing.assert_array_equal(a, b)
