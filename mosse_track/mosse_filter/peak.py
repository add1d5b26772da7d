import numpy as np

eps = 1e-5


def linear_mapping(img):
	"""Rescale a surface to [0, 1]. A flat surface maps to zeros."""
	img = np.asarray(img, dtype=np.float64)
	lo, hi = img.min(), img.max()
	if hi == lo:
		return np.zeros_like(img)
	return (img - lo) / (hi - lo)


def peak_position(resp):
	"""Mean (row, col) of every cell equal to the maximum."""
	max_pos = np.where(resp == resp.max())
	return np.mean(max_pos[0]), np.mean(max_pos[1])


def find_displacement(resp):
	"""
		Signed integer offset of the response peak from the surface centre.
		Positive values mean the target moved down / right.
	"""
	h, w = resp.shape
	row, col = peak_position(resp)
	dy = int(np.round(row - h / 2))
	dx = int(np.round(col - w / 2))
	return dy, dx


def peak_to_sidelobe_ratio(resp, exclude=5):
	my, mx = np.unravel_index(np.argmax(resp), resp.shape)
	mval = resp[my, mx]
	side = np.ones(resp.shape, dtype=bool)
	side[max(my - exclude, 0):my + exclude + 1, max(mx - exclude, 0):mx + exclude + 1] = False
	if not side.any():
		return 0.0
	smean, sstd = resp[side].mean(), resp[side].std()
	return float((mval - smean) / (sstd + eps))
