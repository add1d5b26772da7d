import numpy as np

SIGMA = 100


def gauss(shape, center, sigma=SIGMA):
	"""Get the ground-truth gaussian response over the whole frame."""
	height, width = shape
	center_y, center_x = center
	# get the mesh grid...
	xx, yy = np.meshgrid(np.arange(width), np.arange(height))
	dist = (np.square(yy - center_y) + np.square(xx - center_x)) / (2 * sigma ** 2)
	return np.exp(-dist)
