import numpy as np

from mosse_track.mosse_filter.mosse import BoundingBox


class GaussianSpot:
	"""Bright gaussian blob moving with constant axial speed."""

	def __init__(self, frame_width, frame_height, sigma, center, speed=(0, 0), amplitude=200, box_size=32, border=0):
		self.frame_width, self.frame_height = frame_width, frame_height
		self.sigma = sigma
		self.amplitude = amplitude
		self.box_size = int(box_size)
		self.borders = [[border, border], [self.frame_width - border, self.frame_height - border]]
		self.center = [center[0], center[1]]
		self.axial_speeds = [speed[0], speed[1]]

	def will_bound(self, axis: int):
		next_coord = self.center[axis] + self.axial_speeds[axis]
		return not self.borders[0][axis] <= next_coord < self.borders[1][axis]

	def calculate_next_position(self):
		for i, _ in enumerate(self.center):
			if self.will_bound(axis=i):
				self.axial_speeds[i] *= -1
			self.center[i] = self.center[i] + self.axial_speeds[i]

	def draw_rectangle(self, frame):
		cx, cy = self.center
		xx, yy = np.meshgrid(np.arange(self.frame_width), np.arange(self.frame_height))
		spot = self.amplitude * np.exp(-(np.square(xx - cx) + np.square(yy - cy)) / (2 * self.sigma ** 2))
		if frame.ndim == 3:
			spot = spot[..., None]
		frame += spot
		return frame

	def get_box(self):
		cx, cy = [int(round(c)) for c in self.center]
		size = self.box_size
		return BoundingBox(cx - size // 2, cy - size // 2, size, size)
