import numpy as np

from mosse_track.mosse_filter.mosse import BoundingBox


class MosaicSquare:
	"""
		Square filled with an n x n checker pattern, moving with constant axial
		speed and bouncing off the frame borders. cells=1 gives a plain square.
	"""

	def __init__(self, frame_width, frame_height, size, start, speed=(0, 0), cells=4, colors=(220, 120), border=0):
		self.frame_width, self.frame_height = frame_width, frame_height
		self.size = int(size)
		self.borders = [[border, border], [self.frame_width - border, self.frame_height - border]]
		self.start_coords = [start[0], start[1]]
		self.axial_speeds = [speed[0], speed[1]]
		self.cells = max(int(cells), 1)
		self.color_primary, self.color_secondary = colors

	def will_bound(self, axis: int):
		next_coord = self.start_coords[axis] + self.axial_speeds[axis]
		bound_axis_high = next_coord + self.size > self.borders[1][axis]
		bound_axis_low = next_coord < self.borders[0][axis]
		return bound_axis_low or bound_axis_high

	# start_coords change once per frame
	def calculate_next_position(self):
		for i, _ in enumerate(self.start_coords):
			if self.will_bound(axis=i):
				self.axial_speeds[i] *= -1
			self.start_coords[i] = self.start_coords[i] + self.axial_speeds[i]

	def draw_rectangle(self, frame):
		x0, y0 = [int(round(c)) for c in self.start_coords]
		X = np.linspace(x0, x0 + self.size, self.cells + 1, dtype=int)
		Y = np.linspace(y0, y0 + self.size, self.cells + 1, dtype=int)

		colors = {1: self.color_primary, -1: self.color_secondary}
		idx = 1
		for i in range(self.cells):
			for j in range(self.cells):
				frame[max(Y[j], 0):max(Y[j + 1], 0), max(X[i], 0):max(X[i + 1], 0)] = colors[idx]
				idx *= -1
			if self.cells % 2 == 0:
				idx *= -1
		return frame

	def get_box(self):
		x0, y0 = [int(round(c)) for c in self.start_coords]
		return BoundingBox(x0, y0, self.size, self.size)
