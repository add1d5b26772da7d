class TrackerError(ValueError):
	"""Base class for tracker precondition violations."""


class ShapeMismatch(TrackerError):
	"""Raised when the operands of an array operation disagree in shape."""


class InvalidBoundingBox(TrackerError):
	"""Raised for boxes with non-positive size or lying outside the frame."""


class NumericalDegeneracy(RuntimeWarning):
	"""Emitted when a complex quotient has a numerically zero denominator."""
