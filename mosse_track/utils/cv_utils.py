import cv2
import numpy as np


def to_grayscale(frame):
    """
        Convert a frame to a single-channel float64 array.

        :param frame: HxW gray, HxWx3 BGR or HxWx4 BGRA image
        :type frame: np.ndarray

        :rtype: np.ndarray
    """
    frame = np.asarray(frame)
    if frame.ndim == 2:
        return frame.astype(np.float64)
    if frame.ndim == 3 and frame.shape[2] == 1:
        return frame[..., 0].astype(np.float64)
    if frame.ndim == 3 and frame.shape[2] in (3, 4):
        code = cv2.COLOR_BGR2GRAY if frame.shape[2] == 3 else cv2.COLOR_BGRA2GRAY
        # cvtColor has no float64 path
        if frame.dtype != np.uint8:
            frame = frame.astype(np.float32)
        return cv2.cvtColor(frame, code).astype(np.float64)
    raise ValueError("Unsupported frame shape {}".format(frame.shape))


def window_func_2d(height, width):
    win_col = np.hanning(width)
    win_row = np.hanning(height)
    mask_col, mask_row = np.meshgrid(win_col, win_row)
    return mask_col * mask_row


def pre_process(img):
    """Log-compress, normalize to zero mean / unit std and taper the edges."""
    height, width = img.shape
    img = np.log(img + 1)
    img = (img - np.mean(img)) / (np.std(img) + 1e-5)
    return img * window_func_2d(height, width)


def crop(frame, rect, shape=None):
    """
        Cut rect = (x, y, w, h) out of the frame.

        When shape = (h, w) is given and the cut is smaller (a box clipped by
        the frame border), the patch is resized to it.
    """
    x, y, w, h = [int(v) for v in rect]
    patch = frame[y:y + h, x:x + w]
    if shape is not None and patch.shape[:2] != tuple(shape):
        patch = cv2.resize(patch, (shape[1], shape[0]), interpolation=cv2.INTER_LINEAR)
    return patch


def random_warp(img, rng=None, coef=0.2):
    """Small random rotation plus affine jitter about the patch centre."""
    rng = np.random.default_rng() if rng is None else rng
    h, w = img.shape[:2]
    T = np.zeros((2, 3))
    ang = (rng.random() - 0.5) * coef
    c, s = np.cos(ang), np.sin(ang)
    T[:2, :2] = [[c, -s], [s, c]]
    T[:2, :2] += (rng.random((2, 2)) - 0.5) * coef
    c = np.array([w / 2, h / 2])
    T[:, 2] = c - np.dot(T[:2, :2], c)
    return cv2.warpAffine(np.float32(img), T, (w, h), borderMode=cv2.BORDER_REFLECT).astype(np.float64)
