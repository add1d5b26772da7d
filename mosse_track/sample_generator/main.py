#!/usr/bin/env python
# coding: utf-8

import argparse
import logging
import os
from pathlib import Path

import cv2
import numpy as np
from tqdm import tqdm

from mosse_track.sample_generator.CustomConfig import CustomConfig
from mosse_track.sample_generator.GaussianSpot import GaussianSpot
from mosse_track.sample_generator.MosaicSquare import MosaicSquare

IMG_EXT = ".png"
VID_EXT = "mp4"


def build_objects(cfg):
	_VID = cfg.video
	objects = []
	for obj in cfg.objects:
		kind = obj.get("kind", "mosaic")
		border = obj.get("border", 0)
		if kind == "mosaic":
			objects.append(MosaicSquare(_VID.width, _VID.height, obj.size, obj.start, obj.speed, obj.get("cells", 4), obj.get("colors", [220, 120]), border))
		elif kind == "spot":
			objects.append(GaussianSpot(_VID.width, _VID.height, obj.sigma, obj.start, obj.speed, obj.get("amplitude", 200), obj.get("box", 32), border))
		else:
			raise ValueError("Unknown object kind '{}'".format(kind))
	return objects


def generate_frames(cfg, objects=None):
	"""
		Yield float64 grayscale frames of the configured scene.

		Objects are drawn at their current position and moved afterwards, so
		the first frame shows every object at its start position.
	"""
	_VID = cfg.video
	if objects is None:
		objects = build_objects(cfg)
	rng = np.random.default_rng(_VID.seed)
	frames_number = int(_VID.duration * _VID.framerate)
	for _ in range(frames_number):
		img = np.zeros((_VID.height, _VID.width)) + _VID.bg_color
		for obj in objects:
			img = obj.draw_rectangle(img)
		if _VID.noise > 0:
			img += rng.normal(0, _VID.noise, img.shape)
		yield np.clip(img, 0, 255)
		for obj in objects:
			obj.calculate_next_position()


def write_frames(frames, out_dir, total=None):
	tempdir = Path(out_dir)
	# Create directory if it does not exist, else drop old frames
	if not tempdir.is_dir():
		tempdir.mkdir(parents=True)
	else:
		for f in tempdir.glob("*" + IMG_EXT):
			os.unlink(f)

	paths = []
	with tqdm(total=total) as bar:
		for number, img in enumerate(frames):
			path = tempdir / f"{number:05d}{IMG_EXT}"
			cv2.imwrite(str(path), img.astype(np.uint8))
			paths.append(path)
			bar.update(1)
	return paths


def write_video(frames, output, framerate):
	video = None
	try:
		for img in frames:
			img = cv2.cvtColor(img.astype(np.uint8), cv2.COLOR_GRAY2BGR)
			if video is None:
				height, width = img.shape[:2]
				fourcc = cv2.VideoWriter_fourcc('m', 'p', '4', 'v')
				video = cv2.VideoWriter(str(output), fourcc, framerate, (width, height))
			video.write(img)
	finally:
		if video is not None:
			video.release()
	return output


def main(argv=None):
	ap = argparse.ArgumentParser(description="Generate a synthetic tracking sequence")
	ap.add_argument("-c", "--config", default=None, help="JSON scene config")
	ap.add_argument("-o", "--out", default="../video", help="Output folder")
	ap.add_argument("--video", action="store_true", help="Write a video file instead of images")
	args = ap.parse_args(argv)

	cfg = CustomConfig.load_json(args.config) if args.config else CustomConfig.defaults()
	_VID = cfg.video
	frames_number = int(_VID.duration * _VID.framerate)
	logging.info("Generating %d frames...", frames_number)

	out_dir = Path(args.out) / _VID.dir_name
	if args.video:
		out_dir.mkdir(parents=True, exist_ok=True)
		output = write_video(tqdm(generate_frames(cfg), total=frames_number), out_dir / f"{_VID.dir_name}.{VID_EXT}", _VID.framerate)
		logging.info("Output video: %s", output)
	else:
		write_frames(generate_frames(cfg), out_dir, total=frames_number)
		logging.info("Output frames: %s", out_dir)
	return out_dir


if __name__ == "__main__":
	logging.basicConfig(level=logging.INFO)
	main()
