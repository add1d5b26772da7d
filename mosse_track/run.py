import argparse
import logging
import sys
import timeit

import cv2
import pandas as pd

from mosse_track.graphs import plot_track
from mosse_track.mosse_filter.errors import TrackerError
from mosse_track.mosse_filter.mosse import MosseTracker
from mosse_track.sample_generator.CustomConfig import CustomConfig
from mosse_track.sample_generator.main import build_objects, generate_frames

HEADER = ["frame", "frame_time", "frame_rate", "xmin", "ymin", "width", "height", "PSR"]


def read_video(source):
	# Digits select a camera, anything else is a file
	cap = cv2.VideoCapture(int(source) if str(source).isdigit() else source)
	if not cap.isOpened():
		raise IOError("Could not open video {}".format(source))
	try:
		while True:
			ok, frame = cap.read()
			if not ok:
				break
			yield frame
	finally:
		cap.release()


def frame_row(number, frame_time, box, psr):
	frame_rate = 1.0 / frame_time if frame_time > 0 else 0.0
	return [number, frame_time, frame_rate, *box, psr]


def track_frames(frames, rect, **tracker_args):
	"""
		Track rect through frames, the first frame initializes the filter.

		:rtype: pd.DataFrame with one row per frame
	"""
	frames = iter(frames)
	first = next(frames, None)
	if first is None:
		raise ValueError("No frames to track")

	start_time = timeit.default_timer()
	tracker = MosseTracker(first, rect, **tracker_args)
	rows = [frame_row(0, timeit.default_timer() - start_time, tracker.box, tracker.psr)]

	for number, frame in enumerate(frames, start=1):
		start_time = timeit.default_timer()
		box = tracker.next(frame)
		rows.append(frame_row(number, timeit.default_timer() - start_time, box, tracker.psr))
	return pd.DataFrame(rows, columns=HEADER)


def tracker_args(cfg, args):
	"""Tracker keyword arguments: config values overridden by command-line flags."""
	params = {
		"sigma": cfg.tracker.sigma,
		"learning_rate": cfg.tracker.lr,
		"num_pretrain": cfg.tracker.num_pretrain,
		"rotate": cfg.tracker.rotate,
	}
	if args["sigma"] is not None:
		params["sigma"] = args["sigma"]
	if args["lr"] is not None:
		params["learning_rate"] = args["lr"]
	if args["num_pretrain"] is not None:
		params["num_pretrain"] = args["num_pretrain"]
	if args["rotate"]:
		params["rotate"] = True
	return params


def main(argv=None):
	ap = argparse.ArgumentParser(description="Track a single object with a MOSSE filter")
	ap.add_argument("-i", "--video", default=None, help="Video file or camera index, a generated scene if omitted")
	ap.add_argument("-b", "--box", nargs=4, type=int, metavar=("X", "Y", "W", "H"), help="Initial bounding box")
	ap.add_argument("-c", "--config", default=None, help="JSON config")
	ap.add_argument("-o", "--output", default="track_mosse.csv", help="CSV with per-frame results")
	ap.add_argument("-p", "--plot", default=None, help="Save a plot of the results to this file")
	ap.add_argument('--lr', type=float, default=None, help='the learning rate')
	ap.add_argument('--sigma', type=float, default=None, help='the sigma')
	ap.add_argument('--num_pretrain', type=int, default=None, help='the number of pretrain')
	ap.add_argument('--rotate', action='store_true', help='if rotate frame during pre-training.')
	ap.add_argument("-v", "--verbose", action="store_true", help="Log every frame")
	args = vars(ap.parse_args(argv))

	logging.basicConfig(level=logging.DEBUG if args["verbose"] else logging.INFO)
	cfg = CustomConfig.load_json(args["config"]) if args["config"] else CustomConfig.defaults()

	if args["video"] is not None:
		if args["box"] is None:
			ap.error("--box is required with --video")
		frames = read_video(args["video"])
		rect = args["box"]
	else:
		objects = build_objects(cfg)
		if not objects:
			ap.error("The config describes no objects to track")
		frames = generate_frames(cfg, objects)
		rect = args["box"] if args["box"] is not None else objects[0].get_box()

	try:
		results = track_frames(frames, rect, **tracker_args(cfg, args))
	except (TrackerError, IOError, ValueError) as err:
		logging.error("Tracking failed: %s", err)
		return 1

	results.to_csv(args["output"], index=False)
	logging.info("Tracked %d frames, results in %s", len(results), args["output"])
	if args["plot"]:
		plot_track(results, args["plot"])
	return 0


if __name__ == "__main__":
	sys.exit(main())
