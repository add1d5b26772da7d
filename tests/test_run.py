import json

import pandas as pd
import pytest

from mosse_track.run import HEADER, main, track_frames, tracker_args
from mosse_track.sample_generator.CustomConfig import CustomConfig

pytestmark = pytest.mark.filterwarnings("ignore::mosse_track.mosse_filter.errors.NumericalDegeneracy")

SPOT_SCENE = {
	"tracker": {"sigma": 2.0},
	"video": {"width": 128, "height": 96, "duration": 0.2, "bg_color": 40},
	"objects": [{"kind": "spot", "sigma": 1.5, "start": [48, 48], "speed": [2, 0], "amplitude": 200, "box": 32}],
}


@pytest.fixture
def scene_config(tmp_path):
	path = tmp_path / "config.json"
	path.write_text(json.dumps(SPOT_SCENE))
	return str(path)


def no_overrides(**kwargs):
	args = {"sigma": None, "lr": None, "num_pretrain": None, "rotate": False}
	args.update(kwargs)
	return args


def test_track_frames(spot_frames):
	results = track_frames(spot_frames(5), (32, 32, 32, 32), sigma=2.0)
	assert isinstance(results, pd.DataFrame)
	assert list(results.columns) == HEADER
	assert list(results["frame"]) == [0, 1, 2, 3, 4]
	assert (results["xmin"] == 32).all() and (results["width"] == 32).all()
	assert (results["frame_time"] >= 0).all()


def test_track_frames_needs_frames():
	with pytest.raises(ValueError):
		track_frames([], (0, 0, 10, 10))


def test_tracker_args_from_config():
	params = tracker_args(CustomConfig.defaults(), no_overrides())
	assert params == {"sigma": 2.0, "learning_rate": 0.125, "num_pretrain": 0, "rotate": False}


def test_tracker_args_flags_win():
	params = tracker_args(CustomConfig.defaults(), no_overrides(sigma=3.0, lr=0.5, num_pretrain=2, rotate=True))
	assert params == {"sigma": 3.0, "learning_rate": 0.5, "num_pretrain": 2, "rotate": True}


def test_main_tracks_generated_scene(tmp_path, scene_config):
	output = tmp_path / "track.csv"
	plot = tmp_path / "track.png"
	assert main(["-c", scene_config, "-o", str(output), "-p", str(plot)]) == 0

	results = pd.read_csv(output)
	assert list(results.columns) == HEADER
	assert len(results) == 6
	assert results["xmin"].iloc[0] == 32
	assert results["xmin"].is_monotonic_increasing
	assert plot.exists()


def test_main_tracks_default_scene(tmp_path):
	output = tmp_path / "track.csv"
	assert main(["-o", str(output)]) == 0

	results = pd.read_csv(output)
	assert len(results) == 60
	steps = results["xmin"].diff().dropna()
	assert steps.between(1, 3).all()
	# the spot starts centred at x=80 and moves 2 px per frame
	assert abs(results["xmin"].iloc[-1] - (80 + 2 * 59 - 16)) <= 1
	assert (results["ymin"] - 104).abs().max() <= 1


def test_main_bad_box(tmp_path, scene_config):
	output = tmp_path / "track.csv"
	assert main(["-c", scene_config, "-o", str(output), "-b", "120", "10", "32", "32"]) == 1
	assert not output.exists()


def test_main_missing_video(tmp_path):
	output = tmp_path / "track.csv"
	assert main(["-i", str(tmp_path / "missing.mp4"), "-b", "0", "0", "8", "8", "-o", str(output)]) == 1
	assert not output.exists()
