import numpy as np
import pandas as pd

from mosse_track.graphs import _smoothed, plot_track, show_stats
from mosse_track.run import HEADER


def results_frame(n=12):
	rows = [[i, 0.01, 100.0 + i, 10 + i, 20, 32, 32, 8.0] for i in range(n)]
	return pd.DataFrame(rows, columns=HEADER)


def test_show_stats():
	assert show_stats(pd.Series([1.0, 2.0, 6.0])) == (3.0, 6.0, 1.0)


def test_smoothed_short_series():
	np.testing.assert_array_equal(_smoothed([1.0, 2.0, 3.0]), [1.0, 2.0, 3.0])
	assert len(_smoothed(np.arange(12.0))) == 12


def test_plot_track_to_file(tmp_path):
	output = tmp_path / "track.png"
	assert plot_track(results_frame(), str(output)) == str(output)
	assert output.stat().st_size > 0


def test_plot_track_from_csv(tmp_path):
	csv = tmp_path / "track.csv"
	results_frame(3).to_csv(csv, index=False)
	output = tmp_path / "track.png"
	plot_track(str(csv), str(output))
	assert output.exists()
