import argparse

import matplotlib
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
from scipy import signal


def show_stats(series):
    """(mean, max, min) of a column."""
    arr = np.asarray(series, dtype=float)
    return np.mean(arr), np.max(arr), np.min(arr)


def _smoothed(y, window_length=10, poly_order=3):
    # savgol needs an odd window that fits in the series
    window_length = min(window_length, len(y))
    if window_length % 2 == 0:
        window_length -= 1
    if window_length <= poly_order:
        return np.asarray(y, dtype=float)
    return signal.savgol_filter(y, window_length=window_length, polyorder=poly_order)


def plot_track(results, output=None, fs=12):
    """
        Plot box position, frame rate and PSR per frame.

        :param results: DataFrame or path of a CSV written by run.py
        :param output: image file to save to, shows a window if None
    """
    if not isinstance(results, pd.DataFrame):
        results = pd.read_csv(results)
    if output is not None:
        matplotlib.use("Agg")

    ticks = results["frame"]
    fig, (ax_pos, ax_fps, ax_psr) = plt.subplots(3, 1, sharex=True, figsize=(10, 9))
    fig.suptitle("MOSSE tracking")

    ax_pos.plot(ticks, results["xmin"], label="xmin", c='g')
    ax_pos.plot(ticks, results["ymin"], label="ymin", c='orange')
    ax_pos.set_ylabel("px", fontsize=fs)
    ax_pos.legend(loc="best")

    # Frame 0 is initialization, not tracking
    tracked = results[results["frame"] > 0]
    if len(tracked):
        mean_fps = show_stats(tracked["frame_rate"])[0]
        ax_fps.plot(tracked["frame"], _smoothed(tracked["frame_rate"].to_numpy()), label="FPS", c='purple')
        ax_fps.plot(tracked["frame"], [mean_fps] * len(tracked), label="FPS MEAN", c='purple', linestyle='--')
        ax_psr.plot(tracked["frame"], tracked["PSR"], label="PSR", c='g')
    ax_fps.set_ylabel("FPS", fontsize=fs)
    ax_fps.legend(loc="best")
    ax_psr.set_ylabel("PSR", fontsize=fs)
    ax_psr.set_xlabel("Frame", fontsize=fs)

    for ax in (ax_pos, ax_fps, ax_psr):
        ax.grid()

    if output is None:
        plt.show()
    else:
        fig.savefig(output)
    plt.close(fig)
    return output


if __name__ == "__main__":
    ap = argparse.ArgumentParser()
    ap.add_argument("csv", help="Results written by run.py")
    ap.add_argument("-o", "--output", default=None)
    args = ap.parse_args()
    print("Stats FPS: ", show_stats(pd.read_csv(args.csv)["frame_rate"]))
    plot_track(args.csv, args.output)
