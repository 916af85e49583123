from warnings import warn

import matplotlib as mpl
import matplotlib.pyplot as plt
import numpy as np
from loguru import logger

from pyviewport import (
    LiveSeries,
    TimeAxisDisplay,
    TimeInterval,
    absolute,
    configure_logging,
    data,
    display,
    integrated,
)

# --- User configuration dictionary ---
CONFIG = {
    "SAMPLE_RATE": 1e3,  # simulated acquisition rate in Hz
    "BATCH_SIZE": 50,  # samples delivered per update
    "CAPACITY": 2000,  # samples kept on screen
    "N_UPDATES": 200,  # number of simulated updates
    "JUMP_AT_S": 5.0,  # time at which the signal level jumps (seconds)
    "JUMP_SIZE": 50.0,  # size of the level jump
    "NOISE": 0.2,  # standard deviation of additive noise
    "SEED": 0,
    "LOG_LEVEL": "INFO",  # logging level: DEBUG, INFO, SUCCESS, WARNING, ERROR, CRITICAL
    "FRAME_PAUSE": 0.01,  # seconds between redraws
    # ---
    "AXIS_RANGES": [
        {"policy": "integrated", "threshold": 0.8},
        {"policy": "data"},
        {"policy": "display"},
        {"policy": "absolute", "min": -5.0, "max": 5.0},
    ],
}


def make_axis_range(entry: dict):
    """Build an axis range strategy from a CONFIG entry."""
    policy = entry["policy"]
    if policy == "integrated":
        return integrated(entry.get("threshold", 0.8))
    elif policy == "data":
        return data()
    elif policy == "display":
        return display()
    elif policy == "absolute":
        return absolute(entry["min"], entry["max"])
    raise ValueError(f"Unknown axis range policy: {policy}")


def simulate_batch(
    rng: np.random.Generator, t: np.ndarray, jump_at: float, jump_size: float, noise: float
) -> np.ndarray:
    """Sine wave with noise and a step change in level at `jump_at`."""
    level = np.where(t >= jump_at, jump_size, 0.0)
    return np.sin(2 * np.pi * 0.5 * t) + level + rng.normal(0.0, noise, size=t.size)


def main() -> None:
    """
    Stream a simulated signal through one live series per axis range policy.
    """
    configure_logging(CONFIG.get("LOG_LEVEL", "INFO"))

    rng = np.random.default_rng(CONFIG["SEED"])
    fs = CONFIG["SAMPLE_RATE"]
    batch_size = CONFIG["BATCH_SIZE"]
    window_s = CONFIG["CAPACITY"] / fs

    series = [
        LiveSeries(CONFIG["CAPACITY"], make_axis_range(entry))
        for entry in CONFIG["AXIS_RANGES"]
    ]
    time_display = TimeAxisDisplay()

    fig, axes = plt.subplots(len(series), 1, sharex=True, squeeze=False)
    lines = []
    for ax, live in zip(axes[:, 0], series):
        (line,) = ax.plot([], [], color="black", linewidth=1.0)
        ax.set_title(str(live.viewport.axis_range_strategy))
        lines.append(line)

    sample_index = 0
    for _ in range(CONFIG["N_UPDATES"]):
        t = (sample_index + np.arange(batch_size)) / fs
        x = simulate_batch(
            rng, t, CONFIG["JUMP_AT_S"], CONFIG["JUMP_SIZE"], CONFIG["NOISE"]
        )
        sample_index += batch_size

        t_now = sample_index / fs
        window = TimeInterval.before(t_now, window_s)
        for live in series:
            live.push(x, window)

        if time_display.update(window):
            axes[-1, 0].xaxis.set_major_formatter(time_display.formatter())

        for ax, line, live in zip(axes[:, 0], lines, series):
            y = live.values().to_array()
            t_visible = t_now - (y.size - np.arange(y.size)) / fs
            line.set_data(t_visible, y)
            ax.set_xlim(live.plot_time_interval.start, live.plot_time_interval.end)
            ax.set_ylim(live.plot_range.minimum, live.plot_range.maximum)

        plt.pause(CONFIG["FRAME_PAUSE"])

    for live in series:
        logger.success(
            f"{live.viewport.axis_range_strategy}: final range {live.plot_range} "
            f"after {live.viewport.update_count} updates"
        )
    plt.show()


if __name__ == "__main__":
    # Set Matplotlib rcParams directly here
    for optn, val in {
        "figure.constrained_layout.use": True,
        "figure.dpi": 90,
        "font.family": ("sans-serif",),
        "font.size": 11,
        "lines.linewidth": 1.2,
        "xtick.direction": "in",
        "ytick.direction": "in",
        "axes.formatter.useoffset": False,
    }.items():
        if isinstance(val, (list, tuple)):
            val = tuple(val)
        try:
            mpl.rcParams[optn] = val
        except KeyError:
            warn(f"mpl rcparams key '{optn}' not recognised as a valid rc parameter.")
    main()
