import os
import sys

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
from matplotlib.ticker import LogLocator, ScalarFormatter

NUMERIC_COLUMNS = ["time", "min_mem", "avg_mem", "max_mem", "decisions"]

STATUS_COLORS = {
    "OK": "mediumseagreen",
    "MISMATCH": "salmon",
    "TIMEOUT": "orange",
    "ERROR": "grey",
}


def load_results(csv_path):
    df = pd.read_csv(csv_path)
    for column in NUMERIC_COLUMNS:
        df[column] = pd.to_numeric(df[column], errors='coerce')
    df["case"] = df["folder"].astype(str) + "/" + df["file"].astype(str)
    return df


def _log_axis(ax, numticks=12):
    ax.set_yscale('log')
    ax.yaxis.set_major_locator(LogLocator(base=10, numticks=numticks))
    ax.yaxis.set_minor_locator(LogLocator(base=10, subs=np.arange(2, 10) * 0.1, numticks=numticks))
    ax.yaxis.set_major_formatter(ScalarFormatter())
    ax.yaxis.grid(True, which='both', linestyle='--', alpha=0.3)


def _bar_per_case(df, column, ylabel, title, path, with_range=None):
    # Log scale cannot show zeros.
    sub_df = df[df[column] > 0].sort_values(column)
    if sub_df.empty:
        return None

    fig, ax = plt.subplots(figsize=(12, 7))
    colors = [STATUS_COLORS.get(status, "skyblue") for status in sub_df["status"]]
    ax.bar(sub_df["case"], sub_df[column], color=colors, label=ylabel)

    if with_range:
        low, high = with_range
        yerr = [sub_df[column] - sub_df[low], sub_df[high] - sub_df[column]]
        ax.errorbar(
            sub_df["case"],
            sub_df[column],
            yerr=yerr,
            fmt='none',
            ecolor='black',
            capsize=5,
            linewidth=1,
            label="Min/Max Range"
        )

    ax.set_ylabel(ylabel)
    ax.set_title(title)
    _log_axis(ax)

    plt.setp(ax.get_xticklabels(), rotation=45, ha='right')
    fig.tight_layout()
    ax.legend(loc='upper left')
    fig.savefig(path)
    plt.close(fig)
    return path


def plot_results(csv_path, out_dir="results"):
    df = load_results(csv_path)
    os.makedirs(out_dir, exist_ok=True)
    saved = []

    saved.append(_bar_per_case(df, "time", "Time (s)", "Solve Time per Case",
                               os.path.join(out_dir, "time_log.png")))
    saved.append(_bar_per_case(df, "avg_mem", "Average Memory (KB)", "Memory Usage per Case",
                               os.path.join(out_dir, "memory_log.png"),
                               with_range=("min_mem", "max_mem")))
    saved.append(_bar_per_case(df, "decisions", "Decisions", "Branching Decisions per Case",
                               os.path.join(out_dir, "decisions_log.png")))

    status_counts = df.groupby(["folder", "status"]).size().unstack(fill_value=0)
    fig, ax = plt.subplots(figsize=(12, 7))
    status_counts.plot(kind='bar', stacked=True, ax=ax,
                       color=[STATUS_COLORS.get(s, "skyblue") for s in status_counts.columns])
    ax.set_ylabel("Cases")
    ax.set_title("Outcome Status per Folder")
    plt.setp(ax.get_xticklabels(), rotation=45, ha='right')
    fig.tight_layout()
    status_path = os.path.join(out_dir, "status_counts.png")
    fig.savefig(status_path)
    plt.close(fig)
    saved.append(status_path)

    return [path for path in saved if path]


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("usage: plot.py RESULTS_CSV [OUT_DIR]")
        sys.exit(2)
    for path in plot_results(sys.argv[1], *sys.argv[2:3]):
        print(f"saved {path}")
