from __future__ import annotations

import argparse
import time

import matplotlib.pyplot as plt
import pandas as pd
import streamlit as st

from telemetry.replay import load_telemetry, summarize_turns


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(add_help=False)
    parser.add_argument(
        "--log-path",
        type=str,
        default="telemetry_logs/turns.jsonl",
        help="Path to turn telemetry JSONL log file.",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()

    st.set_page_config(page_title="Mars Rover Telemetry", layout="wide")
    st.title("Mars Rover Telemetry Dashboard")

    status_placeholder = st.empty()
    map_fig = st.empty()
    stats_placeholder = st.empty()
    rover_state_placeholder = st.sidebar.empty()

    refresh_interval = st.sidebar.slider("Refresh interval (s)", 0.5, 5.0, 1.0, 0.5)

    while True:
        df = load_telemetry(args.log_path)
        if df.empty:
            status_placeholder.info(f"Waiting for telemetry at '{args.log_path}'...")
            time.sleep(refresh_interval)
            continue

        status_placeholder.success(f"Streaming from '{args.log_path}' ({len(df)} turns)")
        latest = df.iloc[-1]

        with rover_state_placeholder.container():
            st.subheader("Rover State")
            if pd.notna(latest.get("pose.x")) and pd.notna(latest.get("pose.y")):
                st.write(
                    f"x={int(latest['pose.x'])}, "
                    f"y={int(latest['pose.y'])}, "
                    f"facing={latest.get('pose.direction', '?')}"
                )
            else:
                st.write("No pose in latest record")

        # Path over the grid; x is the row, so it goes on the vertical axis
        with map_fig.container():
            fig, ax = plt.subplots()
            if "pose.x" in df.columns and "pose.y" in df.columns:
                ax.plot(df["pose.y"], df["pose.x"], "-y", label="Path")
                if "accepted" in df.columns:
                    rejected = df[~df["accepted"].astype(bool)]
                    ax.scatter(rejected["pose.y"], rejected["pose.x"], c="r", marker="x", label="Rejected move")
                ax.scatter([latest.get("pose.y", 0)], [latest.get("pose.x", 0)], c="b", label="Rover")
            if "grid_size" in df.columns:
                size = int(latest["grid_size"])
                ax.set_xlim(-0.5, size - 0.5)
                ax.set_ylim(size - 0.5, -0.5)
            ax.set_aspect("equal", adjustable="box")
            ax.set_xlabel("column (y)")
            ax.set_ylabel("row (x)")
            ax.set_title("Rover Path")
            ax.legend(loc="upper right")
            map_fig.pyplot(fig)
            plt.close(fig)

        summary = summarize_turns(df)
        stats_text = "Session stats:\n"
        stats_text += f"- Turns: {summary['turns']}\n"
        stats_text += f"- Rejected moves: {summary['rejected_moves']}\n"
        stats_text += f"- Cells visited: {summary['cells_visited']}\n"
        for name, count in sorted(summary["commands"].items()):
            stats_text += f"- {name}: {count}\n"
        stats_placeholder.text(stats_text)

        time.sleep(refresh_interval)


if __name__ == "__main__":
    main()
