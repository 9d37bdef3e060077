"""Analyze a recorded orbit demo run and generate diagnostic figures."""
from __future__ import annotations

import argparse
import csv
import json
from pathlib import Path
from typing import Dict, List, Sequence

import numpy as np

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt


TIMESERIES_FILENAME = "timeseries.csv"
EVENTS_FILENAME = "events.csv"
META_FILENAME = "meta.json"
FIGS_SUBDIR = "figs"
DEFAULT_RUNS_DIR = Path("data") / "runs"
EARTH_RADIUS = 6_371_000.0


def load_timeseries(path: Path) -> Dict[str, np.ndarray]:
    with path.open("r", newline="") as fh:
        reader = csv.DictReader(fh)
        columns: Dict[str, List[float]] = {name: [] for name in reader.fieldnames or []}
        for row in reader:
            for key, value in row.items():
                if key is None:
                    continue
                columns.setdefault(key, []).append(float(value))
    return {key: np.asarray(values) for key, values in columns.items()}


def load_events(path: Path) -> List[dict]:
    with path.open("r", newline="") as fh:
        reader = csv.DictReader(fh)
        events: List[dict] = []
        for row in reader:
            if not row:
                continue
            event = {
                "t": float(row["t"]),
                "type": row["type"],
                "sat": int(float(row["sat"])),
                "r": float(row["r"]),
            }
            details_raw = row.get("details", "")
            if details_raw:
                try:
                    event["details"] = json.loads(details_raw)
                except json.JSONDecodeError:
                    event["details"] = details_raw
            events.append(event)
    return events


def split_by_satellite(ts: Dict[str, np.ndarray]) -> Dict[int, Dict[str, np.ndarray]]:
    """Group timeseries columns by the ``sat`` label, keeping row order."""

    labels = ts.get("sat", np.array([]))
    groups: Dict[int, Dict[str, np.ndarray]] = {}
    for label in sorted({int(v) for v in labels}):
        mask = labels == label
        groups[label] = {key: values[mask] for key, values in ts.items()}
    return groups


def relative_drift(values: np.ndarray) -> float:
    if values.size == 0:
        return 0.0
    denom = values[0] if abs(values[0]) > 1e-12 else 1.0
    return float((values[-1] - values[0]) / denom)


def summarize_satellites(groups: Dict[int, Dict[str, np.ndarray]]) -> Dict[int, dict]:
    summary: Dict[int, dict] = {}
    for label, ts in groups.items():
        summary[label] = {
            "samples": int(ts["t"].size),
            "t_last": float(ts["t"][-1]) if ts["t"].size else 0.0,
            "r_last": float(ts["r"][-1]) if ts["r"].size else 0.0,
            "energy_drift": relative_drift(ts["energy"]),
            "h_drift": relative_drift(ts["h"]),
        }
    return summary


def count_events(events: List[dict]) -> Dict[str, int]:
    counts: Dict[str, int] = {"reset": 0, "start": 0, "prune": 0}
    for event in events:
        counts[event["type"]] = counts.get(event["type"], 0) + 1
    return counts


def ensure_fig_dir(run_dir: Path) -> Path:
    fig_dir = run_dir / FIGS_SUBDIR
    fig_dir.mkdir(parents=True, exist_ok=True)
    return fig_dir


def plot_orbits(fig_dir: Path, groups: Dict[int, Dict[str, np.ndarray]], earth_radius: float) -> None:
    fig, ax = plt.subplots(figsize=(6, 6))
    for label, ts in groups.items():
        ax.plot(ts["x"], ts["y"], lw=1.5, label=f"Satellite {label}")
    theta = np.linspace(0, 2 * np.pi, 256)
    ax.fill(earth_radius * np.cos(theta), earth_radius * np.sin(theta), color="#3498db", alpha=0.6)
    ax.set_aspect("equal", "box")
    ax.set_xlabel("x [m]")
    ax.set_ylabel("y [m]")
    ax.set_title("Orbits (x-y)")
    ax.legend()
    fig.tight_layout()
    fig.savefig(fig_dir / "orbit_xy.png", dpi=150)
    plt.close(fig)


def plot_energy(fig_dir: Path, groups: Dict[int, Dict[str, np.ndarray]]) -> None:
    fig, ax = plt.subplots(figsize=(7, 4))
    for label, ts in groups.items():
        energy = ts["energy"]
        if energy.size == 0:
            continue
        ax.plot(ts["t"], (energy - energy[0]) / abs(energy[0]), label=f"Satellite {label}")
    ax.set_xlabel("t [s]")
    ax.set_ylabel("ΔE / |E0|")
    ax.set_title("Relative specific energy drift")
    ax.grid(True, alpha=0.3)
    ax.legend()
    fig.tight_layout()
    fig.savefig(fig_dir / "energy.png", dpi=150)
    plt.close(fig)


def plot_radius(fig_dir: Path, groups: Dict[int, Dict[str, np.ndarray]], events: List[dict]) -> None:
    fig, ax = plt.subplots(figsize=(7, 4))
    for label, ts in groups.items():
        ax.plot(ts["t"], ts["r"], label=f"Satellite {label}")
    for event in events:
        if event["type"] == "prune":
            ax.axvline(event["t"], color="#d9480f", linestyle="--", alpha=0.5)
    ax.set_xlabel("t [s]")
    ax.set_ylabel("r [m]")
    ax.set_title("Distance from center")
    ax.grid(True, alpha=0.3)
    ax.legend()
    fig.tight_layout()
    fig.savefig(fig_dir / "radius.png", dpi=150)
    plt.close(fig)


def print_summary(run_dir: Path, summary: Dict[int, dict], event_counts: Dict[str, int]) -> None:
    print(f"Run: {run_dir.name}")
    for label, info in summary.items():
        print(
            f" Satellite {label}: {info['samples']} samples, "
            f"t = {info['t_last']:.0f} s, r = {info['r_last'] / 1000.0:.2f} km, "
            f"ΔE/E = {info['energy_drift']:.3e}, Δh/h = {info['h_drift']:.3e}"
        )
    print(" Events: " + ", ".join(f"{etype}: {count}" for etype, count in event_counts.items()))


def resolve_run_dir(parser: argparse.ArgumentParser, run_dir: str | None, base_runs_dir: Path) -> Path:
    if run_dir:
        run_path = Path(run_dir)
        if not run_path.is_dir():
            run_path = base_runs_dir / run_dir
    else:
        last_run_file = base_runs_dir / "last_run.txt"
        if not last_run_file.exists():
            parser.error("No run given and last_run.txt is missing.")
        run_path = base_runs_dir / last_run_file.read_text(encoding="utf-8").strip()
    if not run_path.is_dir():
        parser.error(f"Run directory not found: {run_path}")
    return run_path


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Analyze a recorded run and write figures.")
    parser.add_argument("run_dir", nargs="?", help="Path or id of a recorded run")
    parser.add_argument(
        "--runs-dir",
        default=str(DEFAULT_RUNS_DIR),
        help="Directory holding recorded runs (default: data/runs).",
    )
    args = parser.parse_args(argv)

    run_path = resolve_run_dir(parser, args.run_dir, Path(args.runs_dir))

    meta_path = run_path / META_FILENAME
    ts_path = run_path / TIMESERIES_FILENAME
    ev_path = run_path / EVENTS_FILENAME
    if not meta_path.exists() or not ts_path.exists() or not ev_path.exists():
        parser.error("Run directory is missing meta.json, timeseries.csv or events.csv.")

    with meta_path.open("r", encoding="utf-8") as fh:
        meta = json.load(fh)

    ts = load_timeseries(ts_path)
    if not ts or ts["t"].size == 0:
        parser.error("timeseries.csv is empty; nothing to analyze.")
    events = load_events(ev_path)

    groups = split_by_satellite(ts)
    fig_dir = ensure_fig_dir(run_path)
    plot_orbits(fig_dir, groups, float(meta.get("central_radius", EARTH_RADIUS)))
    plot_energy(fig_dir, groups)
    plot_radius(fig_dir, groups, events)

    print_summary(run_path, summarize_satellites(groups), count_events(events))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
