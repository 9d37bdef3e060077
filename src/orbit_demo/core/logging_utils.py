"""Logging helpers scoped to the orbit demo package."""
from __future__ import annotations

import csv
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence

from .config import PHYSICS_CFG, PhysicsCfg
from .model import SimSnapshot
from .physics import angular_momentum, energy_specific


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
CONSOLE_HANDLER_NAME = "orbit_demo.console"


def setup_logging(level: str = "INFO", name: str = "orbit_demo") -> logging.Logger:
    """Attach a console handler to the package logger."""

    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    if not any(h.get_name() == CONSOLE_HANDLER_NAME for h in logger.handlers):
        console_handler = logging.StreamHandler()
        console_handler.set_name(CONSOLE_HANDLER_NAME)
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(console_handler)
    return logger


class RunLogger:
    """Records per-frame satellite data and controller events to CSV files.

    A run lives in ``<root_dir>/<run_id>/`` with ``timeseries.csv``,
    ``events.csv`` and ``meta.json``; ``<root_dir>/last_run.txt`` names the
    newest run.
    """

    TIMESERIES_HEADER = ["t", "frame", "sat", "x", "y", "vx", "vy", "r", "energy", "h"]
    EVENTS_HEADER = ["t", "type", "sat", "r", "details"]

    def __init__(
        self,
        root_dir: str | Path = "data/runs",
        run_id: Optional[str] = None,
        *,
        cfg: PhysicsCfg = PHYSICS_CFG,
    ) -> None:
        self.cfg = cfg
        self.root_dir = Path(root_dir)
        self.root_dir.mkdir(parents=True, exist_ok=True)

        base = run_id or datetime.now().strftime("%Y%m%d_%H%M%S_run")
        candidate_id = base
        suffix = 1
        while (self.root_dir / candidate_id).exists():
            candidate_id = f"{base}_{suffix:02d}"
            suffix += 1

        self.run_id = candidate_id
        self.run_dir = self.root_dir / self.run_id
        self.run_dir.mkdir(parents=True, exist_ok=False)

        self.timeseries_path = self.run_dir / "timeseries.csv"
        self.events_path = self.run_dir / "events.csv"
        self.meta_path = self.run_dir / "meta.json"

        self._ts_file = self.timeseries_path.open("w", newline="")
        self._ts_writer = csv.writer(self._ts_file)
        self._ts_writer.writerow(self.TIMESERIES_HEADER)
        self._ev_file = self.events_path.open("w", newline="")
        self._ev_writer = csv.writer(self._ev_file)
        self._ev_writer.writerow(self.EVENTS_HEADER)
        self._last_time = 0.0

        (self.root_dir / "last_run.txt").write_text(self.run_id, encoding="utf-8")

    def write_meta(self, meta: dict) -> None:
        with self.meta_path.open("w", encoding="utf-8") as fh:
            json.dump(meta, fh, indent=2, sort_keys=True)

    def log_ts(self, values: Sequence[float]) -> None:
        self._ts_writer.writerow([f"{v:.17g}" for v in values])

    def log_event(self, values: Sequence[object]) -> None:
        self._ev_writer.writerow(
            [f"{v:.10g}" if isinstance(v, (int, float)) else str(v) for v in values]
        )

    def log_snapshot(self, snapshot: SimSnapshot) -> None:
        """Record one timeseries row per satellite in ``snapshot``."""

        self._last_time = snapshot.time
        for sat in snapshot.satellites:
            x, y = sat.position
            vx, vy = sat.velocity
            self.log_ts(
                [
                    snapshot.time,
                    snapshot.frame,
                    sat.label,
                    x,
                    y,
                    vx,
                    vy,
                    sat.distance,
                    energy_specific(sat.position, sat.velocity, self.cfg),
                    angular_momentum(sat.position, sat.velocity),
                ]
            )

    def record_event(self, event_type: str, details: dict) -> None:
        """Controller listener: store reset/start/prune events."""

        self.log_event(
            [
                details.get("time", self._last_time),
                event_type,
                details.get("label", 0),
                details.get("distance", 0.0),
                json.dumps(details, sort_keys=True),
            ]
        )

    def close(self) -> None:
        self._ts_file.close()
        self._ev_file.close()

    def __enter__(self) -> "RunLogger":
        return self

    def __exit__(self, exc_type, exc, tb) -> Optional[bool]:
        self.close()
        return None


__all__ = ["CONSOLE_HANDLER_NAME", "LOG_FORMAT", "RunLogger", "setup_logging"]
