"""
Orbit Demo - interactive satellite orbits around the Earth
===========================================================

Opens a pygame window with Start/Reset buttons. Each frame the simulation
controller advances ten fixed RK4 sub-steps and the resulting snapshot is
drawn: the Earth as a disc, every satellite as a dot with its trail and a
distance readout.

Keys: Space starts, R resets, Esc quits.
"""
from __future__ import annotations

import argparse
import logging
import math
from pathlib import Path
from typing import Sequence

import pygame

from orbit_demo.core.config import PHYSICS_CFG, RENDER_CFG, PhysicsCfg, RenderCfg
from orbit_demo.core.controller import SimulationController
from orbit_demo.core.logging_utils import RunLogger, setup_logging
from orbit_demo.core.model import SimSnapshot
from orbit_demo.render import (
    Button,
    ButtonVisualStyle,
    Camera,
    draw_scene,
    load_font,
)


logger = logging.getLogger(__name__)


def snapshot_is_finite(snapshot: SimSnapshot) -> bool:
    for sat in snapshot.satellites:
        values = (*sat.position, *sat.velocity)
        if not all(math.isfinite(v) for v in values):
            return False
    return True


def make_run_logger(
    root_dir: str | Path, controller: SimulationController, *, mode: str
) -> RunLogger:
    run_logger = RunLogger(root_dir, cfg=controller.cfg)
    cfg = controller.cfg
    run_logger.write_meta(
        {
            "mode": mode,
            "G": cfg.gravitational_constant,
            "M": cfg.central_mass,
            "mu": cfg.mu,
            "central_radius": cfg.central_radius,
            "integrator": "RK4",
            "dt": cfg.dt,
            "steps_per_frame": cfg.steps_per_frame,
            "trail_length": cfg.trail_length,
            "min_satellites": cfg.min_satellites,
            "initial": [
                {"label": sat.label, "R0": list(sat.position), "V0": list(sat.velocity)}
                for sat in controller.snapshot().satellites
            ],
        }
    )
    controller.add_listener(run_logger.record_event)
    return run_logger


def run_headless(
    frames: int,
    *,
    cfg: PhysicsCfg = PHYSICS_CFG,
    log_dir: str | Path | None = None,
) -> SimSnapshot:
    """Start a fresh simulation and step it ``frames`` times without a window."""

    controller = SimulationController(cfg)
    run_logger = make_run_logger(log_dir, controller, mode="headless") if log_dir else None
    try:
        snapshot = controller.reset()
        if run_logger is not None:
            run_logger.log_snapshot(snapshot)
        controller.start()
        for _ in range(frames):
            snapshot = controller.step()
            if run_logger is not None:
                run_logger.log_snapshot(snapshot)
            if not snapshot_is_finite(snapshot):
                logger.error("Non-finite satellite state at t=%.0f s, stopping", snapshot.time)
                break
        logger.info(
            "Headless run finished: %d frames, t=%.0f s, %d satellites",
            snapshot.frame,
            snapshot.time,
            len(snapshot.satellites),
        )
        return snapshot
    finally:
        if run_logger is not None:
            run_logger.close()


class OrbitApp:
    """Pygame front-end driving a :class:`SimulationController`."""

    def __init__(
        self,
        controller: SimulationController,
        *,
        render_cfg: RenderCfg = RENDER_CFG,
        run_logger: RunLogger | None = None,
    ) -> None:
        self.controller = controller
        self.render_cfg = render_cfg
        self.run_logger = run_logger
        self.halted = False
        self.snapshot = controller.snapshot()

        self.screen = pygame.display.set_mode((render_cfg.width, render_cfg.height))
        pygame.display.set_caption("Orbit Demo")
        self.clock = pygame.time.Clock()
        self.camera = Camera(self.screen.get_size(), render_cfg.pixels_per_meter)
        self.label_font = load_font(render_cfg.font_names, render_cfg.label_font_size)
        self.button_font = load_font(render_cfg.font_names, render_cfg.button_font_size, bold=True)

        style = ButtonVisualStyle(
            base_color=render_cfg.button_color,
            hover_color=render_cfg.button_hover_color,
            disabled_color=render_cfg.button_disabled_color,
            text_color=render_cfg.button_text_color,
            radius=render_cfg.button_radius,
        )
        bw, bh = render_cfg.button_size
        margin = render_cfg.button_margin
        self.buttons = [
            Button(
                (margin, margin, bw, bh),
                "Start",
                self.start,
                style=style,
                enabled=lambda: not self.controller.is_running(),
            ),
            Button((margin * 2 + bw, margin, bw, bh), "Reset", self.reset, style=style),
        ]

    def start(self) -> None:
        if self.halted:
            logger.warning("Simulation halted on non-finite state; reset first")
            return
        self.controller.start()

    def reset(self) -> None:
        self.halted = False
        self.snapshot = self.controller.reset()
        if self.run_logger is not None:
            self.run_logger.log_snapshot(self.snapshot)

    def advance(self) -> None:
        if self.halted or not self.controller.is_running():
            return
        snapshot = self.controller.step()
        if self.run_logger is not None:
            self.run_logger.log_snapshot(snapshot)
        if not snapshot_is_finite(snapshot):
            logger.error("Non-finite satellite state at t=%.0f s, halting", snapshot.time)
            self.halted = True
            return
        self.snapshot = snapshot

    def handle_event(self, event: pygame.event.Event) -> bool:
        """Process one event; return ``False`` when the app should quit."""

        if event.type == pygame.QUIT:
            return False
        if event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                return False
            if event.key == pygame.K_SPACE:
                self.start()
            elif event.key == pygame.K_r:
                self.reset()
        for button in self.buttons:
            button.handle_event(event)
        return True

    def draw(self) -> None:
        draw_scene(
            self.screen,
            self.camera,
            self.snapshot,
            self.label_font,
            central_radius=self.controller.cfg.central_radius,
            render_cfg=self.render_cfg,
        )
        for button in self.buttons:
            button.draw(self.screen, self.button_font)
        pygame.display.flip()

    def run(self) -> None:
        self.reset()
        running = True
        while running:
            for event in pygame.event.get():
                if not self.handle_event(event):
                    running = False
                    break
            self.advance()
            self.draw()
            self.clock.tick(self.render_cfg.fps)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Satellite orbit demo (RK4, central gravity).")
    parser.add_argument(
        "--headless",
        action="store_true",
        help="Run without a window and start immediately.",
    )
    parser.add_argument(
        "--frames",
        type=int,
        default=600,
        help="Frames to simulate in headless mode (default: 600).",
    )
    parser.add_argument(
        "--log-run",
        nargs="?",
        const="data/runs",
        default=None,
        metavar="DIR",
        help="Record the run as CSV under DIR (default: data/runs).",
    )
    parser.add_argument("--log-level", default="INFO", help="Logging level (default: INFO).")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.frames < 0:
        parser.error("--frames must be >= 0")
    setup_logging(args.log_level)

    if args.headless:
        run_headless(args.frames, log_dir=args.log_run)
        return 0

    pygame.init()
    controller = SimulationController()
    run_logger = make_run_logger(args.log_run, controller, mode="window") if args.log_run else None
    try:
        OrbitApp(controller, run_logger=run_logger).run()
    finally:
        if run_logger is not None:
            run_logger.close()
        pygame.quit()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
