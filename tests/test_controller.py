import numpy as np
import pytest

from orbit_demo.core.config import PhysicsCfg
from orbit_demo.core.controller import SimulationController, farthest_index
from orbit_demo.core.model import Satellite
from orbit_demo.core.physics import rk4_step
from orbit_demo.core.vector import vec2
from orbit_demo.data.scenarios import INITIAL_SATELLITES, SatelliteSpec


EXPECTED_INITIAL = [
    ((0.0, 1.0e7), (7.8e3, 0.0)),
    ((1.5e7, 0.0), (0.0, 7.0e3)),
    ((0.0, 1.5e7), (6.5e3, 0.0)),
]


def _assert_initial(snapshot) -> None:
    assert not snapshot.running
    assert snapshot.time == 0.0
    assert snapshot.frame == 0
    assert [(s.position, s.velocity) for s in snapshot.satellites] == EXPECTED_INITIAL
    assert all(s.trail == () for s in snapshot.satellites)
    assert [s.label for s in snapshot.satellites] == [1, 2, 3]


def test_reset_restores_initial_configuration(controller) -> None:
    _assert_initial(controller.snapshot())

    controller.start()
    for _ in range(5):
        controller.step()
    assert len(controller.state.satellites) == 2

    _assert_initial(controller.reset())
    _assert_initial(controller.reset())
    assert not controller.is_running()


def test_step_when_stopped_is_a_no_op(controller) -> None:
    before = controller.snapshot()
    after = controller.step()
    assert after == before

    controller.start()
    controller.step()
    controller.reset()
    controller.step()
    _assert_initial(controller.snapshot())


def test_start_is_idempotent_and_does_not_advance(controller) -> None:
    events = []
    controller.add_listener(lambda kind, details: events.append(kind))

    controller.start()
    controller.start()
    assert controller.is_running()
    assert events == ["start"]
    positions = [s.position for s in controller.snapshot().satellites]
    assert positions == [p for p, _ in EXPECTED_INITIAL]


def test_step_runs_configured_sub_steps(controller) -> None:
    controller.start()
    snapshot = controller.step()
    assert snapshot.running
    assert snapshot.frame == 1
    assert snapshot.time == pytest.approx(100.0)
    assert all(len(s.trail) == 10 for s in snapshot.satellites)
    assert all(s.trail[-1] == s.position for s in snapshot.satellites)


def test_pruning_runs_after_every_sub_step(controller) -> None:
    controller.start()
    snapshot = controller.step()

    # The first sub-step already drops the count to the floor.
    assert [s.label for s in snapshot.satellites] == [1, 3]

    expected = []
    for spec in (INITIAL_SATELLITES[0], INITIAL_SATELLITES[2]):
        r, v = spec.position_vector(), spec.velocity_vector()
        for _ in range(10):
            r, v = rk4_step(r, v, 10.0)
        expected.append((tuple(map(float, r)), tuple(map(float, v))))
    assert [(s.position, s.velocity) for s in snapshot.satellites] == expected


def test_pruning_never_drops_below_floor(controller) -> None:
    controller.start()
    for _ in range(200):
        snapshot = controller.step()
        assert len(snapshot.satellites) >= 2
    assert [s.label for s in snapshot.satellites] == [1, 3]


def test_pruning_floor_follows_configuration() -> None:
    controller = SimulationController(PhysicsCfg(min_satellites=1))
    controller.start()
    snapshot = controller.step()
    assert len(snapshot.satellites) == 1

    controller = SimulationController(PhysicsCfg(min_satellites=3))
    controller.start()
    assert len(controller.step().satellites) == 3


def test_farthest_index_prefers_lowest_index_on_ties() -> None:
    satellites = [
        Satellite(position=vec2(0.0, 1.0e7)),
        Satellite(position=vec2(1.0e7, 0.0)),
        Satellite(position=vec2(5.0e6, 0.0)),
    ]
    assert farthest_index(satellites) == 0
    assert farthest_index(satellites[1:]) == 0
    assert farthest_index([]) == -1


def test_prune_farthest_removes_lower_index_on_tie() -> None:
    controller = SimulationController(
        initial=[
            SatelliteSpec(position=(0.0, 8.0e6), velocity=(7.0e3, 0.0)),
            SatelliteSpec(position=(0.0, 1.2e7), velocity=(5.0e3, 0.0)),
            SatelliteSpec(position=(0.0, -1.2e7), velocity=(-5.0e3, 0.0)),
        ]
    )
    removed = controller.prune_farthest()
    assert removed is not None
    assert removed.label == 2
    assert [s.label for s in controller.state.satellites] == [1, 3]


def test_prune_farthest_stops_at_floor(controller) -> None:
    controller.start()
    controller.step()
    before = controller.snapshot()

    assert controller.prune_farthest() is None
    assert controller.snapshot() == before
    assert [s.label for s in controller.state.satellites] == [1, 3]


def test_trail_is_bounded_fifo() -> None:
    cfg = PhysicsCfg(steps_per_frame=1)
    controller = SimulationController(
        cfg, initial=[SatelliteSpec(position=(0.0, 1.0e7), velocity=(7.8e3, 0.0))]
    )
    controller.start()
    for _ in range(1000):
        controller.step()

    sat = controller.state.satellites[0]
    assert len(sat.trail) == 1000
    first, second = sat.trail[0], sat.trail[1]

    controller.step()
    assert len(sat.trail) == 1000
    assert np.array_equal(sat.trail[0], second)
    assert not any(np.array_equal(point, first) for point in sat.trail)
    assert np.array_equal(sat.trail[-1], sat.position)


def test_trail_length_never_exceeds_cap(controller) -> None:
    controller.start()
    for _ in range(120):
        snapshot = controller.step()
        assert all(0 <= len(s.trail) <= 1000 for s in snapshot.satellites)
    assert all(len(s.trail) == 1000 for s in snapshot.satellites)


def test_listeners_receive_lifecycle_events(controller) -> None:
    events = []
    controller.add_listener(lambda kind, details: events.append((kind, details)))

    controller.start()
    controller.step()
    controller.reset()

    kinds = [kind for kind, _ in events]
    assert kinds == ["start", "prune", "reset"]
    prune_details = events[1][1]
    assert prune_details["label"] == 2
    assert prune_details["count"] == 2
    assert prune_details["distance"] > 1.5e7
    assert prune_details["time"] == pytest.approx(10.0)
    assert events[2][1] == {"time": 0.0, "count": 3}


def test_controllers_are_independent() -> None:
    first = SimulationController()
    second = SimulationController()
    first.start()
    first.step()
    assert len(first.state.satellites) == 2
    _assert_initial(second.snapshot())


def test_snapshot_is_read_only(controller) -> None:
    snapshot = controller.snapshot()
    with pytest.raises(AttributeError):
        snapshot.running = True  # type: ignore[misc]
    with pytest.raises(ValueError):
        controller.state.satellites[0].position[0] = 1.0


def test_satellite_spec_rejects_origin() -> None:
    with pytest.raises(ValueError):
        SatelliteSpec(position=(0.0, 0.0), velocity=(1.0, 0.0))
    with pytest.raises(ValueError):
        SatelliteSpec(position=(float("nan"), 1.0), velocity=(1.0, 0.0))
    with pytest.raises(ValueError):
        SatelliteSpec(position=[0.0, 0.0], velocity=[1.0, 0.0])  # type: ignore[arg-type]
    with pytest.raises(ValueError):
        SatelliteSpec(position=(0, 0), velocity=[1.0, 0.0])  # type: ignore[arg-type]
