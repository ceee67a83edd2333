"""
Unit tests for the player session: navigation, invalidation, and playback.

Playback tests drive the async play loop with asyncio.run() and a fake
sleep that records ticks instead of waiting.
"""

import asyncio
import json

import pytest

from pathfinder.config import DEFAULT_SPEED, tick_delay_ms
from pathfinder.player import PlayerSession
from pathfinder.substrate import GraphFormatError
from pathfinder.trace import PseudocodeLine


class FakeSleep:
    """Awaitable stand-in for asyncio.sleep that calls a hook on every tick."""

    def __init__(self, on_tick=None):
        self.calls: list[float] = []
        self.on_tick = on_tick

    async def __call__(self, delay: float) -> None:
        self.calls.append(delay)
        if self.on_tick is not None:
            self.on_tick(len(self.calls))


async def no_sleep_allowed(delay: float) -> None:
    raise AssertionError("fast solve must not tick")


@pytest.fixture
def fake_sleep() -> FakeSleep:
    return FakeSleep()


@pytest.fixture
def session(open_grid, fake_sleep) -> PlayerSession:
    """BFS session over the open 3x3 grid (7 visit steps + 5 path steps)."""
    return PlayerSession(mode="grid", algorithm="bfs", grid=open_grid, sleep=fake_sleep)


@pytest.fixture
def graph_session(triangle_graph, fake_sleep) -> PlayerSession:
    return PlayerSession(mode="graph", algorithm="dijkstra", graph=triangle_graph, sleep=fake_sleep)


class TestConstruction:
    """Test session setup and settings."""

    def test_initial_state(self, session):
        """A new session has no steps and sits before the start."""
        assert session.steps == ()
        assert session.step_index == -1
        assert session.result is None
        assert session.progress == (0, 0)
        assert session.view().log_lines == ()

    def test_unknown_mode_raises(self):
        with pytest.raises(ValueError):
            PlayerSession(mode="hex")

    def test_unknown_algorithm_raises(self):
        with pytest.raises(ValueError):
            PlayerSession(algorithm="greedy")

    @pytest.mark.parametrize(
        "speed,expected",
        [(0, 1), (-10, 1), (500, 100), ("75", 75), ("fast", DEFAULT_SPEED)],
    )
    def test_speed_clamped(self, session, speed, expected):
        session.set_speed(speed)
        assert session.speed == expected

    @pytest.mark.parametrize("speed,delay_ms", [(1, 203), (50, 105), (100, 5)])
    def test_tick_delay(self, session, speed, delay_ms):
        """Delay shrinks linearly with speed down to a floor."""
        session.set_speed(speed)
        assert tick_delay_ms(speed) == delay_ms
        assert session.tick_delay == pytest.approx(delay_ms / 1000)

    def test_set_algorithm_invalidates(self, session):
        session.rebuild()
        session.set_algorithm("astar")
        assert session.algorithm == "astar"
        assert session.steps == ()

    def test_set_unknown_algorithm_keeps_current(self, session):
        with pytest.raises(ValueError):
            session.set_algorithm("greedy")
        assert session.algorithm == "bfs"


class TestNavigation:
    """Test stepping and seeking within [-1, len(steps) - 1]."""

    def test_step_forward_builds(self, session):
        """Stepping with no steps runs the algorithm first."""
        session.step_forward()
        assert len(session.steps) == 12
        assert session.step_index == 0

    def test_step_backward_without_steps_is_noop(self, session):
        session.step_backward()
        assert session.steps == ()
        assert session.step_index == -1

    def test_seek_without_steps_is_noop(self, session):
        session.seek_to(5)
        assert session.steps == ()
        assert session.step_index == -1

    def test_backward_stops_at_pre_start(self, session):
        session.rebuild()
        session.step_backward()
        assert session.step_index == -1

    def test_forward_stops_at_last(self, session):
        session.to_end()
        session.step_forward()
        assert session.step_index == 11

    @pytest.mark.parametrize("target,expected", [(-50, -1), (-1, -1), (4, 4), (500, 11)])
    def test_seek_clamps(self, session, target, expected):
        session.rebuild()
        session.seek_to(target)
        assert session.step_index == expected

    def test_to_start_builds(self, session):
        session.to_start()
        assert len(session.steps) == 12
        assert session.step_index == -1

    def test_progress(self, session):
        session.rebuild()
        assert session.progress == (0, 12)
        session.seek_to(3)
        assert session.progress == (4, 12)


class TestView:
    """Test the renderer-facing projection."""

    def test_pre_start_view(self, session):
        """Before the first step nothing is revealed, but the cost is known."""
        session.rebuild()
        view = session.view()
        assert view.visited == ()
        assert view.log_lines == ()
        assert view.current_log_index == -1
        assert view.pseudocode_line == PseudocodeLine.INIT
        assert view.path_cost == 4
        assert view.path_length == 5

    def test_end_view(self, session):
        """The last step shows every visit, the full path and every log line."""
        session.to_end()
        view = session.view()
        assert len(view.visited) == 7
        assert len(view.path) == 5
        assert view.frontier == ()
        assert len(view.log_lines) == 17
        assert view.current_log_index == 16
        assert view.progress == (12, 12)
        assert view.pseudocode_line == PseudocodeLine.GOAL
        assert view.is_playing is False

    def test_missing_endpoints_view(self, graph_session):
        """A run that cannot start still shows why."""
        graph_session.set_start_node(None)
        graph_session.step_forward()
        assert graph_session.steps == ()
        assert graph_session.step_index == -1
        view = graph_session.view()
        assert view.log_lines == ("[Graph] Please set Start and End nodes.",)
        assert view.current_log_index == 0

    def test_graph_cost(self, graph_session):
        graph_session.to_end()
        assert graph_session.path_cost == 2
        assert graph_session.path_length == 3
        assert graph_session.meta["parent"]["C"] == "B"


class TestInvalidation:
    """Test that edits clear derived state."""

    def test_grid_edit_invalidates(self, session):
        session.to_end()
        before = session.run_id
        assert session.toggle_cell(1, 1) is True
        assert session.steps == ()
        assert session.step_index == -1
        assert session.result is None
        assert session.path_cost == 0
        assert session.run_id > before

    @pytest.mark.parametrize(
        "edit",
        [
            lambda s: s.toggle_cell(0, 0),
            lambda s: s.cycle_weight(2, 2),
            lambda s: s.set_cell_weight(0, 0, 5),
            lambda s: s.move_start(2, 2),
            lambda s: s.move_end(0, 0),
        ],
    )
    def test_rejected_grid_edit_keeps_steps(self, session, edit):
        """Edits the grid refuses leave the built steps alone."""
        session.to_end()
        before = session.run_id
        assert edit(session) is False
        assert len(session.steps) == 12
        assert session.step_index == 11
        assert session.run_id == before

    def test_grid_edits_ignored_in_graph_mode(self, graph_session):
        assert graph_session.toggle_cell(1, 1) is False
        assert graph_session.move_start(1, 1) is False

    @pytest.mark.parametrize(
        "edit",
        [
            lambda s: s.add_node(40, 40),
            lambda s: s.move_node("A", 40, 40),
            lambda s: s.connect("A", "B"),
            lambda s: s.set_edge_weight("A-B", 7),
            lambda s: s.delete_node("A"),
            lambda s: s.delete_edge("A-B"),
            lambda s: s.set_start_node("B"),
            lambda s: s.set_end_node("B"),
        ],
    )
    def test_graph_edits_ignored_in_grid_mode(self, session, triangle_graph, edit):
        """Graph edits in grid mode neither touch the graph nor drop the steps."""
        session.graph = triangle_graph
        before_graph = triangle_graph.to_json()
        session.to_end()
        before = session.run_id
        assert edit(session) in (False, None)
        assert session.graph.to_json() == before_graph
        assert len(session.steps) == 12
        assert session.run_id == before

    def test_weight_edit_changes_cost(self, session):
        session.set_cell_weight(0, 1, 10)
        session.set_cell_weight(1, 0, 10)
        session.set_algorithm("dijkstra")
        session.to_end()
        assert session.path_cost == 13

    def test_move_endpoint(self, session):
        assert session.move_end(1, 1) is True
        session.to_end()
        assert session.result.shortest_path[-1] == "1,1"

    def test_resize_clamps_and_invalidates(self, session):
        session.rebuild()
        session.resize_grid(1, 100)
        assert (session.grid.rows, session.grid.cols) == (3, 60)
        assert session.steps == ()

    def test_duplicate_connect_does_not_invalidate(self, graph_session):
        graph_session.rebuild()
        assert graph_session.connect("A", "B") is None
        assert graph_session.steps != ()

    def test_graph_edits_invalidate(self, graph_session):
        graph_session.rebuild()
        assert graph_session.set_edge_weight("A-C", 1) is True
        assert graph_session.steps == ()
        graph_session.to_end()
        assert graph_session.result.shortest_path == ["A", "C"]

    def test_move_node_invalidates(self, graph_session):
        graph_session.rebuild()
        assert graph_session.move_node("B", 40, 40) is True
        assert graph_session.steps == ()

    def test_export_import_roundtrip(self, graph_session):
        document = graph_session.export_graph()
        graph_session.rebuild()
        graph_session.import_graph(json.loads(document))
        assert graph_session.steps == ()
        assert graph_session.graph.to_json() == document

    def test_bad_import_keeps_graph(self, graph_session):
        before = graph_session.export_graph()
        with pytest.raises(GraphFormatError):
            graph_session.import_graph("[1, 2, 3]")
        assert graph_session.export_graph() == before

    def test_endpoint_edits_invalidate(self, graph_session):
        graph_session.rebuild()
        assert graph_session.set_end_node("B") is True
        assert graph_session.steps == ()
        assert graph_session.set_end_node("Q") is False
        graph_session.to_end()
        assert graph_session.result.shortest_path == ["A", "B"]

    def test_reset_graph_mode(self, graph_session):
        graph_session.reset()
        assert graph_session.graph.nodes == []

    def test_reset_grid_mode(self, session):
        session.toggle_cell(1, 1)
        session.reset()
        assert not session.grid.is_wall(1, 1)
        assert session.grid.rows == 3

    def test_mode_switch_invalidates(self, session):
        session.rebuild()
        session.set_mode("graph")
        assert session.mode == "graph"
        assert session.steps == ()


class TestPlayback:
    """Test the async play loop."""

    def test_play_to_end(self, session, fake_sleep):
        """Play ticks once per step and stops at the last one."""
        asyncio.run(session.play())
        assert session.step_index == 11
        assert session.is_playing is False
        assert len(fake_sleep.calls) == 12
        assert all(delay == session.tick_delay for delay in fake_sleep.calls)

    def test_play_from_end_rewinds(self, session, fake_sleep):
        """Playing at the last step starts over from pre-start."""
        seen = []
        fake_sleep.on_tick = lambda n: seen.append(session.step_index)
        session.to_end()
        asyncio.run(session.play())
        assert seen[0] == -1
        assert session.step_index == 11

    def test_pause_stops_loop(self, session, fake_sleep):
        """Pausing during a tick leaves the position where it was."""

        def on_tick(n):
            if n == 3:
                session.pause()

        fake_sleep.on_tick = on_tick
        asyncio.run(session.play())
        assert session.step_index == 1
        assert session.is_playing is False
        assert len(session.steps) == 12

    def test_resume_after_pause(self, session, fake_sleep):
        fake_sleep.on_tick = lambda n: session.pause() if n == 3 else None
        asyncio.run(session.play())
        fake_sleep.on_tick = None
        asyncio.run(session.play())
        assert session.step_index == 11

    def test_edit_cancels_play(self, session, fake_sleep):
        """An edit during a tick stops the loop before another step applies."""

        def on_tick(n):
            if n == 3:
                session.toggle_cell(1, 1)

        fake_sleep.on_tick = on_tick
        asyncio.run(session.play())
        assert session.steps == ()
        assert session.step_index == -1
        assert session.is_playing is False
        assert len(fake_sleep.calls) == 3

    def test_new_play_supersedes_old(self, open_grid):
        """Starting a second play loop retires the first."""

        async def yield_once(delay):
            await asyncio.sleep(0)

        session = PlayerSession(grid=open_grid, algorithm="bfs", sleep=yield_once)

        async def scenario():
            first = asyncio.create_task(session.play())
            await asyncio.sleep(0)
            second = asyncio.create_task(session.play())
            await asyncio.gather(first, second)
            return first

        first = asyncio.run(scenario())
        assert first.done()
        assert session.step_index == 11
        assert session.is_playing is False

    def test_fast_solve_jumps_to_end(self, open_grid):
        session = PlayerSession(grid=open_grid, fast_solve=True, sleep=no_sleep_allowed)
        asyncio.run(session.play())
        assert session.step_index == len(session.steps) - 1
        assert session.is_playing is False

    def test_run_algorithm(self, session, fake_sleep):
        """run_algorithm rebuilds and then plays through."""
        session.to_end()
        asyncio.run(session.run_algorithm())
        assert session.step_index == 11
        assert len(fake_sleep.calls) == 12

    def test_run_algorithm_fast_solve(self, open_grid):
        session = PlayerSession(grid=open_grid, fast_solve=True, sleep=no_sleep_allowed)
        asyncio.run(session.run_algorithm())
        assert session.step_index == len(session.steps) - 1
