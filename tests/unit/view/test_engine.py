"""
Unit tests for the GraphView engine facade.
"""

from unittest.mock import MagicMock

import pytest

from depmesh.config import EngineConfig, ViewportConfig
from depmesh.core.types import GraphData, LayoutMode
from depmesh.layout.modes import column_center
from depmesh.view.engine import GraphView
from depmesh.view.loop import ManualScheduler


class RecordingScheduler:
    """Scheduler whose cancel() is ignored, so stale frames can still fire."""

    def __init__(self):
        self.callbacks = []

    def call_soon(self, callback):
        self.callbacks.append(callback)
        return len(self.callbacks) - 1

    def cancel(self, handle):
        pass


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def view(scheduler, demo_graph):
    view = GraphView(1200, 800, scheduler=scheduler)
    view.load(demo_graph)
    return view


class TestLoading:
    def test_defaults_to_every_group(self, view, demo_graph):
        assert view.filters.active == {"Object", "Flow", "Trigger", "Field"}
        assert view.graph.node_count == demo_graph.node_count
        assert len(view.scene.nodes) == demo_graph.node_count

    def test_initial_filter(self, scheduler, demo_graph):
        view = GraphView(scheduler=scheduler)
        view.load(demo_graph, active_groups=["Object"])
        assert {n.id for n in view.graph.nodes} == {"Account", "Opportunity", "Contact"}
        assert view.graph.link_count == 2

    def test_load_starts_ticking(self, view, scheduler):
        assert view.loop.running
        assert scheduler.pending == 1

    def test_load_replaces_everything(self, view, two_group_graph):
        view.set_query("acc")
        view.load(two_group_graph)
        assert view.filters.active == {"X", "Y"}
        assert [n.id for n in view.graph.nodes] == ["A", "B"]
        assert view.simulation.alpha == 1.0

    def test_size_from_config(self, scheduler):
        config = EngineConfig(viewport=ViewportConfig(width=640, height=480))
        view = GraphView(config=config, scheduler=scheduler)
        assert (view.viewport.width, view.viewport.height) == (640, 480)


class TestTicking:
    def test_loop_stops_once_settled(self, view, scheduler):
        frames = scheduler.drain()
        assert not view.loop.running
        assert view.simulation.settled
        assert frames == view.simulation.tick_count

    def test_focus_keeps_ticking_after_settle(self, view, scheduler):
        view.focus()
        assert scheduler.drain(max_frames=500) == 500
        assert view.simulation.settled
        assert view.loop.running
        view.blur()
        scheduler.drain()
        assert not view.loop.running

    def test_drag_keeps_ticking_and_wakes_settled_view(self, view, scheduler):
        scheduler.drain()
        x, y = view.viewport.world_to_screen(*view.positions()["Account"])
        view.controls.pointer_down(x, y)
        assert view.loop.running
        assert scheduler.drain(max_frames=400) == 400
        view.controls.pointer_up(x, y)
        scheduler.drain()
        assert not view.loop.running

    def test_each_tick_rebuilds_scene(self, view, scheduler):
        first = view.scene
        scheduler.run_pending()
        assert view.scene is not first

    def test_on_render_callback(self, scheduler, two_group_graph):
        on_render = MagicMock()
        view = GraphView(scheduler=scheduler, on_render=on_render)
        view.load(two_group_graph)
        on_render.assert_called_once_with(view.scene)
        scheduler.run_pending()
        assert on_render.call_count == 2

    def test_run_until_settled(self, view):
        ticks = view.run_until_settled()
        assert ticks > 0
        assert view.simulation.settled
        assert not view.loop.running


class TestModeSwitching:
    def test_switch_discards_positions(self, scheduler, process_graph):
        view = GraphView(scheduler=scheduler)
        view.load(process_graph)
        view.run_until_settled()
        old = view.simulation

        assert view.set_mode(LayoutMode.LAYERED)
        assert view.simulation is not old
        view.run_until_settled()
        for node in view.simulation.nodes:
            assert node.x == pytest.approx(column_center(node.node.level, 250), abs=30)
        assert all(link.curved for link in view.scene.links)

    def test_same_mode_is_noop(self, view):
        old = view.simulation
        assert not view.set_mode(LayoutMode.FORCE)
        assert view.simulation is old

    def test_stale_frames_never_touch_new_state(self, demo_graph):
        scheduler = RecordingScheduler()
        view = GraphView(scheduler=scheduler)
        view.load(demo_graph)
        old = view.simulation
        stale = list(scheduler.callbacks)

        view.set_mode("layered")
        for callback in stale:
            callback()
        assert old.tick_count == 0
        assert view.simulation.tick_count == 0

    def test_filter_toggle_stops_old_loop(self, demo_graph):
        scheduler = RecordingScheduler()
        view = GraphView(scheduler=scheduler)
        view.load(demo_graph)
        stale = list(scheduler.callbacks)
        view.toggle_filter("Field")
        for callback in stale:
            callback()
        assert view.simulation.tick_count == 0


class TestViewportIndependence:
    def test_viewport_changes_do_not_move_nodes(self, view):
        view.run_until_settled()
        before = view.positions()
        view.controls.wheel(100, 100, -300)
        view.viewport.pan(50, 50)
        view.render()
        assert view.positions() == before

    def test_resize_rebuilds_scene(self, view):
        view.resize(640, 480)
        assert (view.scene.width, view.scene.height) == (640, 480)

    def test_fit_puts_nodes_on_screen(self, view):
        view.run_until_settled()
        view.fit(padding=40)
        for node in view.scene.nodes:
            assert 39 <= node.x <= 1161
            assert 39 <= node.y <= 761


class TestDestroy:
    def test_destroy_stops_loop(self, view, scheduler):
        view.destroy()
        assert not view.loop.running
        assert scheduler.pending == 0
        assert view.scene.is_empty
        assert not view.tick()

    def test_stale_frames_after_destroy(self, demo_graph):
        scheduler = RecordingScheduler()
        view = GraphView(scheduler=scheduler)
        view.load(demo_graph)
        sim = view.simulation
        view.destroy()
        for callback in scheduler.callbacks:
            callback()
        assert sim.tick_count == 0

    def test_no_restart_after_destroy(self, view, scheduler):
        view.destroy()
        view.wake()
        view.focus()
        assert not view.loop.running


class TestEmptyGraph:
    def test_zero_nodes_tick_to_empty_scene(self, scheduler):
        view = GraphView(scheduler=scheduler)
        view.load(GraphData())
        scheduler.drain()
        assert view.scene.is_empty
        assert view.bounds() is None

    def test_fit_without_nodes(self, scheduler):
        view = GraphView(scheduler=scheduler)
        view.fit()
        assert view.viewport.scale == 1.0


class TestExport:
    def test_export_png(self, view, tmp_path):
        view.run_until_settled()
        path = tmp_path / "graph.png"
        data = view.export_png(path)
        assert data.startswith(b"\x89PNG")
        assert path.read_bytes() == data
