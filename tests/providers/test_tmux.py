"""Tests for the tmux provider."""

import subprocess
from unittest.mock import call, patch

import pytest

from goldenpane import CanvasSize, GoldenRatioSession, HostEvent, HostOperationError, NotifyLevel
from goldenpane.providers import TmuxProvider


def completed(stdout="", returncode=0, stderr=""):
    return subprocess.CompletedProcess(args=["tmux"], returncode=returncode, stdout=stdout, stderr=stderr)


@pytest.fixture
def run():
    with patch("goldenpane.providers.tmux.subprocess.run") as mock_run:
        mock_run.return_value = completed()
        yield mock_run


def tmux_args(mock_run):
    return [c.args[0][1:] for c in mock_run.call_args_list]


class TestQueries:
    """Reading the layout."""

    def test_get_panes(self, run):
        run.return_value = completed(
            "%0|120|50|0|0|1|0|nvim|main.py\n"
            "%1|79|50|0|121|0|0|htop|status|with|pipes\n"
        )

        panes = TmuxProvider().get_panes()

        assert [p.id for p in panes] == ["%0", "%1"]
        first, second = panes
        assert (first.width, first.height, first.row, first.col) == (120, 50, 0, 0)
        assert first.active is True
        assert first.filetype == "nvim"
        assert first.buffer_name == "main.py"
        assert first.buffer == "%0"
        assert second.col == 121
        assert second.buffer_name == "status|with|pipes"

    def test_get_panes_dead_pane(self, run):
        run.return_value = completed("%3|80|24|0|0|0|1|bash|done\n")

        (pane,) = TmuxProvider().get_panes()

        assert pane.buffer_valid is False

    def test_get_panes_skips_short_lines(self, run):
        run.return_value = completed("garbage\n\n")
        assert TmuxProvider().get_panes() == []

    def test_canvas_size(self, run):
        run.return_value = completed("50|200")

        assert TmuxProvider().get_canvas_size() == CanvasSize(lines=50, columns=200)

    def test_active_pane(self, run):
        run.return_value = completed("%4\n")
        assert TmuxProvider().get_active_pane_id() == "%4"

    def test_pane_valid(self, run):
        run.return_value = completed("%4")
        assert TmuxProvider().is_pane_valid("%4") is True

        run.return_value = completed(returncode=1, stderr="can't find pane: %4")
        assert TmuxProvider().is_pane_valid("%4") is False

    def test_is_available_without_tmux(self, run):
        run.side_effect = FileNotFoundError("tmux")
        assert TmuxProvider().is_available() is False


class TestMutations:
    """Resizing and rebalancing."""

    def test_set_width(self, run):
        TmuxProvider().set_pane_width("%0", 123)
        assert tmux_args(run) == [["resize-pane", "-t", "%0", "-x", "123"]]

    def test_set_height(self, run):
        TmuxProvider().set_pane_height("%0", 30)
        assert tmux_args(run) == [["resize-pane", "-t", "%0", "-y", "30"]]

    def test_resize_failure_raises(self, run):
        run.return_value = completed(returncode=1, stderr="can't find pane: %9")

        with pytest.raises(HostOperationError, match="can't find pane"):
            TmuxProvider().set_pane_width("%9", 10)

    def test_missing_binary_raises(self, run):
        run.side_effect = FileNotFoundError("tmux")

        with pytest.raises(HostOperationError):
            TmuxProvider().set_pane_height("%0", 10)

    def test_equalize(self, run):
        TmuxProvider().equalize()
        assert tmux_args(run) == [["select-layout", "-E"]]

    def test_recenter_is_noop(self, run):
        TmuxProvider().recenter("%0")
        run.assert_not_called()

    def test_notify(self, run):
        provider = TmuxProvider()
        provider.notify("goldenpane: Enabled")
        provider.notify("goldenpane: bad", NotifyLevel.ERROR)

        assert tmux_args(run) == [
            ["display-message", "goldenpane: Enabled"],
            ["display-message", "ERROR: goldenpane: bad"],
        ]


class TestHooks:
    """Event subscription through tmux hooks."""

    def test_subscribe_installs_hooks(self, run):
        provider = TmuxProvider(hook_command="goldenpane resize", hook_index=7)

        handle = provider.subscribe("GoldenRatio", list(HostEvent), lambda event: None)

        assert handle == "GoldenRatio"
        assert tmux_args(run) == [
            ["set-hook", "-g", "after-select-pane[7]", "run-shell -b 'goldenpane resize'"],
            ["set-hook", "-gw", "window-resized[7]", "run-shell -b 'goldenpane resize'"],
            ["set-hook", "-gw", "after-split-window[7]", "run-shell -b 'goldenpane resize'"],
            ["set-option", "-g", "@goldenpane-group", "GoldenRatio"],
        ]

    def test_unsubscribe_removes_hooks(self, run):
        TmuxProvider(hook_index=7).unsubscribe("GoldenRatio")

        assert tmux_args(run) == [
            ["set-hook", "-gu", "after-select-pane[7]"],
            ["set-hook", "-gwu", "window-resized[7]"],
            ["set-hook", "-gwu", "after-split-window[7]"],
            ["set-option", "-gu", "@goldenpane-group"],
        ]

    def test_has_subscription(self, run):
        run.return_value = completed("GoldenRatio\n")
        assert TmuxProvider().has_subscription("GoldenRatio") is True

        run.return_value = completed("")
        assert TmuxProvider().has_subscription("GoldenRatio") is False

    def test_schedule_runs_now(self, run):
        calls = []
        TmuxProvider().schedule(calls.append, 1)
        assert calls == [1]

    def test_failed_enable_removes_installed_hooks(self, run):
        def tmux(argv, **kwargs):
            if argv[1:3] == ["set-hook", "-gw"] and argv[3].startswith("window-resized"):
                return completed(returncode=1, stderr="invalid option")
            return completed()

        run.side_effect = tmux
        session = GoldenRatioSession(TmuxProvider(hook_index=7))

        session.enable()

        assert session.is_enabled() is False
        issued = tmux_args(run)
        assert ["set-hook", "-gu", "after-select-pane[7]"] in issued
        assert ["set-option", "-gu", "@goldenpane-group"] in issued
        assert ["set-option", "-g", "@goldenpane-group", "GoldenRatio"] not in issued
        assert issued[-1][0] == "display-message"
        assert "Failed to enable" in issued[-1][1]
