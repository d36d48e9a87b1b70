"""Tests for the one-shot command line and the interactive shell loop."""

import pytest
from prompt_toolkit.application import create_app_session
from prompt_toolkit.input import create_pipe_input
from prompt_toolkit.output import DummyOutput

from geotiles.cli import main
from geotiles.shell.app import TileShell
from geotiles.tiles import TileId


class TestMain:
    def test_runs_one_command(self, config_path, capsys):
        assert main(["quadkey", "(3, 5, 3)"]) == 0
        assert capsys.readouterr().out == "213\n"

    def test_multi_line_output(self, config_path, capsys):
        assert main(["children", "0_0_0"]) == 0
        assert capsys.readouterr().out.split() == ["1_0_0", "1_1_0", "1_0_1", "1_1_1"]

    def test_unknown_command(self, config_path, capsys):
        assert main(["bogus"]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err.startswith("error:")

    def test_domain_error(self, config_path, capsys):
        assert main(["quadkey", "0_0_0"]) == 1
        assert "error:" in capsys.readouterr().err

    def test_negative_zoom(self, config_path, capsys):
        assert main(["tile", "(0, 0)", "-1"]) == 1
        assert capsys.readouterr().err.startswith("error:")

    def test_does_not_write_config(self, config_path):
        main(["quadkey", "1_0_0"])
        assert not config_path.exists()


@pytest.fixture
def shell(cfg):
    with create_pipe_input() as inp:
        with create_app_session(input=inp, output=DummyOutput()):
            yield TileShell(cfg)


class TestTileShell:
    def test_execute_updates_state(self, shell):
        assert shell.execute("tile (0, 0) 1") is True
        assert shell.state.last_tile == TileId.from_xyz(1, 1, 1)
        assert shell.state.info_msg == ""

    def test_execute_reports_errors(self, shell):
        assert shell.execute("parent .") is True
        assert shell.state.info_msg == "last command failed"

    def test_negative_levels_keep_the_session(self, shell):
        assert shell.execute("children 1_0_0 -1") is True
        assert shell.state.info_msg == "last command failed"
        assert shell.execute("children 1_0_0") is True
        assert shell.state.last_tile == TileId.from_xyz(1, 1, 2)

    @pytest.mark.parametrize("line", ["quit", "exit", " Q "])
    def test_quit_words(self, shell, line):
        assert shell.execute(line) is False

    def test_toolbar_shows_last_tile(self, shell):
        shell.execute("fromquadkey 213")
        text = "".join(fragment for _, fragment in shell._toolbar())
        assert "last 3_3_5" in text
        assert "zoom 0..19" in text
