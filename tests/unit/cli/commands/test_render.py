"""
Unit tests for the 'render' command.
"""

import struct

import pytest
from click.testing import CliRunner

from depmesh.cli.commands.render import render
from depmesh.core.demo import DemoManager


@pytest.fixture
def demo_dir(tmp_path):
    return DemoManager(tmp_path).provision()


def _args(demo_dir, tmp_path, *extra):
    return [str(demo_dir / "graph.json"), "-o", str(tmp_path / "out.png"),
            "--width", "300", "--height", "200", *extra]


class TestRenderCommand:
    def test_writes_png(self, demo_dir, tmp_path):
        result = CliRunner().invoke(render, _args(demo_dir, tmp_path))
        assert result.exit_code == 0
        assert "Rendered 10 nodes" in result.output
        data = (tmp_path / "out.png").read_bytes()
        assert data.startswith(b"\x89PNG")
        assert struct.unpack(">II", data[16:24]) == (300, 200)

    def test_layered_with_search(self, demo_dir, tmp_path):
        result = CliRunner().invoke(render, [
            str(demo_dir / "process.json"), "-o", str(tmp_path / "p.png"),
            "--mode", "layered", "--search", "stage",
        ])
        assert result.exit_code == 0
        assert (tmp_path / "p.png").exists()

    def test_hover_and_filter(self, demo_dir, tmp_path):
        result = CliRunner().invoke(
            render, _args(demo_dir, tmp_path, "--hover", "Account", "-f", "Object")
        )
        assert result.exit_code == 0
        assert "Rendered 3 nodes" in result.output

    def test_unknown_hover_warns(self, demo_dir, tmp_path):
        result = CliRunner().invoke(render, _args(demo_dir, tmp_path, "--hover", "Nope"))
        assert result.exit_code == 0
        assert "Nope" in result.output

    def test_missing_graph(self, tmp_path):
        result = CliRunner().invoke(render, [str(tmp_path / "missing.json")])
        assert result.exit_code == 1
