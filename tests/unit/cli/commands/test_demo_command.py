"""
Unit tests for the 'demo' command.
"""

import json

from click.testing import CliRunner

from depmesh.cli.commands.demo import demo
from depmesh.core.loader import load_graph_file


class TestDemoCommand:
    def test_prints_graph(self):
        result = CliRunner().invoke(demo)
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert len(data["nodes"]) == 10
        assert len(data["links"]) == 9

    def test_process_graph(self):
        result = CliRunner().invoke(demo, ["--process"])
        data = json.loads(result.output)
        assert max(n["level"] for n in data["nodes"]) == 6

    def test_writes_file(self, tmp_path):
        path = tmp_path / "graph.json"
        result = CliRunner().invoke(demo, ["-o", str(path)])
        assert result.exit_code == 0
        assert "Demo graph written" in result.output
        assert load_graph_file(path).node_count == 10
