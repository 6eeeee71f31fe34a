"""
Unit tests for the top-level command group.
"""

import json

from click.testing import CliRunner

from depmesh.cli.main import main


class TestMain:
    def test_help_lists_commands(self):
        result = CliRunner().invoke(main, ["--help"])
        assert result.exit_code == 0
        for command in ("init", "demo", "groups", "layout", "render"):
            assert command in result.output

    def test_verbose_flag(self):
        result = CliRunner().invoke(main, ["-v", "demo"])
        assert result.exit_code == 0
        assert len(json.loads(result.stdout)["nodes"]) == 10
