"""
Unit tests for the 'render' command.
"""

from unittest.mock import patch

import yaml
from click.testing import CliRunner

from graphlens.cli.commands.render import render


class TestRenderCommand:
    def test_writes_bundle(self, sample_graph_file, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        out = tmp_path / "site"

        result = CliRunner().invoke(render, [str(sample_graph_file), "-o", str(out), "--no-open"])

        assert result.exit_code == 0
        assert (out / "index.html").exists()
        assert (out / "graph.json").exists()
        assert "Generated:" in result.output

    def test_uses_saved_theme(self, sample_graph_file, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / ".graphlens").mkdir()
        (tmp_path / ".graphlens" / "config.yaml").write_text(yaml.dump({"viewer": {"theme": "light"}}))

        result = CliRunner().invoke(render, [str(sample_graph_file), "-o", "site", "--no-open"])

        assert result.exit_code == 0
        html = (tmp_path / "site" / "index.html").read_text()
        assert '|| "light"' in html

    def test_theme_option_overrides_saved(self, sample_graph_file, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        result = CliRunner().invoke(
            render, [str(sample_graph_file), "-o", "site", "--no-open", "--theme", "light"]
        )

        assert result.exit_code == 0
        assert '|| "light"' in (tmp_path / "site" / "index.html").read_text()

    @patch("graphlens.graph.visualize.webbrowser.open")
    def test_opens_browser_by_default(self, mock_open, sample_graph_file, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        result = CliRunner().invoke(render, [str(sample_graph_file)])

        assert result.exit_code == 0
        mock_open.assert_called_once()
        assert (tmp_path / ".graphlens" / "site" / "index.html").exists()

    def test_bad_config_exits_nonzero(self, sample_graph_file, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / ".graphlens").mkdir()
        (tmp_path / ".graphlens" / "config.yaml").write_text("viewer: [unclosed")

        result = CliRunner().invoke(render, [str(sample_graph_file), "--no-open"])

        assert result.exit_code == 1
        assert "Could not read config" in result.output

    def test_missing_graph_exits_nonzero(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        result = CliRunner().invoke(render, ["missing.json", "--no-open"])

        assert result.exit_code == 1

    @patch("graphlens.graph.visualize.webbrowser.open")
    def test_config_can_disable_browser(self, mock_open, sample_graph_file, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / ".graphlens").mkdir()
        (tmp_path / ".graphlens" / "config.yaml").write_text(yaml.dump({"viewer": {"open_browser": False}}))

        result = CliRunner().invoke(render, [str(sample_graph_file)])

        assert result.exit_code == 0
        mock_open.assert_not_called()
