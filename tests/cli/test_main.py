"""Tests for the repo-heatmap command line."""

import json
import os

import pytest
from typer.testing import CliRunner

import repo_heatmap.cli.main as cli_main
from repo_heatmap import __version__
from repo_heatmap.cli import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep user and project config files and env vars out of CLI runs."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(tmp_path)
    for key in list(os.environ):
        if key.startswith("REPO_HEATMAP_"):
            monkeypatch.delenv(key)


def graph_payload(result):
    return json.loads(result.stdout)


class TestVersion:
    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestJsonOutput:
    """Test --json mode."""

    def test_json_document(self, git_repo):
        result = runner.invoke(app, ["-p", str(git_repo), "--json"])
        assert result.exit_code == 0, result.output

        payload = graph_payload(result)
        assert payload["stats"]["totalFiles"] == 3
        assert payload["stats"]["totalChanges"] == 5
        files = [n for n in payload["graph"]["nodes"] if n["kind"] == "file"]
        assert [n["id"] for n in files] == ["src/app.py", "src/lib/util.py", "README.md"]
        assert files[0]["colorValue"] == "rgb(239, 68, 68)"

    def test_max_files_and_exclude(self, git_repo):
        result = runner.invoke(
            app, ["-p", str(git_repo), "--json", "--max-files", "1", "--exclude", "README, lib/"]
        )
        assert result.exit_code == 0, result.output
        payload = graph_payload(result)
        files = [n["id"] for n in payload["graph"]["nodes"] if n["kind"] == "file"]
        assert files == ["src/app.py"]
        assert payload["stats"]["totalFiles"] == 1

    def test_include(self, git_repo):
        result = runner.invoke(app, ["-p", str(git_repo), "--json", "--include", "lib"])
        payload = graph_payload(result)
        dirs = [n["id"] for n in payload["graph"]["nodes"] if n["kind"] == "directory"]
        assert dirs == [".", "src", "src/lib"]

    def test_config_file_sets_max_files(self, git_repo, tmp_path):
        config = tmp_path / "custom.toml"
        config.write_text("max_files = 2\n")
        result = runner.invoke(app, ["-p", str(git_repo), "--json", "-c", str(config)])
        assert result.exit_code == 0, result.output
        files = [n for n in graph_payload(result)["graph"]["nodes"] if n["kind"] == "file"]
        assert len(files) == 2

    def test_cli_flag_beats_config_file(self, git_repo, tmp_path):
        config = tmp_path / "custom.toml"
        config.write_text("max_files = 2\n")
        result = runner.invoke(
            app, ["-p", str(git_repo), "--json", "-c", str(config), "--max-files", "3"]
        )
        files = [n for n in graph_payload(result)["graph"]["nodes"] if n["kind"] == "file"]
        assert len(files) == 3


class TestErrors:
    def test_not_a_repository(self, tmp_path):
        plain = tmp_path / "plain"
        plain.mkdir()
        result = runner.invoke(app, ["-p", str(plain), "--json"])
        assert result.exit_code == 1
        assert "Not a valid git repository" in result.output

    def test_invalid_port_rejected(self, git_repo):
        result = runner.invoke(app, ["-p", str(git_repo), "--port", "70000"])
        assert result.exit_code == 2

    def test_bad_config_value(self, git_repo, tmp_path):
        config = tmp_path / "bad.toml"
        config.write_text('colour = "red"\n')
        result = runner.invoke(app, ["-p", str(git_repo), "--json", "-c", str(config)])
        assert result.exit_code == 1
        assert "Unknown configuration key" in result.output


class TestOutputFile:
    def test_writes_html(self, git_repo, tmp_path):
        out = tmp_path / "heatmap.html"
        result = runner.invoke(app, ["-p", str(git_repo), "--output", str(out)])
        assert result.exit_code == 0, result.output
        assert "Analysis complete!" in result.output
        assert "Files analyzed: 3" in result.output
        html = out.read_text(encoding="utf-8")
        assert 'id="heatmap-data"' in html
        assert "src/lib/util.py" in html


class TestServe:
    """Serving is the default; the server itself is stubbed out."""

    def test_serves_with_settings(self, git_repo, monkeypatch):
        calls = {}

        def fake_serve(graph, stats, host, port, open_browser, verbose):
            calls.update(
                graph=graph, stats=stats, host=host, port=port, open_browser=open_browser
            )

        monkeypatch.setattr(cli_main, "serve_heatmap", fake_serve)
        result = runner.invoke(
            app, ["-p", str(git_repo), "--port", "4010", "--host", "0.0.0.0", "--no-open"]
        )

        assert result.exit_code == 0, result.output
        assert calls["port"] == 4010
        assert calls["host"] == "0.0.0.0"
        assert calls["open_browser"] is False
        assert calls["stats"]["totalChanges"] == 5
        assert "http://localhost:4010" in result.output
        assert "Stopped." in result.output

    def test_ctrl_c_stops_cleanly(self, git_repo, monkeypatch):
        def interrupted(*args, **kwargs):
            raise KeyboardInterrupt

        monkeypatch.setattr(cli_main, "serve_heatmap", interrupted)
        result = runner.invoke(app, ["-p", str(git_repo), "--no-open"])
        assert result.exit_code == 0
        assert "Stopped." in result.output


class TestInteractive:
    def test_prompts_then_writes(self, git_repo, tmp_path):
        out = tmp_path / "interactive.html"
        answers = f"{git_repo}\n4000\nn\n1\nn\n"
        result = runner.invoke(
            app, ["--interactive", "--output", str(out)], input=answers
        )
        assert result.exit_code == 0, result.output
        assert "Repository path?" in result.output
        html = out.read_text(encoding="utf-8")
        assert "src/app.py" in html
        assert "src/lib/util.py" not in html

    def test_date_range_answers(self, git_repo, monkeypatch):
        seen = {}

        def fake_serve(graph, stats, host, port, open_browser, verbose):
            seen.update(port=port, open_browser=open_browser, stats=stats)

        monkeypatch.setattr(cli_main, "serve_heatmap", fake_serve)
        answers = f"{git_repo}\n\ny\n2024-01-15\n\n\ny\n"
        result = runner.invoke(app, ["--interactive"], input=answers)

        assert result.exit_code == 0, result.output
        assert seen["port"] == 3000
        assert seen["open_browser"] is True
        # Only the two later commits fall after the since date
        assert seen["stats"]["totalChanges"] == 3

    def test_invalid_repository(self, tmp_path):
        plain = tmp_path / "plain"
        plain.mkdir()
        result = runner.invoke(app, ["--interactive"], input=f"{plain}\n")
        assert result.exit_code == 1
        assert "Not a valid git repository" in result.output

    def test_end_of_input_cancels(self, git_repo):
        result = runner.invoke(app, ["--interactive"], input=f"{git_repo}\n")
        assert result.exit_code == 0
        assert "Cancelled" in result.output


class TestLogging:
    def test_verbose_log_file(self, git_repo, tmp_path):
        log = tmp_path / "run.log"
        out = tmp_path / "heatmap.html"
        result = runner.invoke(
            app, ["-p", str(git_repo), "-v", "--log-file", str(log), "--output", str(out)]
        )
        assert result.exit_code == 0, result.output
        text = log.read_text()
        assert "Running git" in text
        assert "Parsed 5 change records" in text
