"""Tests for the graphism-new command line."""

from __future__ import annotations

import pytest

from graphism_new.cli import main

pytestmark = pytest.mark.unit


@pytest.fixture(autouse=True)
def offline_host(monkeypatch):
    """No elixir: every module name is free and the version comes from flags."""
    for name in ("GRAPHISM_NEW_PORT", "GRAPHISM_NEW_ASSUME_YES", "GRAPHISM_NEW_DEFAULT_STYLE"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(
        "graphism_new.scaffolder.host.run_command",
        lambda cmd, cwd=None, timeout=30: (0, "false", ""),
    )


class TestMain:
    def test_missing_path(self, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main([])
        assert excinfo.value.code == 1
        assert "Expected PATH to be given" in capsys.readouterr().out

    def test_generates_project(self, tmp_path, capsys):
        target = tmp_path / "hello_world"
        main([str(target), "--elixir-version", "1.15.7", "--rest"])

        out = capsys.readouterr().out
        assert "creating" in out
        assert "mix.exs" in out
        assert "/doc" in out
        mix = (target / "mix.exs").read_text(encoding="utf-8")
        assert 'elixir: "~> 1.15",' in mix
        assert (target / "test" / "hello_world" / "api_test.exs").exists()

    def test_port_flag(self, tmp_path):
        target = tmp_path / "shop"
        main([str(target), "--elixir-version", "1.15.7", "--rest", "--port", "5000"])
        readme = (target / "README.md").read_text(encoding="utf-8")
        assert "http://localhost:5000/doc" in readme

    def test_invalid_module(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main([str(tmp_path / "app"), "--module", "lowercase", "--elixir-version", "1.15.7"])
        assert excinfo.value.code == 1
        assert "Module name must be a valid Elixir alias" in capsys.readouterr().out
        assert not (tmp_path / "app").exists()

    def test_empty_app_override(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main([str(tmp_path / "hello_world"), "--app", "", "--elixir-version", "1.15.7"])
        assert excinfo.value.code == 1
        assert "Application name must start" in capsys.readouterr().out
        assert not (tmp_path / "hello_world").exists()

    def test_invalid_port(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main([str(tmp_path / "app"), "--port", "0", "--elixir-version", "1.15.7"])
        assert excinfo.value.code == 1
        assert "Invalid configuration" in capsys.readouterr().out

    def test_existing_directory_with_yes(self, tmp_path):
        target = tmp_path / "app"
        target.mkdir()
        (target / "keep.txt").write_text("x", encoding="utf-8")
        main([str(target), "--elixir-version", "1.15.7", "-y"])
        assert (target / "mix.exs").exists()
        assert (target / "keep.txt").exists()

    def test_declined_confirmation(self, tmp_path, capsys, monkeypatch):
        target = tmp_path / "app"
        target.mkdir()
        (target / "keep.txt").write_text("x", encoding="utf-8")
        monkeypatch.setattr("rich.prompt.Confirm.ask", lambda *args, **kwargs: False)

        with pytest.raises(SystemExit) as excinfo:
            main([str(target), "--elixir-version", "1.15.7"])

        assert excinfo.value.code == 1
        assert "select another directory" in capsys.readouterr().out
        assert sorted(p.name for p in target.iterdir()) == ["keep.txt"]

    def test_missing_elixir(self, tmp_path, capsys, monkeypatch):
        monkeypatch.delenv("GRAPHISM_NEW_ELIXIR_VERSION", raising=False)

        def no_elixir(cmd, cwd=None, timeout=30):
            raise FileNotFoundError(cmd[0])

        monkeypatch.setattr("graphism_new.scaffolder.host.run_command", no_elixir)
        with pytest.raises(SystemExit) as excinfo:
            main([str(tmp_path / "app")])
        assert excinfo.value.code == 1
        assert "--elixir-version" in capsys.readouterr().out
