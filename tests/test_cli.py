from __future__ import annotations

import os
from pathlib import Path

import pytest

from sapling.cli import build_parser, main


def test_parser_accepts_language_aliases():
    parser = build_parser()

    for flag in ("--lang", "--language", "-l"):
        args = parser.parse_args(["new", "my-app", flag, "en-US"])
        assert args.language == "en-US"

    args = parser.parse_args(["new", "my-app", "--lang=--skip-npm"])
    assert args.language == "--skip-npm"


def test_parser_defaults():
    args = build_parser().parse_args(["init"])
    assert args.language == ""
    assert args.blueprint == "app"
    assert args.welcome is True
    assert args.yarn is None
    assert args.name is None


def test_cli_new_creates_project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys):
    monkeypatch.chdir(tmp_path)

    exit_code = main(["new", "my-app", "--lang", "en-US", "--skip-npm"])

    assert exit_code == 0
    index = tmp_path / "my-app" / "app" / "index.html"
    assert '<html lang="en-US">' in index.read_text(encoding="utf-8")
    assert Path(os.getcwd()) == tmp_path / "my-app"
    captured = capsys.readouterr()
    assert f"Created project at {tmp_path / 'my-app'}" in captured.out
    assert "  create app/index.html" in captured.err


def test_cli_new_rejects_technology_language(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys):
    monkeypatch.chdir(tmp_path)

    exit_code = main(["new", "my-app", "--lang=typescript"])

    assert exit_code == 1
    assert not (tmp_path / "my-app").exists()
    err = capsys.readouterr().err
    assert "An error with the `--lang` flag returned the following message:" in err
    assert "Trying to set the app programming language to `typescript`?" in err


def test_cli_new_warns_on_ambiguous_language(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys):
    monkeypatch.chdir(tmp_path)

    assert main(["new", "my-app", "--lang", "css"]) == 0

    err = capsys.readouterr().err
    assert "WARNING: An error with the `--lang` flag" in err
    assert '<html lang="css">' in (tmp_path / "my-app" / "app" / "index.html").read_text(encoding="utf-8")


def test_cli_new_dry_run(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys):
    monkeypatch.chdir(tmp_path)

    assert main(["new", "my-app", "--dry-run"]) == 0

    assert list(tmp_path.iterdir()) == []
    assert "Would create project at" in capsys.readouterr().out


def test_cli_new_requires_name(capsys):
    assert main(["new"]) == 1
    assert "requires a name to be specified" in capsys.readouterr().err


def test_cli_init_installs_into_current_directory(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.chdir(tmp_path)

    assert main(["init", "--name", "my-addon", "--blueprint", "addon", "--no-welcome"]) == 0

    assert (tmp_path / "index.js").exists()
    assert '"name": "my-addon"' in (tmp_path / "package.json").read_text(encoding="utf-8")


def test_cli_init_refuses_to_overwrite(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "README.md").write_text("custom", encoding="utf-8")

    assert main(["init", "--name", "my-app"]) == 1

    assert "Refusing to overwrite existing files" in capsys.readouterr().err
    assert (tmp_path / "README.md").read_text(encoding="utf-8") == "custom"


def test_cli_lang_without_value_is_a_usage_error(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.chdir(tmp_path)

    with pytest.raises(SystemExit) as excinfo:
        main(["new", "my-app", "--lang", "--skip-npm"])

    assert excinfo.value.code == 2
    assert list(tmp_path.iterdir()) == []


def test_cli_new_rejects_underscore_separated_language(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys):
    monkeypatch.chdir(tmp_path)

    assert main(["new", "my-app", "--lang", "en_US"]) == 1

    assert not (tmp_path / "my-app").exists()
    assert "`en_US` is not a well-formed language tag" in capsys.readouterr().err
