# tests/test_install_cli.py
# -*- coding: utf-8 -*-
"""
Tests for the install.py command-line entry point.
"""

import os
import subprocess
import sys
from pathlib import Path

import pytest
import yaml
from pytest_mock import MockerFixture

import install

REPO_ROOT = Path(__file__).resolve().parent.parent


@pytest.fixture
def config_file(tmp_path):
    cfg = tmp_path / "config.yaml"
    cfg.write_text(
        yaml.safe_dump(
            {
                "plugins": [
                    {"source": "ellisonleao/gruvbox.nvim", "lazy": False},
                    {
                        "source": "hrsh7th/nvim-cmp",
                        "event": "InsertEnter",
                        "dependencies": ["hrsh7th/cmp-path"],
                    },
                    {"source": "tpope/vim-fugitive"},
                ]
            }
        ),
        encoding="utf-8",
    )
    return cfg


def test_parse_args_requires_command():
    with pytest.raises(SystemExit):
        install.parse_args([])


def test_parse_args_global_flags():
    args = install.parse_args(
        ["-v", "--data-dir", "/d", "--config", "c.yaml", "bootstrap", "--runtimepath", "/a,/b"]
    )

    assert args.verbose is True
    assert args.data_dir == "/d"
    assert args.config == "c.yaml"
    assert args.command == "bootstrap"
    assert args.runtimepath == "/a,/b"


def test_path_command(tmp_path, config_file, capsys):
    rc = install.main(
        ["--config", str(config_file), "--data-dir", str(tmp_path), "path"]
    )

    assert rc == 0
    assert capsys.readouterr().out.strip() == str(tmp_path / "lazy" / "lazy.nvim")


def test_path_command_has_no_side_effects(tmp_path, config_file, mocker: MockerFixture):
    mock_run_command = mocker.patch("bootstrap_installer.bs_plugin_manager.run_command")

    install.main(["--config", str(config_file), "--data-dir", str(tmp_path), "path"])

    mock_run_command.assert_not_called()
    assert not (tmp_path / "lazy").exists()


def test_plugins_command(config_file, capsys):
    rc = install.main(["--config", str(config_file), "plugins"])

    out = capsys.readouterr().out.splitlines()
    assert rc == 0
    assert out == [
        "ellisonleao/gruvbox.nvim (start)",
        "hrsh7th/nvim-cmp (on InsertEnter; requires hrsh7th/cmp-path)",
        "tpope/vim-fugitive",
    ]


def test_plugins_command_without_plugins(tmp_path, capsys):
    rc = install.main(["--config", str(tmp_path / "none.yaml"), "plugins"])

    assert rc == 0
    assert "No plugins declared." in capsys.readouterr().out


def test_bootstrap_command_existing_install(tmp_path, config_file, capsys, mocker: MockerFixture):
    (tmp_path / "lazy" / "lazy.nvim").mkdir(parents=True)
    mock_run_command = mocker.patch("bootstrap_installer.bs_plugin_manager.run_command")

    rc = install.main(
        [
            "--config", str(config_file),
            "--data-dir", str(tmp_path),
            "bootstrap", "--runtimepath", "/usr/share/nvim/runtime",
        ]
    )

    out = capsys.readouterr().out
    assert rc == 0
    mock_run_command.assert_not_called()
    install_path = str(tmp_path / "lazy" / "lazy.nvim")
    assert f"plugin manager: {install_path}" in out
    assert f"runtimepath: {install_path},/usr/share/nvim/runtime" in out
    assert "plugins: 3" in out


def test_bootstrap_command_clone_failure_exits_1(
    tmp_path, config_file, capsys, mocker: MockerFixture
):
    mocker.patch(
        "bootstrap_installer.bs_plugin_manager.run_command",
        return_value=subprocess.CompletedProcess(
            args=[], returncode=128, stdout="fatal: unable to access"
        ),
    )
    mocker.patch("bootstrap_installer.bs_plugin_manager.wait_for_keypress")

    with pytest.raises(SystemExit) as exc_info:
        install.main(
            ["--config", str(config_file), "--data-dir", str(tmp_path), "bootstrap"]
        )

    assert exc_info.value.code == 1
    captured = capsys.readouterr()
    assert "Failed to clone lazy.nvim:\nfatal: unable to access" in captured.err
    assert "plugin manager:" not in captured.out


def test_invalid_configuration_returns_2(tmp_path):
    cfg = tmp_path / "config.yaml"
    cfg.write_text(yaml.safe_dump({"plugins": [{"source": "nope"}]}), encoding="utf-8")

    assert install.main(["--config", str(cfg), "path"]) == 2


def _run_cli(*cli_args, cwd):
    """Runs install.py in a fresh interpreter so only its own logging applies."""
    env = {
        key: value
        for key, value in os.environ.items()
        if key not in ("ENVIRONMENT", "LOG_FORMAT", "LOG_LEVEL")
    }
    return subprocess.run(
        [sys.executable, str(REPO_ROOT / "install.py"), *cli_args],
        cwd=cwd,
        env=env,
        stdin=subprocess.DEVNULL,
        capture_output=True,
        text=True,
        timeout=60,
    )


def test_cli_bootstrap_logs_each_line_once(tmp_path, config_file):
    (tmp_path / "lazy" / "lazy.nvim").mkdir(parents=True)

    result = _run_cli(
        "-v", "--config", str(config_file), "--data-dir", str(tmp_path), "bootstrap",
        cwd=tmp_path,
    )

    assert result.returncode == 0
    assert result.stderr.count("plugin(s) declared") == 1
    assert result.stderr.count("already present at") == 1


def test_cli_clone_failure_shows_message_once(tmp_path, config_file):
    result = _run_cli(
        "--config", str(config_file),
        "--data-dir", str(tmp_path),
        "--git-command", str(tmp_path / "no-such-git"),
        "bootstrap",
        cwd=tmp_path,
    )

    assert result.returncode == 1
    assert result.stderr.count("Failed to clone lazy.nvim:") == 1
    assert result.stderr.count("Press any key to exit...") == 1
    assert "plugin manager:" not in result.stdout
