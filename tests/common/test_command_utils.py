import logging
import subprocess
from unittest.mock import MagicMock

import pytest
from pytest_mock import MockerFixture

from common.command_utils import command_exists, log_message, run_command
from config.config_models import AppSettings


@pytest.fixture
def mock_app_settings():
    """Fixture to create mock AppSettings for testing."""
    mock_settings = MagicMock(spec=AppSettings)
    mock_settings.symbols = {"error": "❌", "gear": "⚙️", "warning": "!"}
    return mock_settings


@pytest.fixture
def mock_subprocess_run(mocker: MockerFixture):
    return mocker.patch("common.command_utils.subprocess.run")


@pytest.mark.parametrize(
    "level", ["debug", "info", "warning", "error", "critical"]
)
def test_log_message_dispatches_level(mock_logger, level):
    log_message("hello", level, mock_logger)

    getattr(mock_logger, level).assert_called_once_with(
        "hello", exc_info=False
    )


def test_log_message_unknown_level_is_info(mock_logger):
    log_message("hello", "loud", mock_logger)

    mock_logger.info.assert_called_once_with("hello", exc_info=False)


def test_log_message_defaults_to_module_logger(mocker: MockerFixture):
    module_logger = mocker.patch("common.command_utils.module_logger")

    log_message("hello", "warning")

    module_logger.warning.assert_called_once_with("hello", exc_info=False)


def test_run_command_list_with_capture(
    mock_subprocess_run, mock_logger, mock_app_settings
):
    mock_subprocess_run.return_value = subprocess.CompletedProcess(
        args=["echo", "hi"], returncode=0, stdout="hi\n", stderr=""
    )

    result = run_command(
        ["echo", "hi"],
        mock_app_settings,
        capture_output=True,
        current_logger=mock_logger,
    )

    assert result.stdout == "hi\n"
    mock_subprocess_run.assert_called_once_with(
        ["echo", "hi"],
        check=True,
        shell=False,
        text=True,
        input=None,
        cwd=None,
        env=None,
        capture_output=True,
    )
    mock_logger.info.assert_any_call("⚙️ Executing: echo hi ", exc_info=False)
    mock_logger.debug.assert_any_call("   stdout: hi", exc_info=False)


def test_run_command_merge_stderr(mock_subprocess_run, mock_logger):
    mock_subprocess_run.return_value = subprocess.CompletedProcess(
        args=["git"], returncode=128, stdout="fatal: no"
    )

    result = run_command(
        ["git", "clone"],
        None,
        check=False,
        merge_stderr=True,
        current_logger=mock_logger,
    )

    assert result.returncode == 128
    kwargs = mock_subprocess_run.call_args[1]
    assert kwargs["stdout"] == subprocess.PIPE
    assert kwargs["stderr"] == subprocess.STDOUT
    assert "capture_output" not in kwargs


def test_run_command_shell_joins_list(mock_subprocess_run, mock_logger):
    mock_subprocess_run.return_value = subprocess.CompletedProcess(
        args="echo hi", returncode=0
    )

    run_command(["echo", "hi"], None, shell=True, current_logger=mock_logger)

    assert mock_subprocess_run.call_args[0][0] == "echo hi"
    assert mock_subprocess_run.call_args[1]["shell"] is True


def test_run_command_string_without_shell_warns(
    mock_subprocess_run, mock_logger, mock_app_settings
):
    mock_subprocess_run.return_value = subprocess.CompletedProcess(
        args=["ls", "-l"], returncode=0
    )

    run_command("ls -l", mock_app_settings, current_logger=mock_logger)

    assert mock_subprocess_run.call_args[0][0] == ["ls", "-l"]
    mock_logger.warning.assert_called_once_with(
        "! Running string command 'ls -l' without shell=True. Consider list format.",
        exc_info=False,
    )


def test_run_command_called_process_error(
    mock_subprocess_run, mock_logger, mock_app_settings
):
    mock_subprocess_run.side_effect = subprocess.CalledProcessError(
        2, ["false"], output="out", stderr="bad"
    )

    with pytest.raises(subprocess.CalledProcessError):
        run_command(["false"], mock_app_settings, current_logger=mock_logger)

    mock_logger.error.assert_any_call(
        "❌ Command `false` failed (rc 2).", exc_info=False
    )
    mock_logger.error.assert_any_call("   stdout: out", exc_info=False)
    mock_logger.error.assert_any_call("   stderr: bad", exc_info=False)


def test_run_command_not_found(
    mock_subprocess_run, mock_logger, mock_app_settings
):
    mock_subprocess_run.side_effect = FileNotFoundError(
        2, "No such file", "nosuchcmd"
    )

    with pytest.raises(FileNotFoundError):
        run_command(["nosuchcmd"], mock_app_settings, current_logger=mock_logger)

    mock_logger.error.assert_called_once_with(
        "❌ Command not found: nosuchcmd. Ensure it's installed and in PATH.",
        exc_info=False,
    )


def test_run_command_unexpected_error(
    mock_subprocess_run, mock_logger, mock_app_settings
):
    mock_subprocess_run.side_effect = RuntimeError("kaboom")

    with pytest.raises(RuntimeError):
        run_command(["x"], mock_app_settings, current_logger=mock_logger)

    mock_logger.error.assert_called_once_with(
        "❌ Unexpected error running command `x`: kaboom", exc_info=True
    )


def test_command_exists(mocker: MockerFixture):
    mocker.patch("common.command_utils.shutil.which", side_effect=["/usr/bin/git", None])

    assert command_exists("git") is True
    assert command_exists("nope") is False


def test_run_command_real_process():
    """Combined output of a real short-lived process."""
    result = run_command(
        ["git", "--version"] if command_exists("git") else ["true"],
        AppSettings(),
        check=False,
        merge_stderr=True,
        current_logger=logging.getLogger("test"),
    )

    assert result.returncode == 0
