"""Tests for subprocess_utils module."""

import subprocess
from subprocess import CompletedProcess
from unittest.mock import patch

import pytest

from pullreq.subprocess_utils import copied_env_for_git_subprocess, run_subprocess_with_context


def test_copied_env_for_git_subprocess_sets_git_terminal_prompt() -> None:
    """copied_env_for_git_subprocess sets GIT_TERMINAL_PROMPT=0."""
    env = copied_env_for_git_subprocess()
    assert env["GIT_TERMINAL_PROMPT"] == "0"


def test_copied_env_for_git_subprocess_preserves_existing_env() -> None:
    env = copied_env_for_git_subprocess()
    assert "PATH" in env


def test_run_subprocess_with_context_returns_result() -> None:
    completed = CompletedProcess(args=["git", "status"], returncode=0, stdout="ok\n", stderr="")
    with patch("subprocess.run", return_value=completed) as mock_run:
        result = run_subprocess_with_context(["git", "status"], operation_context="check status")

    assert result.stdout == "ok\n"
    assert mock_run.call_args.kwargs["check"] is True


def test_run_subprocess_with_context_includes_stderr_on_failure() -> None:
    error = subprocess.CalledProcessError(
        returncode=128, cmd=["git", "show", "abc"], stderr="fatal: bad object abc\n"
    )
    with patch("subprocess.run", side_effect=error):
        with pytest.raises(RuntimeError) as exc_info:
            run_subprocess_with_context(
                ["git", "show", "abc"], operation_context="read message of commit abc"
            )

    message = str(exc_info.value)
    assert message.startswith("Failed to read message of commit abc")
    assert "Command: git show abc" in message
    assert "Exit code: 128" in message
    assert "stderr: fatal: bad object abc" in message


def test_run_subprocess_with_context_timeout() -> None:
    error = subprocess.TimeoutExpired(cmd=["git", "push"], timeout=120)
    with patch("subprocess.run", side_effect=error):
        with pytest.raises(RuntimeError, match="timed out after 120s"):
            run_subprocess_with_context(
                ["git", "push"], operation_context="push branch", timeout=120
            )
