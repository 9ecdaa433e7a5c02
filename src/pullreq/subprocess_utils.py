"""Subprocess helpers that attach operation context to failures."""

import logging
import os
import subprocess
import time
from collections.abc import Sequence
from pathlib import Path

logger = logging.getLogger(__name__)


def copied_env_for_git_subprocess() -> dict[str, str]:
    """Copy the current environment with interactive git prompts disabled.

    Credential prompts would otherwise hang a network operation indefinitely.
    """
    env = os.environ.copy()
    env["GIT_TERMINAL_PROMPT"] = "0"
    return env


def run_subprocess_with_context(
    cmd: Sequence[str],
    *,
    operation_context: str,
    cwd: Path | None = None,
    timeout: float | None = None,
    env: dict[str, str] | None = None,
    input: str | None = None,
) -> subprocess.CompletedProcess[str]:
    """Run a command, raising RuntimeError with context when it fails.

    Args:
        cmd: Command and arguments
        operation_context: Human-readable description used in error messages
            (e.g., "push branch 'feature' to remote 'origin'")
        cwd: Working directory
        timeout: Seconds before the command is killed
        env: Environment for the child process
        input: Text passed on stdin

    Returns:
        The completed process with captured text stdout/stderr

    Raises:
        RuntimeError: If the command exits non-zero or times out
        FileNotFoundError: If the executable is not installed
    """
    description = " ".join(cmd)
    started = time.monotonic()
    try:
        result = subprocess.run(
            list(cmd),
            cwd=cwd,
            capture_output=True,
            text=True,
            check=True,
            timeout=timeout,
            env=env,
            input=input,
        )
    except subprocess.CalledProcessError as e:
        stderr = (e.stderr or "").strip()
        msg = f"Failed to {operation_context}\nCommand: {description}\nExit code: {e.returncode}"
        if stderr:
            msg = f"{msg}\nstderr: {stderr}"
        raise RuntimeError(msg) from e
    except subprocess.TimeoutExpired as e:
        msg = f"Failed to {operation_context}: timed out after {timeout}s\nCommand: {description}"
        raise RuntimeError(msg) from e
    finally:
        logger.debug("%s (%.2fs)", description, time.monotonic() - started)

    return result
