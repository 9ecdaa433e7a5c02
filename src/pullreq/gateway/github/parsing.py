"""Parsing utilities for GitHub remotes, URLs and API error responses."""

import json
import re
from dataclasses import dataclass
from urllib.parse import urlparse

from pullreq.gateway.github.types import Project

# git@github.com:owner/name.git
_SCP_LIKE_REMOTE = re.compile(r"^(?:[\w.-]+@)?(?P<host>[\w.-]+):(?P<path>[^/].*)$")
_HTTP_STATUS = re.compile(r"\(HTTP (\d+)\)")
_ISSUE_PATH = re.compile(r"^issues/(\d+)")


def _project_from_path(host: str, path: str) -> Project | None:
    parts = path.strip("/").split("/")
    if len(parts) < 2 or not parts[0] or not parts[1]:
        return None
    name = parts[1].removesuffix(".git")
    return Project(host=host.lower(), owner=parts[0], name=name)


def parse_remote_url(url: str) -> Project | None:
    """Derive the project a git remote URL points at.

    Supports https://, ssh://, git:// and scp-like ("git@host:owner/name") URLs.

    Returns:
        The project, or None if the URL does not look like a repository URL
        (e.g. a local path)
    """
    if "://" in url:
        parsed = urlparse(url)
        if parsed.scheme == "file" or not parsed.hostname:
            return None
        return _project_from_path(parsed.hostname, parsed.path)

    match = _SCP_LIKE_REMOTE.match(url)
    if match is None:
        return None
    return _project_from_path(match.group("host"), match.group("path"))


def parse_issue_number_from_url(url: str) -> int | None:
    """Extract the issue number from https://<host>/<owner>/<name>/issues/<n>."""
    parsed = urlparse(url)
    if not parsed.scheme or not parsed.hostname:
        return None
    parts = parsed.path.strip("/").split("/", 2)
    if len(parts) < 3:
        return None
    match = _ISSUE_PATH.match(parts[2])
    if match is None:
        return None
    return int(match.group(1))


@dataclass(frozen=True)
class ApiErrorDetails:
    """Structured view of a failed `gh api` call."""

    message: str
    status: int | None
    field_errors: tuple[str, ...]
    invalid_fields: frozenset[str]


def _format_field_error(error: object) -> str:
    if not isinstance(error, dict):
        return str(error)
    field_name = error.get("field", "")
    code = error.get("code", "")
    if code == "custom" and error.get("message"):
        return str(error["message"])
    if code == "invalid":
        return f'Invalid value for "{field_name}"'
    if code == "missing_field":
        return f'Missing field: "{field_name}"'
    if code == "already_exists":
        return f'Duplicate value for "{field_name}"'
    if error.get("message"):
        return str(error["message"])
    return f'{code} error caused by "{field_name}" field'


def parse_api_error(stdout: str, stderr: str) -> ApiErrorDetails:
    """Turn the output of a failed `gh api` call into structured details.

    gh prints the response body on stdout and "gh: <message> (HTTP <status>)" on
    stderr. Either may be missing (network failures produce only stderr).
    """
    status_match = _HTTP_STATUS.search(stderr)
    status = int(status_match.group(1)) if status_match else None

    message = stderr.strip().removeprefix("gh: ") or "unknown error"
    field_errors: list[str] = []
    invalid_fields: set[str] = set()
    try:
        data = json.loads(stdout) if stdout.strip() else None
    except json.JSONDecodeError:
        data = None

    if isinstance(data, dict):
        if data.get("message"):
            message = str(data["message"])
            if status is not None:
                message = f"{message} (HTTP {status})"
        for error in data.get("errors") or []:
            field_errors.append(_format_field_error(error))
            if isinstance(error, dict) and error.get("code") == "invalid" and error.get("field"):
                invalid_fields.add(str(error["field"]))

    return ApiErrorDetails(
        message=message,
        status=status,
        field_errors=tuple(field_errors),
        invalid_fields=frozenset(invalid_fields),
    )


def format_api_error(details: ApiErrorDetails) -> str:
    return "\n".join([details.message, *details.field_errors])
