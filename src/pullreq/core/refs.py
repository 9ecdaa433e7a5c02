"""Resolve the base and head of a pull request from local repository state.

Reference strings use the "[owner[/name]:]ref" format. Anything not given
explicitly is defaulted from the remotes and the current branch's upstream.
"""

import logging
from dataclasses import dataclass, replace
from pathlib import Path

from pullreq.core.context import PullReqContext
from pullreq.core.types import (
    AmbiguousRef,
    DetachedHead,
    NoGitHubRemote,
    NoRemoteForHead,
    UnpushedCommits,
)
from pullreq.gateway.git.types import BranchRef, Remote
from pullreq.gateway.github.parsing import parse_remote_url
from pullreq.gateway.github.types import Project, RepositoryNotFound

logger = logging.getLogger(__name__)

# Remotes preferred as the base repository, in order.
_MAIN_REMOTE_NAMES = ("upstream", "github", "origin")


@dataclass(frozen=True)
class ProjectRemote:
    """A remote together with the project its URL points at."""

    remote: Remote
    project: Project


@dataclass(frozen=True)
class LocalRepoState:
    """Everything read from the local repository, once per invocation.

    tracked_branch is only set when the current branch tracks a remote branch;
    tracking another local branch counts as having no upstream.
    """

    repo_root: Path
    current_branch: str | None
    tracked_branch: BranchRef | None
    remotes: tuple[ProjectRemote, ...]


@dataclass(frozen=True)
class ResolvedRefs:
    """Base and head, each resolved to a (project, ref) pair.

    base_tracking and head_tracking are the local names ("origin/main") used to
    enumerate commits; they fall back to the bare ref when no remote matches.
    head_remote is the remote the head would be pushed to.
    """

    base_project: Project
    base: str
    head_project: Project
    head: str
    base_tracking: str
    head_tracking: str
    head_remote: str | None
    tracked_branch: BranchRef | None

    @property
    def qualified_base(self) -> str:
        return f"{self.base_project.owner}:{self.base}"

    @property
    def qualified_head(self) -> str:
        return f"{self.head_project.owner}:{self.head}"


def read_local_state(ctx: PullReqContext) -> LocalRepoState:
    repo_root = ctx.git.get_repository_root(ctx.cwd)
    current_branch = ctx.git.get_current_branch(ctx.cwd)

    tracked_branch = None
    if current_branch is not None:
        tracked_branch = ctx.git.get_tracking_branch(ctx.cwd, current_branch)
        if tracked_branch is not None and not tracked_branch.is_remote:
            tracked_branch = None

    remotes = []
    for remote in ctx.git.list_remotes(ctx.cwd):
        project = parse_remote_url(remote.url)
        if project is not None:
            remotes.append(ProjectRemote(remote=remote, project=project))

    return LocalRepoState(
        repo_root=repo_root,
        current_branch=current_branch,
        tracked_branch=tracked_branch,
        remotes=tuple(remotes),
    )


def parse_ref_spec(context: Project, raw: str) -> tuple[Project, str]:
    """Parse "[owner[/name]:]ref" relative to a context project.

    An owner without a name keeps the context project's name, even when that
    owner's copy of the repository is named differently. The host is always
    inherited.

    Examples:
        "feature"             -> (context, "feature")
        "alice:feature"       -> (alice/<context name>, "feature")
        "alice/fork:feature"  -> (alice/fork, "feature")
    """
    if ":" not in raw:
        return context, raw
    prefix, ref = raw.split(":", 1)
    return Project.from_spec(context.host, prefix, default_name=context.name), ref


def main_project_remote(remotes: tuple[ProjectRemote, ...]) -> ProjectRemote | None:
    """Pick the remote whose project is the default base: upstream, github, origin, any."""
    by_name = {item.remote.name: item for item in remotes}
    for name in _MAIN_REMOTE_NAMES:
        if name in by_name:
            return by_name[name]
    if remotes:
        return remotes[0]
    return None


def remote_for_project(remotes: tuple[ProjectRemote, ...], project: Project) -> Remote | None:
    for item in remotes:
        if item.project.same_as(project):
            return item.remote
    return None


def _remote_for_name(remotes: tuple[ProjectRemote, ...], name: str) -> ProjectRemote | None:
    for item in remotes:
        if item.remote.name == name:
            return item
    return None


def resolve_refs(
    ctx: PullReqContext,
    state: LocalRepoState,
    *,
    base_spec: str | None,
    head_spec: str | None,
    push: bool,
    force: bool,
) -> (
    ResolvedRefs | NoGitHubRemote | DetachedHead | AmbiguousRef | NoRemoteForHead | UnpushedCommits
):
    """Resolve base and head, applying defaults for whatever was not given.

    Args:
        ctx: Application context
        state: Local repository state
        base_spec: Value of --base, if given
        head_spec: Value of --head, if given
        push: Whether the head will be pushed before creating the pull request
        force: Skip the unpushed-commits check

    Returns:
        ResolvedRefs, or the reason resolution was aborted. Nothing on the remote
        has been modified either way.
    """
    main = main_project_remote(state.remotes)
    if main is None:
        return NoGitHubRemote()

    base_project = main.project
    head_project = base_project
    tracked = state.tracked_branch
    if tracked is not None and tracked.remote is not None:
        tracked_remote = _remote_for_name(state.remotes, tracked.remote)
        if tracked_remote is not None:
            head_project = tracked_remote.project

    base = ""
    head = ""
    if base_spec:
        base_project, base = parse_ref_spec(base_project, base_spec)
    if head_spec:
        head_project, head = parse_ref_spec(head_project, head_spec)

    base_remote = remote_for_project(state.remotes, base_project)
    if not base and base_remote is not None:
        base = ctx.git.get_default_branch(ctx.cwd, base_remote.name)

    if not head:
        if tracked is not None:
            head = tracked.short_name
        elif state.current_branch is not None:
            head = state.current_branch
        else:
            return DetachedHead()

    if base_project.same_as(head_project) and base == head:
        return AmbiguousRef(base=base)

    head_remote = base_remote
    if head_remote is None or not base_project.same_as(head_project):
        head_remote = remote_for_project(state.remotes, head_project)
    if push and head_remote is None:
        return NoRemoteForHead(head=head)

    if not force and tracked is not None:
        unpushed = ctx.git.list_commits_between(ctx.cwd, tracked.long_name, "HEAD")
        if unpushed:
            return UnpushedCommits(count=len(unpushed), tracking_ref=tracked.long_name)

    base_tracking = f"{base_remote.name}/{base}" if base_remote is not None else base
    head_tracking = f"{head_remote.name}/{head}" if head_remote is not None else head

    head_project = _canonicalize(ctx, head_project)

    logger.debug(
        "resolved base=%s:%s head=%s:%s head_remote=%s",
        base_project,
        base,
        head_project,
        head,
        head_remote.name if head_remote is not None else None,
    )
    return ResolvedRefs(
        base_project=base_project,
        base=base,
        head_project=head_project,
        head=head,
        base_tracking=base_tracking,
        head_tracking=head_tracking,
        head_remote=head_remote.name if head_remote is not None else None,
        tracked_branch=tracked,
    )


def _canonicalize(ctx: PullReqContext, project: Project) -> Project:
    """Follow renames and transfers of the head repository.

    Lookup failures keep the locally inferred owner and name.
    """
    info = ctx.github.get_repository(project)
    if isinstance(info, RepositoryNotFound):
        logger.debug("keeping local head project %s: %s", project, info.message)
        return project
    return replace(project, owner=info.owner, name=info.name)
