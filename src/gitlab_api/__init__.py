"""Typed client for the GitLab REST API."""

import json
import logging
import os
from typing import Any

import click
from dotenv import load_dotenv


def _ok(data: Any) -> None:
    click.echo(json.dumps(data, indent=2, ensure_ascii=False))


@click.group()
@click.option("--gitlab-url", envvar="GITLAB_URL", help="GitLab instance URL")
@click.option("--gitlab-token", envvar="GITLAB_TOKEN", help="GitLab personal access token")
@click.option("-v", "--verbose", is_flag=True, help="Log every HTTP request")
@click.pass_context
def main(
    ctx: click.Context,
    gitlab_url: str | None,
    gitlab_token: str | None,
    verbose: bool,
) -> None:
    """Query a GitLab instance from the command line."""
    load_dotenv()

    if gitlab_url:
        os.environ["GITLAB_URL"] = gitlab_url
    if gitlab_token:
        os.environ["GITLAB_TOKEN"] = gitlab_token

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        force=True,
    )

    from .api import GitLabAPI

    try:
        ctx.obj = GitLabAPI.from_env()
    except ValueError as e:
        raise click.UsageError(str(e)) from e


def _run(fn: Any) -> Any:
    from .exceptions import GitLabError

    try:
        return fn()
    except GitLabError as e:
        raise click.ClickException(str(e)) from e


@main.command()
@click.pass_obj
def whoami(api: Any) -> None:
    """Show the user owning the token."""
    _ok(_run(api.current_user).to_dict())


@main.command()
@click.option("--active/--all", default=True, help="Only list active users")
@click.option("--search", default=None, help="Match name, username or email")
@click.option("--page", type=click.IntRange(min=1), default=1, show_default=True)
@click.option("--per-page", type=click.IntRange(1, 100), default=20, show_default=True)
@click.pass_obj
def users(api: Any, active: bool, search: str | None, page: int, per_page: int) -> None:
    """List users."""
    from .pagination import Pagination

    query = api.users_query().with_pagination(Pagination.of(page, per_page))
    if active:
        query.with_active(True)
    if search:
        query.with_search(search)
    _ok([u.to_dict() for u in _run(query.query)])


@main.command("merge-requests")
@click.argument("project_id")
@click.option(
    "--state",
    type=click.Choice(["opened", "closed", "locked", "merged", "all"]),
    default="opened",
    show_default=True,
)
@click.option("--page", type=click.IntRange(min=1), default=1, show_default=True)
@click.option("--per-page", type=click.IntRange(1, 100), default=20, show_default=True)
@click.pass_obj
def merge_requests(api: Any, project_id: str, state: str, page: int, per_page: int) -> None:
    """List merge requests of PROJECT_ID (numeric ID or namespace/path)."""
    from .pagination import Pagination

    project = _run(lambda: api.project(project_id))
    query = (
        project.merge_requests_query()
        .with_state(state)
        .with_pagination(Pagination.of(page, per_page))
    )
    _ok([mr.to_dict() for mr in _run(query.query)])


if __name__ == "__main__":
    main()
