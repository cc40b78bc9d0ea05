"""Project resource and project listings."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Self
from urllib.parse import quote

from ..body import Body
from ..config import GitLabConfig
from ..query import GitLabQuery
from .base import ModifiableComponent
from .common import Namespace

if TYPE_CHECKING:
    from .issues import Issue, ProjectIssuesQuery
    from .merge_requests import MergeRequest, ProjectMergeRequestsQuery
    from .repositories import Commit, ProjectCommitsQuery
    from .users import ProjectUsersQuery


class Project(ModifiableComponent):
    id: int | None = None
    name: str = ""
    name_with_namespace: str = ""
    path: str | None = None
    path_with_namespace: str = ""
    description: str | None = None
    default_branch: str | None = None
    visibility: str | None = None
    web_url: str = ""
    ssh_url_to_repo: str = ""
    http_url_to_repo: str = ""
    namespace: Namespace | None = None
    created_at: datetime | None = None
    last_activity_at: datetime | None = None
    archived: bool = False
    open_issues_count: int = 0
    forks_count: int = 0
    star_count: int = 0
    issues_enabled: bool | None = None
    merge_requests_enabled: bool | None = None

    @classmethod
    def from_id(cls, config: GitLabConfig, project_id: int | str) -> Project:
        """Fetch a project by numeric ID or ``namespace/path``."""
        from ..client import GitLabClient

        with GitLabClient(config) as client:
            return client.get(f"/projects/{GitLabClient.encode_id(project_id)}", cls)

    def _body(self) -> Body:
        return (
            Body()
            .put_string("name", self.name or None)
            .put_string("path", self.path)
            .put_string("description", self.description)
            .put_string("default_branch", self.default_branch)
            .put_string("visibility", self.visibility)
            .put_bool("issues_enabled", self.issues_enabled)
            .put_bool("merge_requests_enabled", self.merge_requests_enabled)
        )

    def create(self) -> Project:
        with self._client() as client:
            return client.post("/projects", self._body(), Project, template=self)

    def update(self) -> Project:
        project_id = self._require("id", self.id)
        with self._client() as client:
            return client.put(f"/projects/{project_id}", self._body(), Project, template=self)

    def delete(self) -> Project:
        project_id = self._require("id", self.id)
        with self._client() as client:
            client.delete(f"/projects/{project_id}")
        return self

    def with_name(self, name: str) -> Self:
        self.name = name
        return self

    def with_path(self, path: str) -> Self:
        self.path = path
        return self

    def with_description(self, description: str | None) -> Self:
        self.description = description
        return self

    def with_default_branch(self, default_branch: str) -> Self:
        self.default_branch = default_branch
        return self

    def with_visibility(self, visibility: str) -> Self:
        self.visibility = visibility
        return self

    # ── Children ──────────────────────────────────────────────────

    def _scoped_config(self) -> GitLabConfig:
        self._require("id", self.id)
        return self._require_config()

    def merge_requests_query(self) -> ProjectMergeRequestsQuery:
        from .merge_requests import ProjectMergeRequestsQuery

        return ProjectMergeRequestsQuery(self._scoped_config(), self)

    def issues_query(self) -> ProjectIssuesQuery:
        from .issues import ProjectIssuesQuery

        return ProjectIssuesQuery(self._scoped_config(), self)

    def users_query(self) -> ProjectUsersQuery:
        from .users import ProjectUsersQuery

        return ProjectUsersQuery(self._scoped_config(), self)

    def commits_query(self) -> ProjectCommitsQuery:
        from .repositories import ProjectCommitsQuery

        return ProjectCommitsQuery(self._scoped_config(), self)

    def merge_request(self, iid: int) -> MergeRequest:
        from .merge_requests import MergeRequest

        self._require("id", self.id)
        with self._client() as client:
            mr = client.get(f"/projects/{self.id}/merge_requests/{iid}", MergeRequest)
        return mr.with_project(self)

    def issue(self, iid: int) -> Issue:
        from .issues import Issue

        self._require("id", self.id)
        with self._client() as client:
            issue = client.get(f"/projects/{self.id}/issues/{iid}", Issue)
        return issue.with_project(self)

    def commit(self, sha: str) -> Commit:
        from .repositories import Commit

        self._require("id", self.id)
        with self._client() as client:
            commit = client.get(
                f"/projects/{self.id}/repository/commits/{quote(sha, safe='')}", Commit
            )
        return commit.with_project(self)

    def new_merge_request(self, source_branch: str, target_branch: str, title: str) -> MergeRequest:
        """Build an unsaved merge request in this project; call ``create()`` to submit it."""
        from .merge_requests import MergeRequest

        mr = MergeRequest(source_branch=source_branch, target_branch=target_branch, title=title)
        mr.with_config(self._scoped_config())
        return mr.with_project(self)

    def new_issue(self, title: str) -> Issue:
        """Build an unsaved issue in this project; call ``create()`` to submit it."""
        from .issues import Issue

        issue = Issue(title=title)
        issue.with_config(self._scoped_config())
        return issue.with_project(self)


class ProjectsQuery(GitLabQuery[Project]):
    """All projects visible to the token.

    https://docs.gitlab.com/ee/api/projects.html#list-all-projects
    """

    model = Project
    tail_url = "/projects"

    def with_archived(self, archived: bool) -> Self:
        self.params.add_bool("archived", archived)
        return self

    def with_visibility(self, visibility: str) -> Self:
        self.params.add_string("visibility", visibility)
        return self

    def with_order_by(self, order_by: str) -> Self:
        self.params.add_string("order_by", order_by)
        return self

    def with_sort(self, sort: str) -> Self:
        self.params.add_string("sort", sort)
        return self

    def with_search(self, search: str) -> Self:
        self.params.add_string("search", search)
        return self

    def with_simple(self, simple: bool) -> Self:
        self.params.add_bool("simple", simple)
        return self

    def with_owned(self, owned: bool) -> Self:
        self.params.add_bool("owned", owned)
        return self

    def with_membership(self, membership: bool) -> Self:
        self.params.add_bool("membership", membership)
        return self

    def with_starred(self, starred: bool) -> Self:
        self.params.add_bool("starred", starred)
        return self

    def with_issues_enabled(self, enabled: bool) -> Self:
        self.params.add_bool("with_issues_enabled", enabled)
        return self

    def with_merge_requests_enabled(self, enabled: bool) -> Self:
        self.params.add_bool("with_merge_requests_enabled", enabled)
        return self

    def with_last_activity_after(self, after: datetime) -> Self:
        self.params.add_datetime("last_activity_after", after)
        return self

    def with_last_activity_before(self, before: datetime) -> Self:
        self.params.add_datetime("last_activity_before", before)
        return self


class UserProjectsQuery(ProjectsQuery):
    """Projects owned by one user.

    https://docs.gitlab.com/ee/api/projects.html#list-user-projects
    """

    def __init__(self, config: GitLabConfig, username: str) -> None:
        super().__init__(config)
        self.username = username

    @property
    def tail_url(self) -> str:
        return f"/users/{quote(self.username, safe='')}/projects"
