"""Entry point tying a config to the top-level GitLab resources."""

from __future__ import annotations

from .client import GitLabClient
from .config import GitLabConfig
from .models.issues import IssuesQuery
from .models.merge_requests import MergeRequestsQuery
from .models.projects import Project, ProjectsQuery, UserProjectsQuery
from .models.users import User, UsersQuery


class GitLabAPI:
    """Hands out queries and resource builders bound to one config.

    >>> api = GitLabAPI(GitLabConfig(url="https://gitlab.com", token="glpat-..."))
    >>> api.merge_requests_query().with_state("opened").query()
    """

    def __init__(self, config: GitLabConfig) -> None:
        config.validate()
        self.config = config

    @classmethod
    def from_env(cls) -> GitLabAPI:
        return cls(GitLabConfig.from_env())

    def current_user(self) -> User:
        with GitLabClient(self.config) as client:
            return client.get("/user", User)

    def user(self, user_id: int) -> User:
        with GitLabClient(self.config) as client:
            return client.get(f"/users/{user_id}", User)

    def project(self, project_id: int | str) -> Project:
        return Project.from_id(self.config, project_id)

    def new_project(self, name: str) -> Project:
        """Build an unsaved project; call ``create()`` to submit it."""
        project = Project(name=name)
        project.with_config(self.config)
        return project

    def new_user(self, email: str, username: str, name: str) -> User:
        """Build an unsaved user; call ``create()`` to submit it (admin only)."""
        user = User(email=email, username=username, name=name)
        user.with_config(self.config)
        return user

    def users_query(self) -> UsersQuery:
        return UsersQuery(self.config)

    def projects_query(self) -> ProjectsQuery:
        return ProjectsQuery(self.config)

    def user_projects_query(self, username: str) -> UserProjectsQuery:
        return UserProjectsQuery(self.config, username)

    def merge_requests_query(self) -> MergeRequestsQuery:
        return MergeRequestsQuery(self.config)

    def issues_query(self) -> IssuesQuery:
        return IssuesQuery(self.config)
