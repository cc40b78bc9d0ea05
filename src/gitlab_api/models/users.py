"""User resource and user listings."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Self

from ..body import Body
from ..config import GitLabConfig
from ..query import GitLabQuery
from .base import ModifiableComponent

if TYPE_CHECKING:
    from .projects import Project


class User(ModifiableComponent):
    id: int | None = None
    username: str = ""
    name: str = ""
    state: str = ""
    email: str | None = None
    public_email: str | None = None
    avatar_url: str | None = None
    web_url: str = ""
    bio: str | None = None
    organization: str | None = None
    is_admin: bool | None = None
    created_at: datetime | None = None

    # Only sent on create; GitLab never returns it.
    password: str | None = None

    def _body(self) -> Body:
        return (
            Body()
            .put_string("email", self.email)
            .put_string("username", self.username or None)
            .put_string("name", self.name or None)
            .put_string("bio", self.bio)
            .put_string("organization", self.organization)
        )

    def create(self) -> User:
        """Create the user (admin only). Without a password GitLab mails a reset link."""
        body = self._body().put_string("password", self.password)
        if self.password is None:
            body.put_bool("reset_password", True)
        with self._client() as client:
            return client.post("/users", body, User, template=self)

    def update(self) -> User:
        user_id = self._require("id", self.id)
        with self._client() as client:
            return client.put(f"/users/{user_id}", self._body(), User, template=self)

    def delete(self) -> User:
        user_id = self._require("id", self.id)
        with self._client() as client:
            client.delete(f"/users/{user_id}")
        return self

    def projects_query(self) -> UserProjectsQuery:
        from .projects import UserProjectsQuery

        return UserProjectsQuery(self._require_config(), self.username)

    def with_name(self, name: str) -> Self:
        self.name = name
        return self

    def with_email(self, email: str) -> Self:
        self.email = email
        return self

    def with_password(self, password: str) -> Self:
        self.password = password
        return self

    def with_bio(self, bio: str | None) -> Self:
        self.bio = bio
        return self


class UsersQuery(GitLabQuery[User]):
    """All users visible to the token.

    https://docs.gitlab.com/ee/api/users.html#list-users
    """

    model = User
    tail_url = "/users"

    def with_username(self, username: str) -> Self:
        self.params.add_string("username", username)
        return self

    def with_search(self, search: str) -> Self:
        self.params.add_string("search", search)
        return self

    def with_active(self, active: bool) -> Self:
        self.params.add_bool("active", active)
        return self

    def with_blocked(self, blocked: bool) -> Self:
        self.params.add_bool("blocked", blocked)
        return self

    def with_external(self, external: bool) -> Self:
        self.params.add_bool("external", external)
        return self

    def with_created_after(self, created_after: datetime) -> Self:
        self.params.add_datetime("created_after", created_after)
        return self

    def with_created_before(self, created_before: datetime) -> Self:
        self.params.add_datetime("created_before", created_before)
        return self

    def with_order_by(self, order_by: str) -> Self:
        self.params.add_string("order_by", order_by)
        return self

    def with_sort(self, sort: str) -> Self:
        self.params.add_string("sort", sort)
        return self


class ProjectUsersQuery(GitLabQuery[User]):
    """Users that are members of a project.

    https://docs.gitlab.com/ee/api/projects.html#get-project-users
    """

    model = User

    def __init__(self, config: GitLabConfig, project: Project) -> None:
        super().__init__(config)
        self.project = project

    @property
    def tail_url(self) -> str:
        return f"/projects/{self.project.id}/users"

    def with_search(self, search: str) -> Self:
        self.params.add_string("search", search)
        return self

    def with_skip_users(self, user_ids: list[int]) -> Self:
        self.params.add_ints("skip_users", user_ids)
        return self
