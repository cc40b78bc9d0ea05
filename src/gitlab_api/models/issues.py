"""Issue resource and issue listings."""

from __future__ import annotations

from datetime import date, datetime
from typing import Self

from ..body import Body
from ..params import QueryParams
from ..query import GitLabQuery, ProjectScopedQuery
from .base import ModifiableComponent, ProjectChild
from .common import Milestone
from .users import User


class Issue(ProjectChild, ModifiableComponent):
    """A project issue.

    https://docs.gitlab.com/ee/api/issues.html
    """

    id: int | None = None
    iid: int | None = None
    title: str = ""
    description: str | None = None
    state: str = ""
    author: User | None = None
    assignees: list[User] = []
    labels: list[str] = []
    milestone: Milestone | None = None
    confidential: bool = False
    due_date: date | None = None
    upvotes: int = 0
    downvotes: int = 0
    merge_requests_count: int = 0
    user_notes_count: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None
    closed_at: datetime | None = None
    closed_by: User | None = None
    web_url: str = ""

    def _body(self) -> Body:
        return (
            Body()
            .put_string("title", self.title)
            .put_string("description", self.description)
            .put_int_array("assignee_ids", [u.id for u in self.assignees if u.id is not None])
            .put_string_array("labels", self.labels)
            .put_bool("confidential", self.confidential)
            .put_int("milestone_id", self.milestone.id if self.milestone else None)
            .put_date("due_date", self.due_date)
        )

    def _collection_url(self) -> str:
        return f"/projects/{self._require('project_id', self.project_id)}/issues"

    def _item_url(self) -> str:
        return f"{self._collection_url()}/{self._require('iid', self.iid)}"

    def create(self) -> Issue:
        url = self._collection_url()
        with self._client() as client:
            return client.post(url, self._body(), Issue, template=self)

    def update(self) -> Issue:
        return self._update_with(state_event=None)

    def _update_with(self, state_event: str | None) -> Issue:
        url = self._item_url()
        body = self._body().put_string("state_event", state_event)
        with self._client() as client:
            return client.put(url, body, Issue, template=self)

    def delete(self) -> Issue:
        url = self._item_url()
        with self._client() as client:
            client.delete(url)
        return self

    def close(self) -> Issue:
        return self._update_with("close")

    def reopen(self) -> Issue:
        return self._update_with("reopen")

    def with_title(self, title: str) -> Self:
        self.title = title
        return self

    def with_description(self, description: str | None) -> Self:
        self.description = description
        return self

    def with_assignees(self, assignees: list[User]) -> Self:
        self.assignees = assignees
        return self

    def with_labels(self, labels: list[str]) -> Self:
        self.labels = labels
        return self

    def with_confidential(self, confidential: bool) -> Self:
        self.confidential = confidential
        return self

    def with_due_date(self, due_date: date | None) -> Self:
        self.due_date = due_date
        return self


class _IssueFilters:
    """Filters shared by project and global issue listings."""

    params: QueryParams

    def with_iids(self, iids: list[int]) -> Self:
        self.params.add_ints("iids[]", iids)
        return self

    def with_state(self, state: str) -> Self:
        self.params.add_string("state", state)
        return self

    def with_labels(self, labels: list[str]) -> Self:
        self.params.add_strings("labels", labels)
        return self

    def with_milestone(self, milestone: str) -> Self:
        self.params.add_string("milestone", milestone)
        return self

    def with_scope(self, scope: str) -> Self:
        self.params.add_string("scope", scope)
        return self

    def with_author_id(self, author_id: int) -> Self:
        self.params.add_int("author_id", author_id)
        return self

    def with_assignee_id(self, assignee_id: int) -> Self:
        self.params.add_int("assignee_id", assignee_id)
        return self

    def with_search(self, search: str) -> Self:
        self.params.add_string("search", search)
        return self

    def with_confidential(self, confidential: bool) -> Self:
        self.params.add_bool("confidential", confidential)
        return self

    def with_due_date(self, due_date: str) -> Self:
        """One of ``0``, ``overdue``, ``week``, ``month`` or ``next_month_and_previous_two_weeks``."""
        self.params.add_string("due_date", due_date)
        return self

    def with_created_after(self, created_after: datetime) -> Self:
        self.params.add_datetime("created_after", created_after)
        return self

    def with_created_before(self, created_before: datetime) -> Self:
        self.params.add_datetime("created_before", created_before)
        return self

    def with_updated_after(self, updated_after: datetime) -> Self:
        self.params.add_datetime("updated_after", updated_after)
        return self

    def with_updated_before(self, updated_before: datetime) -> Self:
        self.params.add_datetime("updated_before", updated_before)
        return self

    def with_order_by(self, order_by: str) -> Self:
        self.params.add_string("order_by", order_by)
        return self

    def with_sort(self, sort: str) -> Self:
        self.params.add_string("sort", sort)
        return self


class ProjectIssuesQuery(_IssueFilters, ProjectScopedQuery[Issue]):
    """https://docs.gitlab.com/ee/api/issues.html#list-project-issues"""

    model = Issue
    resource = "issues"


class IssuesQuery(_IssueFilters, GitLabQuery[Issue]):
    """Issues across every project the token can see.

    https://docs.gitlab.com/ee/api/issues.html#list-issues
    """

    model = Issue
    tail_url = "/issues"
