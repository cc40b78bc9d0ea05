"""Merge request resource and merge request listings."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Self

from ..body import Body
from ..params import QueryParams
from ..query import GitLabQuery, ProjectScopedQuery
from .base import ModifiableComponent, ProjectChild
from .common import Milestone
from .users import User

if TYPE_CHECKING:
    from .issues import Issue
    from .repositories import Commit


class MergeRequest(ProjectChild, ModifiableComponent):
    """A project merge request.

    ``source_branch`` is fixed once the merge request exists; everything
    set through the ``with_*`` methods is sent on the next :meth:`update`.

    https://docs.gitlab.com/ee/api/merge_requests.html
    """

    id: int | None = None
    iid: int | None = None
    title: str = ""
    description: str | None = None
    state: str = ""
    source_branch: str = ""
    target_branch: str = ""
    author: User | None = None
    assignees: list[User] = []
    reviewers: list[User] = []
    labels: list[str] = []
    milestone: Milestone | None = None
    draft: bool = False
    upvotes: int = 0
    downvotes: int = 0
    user_notes_count: int = 0
    subscribed: bool = False
    merge_status: str = ""
    sha: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    merged_at: datetime | None = None
    closed_at: datetime | None = None
    merged_by: User | None = None
    closed_by: User | None = None
    web_url: str = ""

    def _body(self) -> Body:
        return (
            Body()
            .put_string("target_branch", self.target_branch)
            .put_string("title", self.title)
            .put_int_array("assignee_ids", [u.id for u in self.assignees if u.id is not None])
            .put_string("description", self.description)
            .put_string_array("labels", self.labels)
        )

    def _collection_url(self) -> str:
        return f"/projects/{self._require('project_id', self.project_id)}/merge_requests"

    def _item_url(self) -> str:
        return f"{self._collection_url()}/{self._require('iid', self.iid)}"

    def create(self) -> MergeRequest:
        url = self._collection_url()
        body = self._body().put_string("source_branch", self.source_branch)
        with self._client() as client:
            return client.post(url, body, MergeRequest, template=self)

    def update(self) -> MergeRequest:
        url = self._item_url()
        with self._client() as client:
            return client.put(url, self._body(), MergeRequest, template=self)

    def delete(self) -> MergeRequest:
        url = self._item_url()
        with self._client() as client:
            client.delete(url)
        return self

    # ── Related resources and actions ─────────────────────────────

    def participants(self) -> list[User]:
        url = f"{self._item_url()}/participants"
        with self._client() as client:
            return client.get_list(url, User)

    def commits(self) -> list[Commit]:
        from .repositories import Commit

        url = f"{self._item_url()}/commits"
        with self._client() as client:
            commits = client.get_list(url, Commit)
        if self.project is not None:
            for commit in commits:
                commit.with_project(self.project)
        else:
            for commit in commits:
                commit.project_id = self.project_id
        return commits

    def closes_issues(self) -> list[Issue]:
        """Issues that will be closed when this merge request is merged."""
        from .issues import Issue

        url = f"{self._item_url()}/closes_issues"
        with self._client() as client:
            return client.get_list(url, Issue)

    def accept(self) -> MergeRequest:
        """Merge the merge request."""
        url = f"{self._item_url()}/merge"
        with self._client() as client:
            return client.put(url, None, MergeRequest, template=self)

    def approve(self) -> MergeRequest:
        url = f"{self._item_url()}/approve"
        with self._client() as client:
            client.request("POST", url)
        return self

    def unapprove(self) -> MergeRequest:
        url = f"{self._item_url()}/unapprove"
        with self._client() as client:
            client.request("POST", url)
        return self

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

    def with_target_branch(self, target_branch: str) -> Self:
        self.target_branch = target_branch
        return self


class _MergeRequestFilters:
    """Filters shared by project and global merge request listings."""

    params: QueryParams

    def with_state(self, state: str) -> Self:
        """``opened``, ``closed``, ``locked``, ``merged`` or ``all``."""
        self.params.add_string("state", state)
        return self

    def with_order_by(self, order_by: str) -> Self:
        self.params.add_string("order_by", order_by)
        return self

    def with_sort(self, sort: str) -> Self:
        self.params.add_string("sort", sort)
        return self

    def with_milestone(self, milestone: str) -> Self:
        self.params.add_string("milestone", milestone)
        return self

    def with_view(self, view: str) -> Self:
        self.params.add_string("view", view)
        return self

    def with_labels(self, labels: list[str]) -> Self:
        self.params.add_strings("labels", labels)
        return self

    def with_labels_details(self, with_labels_details: bool) -> Self:
        self.params.add_bool("with_labels_details", with_labels_details)
        return self

    def with_merge_status_recheck(self, recheck: bool) -> Self:
        self.params.add_bool("with_merge_status_recheck", recheck)
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

    def with_scope(self, scope: str) -> Self:
        self.params.add_string("scope", scope)
        return self

    def with_author_id(self, author_id: int) -> Self:
        self.params.add_int("author_id", author_id)
        return self

    def with_author_username(self, author_username: str) -> Self:
        self.params.add_string("author_username", author_username)
        return self

    def with_assignee_id(self, assignee_id: int) -> Self:
        self.params.add_int("assignee_id", assignee_id)
        return self

    def with_approver_ids(self, approver_ids: list[int]) -> Self:
        self.params.add_ints("approver_ids", approver_ids)
        return self

    def with_approved_by_ids(self, approved_by_ids: list[int]) -> Self:
        self.params.add_ints("approved_by_ids", approved_by_ids)
        return self

    def with_my_reaction_emoji(self, emoji: str) -> Self:
        self.params.add_string("my_reaction_emoji", emoji)
        return self

    def with_source_branch(self, source_branch: str) -> Self:
        self.params.add_string("source_branch", source_branch)
        return self

    def with_target_branch(self, target_branch: str) -> Self:
        self.params.add_string("target_branch", target_branch)
        return self

    def with_search(self, search: str) -> Self:
        self.params.add_string("search", search)
        return self

    def with_wip(self, wip: str) -> Self:
        """``yes`` for draft merge requests only, ``no`` to exclude them."""
        self.params.add_string("wip", wip)
        return self


class ProjectMergeRequestsQuery(_MergeRequestFilters, ProjectScopedQuery[MergeRequest]):
    """https://docs.gitlab.com/ee/api/merge_requests.html#list-project-merge-requests"""

    model = MergeRequest
    resource = "merge_requests"

    def with_iids(self, iids: list[int]) -> Self:
        self.params.add_ints("iids[]", iids)
        return self


class MergeRequestsQuery(_MergeRequestFilters, GitLabQuery[MergeRequest]):
    """Merge requests across every project the token can see.

    https://docs.gitlab.com/ee/api/merge_requests.html#list-merge-requests
    """

    model = MergeRequest
    tail_url = "/merge_requests"
