"""Repository models: commits."""

from __future__ import annotations

from datetime import datetime
from typing import Self

from ..query import ProjectScopedQuery
from .base import GitLabModel, ProjectChild


class CommitStats(GitLabModel):
    additions: int = 0
    deletions: int = 0
    total: int = 0


class Commit(ProjectChild):
    """A repository commit. Commits are read-only through this API."""

    id: str = ""
    short_id: str = ""
    title: str = ""
    message: str = ""
    author_name: str = ""
    author_email: str = ""
    authored_date: datetime | None = None
    committer_name: str = ""
    committer_email: str = ""
    committed_date: datetime | None = None
    created_at: datetime | None = None
    parent_ids: list[str] = []
    stats: CommitStats | None = None
    web_url: str = ""


class ProjectCommitsQuery(ProjectScopedQuery[Commit]):
    """https://docs.gitlab.com/ee/api/commits.html#list-repository-commits"""

    model = Commit
    resource = "repository/commits"

    def with_ref_name(self, ref_name: str) -> Self:
        self.params.add_string("ref_name", ref_name)
        return self

    def with_since(self, since: datetime) -> Self:
        self.params.add_datetime("since", since)
        return self

    def with_until(self, until: datetime) -> Self:
        self.params.add_datetime("until", until)
        return self

    def with_path(self, path: str) -> Self:
        self.params.add_string("path", path)
        return self

    def with_all(self, all_refs: bool) -> Self:
        self.params.add_bool("all", all_refs)
        return self

    def with_stats(self, with_stats: bool) -> Self:
        self.params.add_bool("with_stats", with_stats)
        return self

    def with_first_parent(self, first_parent: bool) -> Self:
        self.params.add_bool("first_parent", first_parent)
        return self

    def with_order(self, order: str) -> Self:
        """``default`` or ``topo``."""
        self.params.add_string("order", order)
        return self
