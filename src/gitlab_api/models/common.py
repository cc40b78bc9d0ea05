"""Small GitLab models embedded in other resources."""

from __future__ import annotations

from .base import GitLabModel


class Namespace(GitLabModel):
    id: int
    name: str = ""
    path: str = ""
    kind: str = ""
    full_path: str = ""


class Milestone(GitLabModel):
    id: int
    iid: int | None = None
    title: str = ""
    state: str = ""
    due_date: str | None = None
