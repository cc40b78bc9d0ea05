"""Listing queries: filters + pagination + response binding."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Generic, Self, TypeVar

from .client import GitLabClient
from .config import GitLabConfig
from .models.base import GitLabComponent, ProjectChild
from .pagination import Pagination
from .params import QueryParams

if TYPE_CHECKING:
    from .models.projects import Project

T = TypeVar("T", bound=GitLabComponent)
C = TypeVar("C", bound=ProjectChild)


class GitLabQuery(ABC, Generic[T]):
    """Builds a filtered listing request and turns the response into components.

    Subclasses name the endpoint with :attr:`tail_url`, expose ``with_*``
    filter methods that append to :attr:`params`, and may override
    :meth:`bind` to wire each parsed component to its parent.
    """

    model: type[T]

    def __init__(self, config: GitLabConfig) -> None:
        self.config = config
        self.params = QueryParams()

    @property
    @abstractmethod
    def tail_url(self) -> str:
        """Path of the listing endpoint, e.g. ``/projects``."""

    def bind(self, component: T) -> None:
        """Hook run once on every parsed component before it is returned."""

    def with_pagination(self, pagination: Pagination) -> Self:
        self.params.add_pagination(pagination)
        return self

    @property
    def entire_url(self) -> str:
        return self.tail_url + str(self.params)

    def query(self) -> list[T]:
        """Run the query and return the components in server order."""
        with GitLabClient(self.config) as client:
            components = client.get_list(self.entire_url, self.model)
        for component in components:
            self.bind(component)
        return components

    def __str__(self) -> str:
        return str(self.params)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.entire_url!r})"


class ProjectScopedQuery(GitLabQuery[C]):
    """A listing nested under one project, e.g. ``/projects/42/issues``.

    Every returned component is bound to that project.
    """

    resource: str

    def __init__(self, config: GitLabConfig, project: Project) -> None:
        super().__init__(config)
        self.project = project

    @property
    def tail_url(self) -> str:
        return f"/projects/{self.project.id}/{self.resource}"

    def bind(self, component: C) -> None:
        component.with_project(self.project)
