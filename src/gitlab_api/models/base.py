"""Base models and the component contract shared by every GitLab resource."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Self

from pydantic import BaseModel, PrivateAttr

from ..config import GitLabConfig
from ..exceptions import GitLabBindingError

if TYPE_CHECKING:
    from ..client import GitLabClient
    from .projects import Project


class GitLabModel(BaseModel):
    """Base model with common behavior for all GitLab API models."""

    model_config = {"extra": "ignore", "populate_by_name": True}

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


class GitLabComponent(GitLabModel):
    """A resource that carries the config needed to issue further requests."""

    _config: GitLabConfig | None = PrivateAttr(default=None)

    @property
    def config(self) -> GitLabConfig | None:
        return self._config

    def with_config(self, config: GitLabConfig) -> Self:
        self._config = config
        return self

    def _adopt_context(self, template: GitLabComponent) -> None:
        """Copy the non-JSON context of *template* onto this freshly parsed copy."""
        if template.config is not None:
            self._config = template.config

    def _require_config(self) -> GitLabConfig:
        if self._config is None:
            msg = f"{type(self).__name__} has no config attached"
            raise GitLabBindingError(msg)
        return self._config

    def _client(self) -> GitLabClient:
        from ..client import GitLabClient

        return GitLabClient(self._require_config())

    def _require(self, name: str, value: Any) -> Any:
        if value is None:
            msg = f"{type(self).__name__}.{name} is not set; the resource was never created"
            raise GitLabBindingError(msg)
        return value


class ModifiableComponent(GitLabComponent, ABC):
    """A component supporting create, update and delete.

    ``create()`` and ``update()`` return the server's copy of the resource with
    this instance's config and parent carried over. ``delete()`` returns this
    instance unchanged; it should not be mutated again afterwards.
    """

    @abstractmethod
    def create(self) -> ModifiableComponent: ...

    @abstractmethod
    def update(self) -> ModifiableComponent: ...

    @abstractmethod
    def delete(self) -> ModifiableComponent: ...


class ProjectChild(GitLabComponent):
    """A component owned by a project, e.g. an issue or a merge request.

    The owning project starts out known only by ``project_id``. It becomes a
    full :class:`Project` either when a project-scoped query binds it or when
    :meth:`resolve_project` fetches it.
    """

    project_id: int | None = None

    _project: Project | None = PrivateAttr(default=None)

    @property
    def project(self) -> Project | None:
        """The owning project if already resolved, else None."""
        return self._project

    def with_project(self, project: Project) -> Self:
        self._project = project
        self.project_id = project.id
        return self

    def resolve_project(self) -> Project:
        """Fetch the owning project once and cache it."""
        if self._project is None:
            from .projects import Project

            project_id = self._require("project_id", self.project_id)
            with self._client() as client:
                self._project = client.get(f"/projects/{project_id}", Project)
        return self._project

    def _adopt_context(self, template: GitLabComponent) -> None:
        super()._adopt_context(template)
        if isinstance(template, ProjectChild) and template.project is not None:
            self.with_project(template.project)
