"""GitLab API transport using httpx."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError

from .config import GitLabConfig
from .exceptions import (
    GitLabApiError,
    GitLabAuthError,
    GitLabNotFoundError,
    GitLabTransportError,
    GitLabValidationError,
)
from .models.base import GitLabComponent

if TYPE_CHECKING:
    from .body import Body

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


class GitLabClient:
    """Blocking HTTP client for the GitLab REST API v4.

    Every response with a status in ``[200, 400)`` is a success. Anything else,
    and any failure to get a response at all, is raised as a
    :class:`~gitlab_api.exceptions.GitLabError`. Nothing is retried.
    """

    def __init__(self, config: GitLabConfig) -> None:
        self.config = config
        self._client = httpx.Client(
            base_url=config.api_url,
            headers={
                "Authorization": f"Bearer {config.token}",
                "Content-Type": "application/json",
            },
            timeout=config.timeout,
            verify=config.ssl_verify,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> GitLabClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ── HTTP helpers ──────────────────────────────────────────────

    @staticmethod
    def encode_id(project_id: str | int) -> str:
        """Encode a project/user ID. Numeric IDs pass through; paths are URL-encoded."""
        if isinstance(project_id, int):
            return str(project_id)
        try:
            return str(int(project_id))
        except ValueError:
            return quote(project_id, safe="")

    def _request(
        self, method: str, path: str, body: Body | None = None
    ) -> tuple[int, Any]:
        """Make an API request and return the status code with the parsed JSON.

        The JSON part is None when the response has no body.
        """
        kwargs: dict[str, Any] = {}
        if body is not None:
            kwargs["json"] = body.to_dict()

        logger.debug("%s %s", method, path)
        try:
            resp = self._client.request(method, path, **kwargs)
        except httpx.TransportError as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise GitLabTransportError(method, path, e) from e

        if not 200 <= resp.status_code < 400:
            logger.warning("%s %s returned %d", method, path, resp.status_code)
            if resp.status_code in (401, 403):
                raise GitLabAuthError(resp.status_code, resp.text)
            if resp.status_code == 404:
                raise GitLabNotFoundError(resp.text)
            if resp.status_code in (400, 422):
                raise GitLabValidationError(resp.status_code, resp.text)
            raise GitLabApiError(resp.status_code, resp.reason_phrase or "", resp.text)

        if resp.status_code == 204 or not resp.content:
            return resp.status_code, None

        content_type = resp.headers.get("content-type", "")
        if "text/html" in content_type:
            msg = "Unexpected HTML response, check URL and authentication"
            raise GitLabApiError(resp.status_code, msg, resp.text[:500])

        try:
            return resp.status_code, resp.json()
        except json.JSONDecodeError as e:
            raise GitLabApiError(
                resp.status_code,
                f"JSON parse error: {e}",
                resp.text[:500],
            ) from e

    def _parse(self, status: int, data: Any, model: type[M], template: Any = None) -> M:
        if data is None and template is not None:
            # Success without a body: the caller's object stands in for the result.
            template.with_config(self.config)
            return template
        if not isinstance(data, dict):
            msg = f"Expected a JSON object for {model.__name__}"
            raise GitLabApiError(status, msg, str(data)[:500])
        try:
            item = model.model_validate(data)
        except ValidationError as e:
            raise GitLabApiError(status, f"Invalid {model.__name__} payload", str(e)) from e
        if isinstance(item, GitLabComponent):
            item.with_config(self.config)
            if template is not None:
                item._adopt_context(template)
        return item

    # ── Verbs ─────────────────────────────────────────────────────

    def get(self, path: str, model: type[M]) -> M:
        status, data = self._request("GET", path)
        return self._parse(status, data, model)

    def get_list(self, path: str, model: type[M]) -> list[M]:
        status, data = self._request("GET", path)
        if data is None:
            return []
        if not isinstance(data, list):
            msg = f"Expected a JSON array of {model.__name__}"
            raise GitLabApiError(status, msg, str(data)[:500])
        return [self._parse(status, entry, model) for entry in data]

    def post(
        self, path: str, body: Body | None, model: type[M], template: GitLabComponent | None = None
    ) -> M:
        status, data = self._request("POST", path, body)
        return self._parse(status, data, model, template)

    def put(
        self, path: str, body: Body | None, model: type[M], template: GitLabComponent | None = None
    ) -> M:
        status, data = self._request("PUT", path, body)
        return self._parse(status, data, model, template)

    def delete(self, path: str) -> None:
        self._request("DELETE", path)

    def request(self, method: str, path: str, body: Body | None = None) -> Any:
        """Send a request whose response is not a resource; return the raw JSON."""
        return self._request(method, path, body)[1]
