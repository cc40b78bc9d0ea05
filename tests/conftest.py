"""Shared test fixtures for gitlab-api."""

from __future__ import annotations

import pytest
import respx

from gitlab_api.config import GitLabConfig
from gitlab_api.models.projects import Project

TEST_URL = "https://gitlab.example.com"
TEST_TOKEN = "test-token"
BASE = f"{TEST_URL}/api/v4"


@pytest.fixture
def config() -> GitLabConfig:
    return GitLabConfig(url=TEST_URL, token=TEST_TOKEN)


@pytest.fixture
def project(config: GitLabConfig) -> Project:
    return Project(id=42, name="demo", path_with_namespace="group/demo").with_config(config)


@pytest.fixture
def mock_api() -> respx.MockRouter:
    with respx.mock(base_url=BASE) as router:
        yield router
