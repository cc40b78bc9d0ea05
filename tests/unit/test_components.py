"""Tests for resource create/update/delete."""

from __future__ import annotations

import json
from datetime import date

import httpx
import pytest

from gitlab_api.exceptions import GitLabBindingError, GitLabNotFoundError
from gitlab_api.models.issues import Issue
from gitlab_api.models.merge_requests import MergeRequest
from gitlab_api.models.projects import Project
from gitlab_api.models.users import User

MR_JSON = {
    "id": 500,
    "iid": 5,
    "project_id": 42,
    "title": "Add login",
    "source_branch": "feature/login",
    "target_branch": "main",
    "state": "opened",
}


def _sent(route) -> dict:
    return json.loads(route.calls.last.request.content)


class TestMergeRequest:
    def test_create(self, project, config, mock_api):
        route = mock_api.post("/projects/42/merge_requests").mock(
            return_value=httpx.Response(201, json=MR_JSON)
        )
        draft = project.new_merge_request("feature/login", "main", "Add login")
        draft.with_assignees([User(id=3), User(id=4)]).with_labels(["backend"])

        created = draft.create()

        assert _sent(route) == {
            "target_branch": "main",
            "title": "Add login",
            "assignee_ids": [3, 4],
            "labels": ["backend"],
            "source_branch": "feature/login",
        }
        assert created.iid == 5
        assert created.config is config
        assert created.project is project
        assert draft.iid is None

    def test_update(self, project, mock_api):
        route = mock_api.put("/projects/42/merge_requests/5").mock(
            return_value=httpx.Response(200, json={**MR_JSON, "title": "Renamed"})
        )
        mr = MergeRequest.model_validate(MR_JSON).with_config(project.config)
        mr.with_project(project)

        updated = mr.with_title("Renamed").with_description("Longer text").update()

        body = _sent(route)
        assert body["title"] == "Renamed"
        assert body["description"] == "Longer text"
        assert "source_branch" not in body
        assert updated.title == "Renamed"
        assert updated.project is project

    def test_delete_returns_snapshot(self, project, mock_api):
        route = mock_api.delete("/projects/42/merge_requests/5").mock(
            return_value=httpx.Response(204)
        )
        mr = MergeRequest.model_validate(MR_JSON).with_config(project.config)
        assert mr.delete() is mr
        assert route.called

    def test_delete_without_iid_fails_before_request(self, project, mock_api):
        draft = project.new_merge_request("a", "main", "Draft")
        with pytest.raises(GitLabBindingError, match="iid"):
            draft.delete()
        assert not mock_api.calls.called

    def test_update_without_iid_fails(self, project, mock_api):
        with pytest.raises(GitLabBindingError):
            project.new_merge_request("a", "main", "Draft").update()

    def test_missing_config(self):
        mr = MergeRequest.model_validate(MR_JSON)
        with pytest.raises(GitLabBindingError, match="config"):
            mr.delete()

    def test_not_found_on_update(self, project, mock_api):
        mock_api.put("/projects/42/merge_requests/5").mock(
            return_value=httpx.Response(404, json={"message": "404 Not found"})
        )
        mr = MergeRequest.model_validate(MR_JSON).with_config(project.config)
        with pytest.raises(GitLabNotFoundError) as exc_info:
            mr.update()
        assert exc_info.value.status_code == 404

    def test_participants_and_commits(self, project, mock_api):
        mock_api.get("/projects/42/merge_requests/5/participants").mock(
            return_value=httpx.Response(200, json=[{"id": 1, "username": "alice"}])
        )
        mock_api.get("/projects/42/merge_requests/5/commits").mock(
            return_value=httpx.Response(200, json=[{"id": "deadbeef"}])
        )
        mr = MergeRequest.model_validate(MR_JSON).with_config(project.config)
        mr.with_project(project)

        assert [u.username for u in mr.participants()] == ["alice"]
        (commit,) = mr.commits()
        assert commit.id == "deadbeef"
        assert commit.project is project

    def test_approve(self, project, mock_api):
        route = mock_api.post("/projects/42/merge_requests/5/approve").mock(
            return_value=httpx.Response(201, json={"approved": True})
        )
        mr = MergeRequest.model_validate(MR_JSON).with_config(project.config)
        assert mr.approve() is mr
        assert route.called

    def test_accept(self, project, mock_api):
        mock_api.put("/projects/42/merge_requests/5/merge").mock(
            return_value=httpx.Response(200, json={**MR_JSON, "state": "merged"})
        )
        mr = MergeRequest.model_validate(MR_JSON).with_config(project.config)
        assert mr.accept().state == "merged"

    def test_accept_with_no_content(self, project, mock_api):
        mock_api.put("/projects/42/merge_requests/5/merge").mock(
            return_value=httpx.Response(204)
        )
        mr = MergeRequest.model_validate(MR_JSON).with_project(project).with_config(project.config)
        assert mr.accept() is mr


class TestIssue:
    def test_create(self, project, mock_api):
        route = mock_api.post("/projects/42/issues").mock(
            return_value=httpx.Response(
                201, json={"id": 1, "iid": 12, "project_id": 42, "due_date": "2024-03-01"}
            )
        )
        issue = project.new_issue("Crash on start").with_due_date(date(2024, 3, 1)).create()

        body = _sent(route)
        assert body["title"] == "Crash on start"
        assert body["due_date"] == "2024-03-01"
        assert "description" not in body
        assert issue.iid == 12
        assert issue.due_date == date(2024, 3, 1)
        assert issue.project is project

    def test_close_sends_state_event(self, project, mock_api):
        route = mock_api.put("/projects/42/issues/12").mock(
            return_value=httpx.Response(200, json={"id": 1, "iid": 12, "state": "closed"})
        )
        issue = Issue(iid=12, project_id=42, title="Crash").with_config(project.config)
        assert issue.close().state == "closed"
        assert _sent(route)["state_event"] == "close"

    def test_update_after_close_omits_state_event(self, project, mock_api):
        route = mock_api.put("/projects/42/issues/12").mock(
            return_value=httpx.Response(200, json={"id": 1, "iid": 12, "state": "closed"})
        )
        issue = Issue(iid=12, project_id=42, title="Crash").with_config(project.config)
        issue.close()
        issue.with_title("Crash on start").update()
        assert "state_event" not in _sent(route)
        assert _sent(route)["title"] == "Crash on start"

    def test_create_without_project_fails(self, config, mock_api):
        issue = Issue(title="Orphan").with_config(config)
        with pytest.raises(GitLabBindingError, match="project_id"):
            issue.create()

    def test_get_by_iid(self, project, mock_api):
        mock_api.get("/projects/42/issues/3").mock(
            return_value=httpx.Response(200, json={"id": 30, "iid": 3, "project_id": 42})
        )
        issue = project.issue(3)
        assert issue.project is project
        assert issue.config is project.config


class TestProject:
    def test_from_id_with_path(self, config, mock_api):
        route = mock_api.get("/projects/group%2Fdemo").mock(
            return_value=httpx.Response(200, json={"id": 42, "name": "demo"})
        )
        project = Project.from_id(config, "group/demo")
        assert project.id == 42
        assert project.config is config
        assert route.called

    def test_create_and_delete(self, config, mock_api):
        route = mock_api.post("/projects").mock(
            return_value=httpx.Response(201, json={"id": 77, "name": "example-project"})
        )
        mock_api.delete("/projects/77").mock(return_value=httpx.Response(202))

        draft = Project(name="example-project").with_visibility("private").with_config(config)
        created = draft.create()

        assert _sent(route) == {"name": "example-project", "visibility": "private"}
        assert created.config is config
        assert created.delete() is created

    @pytest.mark.parametrize("status", [204, 304])
    def test_update_without_response_body(self, config, mock_api, status):
        mock_api.put("/projects/7").mock(return_value=httpx.Response(status))
        project = Project(id=7, name="x").with_config(config)
        assert project.update() is project

    def test_children_need_an_id(self, config):
        with pytest.raises(GitLabBindingError):
            Project(name="draft").with_config(config).merge_requests_query()


class TestUser:
    def test_create_without_password_requests_reset(self, config, mock_api):
        route = mock_api.post("/users").mock(
            return_value=httpx.Response(201, json={"id": 5, "username": "jdoe"})
        )
        user = User(email="j@example.com", username="jdoe", name="J Doe").with_config(config)
        created = user.create()
        assert _sent(route) == {
            "email": "j@example.com",
            "username": "jdoe",
            "name": "J Doe",
            "reset_password": True,
        }
        assert created.id == 5

    def test_update_without_id_fails(self, config):
        with pytest.raises(GitLabBindingError):
            User(username="ghost").with_config(config).update()
