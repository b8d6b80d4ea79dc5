"""
Tests for the Redmine Pydantic models.
"""

import pytest

from mcp_redmine.models import ApiModel
from mcp_redmine.models.constants import EMPTY_STRING, REDMINE_DEFAULT_ID, UNKNOWN
from mcp_redmine.models.redmine import (
    RedmineAttachment,
    RedmineIssue,
    RedmineJournal,
    RedmineProject,
    RedmineReference,
    RedmineSearchResult,
    RedmineUpload,
    RedmineUser,
)


class TestApiModel:
    def test_from_api_response_not_implemented(self):
        with pytest.raises(NotImplementedError):
            ApiModel.from_api_response({})


class TestRedmineReference:
    def test_from_api_response(self):
        ref = RedmineReference.from_api_response({"id": "3", "name": "Bug"})
        assert ref.id == 3
        assert ref.name == "Bug"

    def test_from_empty(self):
        ref = RedmineReference.from_api_response({})
        assert ref.id == REDMINE_DEFAULT_ID
        assert ref.name == UNKNOWN


class TestRedmineIssue:
    def test_from_api_response(self, redmine_issue_data):
        issue = RedmineIssue.from_api_response(redmine_issue_data)

        assert issue.id == 42
        assert issue.project == RedmineReference(id=1, name="Website")
        assert issue.assigned_to.name == "John Smith"
        assert issue.parent is None
        assert issue.start_date == "2024-03-01"
        assert issue.due_date is None
        assert issue.attachments == []

    def test_from_api_response_with_includes(self, redmine_issue_with_includes_data):
        issue = RedmineIssue.from_api_response(redmine_issue_with_includes_data)

        assert len(issue.attachments) == 1
        attachment = issue.attachments[0]
        assert isinstance(attachment, RedmineAttachment)
        assert attachment.filesize == 2048
        assert attachment.description is None
        assert attachment.author.name == "Jane Doe"

        assert [journal.id for journal in issue.journals] == [100, 101]
        assert issue.journals[0].details[0]["new_value"] == "2"
        assert issue.journals[1].notes is None

    def test_parent_without_name(self, redmine_issue_data):
        redmine_issue_data["parent"] = {"id": 40}
        issue = RedmineIssue.from_api_response(redmine_issue_data)
        assert issue.parent.id == 40
        assert issue.parent.name == UNKNOWN

    def test_from_empty(self):
        issue = RedmineIssue.from_api_response({})
        assert issue.id == REDMINE_DEFAULT_ID
        assert issue.subject == EMPTY_STRING

    def test_to_simplified_dict_drops_unset(self, redmine_issue_data):
        simplified = RedmineIssue.from_api_response(
            redmine_issue_data
        ).to_simplified_dict()

        assert simplified["id"] == 42
        assert simplified["status"] == {"id": 1, "name": "New"}
        assert "due_date" not in simplified
        assert "closed_on" not in simplified
        assert "attachments" not in simplified
        assert "journals" not in simplified

    def test_to_simplified_dict_keeps_related(self, redmine_issue_with_includes_data):
        simplified = RedmineIssue.from_api_response(
            redmine_issue_with_includes_data
        ).to_simplified_dict()

        assert simplified["attachments"][0]["filename"] == "trace.log"
        assert simplified["journals"][0]["notes"] == "Reproduced on staging."


class TestRedmineSearchResult:
    def test_from_api_response(self, redmine_search_data):
        result = RedmineSearchResult.from_api_response(redmine_search_data)

        assert result.total_count == 57
        assert result.offset == 0
        assert result.limit == 25
        assert result.issues[1].assigned_to is None

    def test_missing_pagination_defaults_to_page_size(self):
        result = RedmineSearchResult.from_api_response(
            {"issues": [{"id": 1, "subject": "a"}]}
        )
        assert result.total_count == 1
        assert result.limit == 1

    def test_to_simplified_dict(self, redmine_search_data):
        simplified = RedmineSearchResult.from_api_response(
            redmine_search_data
        ).to_simplified_dict()

        assert set(simplified) == {"issues", "total_count", "offset", "limit"}
        assert simplified["issues"][0]["subject"] == "Login page returns 500"


class TestRedmineProject:
    def test_from_api_response(self):
        project = RedmineProject.from_api_response(
            {"id": 2, "name": "API", "identifier": "api", "parent": {"id": 1, "name": "Web"}}
        )
        assert project.identifier == "api"
        assert project.parent.id == 1


class TestRedmineUser:
    def test_name_from_first_and_last(self):
        user = RedmineUser.from_api_response(
            {"id": 5, "firstname": "Jane", "lastname": "Doe"}
        )
        assert user.name == "Jane Doe"

    def test_explicit_name_wins(self):
        user = RedmineUser.from_api_response(
            {"id": 5, "name": "J. Doe", "firstname": "Jane", "lastname": "Doe"}
        )
        assert user.name == "J. Doe"

    def test_no_name_parts(self):
        assert RedmineUser.from_api_response({"id": 5}).name == UNKNOWN


class TestRedmineJournal:
    def test_non_list_details_ignored(self):
        journal = RedmineJournal.from_api_response({"id": 1, "details": "oops"})
        assert journal.details == []


class TestRedmineUpload:
    def test_from_api_response(self):
        upload = RedmineUpload.from_api_response(
            {"id": 3, "token": "3.abc"}, filename="a.txt", content_type="text/plain"
        )
        assert upload.token == "3.abc"
        assert upload.filename == "a.txt"

    def test_missing_token(self):
        with pytest.raises(ValueError, match="token"):
            RedmineUpload.from_api_response({"id": 3})

    def test_to_attachment_payload_excludes_unset(self):
        upload = RedmineUpload(token="3.abc", id=3, filename="a.txt")
        assert upload.to_attachment_payload() == {"token": "3.abc", "filename": "a.txt"}
