"""Tests for the Redmine Notes and Transitions mixins."""

import json

import pytest

from mcp_redmine.exceptions import MCPRedmineHTTPError
from tests.fixtures.redmine_mocks import last_request, make_response


class TestNotesMixin:
    """Tests for the NotesMixin class."""

    def test_add_issue_note(self, redmine_fetcher):
        redmine_fetcher.session.request.return_value = make_response(status_code=204)

        result = redmine_fetcher.add_issue_note(42, "Deployed the fix to staging.")

        method, url, kwargs = last_request(redmine_fetcher.session)
        assert result is None
        assert method == "PUT"
        assert url == "https://redmine.example.com/issues/42.json"
        assert json.loads(kwargs["data"]) == {
            "issue": {"notes": "Deployed the fix to staging."}
        }

    def test_add_issue_note_invalid_id(self, redmine_fetcher):
        with pytest.raises(ValueError):
            redmine_fetcher.add_issue_note(0, "note")
        redmine_fetcher.session.request.assert_not_called()


class TestTransitionsMixin:
    """Tests for the TransitionsMixin class."""

    def test_transition_issue(self, redmine_fetcher):
        redmine_fetcher.session.request.return_value = make_response(status_code=204)

        redmine_fetcher.transition_issue(42, 5)

        method, url, kwargs = last_request(redmine_fetcher.session)
        assert method == "PUT"
        assert url == "https://redmine.example.com/issues/42.json"
        assert json.loads(kwargs["data"]) == {"issue": {"status_id": 5}}

    def test_transition_issue_with_notes(self, redmine_fetcher):
        redmine_fetcher.session.request.return_value = make_response(status_code=204)

        redmine_fetcher.transition_issue(42, 5, "Closing as fixed.")

        _, _, kwargs = last_request(redmine_fetcher.session)
        assert json.loads(kwargs["data"]) == {
            "issue": {"status_id": 5, "notes": "Closing as fixed."}
        }

    def test_transition_issue_empty_notes_not_sent(self, redmine_fetcher):
        redmine_fetcher.session.request.return_value = make_response(status_code=204)

        redmine_fetcher.transition_issue(42, 5, "")

        _, _, kwargs = last_request(redmine_fetcher.session)
        assert json.loads(kwargs["data"]) == {"issue": {"status_id": 5}}

    def test_transition_issue_invalid_status(self, redmine_fetcher):
        with pytest.raises(ValueError, match="status_id"):
            redmine_fetcher.transition_issue(42, 0)

    def test_transition_issue_rejected_by_workflow(self, redmine_fetcher):
        redmine_fetcher.session.request.return_value = make_response(
            status_code=422, text='{"errors":["Status is invalid"]}'
        )

        with pytest.raises(MCPRedmineHTTPError, match="HTTP 422"):
            redmine_fetcher.transition_issue(42, 99)
