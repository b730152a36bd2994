"""
Fixtures pytest — Auto-Assign.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from auto_assign.coordinator import ReviewCoordinator
from auto_assign.models import ApiResponse, AssignConfig, RequestContext


@pytest.fixture
def sample_payload() -> dict:
    """Payload d'événement pull_request de test."""
    return {
        "action": "opened",
        "number": 1,
        "pull_request": {
            "number": 1,
            "labels": [],
            "title": "test",
            "draft": False,
            "user": {"login": "pr-creator"},
        },
        "repository": {
            "name": "auto-assign",
            "owner": {"login": "kentaro-m"},
        },
    }


@pytest.fixture
def request_context(sample_payload) -> RequestContext:
    return RequestContext(owner="kentaro-m", repo="auto-assign", number=1, payload=sample_payload)


@pytest.fixture
def mock_client() -> MagicMock:
    """Client distant factice : chaque opération est un AsyncMock."""
    client = MagicMock()
    client.list_requested_reviewers = AsyncMock(
        return_value=ApiResponse(status=200, data={"users": []})
    )
    client.request_reviewers = AsyncMock(return_value=ApiResponse(status=201, data={}))
    client.list_reviews = AsyncMock(return_value=ApiResponse(status=200, data=[]))
    client.add_assignees = AsyncMock(return_value=ApiResponse(status=201, data={}))
    return client


@pytest.fixture
def debug_sink() -> MagicMock:
    return MagicMock()


@pytest.fixture
def coordinator(mock_client, request_context, debug_sink) -> ReviewCoordinator:
    return ReviewCoordinator(mock_client, request_context, debug=debug_sink)


@pytest.fixture
def make_coordinator(mock_client, debug_sink):
    """Fabrique de coordinateurs sur un payload arbitraire."""
    def _make(payload: dict) -> ReviewCoordinator:
        context = RequestContext(owner="kentaro-m", repo="auto-assign", number=1, payload=payload)
        return ReviewCoordinator(mock_client, context, debug=debug_sink)
    return _make


@pytest.fixture
def sample_config() -> AssignConfig:
    """Configuration de l'action de test."""
    return AssignConfig.model_validate({
        "addReviewers": True,
        "addAssignees": False,
        "reviewers": ["reviewer1", "reviewer2", "reviewer3"],
        "numberOfReviewers": 0,
    })
