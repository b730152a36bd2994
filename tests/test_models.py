"""Tests des modèles et de la configuration."""

import json

import pytest
from pydantic import ValidationError

from auto_assign.config import Settings
from auto_assign.exceptions import ConfigurationError
from auto_assign.models import AssignConfig, RequestContext


class TestRequestContext:
    """Tests pour RequestContext."""

    def test_is_immutable(self, request_context):
        with pytest.raises(ValidationError):
            request_context.number = 2

    def test_creator_and_pull_request(self, request_context):
        assert request_context.creator == "pr-creator"
        assert request_context.pull_request["title"] == "test"

    def test_creator_none_without_pull_request(self):
        ctx = RequestContext(owner="o", repo="r", number=3, payload={"issue": {"number": 3}})
        assert ctx.pull_request is None
        assert ctx.creator is None

    @pytest.mark.parametrize(
        "payload, expected",
        [
            ({"pull_request": {"number": 5}, "number": 9}, 5),
            ({"issue": {"number": 6}}, 6),
            ({"number": "7"}, 7),
        ],
    )
    def test_from_event_number_resolution(self, payload, expected):
        ctx = RequestContext.from_event("kentaro-m", "auto-assign", payload)
        assert ctx.number == expected

    def test_from_event_without_number(self):
        with pytest.raises(ConfigurationError):
            RequestContext.from_event("o", "r", {"action": "opened"})

    @pytest.mark.parametrize("number", ["abc", "1.5", [3]])
    def test_from_event_with_invalid_number(self, number):
        with pytest.raises(ConfigurationError, match="invalide"):
            RequestContext.from_event("o", "r", {"number": number})

    def test_from_event_file(self, tmp_path, sample_payload):
        event = tmp_path / "event.json"
        event.write_text(json.dumps(sample_payload))

        ctx = RequestContext.from_event_file("kentaro-m", "auto-assign", event)

        assert ctx.number == 1
        assert ctx.payload == sample_payload

    def test_from_event_file_missing(self, tmp_path):
        with pytest.raises(ConfigurationError):
            RequestContext.from_event_file("o", "r", tmp_path / "missing.json")


class TestAssignConfig:
    """Tests pour AssignConfig."""

    def test_defaults(self):
        config = AssignConfig()
        assert config.add_reviewers is True
        assert config.add_assignees is False
        assert config.number_of_reviewers == 0
        assert config.filter_labels.include == []

    def test_camel_case_keys(self):
        config = AssignConfig.model_validate({
            "addAssignees": "author",
            "numberOfReviewers": 2,
            "skipKeywords": ["wip"],
            "filterLabels": {"include": ["review"], "exclude": ["hold"]},
            "runOnDraft": True,
        })
        assert config.assign_author is True
        assert config.number_of_reviewers == 2
        assert config.skip_keywords == ["wip"]
        assert config.filter_labels.exclude == ["hold"]
        assert config.run_on_draft is True

    def test_negative_number_rejected(self):
        with pytest.raises(ValidationError):
            AssignConfig.model_validate({"numberOfReviewers": -1})

    def test_validate_groups_requires_reviewers(self):
        with pytest.raises(ConfigurationError, match="aucun reviewer"):
            AssignConfig(add_reviewers=True, reviewers=[]).validate_groups()

    def test_validate_groups_requires_review_groups(self):
        with pytest.raises(ConfigurationError, match="reviewGroups"):
            AssignConfig(add_reviewers=True, use_review_groups=True).validate_groups()

    def test_validate_groups_requires_assignee_groups(self):
        config = AssignConfig(add_reviewers=False, add_assignees=True, use_assignee_groups=True)
        with pytest.raises(ConfigurationError, match="assigneeGroups"):
            config.validate_groups()


class TestSettings:
    """Tests pour Settings."""

    def test_reads_action_inputs(self, monkeypatch):
        monkeypatch.delenv("INPUT_REPO-TOKEN", raising=False)
        monkeypatch.delenv("INPUT_REPO_TOKEN", raising=False)
        monkeypatch.delenv("INPUT_CONFIGURATION-PATH", raising=False)
        monkeypatch.delenv("INPUT_CONFIGURATION_PATH", raising=False)
        monkeypatch.delenv("CONFIGURATION_PATH", raising=False)
        monkeypatch.setenv("GITHUB_REPOSITORY", "kentaro-m/auto-assign")
        monkeypatch.setenv("GITHUB_TOKEN", "gh-token")
        monkeypatch.setenv("GITHUB_EVENT_PATH", "/tmp/event.json")

        settings = Settings(_env_file=None)

        assert settings.github_token == "gh-token"
        assert settings.github_configured is True
        assert settings.repository_coordinates == ("kentaro-m", "auto-assign")
        assert settings.github_event_path == "/tmp/event.json"
        assert settings.configuration_path == ".github/auto_assign.yml"

    @pytest.mark.parametrize("value", ["", "kentaro-m", "a/b/c", "/repo", "owner/"])
    def test_invalid_repository(self, value):
        settings = Settings(_env_file=None, github_repository=value)
        with pytest.raises(ConfigurationError):
            settings.repository_coordinates
