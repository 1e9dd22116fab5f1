"""Tests for the Github API client."""

from unittest.mock import patch

import pytest

from common.http_client import HttpError, NotFoundError
from repository.github import GitHubClient, RateLimitError

API = "https://api.github.com/repos/a/p"


class TestGetCommit:
    """Test commit lookups."""

    @patch("repository.github.get_json")
    def test_returns_sha(self, mock_get_json):
        mock_get_json.return_value = {"sha": "0123456789abcdef"}
        client = GitHubClient()

        assert client.get_commit("a", "p", "v1.0.0") == "0123456789abcdef"
        mock_get_json.assert_called_once_with(f"{API}/commits/v1.0.0", context="github", auth=None)

    @patch("repository.github.get_json")
    def test_uses_basic_auth(self, mock_get_json):
        mock_get_json.return_value = {"sha": "abc"}
        GitHubClient(username="user", token="tok").get_commit("a", "p", "v1.0.0")
        assert mock_get_json.call_args.kwargs["auth"] == ("user", "tok")

    @patch("repository.github.get_json")
    def test_incomplete_credentials_not_sent(self, mock_get_json):
        mock_get_json.return_value = {"sha": "abc"}
        GitHubClient(username="user").get_commit("a", "p", "v1.0.0")
        assert mock_get_json.call_args.kwargs["auth"] is None

    @patch("repository.github.get_json")
    def test_rate_limit(self, mock_get_json):
        mock_get_json.side_effect = HttpError(f"{API}/commits/v1", 403, '{"message": "API rate limit exceeded for 1.2.3.4"}')
        with pytest.raises(RateLimitError) as exc:
            GitHubClient().get_commit("a", "p", "v1")
        assert "M2T_GITHUB" in str(exc.value)
        assert "https://github.com/settings/tokens/new" in str(exc.value)

    @patch("repository.github.get_json")
    def test_other_errors_propagate(self, mock_get_json):
        mock_get_json.side_effect = HttpError(f"{API}/commits/v1", 500, "boom")
        with pytest.raises(HttpError) as exc:
            GitHubClient().get_commit("a", "p", "v1")
        assert not isinstance(exc.value, RateLimitError)


class TestHasTag:
    """Test tag ref existence checks."""

    @patch("repository.github.get_json")
    def test_found(self, mock_get_json):
        mock_get_json.return_value = {"ref": "refs/tags/v1.0.0"}
        assert GitHubClient().has_tag("a", "p", "v1.0.0")
        mock_get_json.assert_called_once_with(f"{API}/git/refs/tags/v1.0.0", context="github", auth=None)

    @patch("repository.github.get_json")
    def test_not_found(self, mock_get_json):
        mock_get_json.side_effect = NotFoundError(f"{API}/git/refs/tags/v1.0.0")
        assert not GitHubClient().has_tag("a", "p", "v1.0.0")

    @patch("repository.github.get_json")
    def test_incomplete_tag_returns_list(self, mock_get_json):
        mock_get_json.return_value = [{"ref": "refs/tags/v1.0.0"}, {"ref": "refs/tags/v1.0.1"}]
        assert not GitHubClient().has_tag("a", "p", "v1.0")


class TestLookupTag:
    """Test nested module tag resolution order."""

    @patch.object(GitHubClient, "list_tags")
    @patch.object(GitHubClient, "has_tag")
    def test_prefixed_tag_first(self, mock_has_tag, mock_list_tags):
        mock_has_tag.return_value = True
        assert GitHubClient().lookup_tag("a", "p", "api", "v1.0.4") == "api/v1.0.4"
        mock_has_tag.assert_called_once_with("a", "p", "api/v1.0.4")
        mock_list_tags.assert_not_called()

    @patch.object(GitHubClient, "list_tags")
    @patch.object(GitHubClient, "has_tag")
    def test_plain_tag(self, mock_has_tag, mock_list_tags):
        mock_has_tag.side_effect = [False, True]
        assert GitHubClient().lookup_tag("a", "p", "api", "v1.0.4") == "v1.0.4"
        mock_list_tags.assert_not_called()

    @patch.object(GitHubClient, "list_tags")
    @patch.object(GitHubClient, "has_tag")
    def test_most_recent_suffix_match(self, mock_has_tag, mock_list_tags):
        mock_has_tag.return_value = False
        mock_list_tags.return_value = [
            "refs/tags/sdk/api/v1.0.4",
            "refs/tags/v1.0.4",
            "refs/tags/go/sdk/api/v1.0.4",
            "refs/tags/v2.0.0",
        ]
        assert GitHubClient().lookup_tag("a", "p", "api", "v1.0.4") == "go/sdk/api/v1.0.4"

    @patch.object(GitHubClient, "list_tags")
    @patch.object(GitHubClient, "has_tag")
    def test_no_match(self, mock_has_tag, mock_list_tags):
        mock_has_tag.return_value = False
        mock_list_tags.return_value = ["refs/tags/v1.0.4"]
        assert GitHubClient().lookup_tag("a", "p", "api", "v1.0.4") is None


class TestListTags:
    """Test tag listing."""

    @patch("repository.github.get_json")
    def test_refs(self, mock_get_json):
        mock_get_json.return_value = [{"ref": "refs/tags/v1"}, {"ref": "refs/tags/v2"}]
        assert GitHubClient().list_tags("a", "p") == ["refs/tags/v1", "refs/tags/v2"]

    @patch("repository.github.get_json")
    def test_repository_without_tags(self, mock_get_json):
        mock_get_json.side_effect = NotFoundError(f"{API}/git/refs/tags")
        assert GitHubClient().list_tags("a", "p") == []


class TestHasContentsAtPath:
    """Test nested directory detection."""

    @patch("repository.github.get_json")
    def test_present(self, mock_get_json):
        mock_get_json.return_value = [{"name": "go.mod"}]
        assert GitHubClient().has_contents_at_path("a", "p", "api", "api/v1.0.0")
        mock_get_json.assert_called_once_with(
            f"{API}/contents/api?ref=api%2Fv1.0.0", context="github", auth=None
        )

    @patch("repository.github.get_json")
    def test_absent(self, mock_get_json):
        mock_get_json.side_effect = NotFoundError(f"{API}/contents/api")
        assert not GitHubClient().has_contents_at_path("a", "p", "api", "v1.0.0")
