"""Tests for import path resolution."""

from unittest.mock import patch

import pytest

from tuples.errors import SourceError, SpecFormatError
from tuples.models import ResolverConfig, SourceKind
from tuples.resolver import lookup, resolve
from tuples.spec import parse_spec

OFFLINE = ResolverConfig(offline=True)


def _resolve(line, config=OFFLINE):
    return resolve(parse_spec(line), config)


class TestResolveAccountAndProject:
    """Test account/project for well known hosts and vanity domains."""

    @pytest.mark.parametrize("line,account,project", [
        ("github.com/pkg/errors v1.0.0", "pkg", "errors"),
        ("github.com/konsorten/go-windows-terminal-sequences v1.1.1", "konsorten", "go-windows-terminal-sequences"),
        ("gopkg.in/yaml.v2 v2.0.0", "go-yaml", "yaml"),
        ("gopkg.in/op/go-logging.v1 v1.0.0", "op", "go-logging"),
        ("gopkg.in/user/pkg.v3 v3.0.0", "user", "pkg"),
        ("gopkg.in/fsnotify.v1 v1.0.0", "fsnotify", "fsnotify"),
        ("golang.org/x/crypto v1.0.0", "golang", "crypto"),
        ("golang.org/x/text v0.3.0", "golang", "text"),
        ("k8s.io/api v1.0.0", "kubernetes", "api"),
        ("k8s.io/client-go v2.0.0", "kubernetes", "client-go"),
        ("go.uber.org/zap v1.10.0", "uber-go", "zap"),
        ("gocloud.dev v0.16.0", "google", "go-cloud"),
        ("google.golang.org/api v1.0.0", "googleapis", "google-api-go-client"),
        ("github.com/docker/docker v1.13.1", "moby", "moby"),
        ("gotest.tools v2.2.0", "gotestyourself", "gotest.tools"),
        ("gotest.tools/gotestsum v0.3.5", "gotestyourself", "gotestsum"),
        ("sigs.k8s.io/yaml v1.1.0", "kubernetes-sigs", "yaml"),
    ])
    def test_known_paths(self, line, account, project):
        t = _resolve(line)
        assert t.account == account
        assert t.project == project
        assert t.source.kind is SourceKind.GITHUB


class TestSubmodules:
    """Test path remainders becoming submodules."""

    def test_github_submodule(self):
        t = _resolve("github.com/minio/minio-go/v6 v6.0.39")
        assert (t.account, t.project, t.submodule) == ("minio", "minio-go", "v6")
        assert t.group == "minio_minio_go_v6"
        assert t.subdir == "github.com/minio/minio-go/v6"

    def test_group_uses_submodule_basename(self):
        t = _resolve("github.com/aws/aws-sdk-go-v2/service/s3 v1.0.0")
        assert t.submodule == "service/s3"
        assert t.group == "aws_aws_sdk_go_v2_s3"

    def test_static_mirror_module(self):
        t = _resolve("aletheia.icu/broccoli/fs v0.0.0-20190413220151-2f3a71d5f31e")
        assert (t.account, t.project, t.submodule) == ("aletheia-icu", "broccoli", "fs")
        assert t.group == "aletheia_icu_broccoli_fs"

    def test_static_mirror_remainder(self):
        t = _resolve("google.golang.org/grpc/examples v0.0.0-20200101000000-abcdef012345")
        assert (t.account, t.project, t.submodule) == ("grpc", "grpc-go", "examples")

    def test_cloud_google_com(self):
        t = _resolve("cloud.google.com/go/storage v1.0.0")
        assert (t.account, t.project, t.submodule) == ("googleapis", "google-cloud-go", "storage")

    def test_elastic_apm_module(self):
        t = _resolve("go.elastic.co/apm/module/apmhttp v1.5.0")
        assert (t.account, t.project, t.submodule) == ("elastic", "apm-agent-go", "module/apmhttp")
        assert t.group == "elastic_apm_agent_go_apmhttp"


class TestGitlab:
    """Test Gitlab hosted paths."""

    def test_default_site(self):
        t = _resolve("gitlab.com/gitlab-org/labkit v0.0.0-20190221122536-0c3fc7cdd57c")
        assert t.source.is_gitlab
        assert t.source.is_default_site
        assert str(t) == "gitlab-org:labkit:0c3fc7cdd57c:gitlab_org_labkit/vendor/gitlab.com/gitlab-org/labkit"

    def test_known_custom_site(self):
        t = _resolve("salsa.debian.org/go-team/pkg v1.0.0")
        assert t.source.site == "https://salsa.debian.org"
        assert str(t).startswith("https://salsa.debian.org:go-team:pkg:v1.0.0:")

    def test_static_custom_site(self):
        t = _resolve("howett.net/plist v0.0.0-20181124034731-591f970eefbb")
        assert t.source.site == "https://gitlab.howett.net"
        assert str(t) == (
            "https://gitlab.howett.net:go:plist:591f970eefbb:go_plist/vendor/howett.net/plist"
        )


class TestTupleString:
    """Test the textual tuple form."""

    @pytest.mark.parametrize("line,expected", [
        ("github.com/pkg/errors v1.0.0", "pkg:errors:v1.0.0:pkg_errors/vendor/github.com/pkg/errors"),
        ("github.com/pkg/errors v0.0.0-20181001143604-e0a95dfd547c",
         "pkg:errors:e0a95dfd547c:pkg_errors/vendor/github.com/pkg/errors"),
        ("github.com/UserName/project-with-dashes v1.1.1",
         "UserName:project-with-dashes:v1.1.1:username_project_with_dashes/vendor/github.com/UserName/project-with-dashes"),
    ])
    def test_string(self, line, expected):
        assert str(_resolve(line)) == expected

    def test_package_rename(self):
        t = _resolve(
            "github.com/spf13/cobra v0.0.0-20180412120829-615425954c3b => "
            "github.com/rsteube/cobra v0.0.1-zsh-completion-custom",
            ResolverConfig(offline=True, prefix="src"),
        )
        assert str(t) == "rsteube:cobra:v0.0.1-zsh-completion-custom:rsteube_cobra/src/github.com/spf13/cobra"


class TestMalformedPaths:
    """Test hard errors for malformed hosted paths."""

    @pytest.mark.parametrize("line", ["github.com/pkg v1.0.0", "gitlab.com/org v1.0.0"])
    def test_short_hosted_path(self, line):
        with pytest.raises(SpecFormatError):
            _resolve(line)


class TestUnresolved:
    """Test unresolvable paths."""

    def test_source_error_message(self):
        with pytest.raises(SourceError) as exc:
            _resolve("some_unknown.vanity_url.net/account/project v1.2.3")
        assert str(exc.value) == (
            "::v1.2.3:group_name/vendor/some_unknown.vanity_url.net/account/project "
            "(from some_unknown.vanity_url.net/account/project@v1.2.3)"
        )

    def test_vanity_domain_with_unmatched_path(self):
        assert lookup("golang.org/x/tools/gopls/internal") is None

    @patch("tuples.resolver.discover")
    def test_no_discovery_offline(self, mock_discover):
        with pytest.raises(SourceError):
            _resolve("example.org/foo v1.0.0")
        mock_discover.assert_not_called()


class TestDiscoveryFallback:
    """Test the online go-import fallback."""

    @patch("tuples.resolver.discover")
    def test_discovered_mirror(self, mock_discover):
        mock_discover.return_value = "github.com/owner/foo"
        t = resolve(parse_spec("example.org/foo v1.0.0"), ResolverConfig())
        mock_discover.assert_called_once_with("example.org/foo")
        assert (t.account, t.project) == ("owner", "foo")
        assert t.subdir == "example.org/foo"

    @patch("tuples.resolver.discover")
    def test_discovery_is_tried_once(self, mock_discover):
        mock_discover.return_value = "other.example.org/foo"
        with pytest.raises(SourceError):
            resolve(parse_spec("example.org/foo v1.0.0"), ResolverConfig())
        assert mock_discover.call_count == 1

    @patch("tuples.resolver.discover")
    def test_discovery_failure(self, mock_discover):
        mock_discover.return_value = None
        with pytest.raises(SourceError):
            resolve(parse_spec("example.org/foo v1.0.0"), ResolverConfig())
