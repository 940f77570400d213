"""Tests for BuildMetadata, EnvironmentMetadataProvider and host locators."""

import dataclasses
from unittest.mock import patch

import pytest

from logship.core.settings import LogShipSettings
from logship.metadata import (
    BuildMetadata,
    EnvironmentMetadataProvider,
    SettingsHostLocator,
    StaticHostLocator,
)
from tests._support import FakeBuild


# ===========================================================================
# BuildMetadata
# ===========================================================================


class TestBuildMetadata:
    def test_frozen(self):
        md = BuildMetadata(job_name="etl")
        with pytest.raises(dataclasses.FrozenInstanceError):
            md.job_name = "other"  # type: ignore[misc]

    def test_tags_read_only(self):
        md = BuildMetadata(tags={"env": "prod"})
        with pytest.raises(TypeError):
            md.tags["env"] = "dev"  # type: ignore[index]

    def test_tags_copied_from_input(self):
        source = {"env": "prod"}
        md = BuildMetadata(tags=source)
        source["env"] = "dev"
        assert md.tags["env"] == "prod"

    def test_tag_string_sorted(self):
        md = BuildMetadata(tags={"job": "etl", "env": "prod", "canary": ""})
        assert md.tag_string() == "canary,env:prod,job:etl"

    def test_tag_string_empty(self):
        assert BuildMetadata().tag_string() == ""

    def test_to_dict_omits_unset(self):
        md = BuildMetadata(job_name="etl", build_number="7", tags={"a": "b"})
        assert md.to_dict() == {"job_name": "etl", "build_number": "7", "tags": {"a": "b"}}

    def test_with_host_url_returns_copy(self):
        md = BuildMetadata(job_name="etl", tags={"a": "b"})
        enriched = md.with_host_url("https://ci/")
        assert enriched.host_url == "https://ci/"
        assert enriched.job_name == "etl"
        assert dict(enriched.tags) == {"a": "b"}
        assert md.host_url is None


# ===========================================================================
# EnvironmentMetadataProvider
# ===========================================================================


class TestEnvironmentMetadataProvider:
    def test_reads_build_environment(self):
        build = FakeBuild(
            env={
                "JOB_NAME": "etl.nightly",
                "BUILD_ID": "2026-10-18_01-00-00",
                "BUILD_NUMBER": "42",
                "BUILD_URL": "https://ci/job/etl.nightly/42/",
                "BUILD_TAG": "ci-etl.nightly-42",
                "NODE_NAME": "agent-3",
                "GIT_BRANCH": "origin/main",
                "WORKSPACE": "/work/etl",
                "HOSTNAME": "agent-3.internal",
            }
        )
        md = EnvironmentMetadataProvider().resolve(build, None)

        assert md.job_name == "etl.nightly"
        assert md.build_id == "2026-10-18_01-00-00"
        assert md.build_number == "42"
        assert md.build_url == "https://ci/job/etl.nightly/42/"
        assert md.build_tag == "ci-etl.nightly-42"
        assert md.node_name == "agent-3"
        assert md.branch == "origin/main"
        assert md.workspace == "/work/etl"
        assert md.hostname == "agent-3.internal"
        assert md.tags == {"job": "etl.nightly", "branch": "origin/main"}

    def test_branch_fallbacks(self):
        build = FakeBuild(env={"BRANCH_NAME": "feature/x"})
        md = EnvironmentMetadataProvider(hostname="h").resolve(build, None)
        assert md.branch == "feature/x"

    def test_blank_values_ignored(self):
        build = FakeBuild(env={"JOB_NAME": "  ", "BUILD_NUMBER": ""})
        md = EnvironmentMetadataProvider(hostname="h").resolve(build, None)
        assert md.job_name is None
        assert md.build_number is None

    def test_global_tags_win_over_derived_tags(self):
        build = FakeBuild(env={"JOB_NAME": "etl"})
        provider = EnvironmentMetadataProvider(global_tags={"env": "prod", "job": "static"}, hostname="h")
        md = provider.resolve(build, None)
        assert md.tags == {"env": "prod", "job": "static"}

    def test_hostname_falls_back_to_socket(self):
        with patch("logship.metadata.provider.socket.gethostname", return_value="box-1"):
            md = EnvironmentMetadataProvider().resolve(FakeBuild(env={}), None)
        assert md.hostname == "box-1"

    def test_explicit_hostname_wins(self):
        md = EnvironmentMetadataProvider(hostname="fixed").resolve(FakeBuild(env={"HOSTNAME": "env"}), None)
        assert md.hostname == "fixed"

    def test_listener_passed_to_build(self):
        seen = []

        class Build:
            def fetch_log(self, max_lines):
                return []

            def environment(self, listener):
                seen.append(listener)
                return {}

        listener = object()
        EnvironmentMetadataProvider(hostname="h").resolve(Build(), listener)
        assert seen == [listener]

    def test_build_without_environment(self):
        class Build:
            def fetch_log(self, max_lines):
                return []

        md = EnvironmentMetadataProvider(hostname="h", global_tags={"env": "dev"}).resolve(Build(), None)
        assert md.job_name is None
        assert md.hostname == "h"
        assert md.tags == {"env": "dev"}

    @pytest.mark.parametrize("error", [OSError("no env"), InterruptedError()])
    def test_environment_errors_propagate(self, error):
        class Build:
            def fetch_log(self, max_lines):
                return []

            def environment(self, listener):
                raise error

        with pytest.raises(type(error)):
            EnvironmentMetadataProvider().resolve(Build(), None)


# ===========================================================================
# Host locators
# ===========================================================================


class TestHostLocators:
    def test_static_adds_trailing_slash(self):
        assert StaticHostLocator("https://ci.example.com").root_url() == "https://ci.example.com/"

    def test_static_keeps_trailing_slash(self):
        assert StaticHostLocator("https://ci.example.com/").root_url() == "https://ci.example.com/"

    @pytest.mark.parametrize("url", ["", None, "   "])
    def test_static_empty(self, url):
        assert StaticHostLocator(url).root_url() == ""

    def test_settings_locator(self):
        settings = LogShipSettings(host_url="https://ci.example.com")
        assert SettingsHostLocator(settings).root_url() == "https://ci.example.com/"

    def test_settings_locator_unset(self):
        assert SettingsHostLocator(LogShipSettings()).root_url() == ""
