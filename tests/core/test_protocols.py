"""Structural checks: shipped implementations satisfy the collaborator protocols."""

import io

from logship.core.protocols import (
    EnvironmentSource,
    ErrorSink,
    ExecutionUnit,
    HostLocator,
    LogTransport,
    MetadataProvider,
)
from logship.core.settings import LogShipSettings
from logship.delivery import NullSink, TextStreamSink
from logship.metadata import EnvironmentMetadataProvider, SettingsHostLocator, StaticHostLocator
from logship.transports import ConsoleTransport, HttpLogTransport
from tests._support import FakeBuild, RecordingTransport


def test_builds():
    build = FakeBuild()
    assert isinstance(build, ExecutionUnit)
    assert isinstance(build, EnvironmentSource)


def test_metadata_provider():
    assert isinstance(EnvironmentMetadataProvider(), MetadataProvider)


def test_host_locators():
    assert isinstance(StaticHostLocator(), HostLocator)
    assert isinstance(SettingsHostLocator(LogShipSettings()), HostLocator)


def test_transports():
    assert isinstance(ConsoleTransport(stream=io.StringIO()), LogTransport)
    assert isinstance(RecordingTransport(), LogTransport)
    with HttpLogTransport("https://logs.example.com") as http:
        assert isinstance(http, LogTransport)


def test_error_sinks():
    assert isinstance(io.BytesIO(), ErrorSink)
    assert isinstance(TextStreamSink(io.StringIO()), ErrorSink)
    assert isinstance(NullSink(), ErrorSink)


def test_object_without_fetch_log_is_not_a_build():
    assert not isinstance(object(), ExecutionUnit)
