"""Tests for the version utility."""

from importlib.metadata import PackageNotFoundError
from unittest import mock

from event_server.utils.version import FALLBACK_VERSION, get_version, parse_version


def test_parse_plain_version():
    info = parse_version("1.2.3")
    assert info.version == "1.2.3"
    assert info.full_version == "1.2.3"
    assert info.local is None
    assert info.is_dev is False


def test_parse_local_and_dev_version():
    info = parse_version("0.4.0.dev3+g1a2b3c")
    assert info.version == "0.4.0"
    assert info.local == "g1a2b3c"
    assert info.is_dev is True


def test_get_version_falls_back_when_not_installed():
    get_version.cache_clear()
    try:
        with mock.patch("event_server.utils.version.version", side_effect=PackageNotFoundError):
            info = get_version()
        assert info.full_version == FALLBACK_VERSION
        assert info.is_dev is True
    finally:
        get_version.cache_clear()
