from __future__ import annotations

import pytest
from pydantic import ValidationError

from archive_harvester.config import KNOWN_SOURCES, HarvestSettings


def test_default_settings() -> None:
    settings = HarvestSettings()
    assert settings.dates is False
    assert settings.no_subs is False
    assert settings.sources == list(KNOWN_SOURCES)
    assert settings.request_timeout is None
    assert settings.commoncrawl_index == "CC-MAIN-2018-22"


def test_sources_accept_comma_separated_string() -> None:
    settings = HarvestSettings(sources=" Wayback, commoncrawl ")
    assert settings.sources == ["wayback", "commoncrawl"]


@pytest.mark.parametrize(
    "sources",
    [["wayback", "alexa"], ["wayback", "wayback"], [], ""],
)
def test_invalid_sources_rejected(sources) -> None:
    with pytest.raises(ValidationError):
        HarvestSettings(sources=sources)


@pytest.mark.parametrize(
    "overrides",
    [
        {"request_timeout": 0},
        {"thread_pool_workers": 0},
        {"wayback_endpoint": "ftp://archive"},
    ],
)
def test_invalid_values_rejected(overrides) -> None:
    with pytest.raises(ValidationError):
        HarvestSettings(**overrides)


def test_endpoints_are_normalised() -> None:
    settings = HarvestSettings(commoncrawl_endpoint="https://index.commoncrawl.org/ ")
    assert settings.commoncrawl_endpoint == "https://index.commoncrawl.org"
