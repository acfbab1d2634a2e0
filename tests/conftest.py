"""Shared fixtures."""

import pytest

from stormharm.models import StormEvent


def make_event(event_type, fatalities=0, injuries=0, prop=0.0, prop_exp="", crop=0.0, crop_exp=""):
    return StormEvent(
        event_type=event_type,
        fatalities=fatalities,
        injuries=injuries,
        prop_dmg=prop,
        prop_dmg_exp=prop_exp,
        crop_dmg=crop,
        crop_dmg_exp=crop_exp,
    )


@pytest.fixture
def scenario_events():
    """Three records: two tornadoes and one flood."""
    return (
        make_event("TORNADO", fatalities=5, injuries=10, prop=10, prop_exp="K", crop=0, crop_exp=""),
        make_event("FLOOD", fatalities=1, injuries=0, prop=2, prop_exp="M", crop=1, crop_exp="M"),
        make_event("TORNADO", fatalities=3, injuries=2, prop=0, prop_exp="", crop=0, crop_exp=""),
    )


@pytest.fixture
def event():
    """Factory fixture: event("HAIL", fatalities=1, ...)."""
    return make_event
