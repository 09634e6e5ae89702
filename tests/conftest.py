# tests/conftest.py

import pytest

import leaptime
from leaptime.core import system as system_mod
from leaptime.reference.leap_source import packaged_path

# NTP offset (seconds since 1900, no leap seconds) of 2017-01-01 00:00:00;
# the leap second before it is 2016-12-31 23:59:60.
NTP_2017 = 3692217600
# 2012-06-30 23:59:60
NTP_2012_JUL = 3550089600


@pytest.fixture(scope="session")
def leap_file():
    return packaged_path()


@pytest.fixture(scope="session")
def system1900(leap_file):
    """Epoch 1900 with the full packaged leap list (27 leap seconds)."""
    return leaptime.initialize(1900, leap_file)


@pytest.fixture(scope="session")
def system2016():
    """Epoch 2016 with a single leap second at the end of the year."""
    return leaptime.initialize_from_offsets(2016, [NTP_2017])


@pytest.fixture
def fresh_advisory(monkeypatch):
    """Re-arm the one-time NotInitializedWarning."""
    monkeypatch.setattr(system_mod, "_advised", False)
