"""Shared fixtures for the test suite."""

import pytest

from voicing_engine.instrument import Instrument
from voicing_engine.presets import GUITAR, UKULELE
from voicing_engine.voicing import Barre, Voicing


@pytest.fixture
def guitar() -> Instrument:
    """Standard-tuned six-string guitar, no capo."""
    return GUITAR


@pytest.fixture
def ukulele() -> Instrument:
    return UKULELE


@pytest.fixture
def am_open() -> Voicing:
    return Voicing.parse("X02210")


@pytest.fixture
def c_open() -> Voicing:
    return Voicing.parse("X32010")


@pytest.fixture
def f_barre() -> Voicing:
    """E-shape F major barre at fret 1, barre declared."""
    return Voicing.from_frets([1, 3, 3, 2, 1, 1], barre=Barre(fret=1, from_string=0, to_string=5))
