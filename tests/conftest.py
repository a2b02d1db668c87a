"""Shared test fixtures."""

import pytest

from pystardate.codec.calendar import GregorianCodec, JulianCodec
from pystardate.codec.quadcent import QuadcentCodec
from pystardate.codec.stardate import StardateCodec
from pystardate.codec.unix import UnixCodec, UnixHexCodec


@pytest.fixture
def stardate():
    return StardateCodec()


@pytest.fixture
def julian():
    return JulianCodec()


@pytest.fixture
def gregorian():
    return GregorianCodec()


@pytest.fixture
def quadcent():
    return QuadcentCodec()


@pytest.fixture
def unix():
    return UnixCodec()


@pytest.fixture
def unix_hex():
    return UnixHexCodec()
