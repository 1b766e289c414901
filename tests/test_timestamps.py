"""Tests for Timestamp ordering, sentinels and conversions."""

import pytest

from streamshow import Timestamp


def test_sentinel_ordering():
    """Sentinels bracket every real timestamp."""
    real = Timestamp(0)
    assert Timestamp.UNSET < Timestamp.PRE_STREAM < real < Timestamp.POST_STREAM
    assert Timestamp.PRE_STREAM < Timestamp(-1_000_000)


def test_sentinel_str():
    assert str(Timestamp.PRE_STREAM) == "Timestamp::PreStream"
    assert str(Timestamp.POST_STREAM) == "Timestamp::PostStream"
    assert str(Timestamp.UNSET) == "Timestamp::Unset"
    assert str(Timestamp(42)) == "42"


def test_is_special():
    assert Timestamp.PRE_STREAM.is_special()
    assert not Timestamp(5).is_special()
    assert Timestamp(5).is_range_value()


def test_seconds_conversion():
    ts = Timestamp.from_seconds(1.5)
    assert ts.value == 1_500_000
    assert ts.seconds() == 1.5


def test_seconds_of_sentinel_raises():
    with pytest.raises(ValueError, match="PreStream"):
        Timestamp.PRE_STREAM.seconds()


def test_equality_and_hash():
    assert Timestamp(10) == Timestamp(10)
    assert len({Timestamp(10), Timestamp(10), Timestamp(11)}) == 2
