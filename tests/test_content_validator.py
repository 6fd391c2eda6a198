"""
Message content validation tests
"""

import math

import pytest

from v2v.mechanisms.ContentValidator import (
    ContentValidator,
    POSITION_NOT_FINITE, SPEED_NOT_FINITE, SPEED_TOO_HIGH, FROM_THE_FUTURE, TOO_OLD,
)


@pytest.fixture
def validator():
    return ContentValidator(max_reasonable_speed=50.0, max_message_age=5.0)


def packet(pos=(100.0, 200.0), speed=(10.0, 5.0), created_at=10.0):
    return {'pos': pos, 'speed': speed, 'created_at': created_at}


class TestContentValidator:
    """Tests for ContentValidator."""

    def test_plausible_message(self, validator):
        assert validator.check(packet(), 10.0) is None
        assert validator.is_valid(packet(), 12.0)

    @pytest.mark.parametrize('pos', [
        (math.nan, 0.0),
        (0.0, math.nan),
        (math.inf, 0.0),
        (0.0, -math.inf),
    ])
    def test_non_finite_position(self, validator, pos):
        assert validator.check(packet(pos=pos), 10.0) == POSITION_NOT_FINITE

    def test_speed_limit(self, validator):
        assert validator.check(packet(speed=(30.0, 40.0)), 10.0) is None
        assert validator.check(packet(speed=(30.0, 40.1)), 10.0) == SPEED_TOO_HIGH
        assert validator.check(packet(speed=(150.0, 0.0)), 10.0) == SPEED_TOO_HIGH

    def test_non_finite_speed(self, validator):
        assert validator.check(packet(speed=(math.nan, 0.0)), 10.0) == SPEED_NOT_FINITE

    def test_message_from_the_future(self, validator):
        assert validator.check(packet(created_at=10.5), 10.0) == FROM_THE_FUTURE

    def test_stale_message(self, validator):
        assert validator.check(packet(created_at=5.0), 10.0) is None
        assert validator.check(packet(created_at=4.9), 10.0) == TOO_OLD

    def test_first_failure_is_reported(self, validator):
        bad = packet(pos=(math.nan, 0.0), speed=(500.0, 0.0), created_at=100.0)
        assert validator.check(bad, 10.0) == POSITION_NOT_FINITE
