"""
Tests for lux discretization and reading validation.
"""
import math

import pytest

from environments.discretization import (discretize_light_level, discretize_sunshine,
                                         discretize_reading)
from environments.types import (LabReading, StateDescriptor, MissingReadingError,
                                ReadingTypeError, ReadingError, TAG_Z1_LEVEL, TAG_SUNSHINE)


def make_reading(**overrides):
    fields = dict(z1_level=120.0, z2_level=40.0, z1_light=True, z2_light=False,
                  z1_blinds=False, z2_blinds=True, sunshine=800.0)
    fields.update(overrides)
    return LabReading(**fields)


class TestLightLevel:
    """Test zone light level thresholds."""

    @pytest.mark.parametrize("lux,level", [
        (0, 0), (49, 0), (49.999, 0), (50, 1), (99.9, 1), (100, 2),
        (299, 2), (300, 3), (10000, 3),
    ])
    def test_thresholds(self, lux, level):
        """Test each bucket boundary."""
        assert discretize_light_level(lux) == level

    def test_negative_and_missing_fall_into_lowest_bucket(self):
        """Test that negative or missing input maps to level 0."""
        assert discretize_light_level(-5) == 0
        assert discretize_light_level(None) == 0

    def test_nan_falls_into_lowest_bucket(self):
        """Test that an unreadable (NaN) lux maps to level 0, not the top level."""
        assert discretize_light_level(math.nan) == 0
        assert discretize_light_level(float('nan')) == 0
        assert discretize_sunshine(math.nan) == 0

    def test_monotone(self):
        """Test that levels never decrease as lux increases."""
        levels = [discretize_light_level(x) for x in range(0, 1000, 7)]
        assert levels == sorted(levels)


class TestSunshine:
    """Test sunshine level thresholds."""

    @pytest.mark.parametrize("lux,level", [
        (0, 0), (49, 0), (50, 1), (199, 1), (200, 2), (699, 2), (700, 3),
    ])
    def test_thresholds(self, lux, level):
        assert discretize_sunshine(lux) == level

    def test_monotone_and_pure(self):
        """Test that the same input gives the same level and levels are monotone."""
        levels = [discretize_sunshine(x) for x in range(0, 2000, 13)]
        assert levels == sorted(levels)
        assert [discretize_sunshine(x) for x in range(0, 2000, 13)] == levels


class TestDiscretizeReading:
    """Test turning a raw reading into a discrete descriptor."""

    def test_levels_discretized_fixtures_verbatim(self):
        descriptor = discretize_reading(make_reading())
        assert descriptor == StateDescriptor(2, 0, True, False, False, True, 3)


class TestReadingFromTags:
    """Test validation of tag/value readings."""

    def test_roundtrip_through_tags(self):
        reading = make_reading()
        tags, values = reading.to_tags()
        assert LabReading.from_tags(tags, values) == reading

    def test_integer_lux_accepted(self):
        tags, values = make_reading().to_tags()
        values[0] = 120
        assert LabReading.from_tags(tags, values).z1_level == 120.0

    def test_missing_tag(self):
        """Test that an absent tag is reported as missing."""
        tags, values = make_reading().to_tags()
        index = tags.index(TAG_SUNSHINE)
        del tags[index]
        del values[index]
        with pytest.raises(MissingReadingError):
            LabReading.from_tags(tags, values)

    def test_wrong_type(self):
        """Test that a mistyped value is reported as a type error."""
        tags, values = make_reading().to_tags()
        values[tags.index(TAG_Z1_LEVEL)] = 'bright'
        with pytest.raises(ReadingTypeError):
            LabReading.from_tags(tags, values)

    def test_boolean_is_not_a_lux_value(self):
        tags, values = make_reading().to_tags()
        values[tags.index(TAG_Z1_LEVEL)] = True
        with pytest.raises(ReadingTypeError):
            LabReading.from_tags(tags, values)

    def test_number_is_not_a_fixture_state(self):
        tags, values = make_reading().to_tags()
        values[2] = 1
        with pytest.raises(ReadingTypeError):
            LabReading.from_tags(tags, values)

    def test_length_mismatch(self):
        tags, values = make_reading().to_tags()
        with pytest.raises(ReadingError):
            LabReading.from_tags(tags, values[:-1])

    def test_reading_errors_are_value_errors(self):
        assert issubclass(MissingReadingError, ValueError)
        assert issubclass(ReadingTypeError, ValueError)
