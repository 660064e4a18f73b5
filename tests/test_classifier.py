# -*- coding: utf-8 -*-
"""Tests for smart-mode shot classification."""

import pytest
from pydantic import ValidationError

from distox_lib.enums import ShotType
from distox_lib.shots.classifier import ShotClassifier
from distox_lib.shots.classifier import average_shot
from distox_lib.shots.classifier import is_triple
from distox_lib.shots.classifier import measurements_match
from distox_lib.shots.models import RawMeasurement
from distox_lib.shots.models import SplayShot
from distox_lib.shots.models import SurveyShot
from tests.conftest import raw


def _azimuth_gap(a: float, b: float) -> float:
    diff = abs(a - b) % 360.0
    return min(diff, 360.0 - diff)


class TestMeasurementsMatch:
    """Tests for the pairwise repeat check."""

    def test_identical(self):
        assert measurements_match(raw(10.0, 45.0, 5.0), raw(10.0, 45.0, 5.0))

    def test_distance_below_threshold(self):
        assert measurements_match(raw(10.0, 0.0, 0.0), raw(10.04, 0.0, 0.0))

    def test_distance_threshold_is_strict(self):
        """Test a difference of exactly 5 cm is not a match."""
        assert not measurements_match(raw(0.0, 0.0, 0.0), raw(0.05, 0.0, 0.0))

    def test_distance_above_threshold(self):
        assert not measurements_match(raw(10.0, 0.0, 0.0), raw(10.1, 0.0, 0.0))

    def test_angle_below_threshold(self):
        assert measurements_match(raw(10.0, 0.0, 0.0), raw(10.0, 1.69, 0.0))

    def test_angle_above_threshold(self):
        assert not measurements_match(raw(10.0, 0.0, 0.0), raw(10.0, 1.71, 0.0))

    def test_inclination_counts(self):
        assert not measurements_match(raw(10.0, 0.0, 0.0), raw(10.0, 0.0, 2.0))

    def test_across_seam(self):
        """Test 359.5° and 0.5° are 1° apart, not 359°."""
        assert measurements_match(raw(10.0, 359.5, 0.0), raw(10.0, 0.5, 0.0))

    def test_is_triple_checks_every_pair(self):
        """Test the first and last must match, not only neighbours."""
        assert is_triple([raw(10.0, 0.0, 0.0), raw(10.0, 0.8, 0.0), raw(10.0, 1.6, 0.0)])
        assert not is_triple(
            [raw(10.0, 0.0, 0.0), raw(10.0, 0.9, 0.0), raw(10.0, 1.8, 0.0)]
        )


class TestAverageShot:
    """Tests for averaging a matching triple."""

    def test_average(self):
        measurements = [raw(10.00, 45.0, 5.0), raw(10.02, 45.0, 5.0), raw(10.04, 45.0, 5.0)]
        shot = average_shot(measurements)
        assert isinstance(shot, SurveyShot)
        assert shot.distance == pytest.approx(10.02)
        assert shot.azimuth == pytest.approx(45.0)
        assert shot.inclination == pytest.approx(5.0)
        assert shot.measurements == tuple(measurements)

    def test_average_across_seam(self):
        shot = average_shot(
            [raw(10.0, 359.5, 0.0), raw(10.0, 0.0, 0.0), raw(10.0, 0.5, 0.0)]
        )
        assert _azimuth_gap(shot.azimuth, 0.0) < 1e-6
        assert 0.0 <= shot.azimuth < 360.0


class TestShotClassifier:
    """Tests for the sliding-window state machine."""

    def test_pending_until_window_full(self, classifier):
        assert classifier.add_measurement(raw(10.0, 0.0, 0.0)) is None
        assert classifier.pending_count == 1
        assert classifier.add_measurement(raw(10.0, 0.0, 0.0)) is None
        assert classifier.pending_count == 2

    def test_survey_shot(self, classifier):
        """Test three matching measurements become one survey shot."""
        measurements = [raw(10.00, 45.0, 5.0), raw(10.02, 45.0, 5.0), raw(10.04, 45.0, 5.0)]
        results = [classifier.add_measurement(m) for m in measurements]

        assert results[:2] == [None, None]
        shot = results[2]
        assert isinstance(shot, SurveyShot)
        assert shot.type == ShotType.SURVEY_SHOT
        assert shot.distance == pytest.approx(10.02)
        assert shot.azimuth == pytest.approx(45.0)
        assert shot.inclination == pytest.approx(5.0)
        assert shot.measurements == tuple(measurements)
        assert classifier.pending_count == 0

    def test_splay_on_pattern_break(self, classifier):
        """Test a non-matching window releases only the oldest measurement."""
        first = raw(10.0, 0.0, 0.0, timestamp=1.0)
        second = raw(15.0, 0.0, 0.0, timestamp=2.0)
        third = raw(10.0, 0.0, 0.0, timestamp=3.0)

        classifier.add_measurement(first)
        classifier.add_measurement(second)
        shot = classifier.add_measurement(third)

        assert isinstance(shot, SplayShot)
        assert shot.type == ShotType.SPLAY
        assert shot.measurements == (first,)
        assert shot.distance == first.distance
        assert classifier.pending == (second, third)

    def test_splay_passes_values_unchanged(self, classifier):
        measurement = raw(3.217, 123.45, -12.3)
        classifier.add_measurement(measurement)
        classifier.add_measurement(raw(8.0, 0.0, 0.0))
        shot = classifier.add_measurement(raw(9.0, 0.0, 0.0))
        assert shot.distance == measurement.distance
        assert shot.azimuth == measurement.azimuth
        assert shot.inclination == measurement.inclination

    def test_survey_after_splays(self, classifier):
        """Test the window slides until a matching triple forms."""
        shots = [
            classifier.add_measurement(m)
            for m in (
                raw(10.0, 0.0, 0.0),
                raw(15.0, 0.0, 0.0),
                raw(10.0, 0.0, 0.0),
                raw(10.0, 0.0, 0.0),
                raw(10.0, 0.0, 0.0),
            )
        ]
        assert shots[0] is None
        assert shots[1] is None
        assert isinstance(shots[2], SplayShot)
        assert shots[2].distance == 10.0
        assert isinstance(shots[3], SplayShot)
        assert shots[3].distance == 15.0
        assert isinstance(shots[4], SurveyShot)
        assert classifier.pending_count == 0

    def test_inclination_break(self, classifier):
        classifier.add_measurement(raw(10.0, 0.0, 0.0))
        classifier.add_measurement(raw(10.0, 0.0, 0.0))
        shot = classifier.add_measurement(raw(10.0, 0.0, 2.0))
        assert isinstance(shot, SplayShot)
        assert classifier.pending_count == 2

    def test_wraparound_triple(self, classifier):
        for azimuth in (359.5, 0.0):
            classifier.add_measurement(raw(10.0, azimuth, 0.0))
        shot = classifier.add_measurement(raw(10.0, 0.5, 0.0))
        assert isinstance(shot, SurveyShot)
        assert _azimuth_gap(shot.azimuth, 0.0) < 1e-6

    def test_pending_never_exceeds_two(self, classifier):
        """Test the buffer holds at most two measurements between calls."""
        for i in range(20):
            classifier.add_measurement(raw(1.0 + i, (i * 40) % 360, 0.0))
            assert classifier.pending_count <= 2

    def test_flush(self, classifier):
        """Test flush emits pending measurements as splays, oldest first."""
        first = raw(1.0, 0.0, 0.0)
        second = raw(2.0, 0.0, 0.0)
        classifier.add_measurement(first)
        classifier.add_measurement(second)

        shots = classifier.flush()

        assert [shot.measurements for shot in shots] == [(first,), (second,)]
        assert all(isinstance(shot, SplayShot) for shot in shots)
        assert classifier.pending_count == 0

    def test_flush_empty(self, classifier):
        assert classifier.flush() == []

    def test_clear(self, classifier):
        """Test clear discards pending measurements without emitting."""
        received = []
        classifier.subscribe(received.append)
        classifier.add_measurement(raw(1.0, 0.0, 0.0))
        classifier.add_measurement(raw(2.0, 0.0, 0.0))

        classifier.clear()

        assert classifier.pending_count == 0
        assert received == []
        assert classifier.flush() == []


class TestSubscribers:
    """Tests for shot observers."""

    def test_receives_emitted_shots(self, classifier):
        received = []
        classifier.subscribe(received.append)
        for m in (raw(10.0, 0.0, 0.0), raw(15.0, 0.0, 0.0), raw(10.0, 0.0, 0.0)):
            returned = classifier.add_measurement(m)
        assert received == [returned]

    def test_flush_notifies_in_order(self, classifier):
        received = []
        classifier.subscribe(received.append)
        classifier.add_measurement(raw(1.0, 0.0, 0.0))
        classifier.add_measurement(raw(2.0, 0.0, 0.0))
        shots = classifier.flush()
        assert received == shots

    def test_subscriber_order(self, classifier):
        """Test subscribers are called in registration order."""
        calls = []
        classifier.subscribe(lambda shot: calls.append("first"))
        classifier.subscribe(lambda shot: calls.append("second"))
        classifier.add_measurement(raw(1.0, 0.0, 0.0))
        classifier.flush()
        assert calls == ["first", "second"]

    def test_unsubscribe(self, classifier):
        received = []
        classifier.subscribe(received.append)
        classifier.unsubscribe(received.append)
        classifier.add_measurement(raw(1.0, 0.0, 0.0))
        classifier.flush()
        assert received == []

    def test_unsubscribe_unknown(self, classifier):
        with pytest.raises(ValueError):
            classifier.unsubscribe(print)

    def test_no_subscribers(self):
        """Test the classifier works without any observer."""
        classifier = ShotClassifier()
        classifier.add_measurement(raw(1.0, 0.0, 0.0))
        assert len(classifier.flush()) == 1


class TestShotModels:
    """Tests for shot model validation."""

    def test_raw_measurement_wraps_azimuth(self):
        assert raw(1.0, 360.0, 0.0).azimuth == 0.0
        assert raw(1.0, -90.0, 0.0).azimuth == pytest.approx(270.0)

    def test_raw_measurement_rejects_negative_distance(self):
        with pytest.raises(ValidationError):
            raw(-1.0, 0.0, 0.0)

    def test_raw_measurement_rejects_inclination(self):
        with pytest.raises(ValidationError):
            raw(1.0, 0.0, 91.0)

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_raw_measurement_rejects_non_finite_azimuth(self, value):
        with pytest.raises(ValidationError):
            RawMeasurement(distance=1.0, azimuth=value, inclination=0.0)

    @pytest.mark.parametrize("field", ["distance", "inclination", "timestamp"])
    def test_raw_measurement_rejects_nan(self, field):
        values = {"distance": 1.0, "azimuth": 0.0, "inclination": 0.0}
        values[field] = float("nan")
        with pytest.raises(ValidationError):
            RawMeasurement(**values)

    def test_shot_rejects_nan_azimuth(self):
        with pytest.raises(ValidationError):
            SplayShot(
                distance=1.0,
                azimuth=float("nan"),
                inclination=0.0,
                measurements=(raw(1.0, 0.0, 0.0),),
            )

    def test_raw_measurement_default_timestamp(self):
        measurement = RawMeasurement(distance=1.0, azimuth=0.0, inclination=0.0)
        assert measurement.timestamp > 0

    def test_splay_requires_one_measurement(self):
        m = raw(1.0, 0.0, 0.0)
        with pytest.raises(ValidationError, match="exactly 1"):
            SplayShot(distance=1.0, azimuth=0.0, inclination=0.0, measurements=(m, m))

    def test_survey_requires_three_measurements(self):
        m = raw(1.0, 0.0, 0.0)
        with pytest.raises(ValidationError, match="exactly 3"):
            SurveyShot(distance=1.0, azimuth=0.0, inclination=0.0, measurements=(m,))

    def test_serialization_tag(self):
        shot = SplayShot.from_measurement(raw(1.0, 0.0, 0.0))
        assert shot.model_dump(mode="json")["type"] == "splay"
