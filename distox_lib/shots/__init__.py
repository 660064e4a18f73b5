# -*- coding: utf-8 -*-
"""Shots module: direction geometry and smart-mode classification."""

from distox_lib.shots.classifier import ShotClassifier
from distox_lib.shots.direction import DirectionVector
from distox_lib.shots.direction import angular_separation
from distox_lib.shots.direction import average_directions
from distox_lib.shots.direction import average_distances
from distox_lib.shots.direction import normalize_azimuth
from distox_lib.shots.direction import to_angles
from distox_lib.shots.direction import to_vector
from distox_lib.shots.models import DetectedShot
from distox_lib.shots.models import RawMeasurement
from distox_lib.shots.models import SplayShot
from distox_lib.shots.models import SurveyShot

__all__ = [
    "DetectedShot",
    "DirectionVector",
    "RawMeasurement",
    "ShotClassifier",
    "SplayShot",
    "SurveyShot",
    "angular_separation",
    "average_directions",
    "average_distances",
    "normalize_azimuth",
    "to_angles",
    "to_vector",
]
