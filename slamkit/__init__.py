"""Pose conversions, plane detection from map points and dataset sequence loaders for visual SLAM."""

__version__ = "0.1.0"