"""Packaged calibration data."""
