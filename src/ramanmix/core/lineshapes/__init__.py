"""Lineshape functions used to build material reference curves."""

from ramanmix.core.lineshapes.functions import CurveCache, sum_of_peaks, voigt

__all__ = ["CurveCache", "sum_of_peaks", "voigt"]
