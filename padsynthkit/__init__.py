"""Toolkit-free building blocks for a PADsynth-style synthesizer: reverb, dials, palette themes, parameter controls, program banks and harmonic editing."""

__version__ = "0.1.0"