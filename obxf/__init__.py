"""Building blocks of a polyphonic analog-modelling synthesizer: DSP parts, preset files and program management."""

__version__ = "0.8.0"