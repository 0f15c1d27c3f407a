"""Decoders for DAB FIG type 0 signalling, F-PAD / X-PAD and MOT data groups."""

__version__ = "0.1.0"