"""Helpers for SPH surface reconstruction: bounding boxes, option parsing, file sequences, logging and smoothing weights."""

__version__ = "0.10.0"