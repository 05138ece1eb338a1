"""Stroke smoothing for display."""

from .smoothing import catmull_rom, moving_average_smooth, smooth_stroke

__all__ = ['catmull_rom', 'smooth_stroke', 'moving_average_smooth']
