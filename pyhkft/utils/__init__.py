"""Utility functions for pyhkft."""

from .formula import makeup, mass, entropy, calculate_ghs, FormulaError
from .units import convert, outvert

__all__ = [
    'makeup', 'mass', 'entropy', 'calculate_ghs', 'FormulaError',
    'convert', 'outvert'
]
