"""
Data management for pyhkft: the element table used for formula masses and
elemental entropies.
"""

from .loader import DataLoader

__all__ = ['DataLoader']
