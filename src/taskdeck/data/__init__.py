"""
Data management submodule: versioned data files, schema validation and file I/O.
"""

from .core import Store, StoreContext

# Define what gets imported with `from data import *`
__all__ = [
    'Store',
    'StoreContext',
]
