# API endpoints package

from . import gst

__all__ = [
    'gst'
]
