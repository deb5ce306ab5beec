# GST services package

from . import gstin
from . import gst_verification

__all__ = [
    'gstin',
    'gst_verification'
]
