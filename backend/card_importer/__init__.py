"""
PYX card importer: reads black and white cards out of rich-text spreadsheets.
"""

__version__ = "0.1.0"
