"""
Shared library for the PYX card importer: configuration, models, exceptions and
workbook access.
"""

__version__ = "0.1.0"
