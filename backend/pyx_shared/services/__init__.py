"""
Shared services module

Import services by their direct path, e.g.
- pyx_shared.services.workbook_reader
"""

__all__ = []
