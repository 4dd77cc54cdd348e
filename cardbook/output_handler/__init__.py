"""
Output Handler Module for the contact book.

Exports the contact collection to Excel workbooks.
"""

from .excel_exporter import ContactExcelExporter

__all__ = ['ContactExcelExporter']
