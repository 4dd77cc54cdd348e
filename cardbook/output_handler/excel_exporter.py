"""
Excel Exporter Module.

This module writes the contact collection to an Excel workbook using
openpyxl.

Features:
    - Formatted header row
    - Auto column width
    - Frozen header

Author: cardbook maintainers
"""

from pathlib import Path
from typing import List, Optional, Sequence, Union

import openpyxl
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from config import get_config
from cardbook.utils.logger import get_logger
from cardbook.utils.helpers import ensure_directory, generate_timestamp
from cardbook.utils.exceptions import ExportError
from cardbook.contacts.models import Contact

logger = get_logger(__name__)


class ContactExcelExporter:
    """
    Exports contacts to Excel format.

    Attributes:
        output_dir: Directory for output files
        sheet_name: Title of the contacts sheet

    Example:
        >>> exporter = ContactExcelExporter()
        >>> filepath = exporter.export(manager.contacts)
        >>> print(f"Saved to: {filepath}")
    """

    COLUMNS = [
        ('ID', 'id'),
        ('Name', 'name'),
        ('Phone', 'phone'),
        ('Email', 'email'),
        ('Images', 'image_urls'),
        ('Created At', 'created_at'),
        ('Updated At', 'updated_at'),
    ]

    MAX_COLUMN_WIDTH = 50

    def __init__(self, output_dir: Optional[Union[str, Path]] = None) -> None:
        """Initialize the Excel exporter with configuration."""
        self.output_dir = Path(output_dir or get_config("paths.output_dir", "outputs"))
        self.sheet_name = get_config("output.excel.sheet_name", "Contacts")
        self.filename_prefix = get_config("output.excel.filename_prefix", "contacts")

        logger.debug(f"ContactExcelExporter initialized (output_dir: {self.output_dir})")

    def get_default_filename(self) -> str:
        """Generate a default filename with timestamp."""
        return f"{self.filename_prefix}_{generate_timestamp()}.xlsx"

    def export(
        self,
        contacts: Sequence[Contact],
        filepath: Optional[Union[str, Path]] = None
    ) -> str:
        """
        Export contacts to an Excel file.

        Args:
            contacts: Contacts to export, in collection order.
            filepath: Output file. If None, a timestamped file is created
                      in the output directory.

        Returns:
            Path to the created Excel file.

        Raises:
            ExportError: If there is nothing to export or writing fails.
        """
        if filepath is None:
            filepath = self.output_dir / self.get_default_filename()
        filepath = Path(filepath)

        if not contacts:
            raise ExportError(str(filepath), "No contacts to export")

        try:
            ensure_directory(filepath.parent)
            workbook = openpyxl.Workbook()
            self._create_contacts_sheet(workbook, list(contacts))
            workbook.save(filepath)
        except OSError as e:
            logger.error(f"Excel export failed: {e}")
            raise ExportError(str(filepath), str(e)) from e

        logger.info(f"Excel file saved: {filepath} ({len(contacts)} contacts)")
        return str(filepath)

    def _cell_value(self, contact: Contact, field_name: str):
        value = getattr(contact, field_name)
        if field_name == 'image_urls':
            return "\n".join(value)
        return value if value is not None else ''

    def _create_contacts_sheet(self, workbook, contacts: List[Contact]) -> None:
        """
        Fill the active sheet with one row per contact.

        Args:
            workbook: openpyxl Workbook instance.
            contacts: Contacts to write.
        """
        sheet = workbook.active
        sheet.title = self.sheet_name

        header_font = Font(bold=True, color="FFFFFF")
        header_fill = PatternFill(start_color="4472C4", end_color="4472C4", fill_type="solid")
        header_alignment = Alignment(horizontal="center", vertical="center")
        thin_border = Border(
            left=Side(style='thin'),
            right=Side(style='thin'),
            top=Side(style='thin'),
            bottom=Side(style='thin')
        )

        for col, (header_name, _) in enumerate(self.COLUMNS, 1):
            cell = sheet.cell(row=1, column=col, value=header_name)
            cell.font = header_font
            cell.fill = header_fill
            cell.alignment = header_alignment
            cell.border = thin_border

        for row_num, contact in enumerate(contacts, 2):
            for col, (_, field_name) in enumerate(self.COLUMNS, 1):
                cell = sheet.cell(
                    row=row_num,
                    column=col,
                    value=self._cell_value(contact, field_name)
                )
                cell.border = thin_border

        for col, (header_name, _) in enumerate(self.COLUMNS, 1):
            max_length = len(header_name)
            for row in range(2, len(contacts) + 2):
                cell_value = sheet.cell(row=row, column=col).value
                if cell_value:
                    longest_line = max(len(line) for line in str(cell_value).split("\n"))
                    max_length = max(max_length, longest_line)

            sheet.column_dimensions[get_column_letter(col)].width = \
                min(max_length + 2, self.MAX_COLUMN_WIDTH)

        sheet.freeze_panes = 'A2'
