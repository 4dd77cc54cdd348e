import openpyxl
import pytest

from cardbook.contacts import ContactFields
from cardbook.output_handler import ContactExcelExporter
from cardbook.utils.exceptions import ExportError


def test_export_writes_one_row_per_contact(manager, tmp_path):
    manager.add(ContactFields(name="Ada", phone="1", email="ada@example.com",
                              image_urls=["front.png", "back.png"]))
    manager.add(ContactFields(name="Bob", phone="2"))

    path = ContactExcelExporter(tmp_path).export(manager.contacts, tmp_path / "out.xlsx")

    sheet = openpyxl.load_workbook(path).active
    rows = list(sheet.iter_rows(values_only=True))
    assert sheet.title == "Contacts"
    assert rows[0] == ("ID", "Name", "Phone", "Email", "Images", "Created At", "Updated At")
    assert rows[1][1:5] == ("Ada", "1", "ada@example.com", "front.png\nback.png")
    assert rows[2][1] == "Bob"
    assert len(rows) == 3
    assert sheet.freeze_panes == "A2"


def test_default_filename_goes_to_output_dir(manager, tmp_path):
    manager.add(ContactFields(name="Ada", phone="1"))
    exporter = ContactExcelExporter(tmp_path / "exports")

    path = exporter.export(manager.contacts)

    assert path.startswith(str(tmp_path / "exports" / "contacts_"))
    assert path.endswith(".xlsx")


def test_nothing_to_export(tmp_path):
    with pytest.raises(ExportError):
        ContactExcelExporter(tmp_path).export([])
