import re

import pytest

from main import build_parser, main


@pytest.fixture
def cli(tmp_path, capsys):
    def _run(*args):
        code = main(["--quiet", "--data-dir", str(tmp_path), *args])
        out, err = capsys.readouterr()
        return code, out, err
    return _run


def saved_id(output):
    return int(re.search(r"Saved contact (\d+)", output).group(1))


def test_add_and_list(cli):
    code, out, _ = cli("add", "--name", "Ada Lovelace", "--phone", "555-0100",
                       "--email", "ada@example.com", "--image", "card.png")
    assert code == 0

    code, out, _ = cli("list")
    assert code == 0
    assert "Contact List (1 contact)" in out
    assert "Ada Lovelace" in out
    assert "Images: 1" in out


def test_list_when_empty(cli):
    code, out, _ = cli("list")
    assert code == 0
    assert "No contacts yet" in out


def test_add_without_phone_value_is_a_validation_error(cli):
    code, _, err = cli("add", "--name", "Ada", "--phone", "  ")
    assert code == 1
    assert "Error: Name and Phone are required fields!" in err


def test_add_rejects_non_image_attachment(cli):
    code, _, err = cli("add", "--name", "Ada", "--phone", "1", "--image", "cv.pdf")
    assert code == 1
    assert "Please select only image files" in err


def test_update_changes_only_given_fields(cli):
    _, out, _ = cli("add", "--name", "Ada", "--phone", "1",
                    "--image", "a.png", "--image", "b.png")
    contact_id = saved_id(out)

    code, out, _ = cli("update", str(contact_id), "--email", "ada@example.com",
                       "--remove-image", "1")
    assert code == 0
    assert f"Updated contact {contact_id}" in out

    _, out, _ = cli("list")
    assert "Email:  ada@example.com" in out
    assert "Phone:  1" in out
    assert "Images: 1" in out


def test_update_unknown_contact(cli):
    code, _, err = cli("update", "42", "--name", "Nobody")
    assert code == 1
    assert "Error: No contact with id 42." in err


def test_delete_asks_for_confirmation(cli, monkeypatch):
    _, out, _ = cli("add", "--name", "Ada", "--phone", "1")
    contact_id = saved_id(out)

    monkeypatch.setattr("builtins.input", lambda prompt: "n")
    code, out, _ = cli("delete", str(contact_id))
    assert code == 0
    assert "Cancelled." in out

    code, out, _ = cli("delete", str(contact_id), "--yes")
    assert code == 0
    assert "Contact deleted." in out

    _, out, _ = cli("list")
    assert "No contacts yet" in out


def test_clear(cli, monkeypatch):
    cli("add", "--name", "Ada", "--phone", "1")
    cli("add", "--name", "Bob", "--phone", "2")

    monkeypatch.setattr("builtins.input", lambda prompt: "yes")
    code, out, _ = cli("clear")
    assert code == 0
    assert "All contacts have been deleted." in out


def test_export(cli, tmp_path):
    cli("add", "--name", "Ada", "--phone", "1")

    target = tmp_path / "book.xlsx"
    code, out, _ = cli("export", "--output", str(target))

    assert code == 0
    assert target.exists()
    assert "Exported 1 contacts" in out


def test_export_without_contacts_fails(cli, tmp_path):
    code, _, err = cli("export", "--output", str(tmp_path / "empty.xlsx"))
    assert code == 1
    assert "No contacts to export" in err


def test_memory_store_does_not_persist(cli):
    cli("--store", "memory", "add", "--name", "Ada", "--phone", "1")
    code, out, _ = cli("list")
    assert "No contacts yet" in out


def test_malformed_config_file_exits_with_error(tmp_path, capsys):
    bad = tmp_path / "bad.yaml"
    bad.write_text("ocr: [unclosed\n", encoding="utf-8")

    code = main(["--quiet", "--config", str(bad), "--data-dir", str(tmp_path), "list"])

    _, err = capsys.readouterr()
    assert code == 1
    assert "Unexpected error:" in err


def test_parser_requires_a_command():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_scan_prefills_and_saves(cli, monkeypatch, scripted_backend):
    backend = scripted_backend(
        {"ticks": [0.5, 1.0], "text": "John Doe\nCTO"},
        {"text": "john.doe@example.com\n+1 415-555-2671"},
    )
    monkeypatch.setattr("cardbook.ocr_engine.engine.create_backend", lambda name=None: backend)

    code, out, err = cli("scan", "front.png", "back.png", "--phone", "+1 555 0100", "--save")

    assert code == 0
    assert "--- Image 2 ---" in out
    assert "Name:  John Doe" in out
    assert "Phone: +1 555 0100" in out
    assert "Saved contact" in out
    assert "100%" in err
    assert backend.close_calls == 1

    _, out, _ = cli("list")
    assert "John Doe" in out
    assert "Images: 2" in out


def test_scan_json_output(cli, monkeypatch, scripted_backend):
    backend = scripted_backend({"text": "Jane Roe"})
    monkeypatch.setattr("cardbook.ocr_engine.engine.create_backend", lambda name=None: backend)

    code, out, _ = cli("scan", "card.png", "--json")

    assert code == 0
    assert '"name": "Jane Roe"' in out


def test_scan_failure_reports_user_message(cli, monkeypatch, scripted_backend):
    backend = scripted_backend({"error": RuntimeError("garbled")})
    monkeypatch.setattr("cardbook.ocr_engine.engine.create_backend", lambda name=None: backend)

    code, _, err = cli("scan", "card.png")

    assert code == 1
    assert "Error: OCR processing failed. Please try other images or enter manually." in err
