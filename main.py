#!/usr/bin/env python3
"""
cardbook - Business-Card Contact Manager - Main Entry Point.

Command-line interface for the contact book. Scan business cards with
OCR to pre-fill a contact, or add, list, update, delete, clear and
export contacts.

Usage:
    python main.py scan front.jpg back.jpg --save
    python main.py add --name "Ada Lovelace" --phone "+44 20 7946 0018"
    python main.py list
    python main.py update 1760870400000 --email ada@example.com
    python main.py delete 1760870400000
    python main.py clear --yes
    python main.py export --output outputs/contacts.xlsx

Version: 1.0.0
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from config import ConfigurationManager
from cardbook.utils.logger import setup_logger_from_config, set_level, get_logger
from cardbook.utils.exceptions import ContactBookError
from cardbook.app import ContactBookApp
from cardbook.contacts import Contact, ContactFields


def build_parser() -> argparse.ArgumentParser:
    """
    Build the command-line argument parser.

    Returns:
        Configured ArgumentParser.
    """
    parser = argparse.ArgumentParser(
        prog="cardbook",
        description="Business-card contact manager with OCR pre-fill",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    Scan two sides of a card and save the result:
        python main.py scan front.jpg back.jpg --save

    Scan, but correct the phone before saving:
        python main.py scan card.png --phone "+1 415 555 2671" --save

    Delete without the confirmation prompt:
        python main.py delete 1760870400000 --yes
        """
    )

    parser.add_argument(
        "--config", "-c",
        type=str,
        default=None,
        help="Path to custom configuration file"
    )
    parser.add_argument(
        "--store",
        choices=["json", "sqlite", "memory"],
        default=None,
        help="Storage backend (default: from configuration)"
    )
    parser.add_argument(
        "--data-dir",
        type=str,
        default=None,
        help="Directory for stored contacts (default: from configuration)"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Only log warnings and errors"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    scan = subparsers.add_parser("scan", help="Run OCR on business-card images")
    scan.add_argument("images", nargs="+", help="Image files (at most 5)")
    _add_field_arguments(scan)
    scan.add_argument("--save", action="store_true", help="Save the scanned contact")
    scan.add_argument("--json", action="store_true", help="Print the OCR result as JSON")

    add = subparsers.add_parser("add", help="Add a contact")
    add.add_argument("--name", required=True, help="Full name")
    add.add_argument("--phone", required=True, help="Phone number")
    add.add_argument("--email", default="", help="Email address")
    add.add_argument("--image", action="append", default=[], help="Attach an image (repeatable)")

    subparsers.add_parser("list", help="List contacts")

    update = subparsers.add_parser("update", help="Edit an existing contact")
    update.add_argument("id", type=int, help="Contact id")
    _add_field_arguments(update)
    update.add_argument("--image", action="append", default=None, help="Replace images (repeatable)")
    update.add_argument(
        "--remove-image",
        type=int,
        action="append",
        default=[],
        metavar="N",
        help="Detach the N-th image, 1-based (repeatable)"
    )

    delete = subparsers.add_parser("delete", help="Delete a contact")
    delete.add_argument("id", type=int, help="Contact id")
    delete.add_argument("--yes", "-y", action="store_true", help="Do not ask for confirmation")

    clear = subparsers.add_parser("clear", help="Delete all contacts")
    clear.add_argument("--yes", "-y", action="store_true", help="Do not ask for confirmation")

    export = subparsers.add_parser("export", help="Export contacts to Excel")
    export.add_argument("--output", "-o", type=str, default=None, help="Output .xlsx file")

    return parser


def _add_field_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--name", default=None, help="Full name")
    parser.add_argument("--phone", default=None, help="Phone number")
    parser.add_argument("--email", default=None, help="Email address")


def initialize_system(args: argparse.Namespace) -> ConfigurationManager:
    """
    Initialize configuration and logging.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Initialized configuration manager.
    """
    ConfigurationManager.reset()
    config = ConfigurationManager(args.config)

    if args.store:
        config.set("storage.backend", args.store)
    if args.data_dir:
        config.set("paths.data_dir", str(Path(args.data_dir).resolve()))

    logger = setup_logger_from_config()
    if args.debug:
        set_level(logging.DEBUG)
    elif args.quiet:
        set_level(logging.WARNING)

    logger.debug(f"Version: {config.get('project.version', '1.0.0')}")
    logger.debug(f"Command: {args.command}")
    return config


def make_confirm(assume_yes: bool):
    """Return a confirmation callback for delete and clear."""
    def confirm(question: str) -> bool:
        if assume_yes:
            return True
        answer = input(f"{question} [y/N] ")
        return answer.strip().lower() in ("y", "yes")
    return confirm


def format_contact(contact: Contact) -> str:
    """One contact as a few human-readable lines."""
    lines = [f"[{contact.id}] {contact.name}", f"    Phone:  {contact.phone}"]
    if contact.email:
        lines.append(f"    Email:  {contact.email}")
    if contact.image_urls:
        lines.append(f"    Images: {len(contact.image_urls)}")
    return "\n".join(lines)


def _override_form(app: ContactBookApp, args: argparse.Namespace) -> None:
    for field_name in ("name", "phone", "email"):
        value = getattr(args, field_name)
        if value is not None:
            setattr(app.form, field_name, value)


def run_scan(app: ContactBookApp, args: argparse.Namespace) -> int:
    def show_progress(percent: int) -> None:
        print(
            f"\rProcessing {len(args.images)} image(s)... {percent}%",
            end="",
            file=sys.stderr,
            flush=True
        )

    try:
        result = app.scan_images(args.images, on_progress=show_progress)
    finally:
        print(file=sys.stderr)

    if args.json:
        print(result.to_json())
    else:
        print("Extracted Text from All Images:")
        print(result.combined_text)

    _override_form(app, args)
    print("Contact fields:")
    print(f"    Name:  {app.form.name}")
    print(f"    Phone: {app.form.phone}")
    print(f"    Email: {app.form.email}")

    if args.save:
        contact = app.submit_form()
        print(f"Saved contact {contact.id}")
    return 0


def run_add(app: ContactBookApp, args: argparse.Namespace) -> int:
    images = [payload.reference for payload in app.input_handler.select(args.image)]
    contact = app.add_contact(ContactFields(
        name=args.name,
        phone=args.phone,
        email=args.email,
        image_urls=images
    ))
    print(f"Saved contact {contact.id}")
    return 0


def run_list(app: ContactBookApp, args: argparse.Namespace) -> int:
    contacts = app.contacts
    if not contacts:
        print("No contacts yet. Scan business cards or add contacts to get started!")
        return 0

    noun = "contact" if len(contacts) == 1 else "contacts"
    print(f"Contact List ({len(contacts)} {noun})")
    for contact in contacts:
        print(format_contact(contact))
    return 0


def run_update(app: ContactBookApp, args: argparse.Namespace) -> int:
    app.edit_contact(args.id)
    _override_form(app, args)

    if args.image is not None:
        payloads = app.input_handler.select(args.image)
        app.form.selected_images = [payload.reference for payload in payloads]

    for position in sorted(set(args.remove_image), reverse=True):
        try:
            app.form.remove_image(position - 1)
        except IndexError:
            app.cancel_edit()
            print(f"Error: contact has no image #{position}", file=sys.stderr)
            return 1

    contact = app.submit_form()
    print(f"Updated contact {contact.id}")
    return 0


def run_delete(app: ContactBookApp, args: argparse.Namespace) -> int:
    if app.delete_contact(args.id, make_confirm(args.yes)):
        print("Contact deleted.")
    else:
        print("Cancelled.")
    return 0


def run_clear(app: ContactBookApp, args: argparse.Namespace) -> int:
    if app.clear_all(make_confirm(args.yes)):
        print("All contacts have been deleted.")
    else:
        print("Cancelled.")
    return 0


def run_export(app: ContactBookApp, args: argparse.Namespace) -> int:
    path = app.export_contacts(args.output)
    print(f"Exported {len(app.contacts)} contacts to {path}")
    return 0


COMMANDS = {
    "scan": run_scan,
    "add": run_add,
    "list": run_list,
    "update": run_update,
    "delete": run_delete,
    "clear": run_clear,
    "export": run_export,
}


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main function - entry point for command-line execution.

    Args:
        argv: Arguments without the program name (default: sys.argv[1:]).

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    args = build_parser().parse_args(argv)

    try:
        initialize_system(args)

        app = ContactBookApp()
        app.start()
        return COMMANDS[args.command](app, args)

    except ContactBookError as e:
        get_logger(__name__).debug(f"{type(e).__name__}: {e}")
        print(f"Error: {e.user_message}", file=sys.stderr)
        return 1

    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print("\nOperation cancelled by user")
        return 130

    except Exception as e:
        print(f"Unexpected error: {e}", file=sys.stderr)
        if args.debug:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
