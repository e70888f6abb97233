"""
Command-line interface for the X-Invoice header package.

Provides three main commands:
- encode: Encode an invoice record from a JSON file into a header line
- decode: Decode a raw X-Invoice header value and show its fields
- inspect: Read the X-Invoice header of a stored email message
"""

from email import policy
from email.parser import BytesParser
from pathlib import Path
from typing import Optional

import typer

from .codec import encode_header, header_from_payload, load_payload
from .config import HEADER_NAME, SCHEMA_VERSION, logger, setup_logging
from .exceptions import HeaderValidationError, MalformedHeaderError
from .rules import HEADER_FIELDS
from .schemas import EncodeOptions, InvoiceHeader
from .validator import format_errors_text


# Create Typer app
app = typer.Typer(
    name="x-invoice",
    help="Encode, decode and inspect X-Invoice email headers",
    add_completion=False,
)


@app.callback()
def _configure() -> None:
    setup_logging()


def _decode_or_exit(value: str, default_version: bool = False) -> InvoiceHeader:
    """Decode a header value, reporting failures and exiting with code 1."""
    try:
        payload = load_payload(value)
        if default_version:
            payload.setdefault("version", SCHEMA_VERSION)
        return header_from_payload(payload)
    except MalformedHeaderError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    except HeaderValidationError as e:
        typer.echo(format_errors_text(e.errors), err=True)
        raise typer.Exit(code=1)


def _echo_fields(header: InvoiceHeader) -> None:
    for field in HEADER_FIELDS:
        value = getattr(header, field.attr)
        if value is None:
            continue
        if field.attr.endswith("_date"):
            value = value.isoformat()
        elif isinstance(value, bool):
            value = "true" if value else "false"
        typer.echo(f"  {field.wire:<13} {value}")


@app.command()
def encode(
    input_file: Path = typer.Option(
        ...,
        "--input",
        "-i",
        help="JSON file holding one invoice record, keyed by wire names; a missing version defaults to the current one",
        exists=True,
        file_okay=True,
        dir_okay=False,
        resolve_path=True,
    ),
    pretty: bool = typer.Option(
        False,
        "--pretty",
        help="Indent the JSON object, one key per line",
    ),
    escape_html: bool = typer.Option(
        False,
        "--escape-html",
        help="Escape <, >, & and ' inside string values",
    ),
) -> None:
    """
    Encode an invoice record into an X-Invoice header line.

    The record is checked with the same rules used when decoding a header,
    then printed in its canonical encoding. Records without a version are
    written as the current schema version.
    """
    header = _decode_or_exit(input_file.read_text(encoding="utf-8"), default_version=True)

    value = encode_header(header, EncodeOptions(pretty=pretty, escape_html=escape_html))
    typer.echo(f"{HEADER_NAME}: {value}")


@app.command()
def decode(
    value: Optional[str] = typer.Argument(
        None,
        help="Raw X-Invoice header value",
    ),
    input_file: Optional[Path] = typer.Option(
        None,
        "--input",
        "-i",
        help="File containing the raw header value",
        exists=True,
        file_okay=True,
        dir_okay=False,
        resolve_path=True,
    ),
) -> None:
    """
    Decode a raw X-Invoice header value and show its fields.
    """
    if input_file is not None:
        value = input_file.read_text(encoding="utf-8")

    if value is None:
        typer.echo("Error: provide a header value or --input", err=True)
        raise typer.Exit(code=1)

    header = _decode_or_exit(value)

    typer.echo(f"{HEADER_NAME} v{header.version}")
    _echo_fields(header)


@app.command()
def inspect(
    message_file: Path = typer.Option(
        ...,
        "--message",
        "-m",
        help="Stored email message (.eml) to inspect",
        exists=True,
        file_okay=True,
        dir_okay=False,
        resolve_path=True,
    ),
) -> None:
    """
    Decode the X-Invoice header of an email message.

    Also checks that the message carries an attachment whose filename
    matches the one named in the header.
    """
    msg = BytesParser(policy=policy.default).parsebytes(message_file.read_bytes())

    raw_value = msg.get(HEADER_NAME)
    if raw_value is None:
        typer.echo(f"Error: message has no {HEADER_NAME} header", err=True)
        raise typer.Exit(code=1)

    header = _decode_or_exit(str(raw_value))

    typer.echo(f"{HEADER_NAME} v{header.version} in {message_file.name}")
    _echo_fields(header)

    attachments = [part.get_filename() for part in msg.walk() if part.get_filename()]
    logger.debug(f"Attachments found: {attachments}")

    if header.filename not in attachments:
        typer.echo(
            f"\nError: no attachment named '{header.filename}' "
            f"(found: {', '.join(attachments) or 'none'})",
            err=True,
        )
        raise typer.Exit(code=1)

    typer.echo(f"\n[OK] Attachment '{header.filename}' found")


@app.command()
def version() -> None:
    """Show version information."""
    from . import __version__
    typer.echo(f"X-Invoice header v{__version__} (schema {SCHEMA_VERSION})")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
