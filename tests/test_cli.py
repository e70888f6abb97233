"""
Tests for the x-invoice command-line interface.
"""

import json

import pytest
from typer.testing import CliRunner

from email_invoice.cli import app


runner = CliRunner()

VALUE = (
    '{"version":"1.0","issuer":"Service Provider","filename":"bill.pdf",'
    '"invoice_id":"XF4321-89","invoice_date":"2015-01-10T00:00:00+01:00",'
    '"paid":false,"amount":39.90,"currency":"USD"}'
)


def _message(header_value=VALUE, attachment="bill.pdf") -> bytes:
    lines = [
        "From: billing@example.com",
        "To: customer@example.com",
        "Subject: Your invoice",
    ]
    if header_value is not None:
        lines.append(f"X-Invoice: {header_value}")
    lines += [
        "MIME-Version: 1.0",
        'Content-Type: multipart/mixed; boundary="BOUNDARY"',
        "",
        "--BOUNDARY",
        "Content-Type: text/plain; charset=utf-8",
        "",
        "Please find your invoice attached.",
        "--BOUNDARY",
        "Content-Type: application/pdf",
        f'Content-Disposition: attachment; filename="{attachment}"',
        "Content-Transfer-Encoding: base64",
        "",
        "JVBERi0xLjQK",
        "--BOUNDARY--",
        "",
    ]
    return "\r\n".join(lines).encode("utf-8")


@pytest.fixture
def record_file(tmp_path):
    path = tmp_path / "invoice.json"
    path.write_text(json.dumps({
        "version": "1.0",
        "issuer": "Smith & Sons",
        "filename": "bill.pdf",
        "invoice_date": "2015-01-10T00:00:00+01:00",
        "paid": False,
        "amount": 39.9,
        "currency": "USD",
    }), encoding="utf-8")
    return path


class TestEncodeCommand:
    def test_compact(self, record_file):
        result = runner.invoke(app, ["encode", "--input", str(record_file)])
        assert result.exit_code == 0
        assert result.output.startswith('X-Invoice: {"version":"1.0","issuer":"Smith & Sons",')
        assert '"amount":39.9,' in result.output

    def test_version_defaults_when_absent(self, tmp_path):
        path = tmp_path / "unversioned.json"
        path.write_text(json.dumps({
            "issuer": "Acme",
            "filename": "invoice.pdf",
            "invoice_date": "2024-01-15T00:00:00+00:00",
            "paid": True,
            "amount": 10,
            "currency": "EUR",
        }), encoding="utf-8")
        result = runner.invoke(app, ["encode", "-i", str(path)])
        assert result.exit_code == 0
        assert result.output.startswith('X-Invoice: {"version":"1.0","issuer":"Acme",')

    def test_unknown_version_still_rejected(self, tmp_path):
        path = tmp_path / "future.json"
        path.write_text('{"version": "2.0", "issuer": "Acme"}', encoding="utf-8")
        result = runner.invoke(app, ["encode", "-i", str(path)])
        assert result.exit_code == 1
        assert "unsupported_version:version" in result.output

    def test_escape_html(self, record_file):
        result = runner.invoke(app, ["encode", "-i", str(record_file), "--escape-html"])
        assert result.exit_code == 0
        assert '"issuer":"Smith \\u0026 Sons"' in result.output

    def test_pretty(self, record_file):
        result = runner.invoke(app, ["encode", "-i", str(record_file), "--pretty"])
        assert result.exit_code == 0
        assert '\n  "issuer": "Smith & Sons",\n' in result.output

    def test_invalid_record(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text('{"version": "1.0", "issuer": "Acme"}', encoding="utf-8")
        result = runner.invoke(app, ["encode", "-i", str(path)])
        assert result.exit_code == 1
        assert "missing_field:filename" in result.output

    def test_missing_file(self, tmp_path):
        result = runner.invoke(app, ["encode", "-i", str(tmp_path / "nope.json")])
        assert result.exit_code != 0


class TestDecodeCommand:
    def test_value_argument(self):
        result = runner.invoke(app, ["decode", VALUE])
        assert result.exit_code == 0
        assert "X-Invoice v1.0" in result.output
        assert "Service Provider" in result.output
        assert "2015-01-10T00:00:00+01:00" in result.output
        assert "39.90" in result.output
        assert "false" in result.output

    def test_input_file(self, tmp_path):
        path = tmp_path / "header.txt"
        path.write_text(VALUE, encoding="utf-8")
        result = runner.invoke(app, ["decode", "--input", str(path)])
        assert result.exit_code == 0
        assert "XF4321-89" in result.output

    def test_no_value(self):
        result = runner.invoke(app, ["decode"])
        assert result.exit_code == 1
        assert "provide a header value" in result.output

    def test_malformed(self):
        result = runner.invoke(app, ["decode", "not json"])
        assert result.exit_code == 1
        assert "not valid JSON" in result.output

    def test_invalid_fields(self):
        result = runner.invoke(app, ["decode", '{"version":"2.0","paid":1}'])
        assert result.exit_code == 1
        assert "unsupported_version:version" in result.output
        assert "type_error:paid: 'paid' must be a JSON boolean" in result.output


class TestInspectCommand:
    def test_header_and_attachment(self, tmp_path):
        path = tmp_path / "invoice.eml"
        path.write_bytes(_message())
        result = runner.invoke(app, ["inspect", "--message", str(path)])
        assert result.exit_code == 0
        assert "X-Invoice v1.0 in invoice.eml" in result.output
        assert "Service Provider" in result.output
        assert "[OK] Attachment 'bill.pdf' found" in result.output

    def test_attachment_mismatch(self, tmp_path):
        path = tmp_path / "invoice.eml"
        path.write_bytes(_message(attachment="statement.pdf"))
        result = runner.invoke(app, ["inspect", "-m", str(path)])
        assert result.exit_code == 1
        assert "no attachment named 'bill.pdf'" in result.output
        assert "statement.pdf" in result.output

    def test_missing_header(self, tmp_path):
        path = tmp_path / "plain.eml"
        path.write_bytes(_message(header_value=None))
        result = runner.invoke(app, ["inspect", "-m", str(path)])
        assert result.exit_code == 1
        assert "message has no X-Invoice header" in result.output

    def test_invalid_header(self, tmp_path):
        path = tmp_path / "invoice.eml"
        path.write_bytes(_message(header_value='{"version":"1.0"}'))
        result = runner.invoke(app, ["inspect", "-m", str(path)])
        assert result.exit_code == 1
        assert "missing_field:issuer" in result.output


def test_version_command():
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert "X-Invoice header v1.0.0 (schema 1.0)" in result.output
