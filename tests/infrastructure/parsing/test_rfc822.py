"""Tests for the stdlib-backed parser strategies and plugin loading."""

from __future__ import annotations

from email.message import EmailMessage

import pytest

from conftest import build_raw_email
from mailrelay.infrastructure.email import (
    Compat32Strategy,
    StdlibMimeStrategy,
    import_strategy_loader,
    parse_content,
)
from mailrelay.infrastructure.email.html_text import html_to_text


def _with_attachment() -> bytes:
    msg = EmailMessage()
    msg["From"] = "alice@example.com"
    msg["To"] = "relay@example.com"
    msg["Subject"] = "Report"
    msg.set_content("See attached")
    msg.add_attachment(b"\x00\x01binary", maintype="application", subtype="octet-stream", filename="report.bin")
    return msg.as_bytes()


class TestStdlibMimeStrategy:
    def test_prefers_inline_text_over_attachment(self) -> None:
        content = StdlibMimeStrategy().parse(_with_attachment())

        assert content.text.strip() == "See attached"
        assert content.html is None

    def test_html_body(self) -> None:
        content = StdlibMimeStrategy().parse(build_raw_email(text=None, html="<p>hi</p>"))

        assert content.text is None
        assert "<p>hi</p>" in content.html

    def test_unregistered_charset_falls_back_to_utf8(self) -> None:
        raw = b"Content-Type: text/plain; charset=unknown-8bit\r\n\r\nhello world"

        assert StdlibMimeStrategy().parse(raw).text == "hello world"


class TestCompat32Strategy:
    def test_skips_attachments(self) -> None:
        content = Compat32Strategy().parse(_with_attachment())

        assert content.text.strip() == "See attached"

    def test_decodes_declared_charset(self) -> None:
        raw = (
            "Content-Type: text/plain; charset=iso-8859-1\r\n"
            "Content-Transfer-Encoding: 8bit\r\n\r\n"
        ).encode("ascii") + "café".encode("iso-8859-1")

        content = Compat32Strategy().parse(raw)

        assert content.text == "café"

    def test_unknown_charset_falls_back_to_utf8(self) -> None:
        raw = b"Content-Type: text/plain; charset=x-unknown\r\n\r\nhello"

        assert Compat32Strategy().parse(raw).text == "hello"

    def test_alternative_bodies(self) -> None:
        content = Compat32Strategy().parse(build_raw_email(text="plain", html="<i>rich</i>"))

        assert content.text.strip() == "plain"
        assert "<i>rich</i>" in content.html


class TestStrategyLoader:
    def test_imports_factory_from_path(self) -> None:
        loader = import_strategy_loader("mailrelay.infrastructure.email.rfc822:create_compat32_strategy")

        assert isinstance(loader(), Compat32Strategy)

    def test_missing_module_fails_when_loaded(self) -> None:
        loader = import_strategy_loader("mailrelay_missing_plugin:factory")

        with pytest.raises(ModuleNotFoundError):
            loader()

    def test_rejects_empty_path(self) -> None:
        with pytest.raises(ValueError):
            import_strategy_loader(":factory")

    def test_parse_content_survives_missing_plugin(self) -> None:
        loader = import_strategy_loader("mailrelay_missing_plugin:factory")

        content = parse_content(build_raw_email(text="still parsed"), loader)

        assert content.text.strip() == "still parsed"


def test_html_to_text_strips_markup_and_scripts() -> None:
    html = (
        "<html><head><title>T</title><style>p {color: red}</style></head>"
        "<body><h1>Title</h1><p>Line one<br>Line two</p><script>x()</script></body></html>"
    )

    text = html_to_text(html)

    assert text.splitlines() == ["Title", "Line one", "Line two"]
