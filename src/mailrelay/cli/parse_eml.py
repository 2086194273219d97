"""Parse a stored .eml file the way the Telegram notifier would."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path

from loguru import logger

from mailrelay.infrastructure import configure_logging, get_settings
from mailrelay.infrastructure.email import RawInboundEmail, import_strategy_loader, parse_email


def main(argv: list[str] | None = None) -> int:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Parse an .eml file into text/HTML")
    parser.add_argument("path", type=Path, help="RFC 822 message file")
    parser.add_argument("--max-size", type=int, default=settings.max_email_size, help="Max bytes to parse")
    parser.add_argument(
        "--policy",
        default=settings.max_email_size_policy,
        help="Oversize policy: truncate, unhandled, or anything else to read through",
    )
    parser.add_argument("--plugin", default=settings.mail_parser_plugin, help="Alternate parser, module:factory")
    parser.add_argument("--json", action="store_true", help="Print the full parsed mail as JSON")
    args = parser.parse_args(argv)

    configure_logging(settings.log_level)

    if not args.path.is_file():
        logger.error(f"No such file: {args.path}")
        return 1

    message = RawInboundEmail(args.path.read_bytes())
    loader = import_strategy_loader(args.plugin) if args.plugin else None
    mail = asyncio.run(parse_email(message, args.max_size, args.policy, loader))

    if args.json:
        print(json.dumps(mail.to_dict(), indent=2, ensure_ascii=False))
    else:
        print(f"Subject: {mail.subject}")
        print(f"From: {mail.sender}")
        print(f"To: {mail.recipient}")
        print()
        sys.stdout.write((mail.text or "") + "\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
