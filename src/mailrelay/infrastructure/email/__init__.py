"""Mail parsing: size policy, strategies and the raw-bytes inbound adapter."""

from mailrelay.infrastructure.email.parser import (
    MaxSizePolicy,
    oversize_notice,
    parse_email,
    random_id,
    read_stream,
)
from mailrelay.infrastructure.email.raw_message import RawInboundEmail
from mailrelay.infrastructure.email.rfc822 import (
    Compat32Strategy,
    StdlibMimeStrategy,
    import_strategy_loader,
    parse_content,
)

__all__ = [
    "Compat32Strategy",
    "MaxSizePolicy",
    "RawInboundEmail",
    "StdlibMimeStrategy",
    "import_strategy_loader",
    "oversize_notice",
    "parse_content",
    "parse_email",
    "random_id",
    "read_stream",
]
