from mailrelay.domain.entities.delivery_status import DeliveryStatus
from mailrelay.domain.entities.parsed_mail import MailContent, ParsedMail

__all__ = ["DeliveryStatus", "MailContent", "ParsedMail"]
