"""Mail adapters - Mailer implementations."""

from .console import ConsoleMailer
from .mailer import SmtpMailer

__all__ = ["ConsoleMailer", "SmtpMailer"]
