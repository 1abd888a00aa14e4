from .client import EmailMessage, Mailer, ResendMailer
from .templates import EmailTemplates

__all__ = ["EmailMessage", "Mailer", "ResendMailer", "EmailTemplates"]
