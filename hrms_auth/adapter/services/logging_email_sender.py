import logging

from hrms_auth.app.services.email_sender import EmailMessage, IEmailSender
from hrms_auth.app.services.security_log import preview

logger = logging.getLogger(__name__)


class LoggingEmailSender(IEmailSender):
    """Records outbound mail in the log instead of delivering it"""

    async def send(self, message: EmailMessage) -> None:
        logger.info(
            f"Email queued to={preview(message.to, 4)} subject={message.subject!r} "
            f"size={len(message.html)}"
        )
