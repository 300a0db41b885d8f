from abc import ABC, abstractmethod

from pydantic import BaseModel


class EmailMessage(BaseModel):
    to: str
    subject: str
    html: str


class IEmailSender(ABC):
    """Outbound email port - delivery lives outside this service"""

    @abstractmethod
    async def send(self, message: EmailMessage) -> None:
        """Send a message; implementations may raise on transport failure"""
        pass


def reset_password_email(to: str, reset_link: str, ttl_minutes: int) -> EmailMessage:
    return EmailMessage(
        to=to,
        subject="Reset your password",
        html=(
            "<p>We received a request to reset your password.</p>"
            f'<p><a href="{reset_link}">Reset password</a></p>'
            f"<p>This link expires in {ttl_minutes} minutes. "
            "If you did not request a reset you can ignore this email.</p>"
        ),
    )
