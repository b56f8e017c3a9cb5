"""Welcome, password-reset and bulk notifications over email and SMS."""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Protocol

from .dispatch import DispatchPolicy, dispatch
from .models.dispatch import DispatchResult, WelcomeResult
from .models.users import Recipient

WELCOME_SUBJECT = "Welcome to our service!"
PASSWORD_RESET_SUBJECT = "Password Reset Request"
PASSWORD_RESET_BODY = "Click here to reset your password: https://example.com/reset"


class EmailSender(Protocol):
    async def send_email(self, to: str, subject: str, body: str) -> bool: ...


class SmsSender(Protocol):
    async def send_sms(self, phone_number: str, message: str) -> bool: ...


class NotificationService:
    """Sends user notifications; transport errors become ``False`` results."""

    def __init__(
        self,
        email: EmailSender,
        sms: SmsSender,
        logger: logging.Logger | None = None,
    ) -> None:
        self.email = email
        self.sms = sms
        self.logger = logger or logging.getLogger(__name__)

    async def send_welcome_notification(self, recipient: Recipient) -> WelcomeResult:
        self.logger.info(f"Sending welcome notification to {recipient.name}")

        email_sent = await self._send_welcome_email(recipient)
        sms_sent = (
            await self._send_welcome_sms(recipient.phone, recipient.name)
            if recipient.phone
            else False
        )
        result = WelcomeResult(email_sent=email_sent, sms_sent=sms_sent)

        if result.any_sent:
            self.logger.info(
                f"Welcome notification sent successfully to {recipient.name}"
            )
        else:
            self.logger.error(
                f"Failed to send welcome notification to {recipient.name}"
            )
        return result

    async def _send_welcome_email(self, recipient: Recipient) -> bool:
        body = f"Hello {recipient.name}, welcome to our amazing platform!"
        try:
            sent = await self.email.send_email(recipient.email, WELCOME_SUBJECT, body)
            return bool(sent)
        except Exception as exc:
            self.logger.error("Failed to send welcome email", exc_info=exc)
            return False

    async def _send_welcome_sms(self, phone: str, name: str) -> bool:
        message = f"Hi {name}! Welcome to our service. Reply STOP to unsubscribe."
        try:
            return bool(await self.sms.send_sms(phone, message))
        except Exception as exc:
            self.logger.error("Failed to send welcome SMS", exc_info=exc)
            return False

    async def send_password_reset_notification(self, email: str) -> bool:
        self.logger.info(f"Sending password reset notification to {email}")
        try:
            sent = bool(
                await self.email.send_email(
                    email, PASSWORD_RESET_SUBJECT, PASSWORD_RESET_BODY
                )
            )
        except Exception as exc:
            self.logger.error("Password reset email failed", exc_info=exc)
            return False

        if sent:
            self.logger.info(f"Password reset email sent to {email}")
        else:
            self.logger.error(f"Failed to send password reset email to {email}")
        return sent

    async def send_bulk_notifications(
        self,
        recipients: Iterable[Recipient],
        subject: str,
        template: Callable[[str], str],
        *,
        policy: DispatchPolicy = DispatchPolicy.SEQUENTIAL,
    ) -> DispatchResult:
        """Email every recipient and tally results without stopping on failure.

        A rendering or send exception counts as a failure and is logged
        with the recipient's address.
        """
        batch = list(recipients)
        self.logger.info(f"Starting bulk notification to {len(batch)} users")

        async def send(recipient: Recipient) -> bool:
            body = template(recipient.name)
            return await self.email.send_email(recipient.email, subject, body)

        def on_error(recipient: Recipient, exc: Exception) -> None:
            self.logger.error(
                f"Bulk notification failed for {recipient.email}", exc_info=exc
            )

        result = await dispatch(batch, send, policy=policy, on_error=on_error)
        self.logger.info(
            f"Bulk notification completed: {result.successful} successful, "
            f"{result.failed} failed"
        )
        return result


__all__ = ["EmailSender", "NotificationService", "SmsSender"]
