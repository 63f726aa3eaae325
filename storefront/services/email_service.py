"""
Email delivery through the SendGrid v3 REST API with per-recipient rate
limiting and retries. Delivery problems are logged and reported through
DeliveryStatus; they never propagate to the request that triggered them.
"""
import time
from collections import defaultdict, deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

import requests
from loguru import logger

from storefront.config import Settings
from storefront.services import email_templates
from storefront.services.email_templates import EmailMessage

SENDGRID_URL = "https://api.sendgrid.com/v3/mail/send"


@dataclass
class DeliveryStatus:
    user_email_sent: bool = False
    admin_email_sent: bool = False
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    errors: List[str] = field(default_factory=list)


class RateLimiter:
    """Sliding window counter keyed by recipient"""

    def __init__(self, max_events: int, window: float, clock: Callable[[], float] = time.monotonic):
        self.max_events = max_events
        self.window = window
        self.clock = clock
        self._events: Dict[str, deque] = defaultdict(deque)

    def allow(self, key: str) -> bool:
        now = self.clock()
        key = key.lower()
        self._expire(now)
        events = self._events[key]
        if len(events) >= self.max_events:
            return False
        events.append(now)
        return True

    def _expire(self, now: float) -> None:
        """Drop events outside the window and forget recipients with none left"""
        for key in list(self._events):
            events = self._events[key]
            while events and events[0] <= now - self.window:
                events.popleft()
            if not events:
                del self._events[key]


class EmailService:
    TIMEOUT = 10

    def __init__(
        self,
        settings: Settings,
        session: requests.Session = None,
        rate_limiter: RateLimiter = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.settings = settings
        self.http = session or requests.Session()
        self.rate_limiter = rate_limiter or RateLimiter(
            settings.email_max_per_window, settings.email_rate_limit_window
        )
        self.sleep = sleep

    def _payload(self, message: EmailMessage) -> Dict[str, Any]:
        return {
            "personalizations": [{"to": [{"email": message.to}]}],
            "from": {"email": self.settings.email_from, "name": self.settings.email_from_name},
            "subject": message.subject,
            "content": [
                {"type": "text/plain", "value": message.text},
                {"type": "text/html", "value": message.html},
            ],
        }

    def send(self, message: EmailMessage) -> bool:
        """Deliver one email; True when accepted or when delivery is disabled"""
        logger.info(f"Email to={message.to} subject={message.subject!r}")
        logger.debug(f"Email body:\n{message.text}")

        if not self.settings.sendgrid_api_key:
            logger.warning("SENDGRID_API_KEY not configured, email logged only")
            return True

        try:
            response = self.http.post(
                SENDGRID_URL,
                json=self._payload(message),
                headers={"Authorization": f"Bearer {self.settings.sendgrid_api_key}"},
                timeout=self.TIMEOUT,
            )
        except requests.RequestException as e:
            logger.error(f"Email delivery to {message.to} failed: {e}")
            return False

        if response.status_code >= 400:
            logger.error(f"SendGrid rejected email to {message.to} ({response.status_code}): {response.text}")
            return False

        logger.info(f"Email sent to {message.to}")
        return True

    def send_with_retry(self, message: EmailMessage) -> bool:
        attempts = max(1, self.settings.email_retry_attempts)
        for attempt in range(1, attempts + 1):
            if self.send(message):
                return True
            if attempt < attempts:
                logger.warning(f"Retrying email to {message.to} (attempt {attempt}/{attempts})")
                self.sleep(self.settings.email_retry_delay * attempt)
        logger.error(f"Giving up on email to {message.to} after {attempts} attempts")
        return False

    def send_pair(self, context: str, reference: Any, user_message: Optional[EmailMessage],
                  admin_message: Optional[EmailMessage]) -> DeliveryStatus:
        """
        Send a customer email and its admin counterpart.

        The customer's address is rate limited; the admin copy is not.
        """
        status = DeliveryStatus()

        if user_message is not None:
            if self.rate_limiter.allow(user_message.to):
                status.user_email_sent = self.send_with_retry(user_message)
            else:
                logger.warning(f"Email rate limit exceeded for {user_message.to}")
                status.errors.append("Email rate limit exceeded")

        if admin_message is not None:
            status.admin_email_sent = self.send_with_retry(admin_message)

        if (user_message is not None and not status.user_email_sent) or \
                (admin_message is not None and not status.admin_email_sent):
            status.errors.append("Some emails failed to send")

        logger.info(
            f"Email delivery [{context}] ref={reference} user_sent={status.user_email_sent} "
            f"admin_sent={status.admin_email_sent} errors={status.errors or None}"
        )
        return status

    def notify_order(self, order: Dict[str, Any]) -> DeliveryStatus:
        user_message = email_templates.order_confirmation(order) if order.get("customer_email") else None
        admin_message = email_templates.admin_order_notification(order, self.settings.admin_email)
        return self.send_pair("order_completion", order["id"], user_message, admin_message)

    def notify_appointment(self, meeting: Dict[str, Any]) -> DeliveryStatus:
        return self.send_pair(
            "meeting_booking",
            meeting["meeting_id"],
            email_templates.meeting_confirmation(meeting),
            email_templates.admin_meeting_notification(meeting, self.settings.admin_email),
        )

    def notify_ticket(self, ticket: Dict[str, Any]) -> DeliveryStatus:
        return self.send_pair("support_ticket", ticket["ticket_number"], email_templates.ticket_confirmation(ticket), None)

    def notify_contact(self, inquiry: Dict[str, Any]) -> DeliveryStatus:
        return self.send_pair(
            "contact_inquiry",
            inquiry["id"],
            None,
            email_templates.contact_inquiry_notification(inquiry, self.settings.admin_email),
        )
