from datetime import datetime, timezone
from decimal import Decimal
from unittest import mock

import pytest
import requests

from storefront.config import Settings
from storefront.services import EmailService, RateLimiter
from storefront.services import email_templates


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


@pytest.fixture
def order():
    return {
        "id": 7,
        "tracking_id": "TR00000007",
        "customer_name": "Asha Rao",
        "customer_email": "asha@indosaga.in",
        "customer_phone": "9876543210",
        "shipping_address": "12 MG Road, Pune",
        "pincode": "411001",
        "payment_method": "upi",
        "payment_status": "paid",
        "razorpay_payment_id": "pay_P1",
        "total": Decimal("110001.00"),
        "items": [
            {"name": "Classic Teak Dining Table", "quantity": 2, "price": Decimal("55000")},
            {"name": "Modern Teak Chairs", "quantity": 1, "price": Decimal("1")},
        ],
    }


def _service(settings, http=None, sleep=None, limiter=None):
    return EmailService(settings, session=http or mock.Mock(spec=requests.Session),
                        rate_limiter=limiter, sleep=sleep or mock.Mock())


def test_rate_limiter_window():
    clock = FakeClock()
    limiter = RateLimiter(max_events=2, window=60, clock=clock)
    assert limiter.allow("asha@indosaga.in")
    assert limiter.allow("ASHA@indosaga.in")
    assert not limiter.allow("asha@indosaga.in")
    assert limiter.allow("ravi@indosaga.in")

    clock.now += 61
    assert limiter.allow("asha@indosaga.in")


def test_rate_limiter_forgets_idle_recipients():
    clock = FakeClock()
    limiter = RateLimiter(max_events=2, window=60, clock=clock)
    limiter.allow("asha@indosaga.in")
    limiter.allow("ravi@indosaga.in")

    clock.now += 61
    limiter.allow("meera@indosaga.in")
    assert list(limiter._events) == ["meera@indosaga.in"]


def test_without_api_key_emails_are_only_logged(settings, order):
    http = mock.Mock(spec=requests.Session)
    status = _service(settings, http=http).notify_order(order)
    assert status.user_email_sent and status.admin_email_sent
    assert status.errors == []
    http.post.assert_not_called()


def test_sendgrid_request(settings, order):
    configured = Settings(**{**settings.__dict__, "sendgrid_api_key": "SG.key"})
    http = mock.Mock(spec=requests.Session)
    http.post.return_value = mock.Mock(status_code=202)

    status = _service(configured, http=http).notify_order(order)
    assert status.user_email_sent and status.admin_email_sent

    recipients = [call.kwargs["json"]["personalizations"][0]["to"][0]["email"] for call in http.post.call_args_list]
    assert recipients == ["asha@indosaga.in", "owner@indosaga.in"]
    first = http.post.call_args_list[0]
    assert first.kwargs["headers"]["Authorization"] == "Bearer SG.key"
    assert first.kwargs["json"]["from"]["email"] == configured.email_from


def test_failed_delivery_is_retried_with_growing_delay(settings, order):
    configured = Settings(**{**settings.__dict__, "sendgrid_api_key": "SG.key"})
    http = mock.Mock(spec=requests.Session)
    http.post.side_effect = [
        requests.ConnectionError("down"),
        mock.Mock(status_code=500, text="oops"),
        mock.Mock(status_code=202),
        mock.Mock(status_code=202),
    ]
    sleep = mock.Mock()

    status = _service(configured, http=http, sleep=sleep).notify_order(order)
    assert status.user_email_sent and status.admin_email_sent
    assert [call.args[0] for call in sleep.call_args_list] == [1.0, 2.0]


def test_delivery_gives_up_after_all_attempts(settings, order):
    configured = Settings(**{**settings.__dict__, "sendgrid_api_key": "SG.key"})
    http = mock.Mock(spec=requests.Session)
    http.post.return_value = mock.Mock(status_code=500, text="oops")

    status = _service(configured, http=http).notify_order(order)
    assert not status.user_email_sent
    assert not status.admin_email_sent
    assert "Some emails failed to send" in status.errors
    assert http.post.call_count == 6


def test_rate_limited_customer_still_notifies_admin(settings, order):
    limiter = RateLimiter(max_events=1, window=60, clock=FakeClock())
    service = _service(settings, limiter=limiter)

    assert service.notify_order(order).user_email_sent
    status = service.notify_order(order)
    assert not status.user_email_sent
    assert status.admin_email_sent
    assert "Email rate limit exceeded" in status.errors


def test_order_without_customer_email_only_notifies_admin(settings, order):
    order["customer_email"] = None
    status = _service(settings).notify_order(order)
    assert status.admin_email_sent
    assert status.errors == []


def test_order_templates(order):
    customer = email_templates.order_confirmation(order)
    assert customer.to == "asha@indosaga.in"
    assert "Order Confirmation #7" in customer.subject
    assert "UPI Payment" in customer.text
    assert "₹110,001.00" in customer.text

    admin = email_templates.admin_order_notification(order, "owner@indosaga.in")
    assert admin.to == "owner@indosaga.in"
    assert "pay_P1" in admin.text


def test_templates_escape_html():
    inquiry = {
        "id": 1, "first_name": "<b>Asha</b>", "last_name": "Rao", "email": "asha@indosaga.in",
        "phone": None, "inquiry_type": "general", "message": "<script>alert(1)</script>",
    }
    message = email_templates.contact_inquiry_notification(inquiry, "owner@indosaga.in")
    assert "<script>" not in message.html
    assert "&lt;script&gt;" in message.html


def test_meeting_templates():
    meeting = {
        "meeting_id": "APT-1", "customer_name": "Asha Rao", "customer_email": "asha@indosaga.in",
        "customer_phone": "", "appointment_date": datetime(2030, 3, 14, 10, 30, tzinfo=timezone.utc),
        "meeting_type": "virtual_showroom", "duration": 30, "meeting_link": "https://meet.jit.si/x", "notes": "",
    }
    customer = email_templates.meeting_confirmation(meeting)
    assert "Thursday, 14 March 2030" in customer.text
    assert "16:00 IST" in customer.text

    admin = email_templates.admin_meeting_notification(meeting, "owner@indosaga.in")
    assert "Virtual Showroom" in admin.text
    assert "Not provided" in admin.text


def test_meeting_time_is_shown_in_ist():
    late = {
        "meeting_id": "APT-2", "customer_name": "Asha Rao", "customer_email": "asha@indosaga.in",
        "appointment_date": datetime(2030, 3, 14, 20, 0), "meeting_type": "consultation",
    }
    text = email_templates.meeting_confirmation(late).text
    assert "Friday, 15 March 2030" in text
    assert "01:30 IST" in text
