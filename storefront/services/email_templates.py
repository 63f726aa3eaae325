"""
Transactional email bodies (plain text and HTML)
"""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from html import escape
from typing import Any, Dict, List, Optional

PAYMENT_METHOD_LABELS = {
    "card": "Credit/Debit Card",
    "upi": "UPI Payment",
    "netbanking": "Net Banking",
    "wallet": "Digital Wallet",
    "cod": "Cash on Delivery",
    "qr": "QR Code Payment",
}

STORE_NAME = "IndoSaga Furniture"
SUPPORT_PHONE = "+91 98765 43210"
SUPPORT_EMAIL = "support@indosaga.com"
IST = timezone(timedelta(hours=5, minutes=30), "IST")


@dataclass
class EmailMessage:
    to: str
    subject: str
    text: str
    html: str


def rupees(amount) -> str:
    value = Decimal(amount or 0).quantize(Decimal("0.01"))
    return f"₹{value:,}"


def showroom_time(when: datetime) -> datetime:
    """Appointment instants are stored in UTC; customers book in IST"""
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)
    return when.astimezone(IST)


def _page(title: str, body: str) -> str:
    return (
        "<!DOCTYPE html><html><head><meta charset=\"utf-8\">"
        f"<title>{escape(title)}</title></head>"
        "<body style=\"font-family: Arial, sans-serif; color: #333;\">"
        f"<h2>{escape(title)}</h2>{body}"
        f"<p style=\"font-size: 12px; color: #666;\">{STORE_NAME} | {SUPPORT_PHONE} | {SUPPORT_EMAIL}</p>"
        "</body></html>"
    )


def _rows(pairs: List[tuple]) -> str:
    cells = "".join(
        f"<tr><td><strong>{escape(label)}:</strong></td><td>{escape(str(value))}</td></tr>"
        for label, value in pairs
    )
    return f"<table>{cells}</table>"


def _lines(pairs: List[tuple]) -> str:
    return "\n".join(f"- {label}: {value}" for label, value in pairs)


def _order_lines(items: List[Dict[str, Any]]) -> List[tuple]:
    return [
        (item["name"], f"{item['quantity']} x {rupees(item['price'])} = {rupees(Decimal(item['price']) * item['quantity'])}")
        for item in items
    ]


def order_confirmation(order: Dict[str, Any]) -> EmailMessage:
    """Customer-facing confirmation for a placed order"""
    method = PAYMENT_METHOD_LABELS.get(order.get("payment_method"), order.get("payment_method") or "")
    summary = [
        ("Order ID", order["id"]),
        ("Tracking ID", order.get("tracking_id") or ""),
        ("Payment Method", method),
        ("Payment Status", order.get("payment_status", "pending")),
        ("Total", rupees(order["total"])),
        ("Shipping Address", f"{order['shipping_address']} - {order['pincode']}"),
    ]
    items = _order_lines(order.get("items", []))
    subject = f"Order Confirmation #{order['id']} - {STORE_NAME}"
    text = (
        f"Dear {order['customer_name']},\n\n"
        f"Thank you for shopping with {STORE_NAME}. Your order has been placed.\n\n"
        f"{_lines(summary)}\n\nItems:\n{_lines(items)}\n\n"
        f"Questions? Call {SUPPORT_PHONE} or write to {SUPPORT_EMAIL}.\n"
    )
    html = _page(
        "Order Confirmed",
        f"<p>Dear {escape(order['customer_name'])},</p>"
        f"<p>Thank you for shopping with {STORE_NAME}. Your order has been placed.</p>"
        f"{_rows(summary)}<h3>Items</h3>{_rows(items)}",
    )
    return EmailMessage(to=order["customer_email"], subject=subject, text=text, html=html)


def admin_order_notification(order: Dict[str, Any], admin_email: str) -> EmailMessage:
    method = PAYMENT_METHOD_LABELS.get(order.get("payment_method"), order.get("payment_method") or "")
    details = [
        ("Order ID", order["id"]),
        ("Customer", order["customer_name"]),
        ("Email", order.get("customer_email") or "Not provided"),
        ("Phone", order["customer_phone"]),
        ("Address", f"{order['shipping_address']} - {order['pincode']}"),
        ("Payment Method", method),
        ("Payment Status", order.get("payment_status", "pending")),
        ("Gateway Payment ID", order.get("razorpay_payment_id") or "N/A"),
        ("Total", rupees(order["total"])),
    ]
    items = _order_lines(order.get("items", []))
    subject = f"New Order Received - {order['customer_name']} - {rupees(order['total'])}"
    text = f"New order received\n\n{_lines(details)}\n\nItems:\n{_lines(items)}\n"
    html = _page("New Order Received", f"{_rows(details)}<h3>Items</h3>{_rows(items)}")
    return EmailMessage(to=admin_email, subject=subject, text=text, html=html)


def _meeting_label(meeting_type: Optional[str]) -> str:
    return (meeting_type or "virtual_showroom").replace("_", " ").title()


def meeting_confirmation(meeting: Dict[str, Any]) -> EmailMessage:
    when = showroom_time(meeting["appointment_date"])
    details = [
        ("Meeting ID", meeting["meeting_id"]),
        ("Date", when.strftime("%A, %d %B %Y")),
        ("Time", f"{when.strftime('%H:%M')} IST"),
        ("Type", _meeting_label(meeting.get("meeting_type"))),
        ("Duration", f"{meeting.get('duration', 30)} minutes"),
        ("Meeting Link", meeting.get("meeting_link") or ""),
    ]
    subject = f"Your Virtual Meeting is Confirmed - {STORE_NAME}"
    text = (
        f"Dear {meeting['customer_name']},\n\n"
        f"Your virtual consultation with {STORE_NAME} is booked.\n\n{_lines(details)}\n\n"
        "Please join a few minutes early from a quiet, well lit place.\n"
    )
    html = _page(
        "Meeting Confirmed",
        f"<p>Dear {escape(meeting['customer_name'])},</p>"
        f"<p>Your virtual consultation with {STORE_NAME} is booked.</p>{_rows(details)}",
    )
    return EmailMessage(to=meeting["customer_email"], subject=subject, text=text, html=html)


def admin_meeting_notification(meeting: Dict[str, Any], admin_email: str) -> EmailMessage:
    when = showroom_time(meeting["appointment_date"])
    details = [
        ("Meeting ID", meeting["meeting_id"]),
        ("Customer", meeting["customer_name"]),
        ("Email", meeting["customer_email"]),
        ("Phone", meeting.get("customer_phone") or "Not provided"),
        ("Date", when.strftime("%A, %d %B %Y")),
        ("Time", f"{when.strftime('%H:%M')} IST"),
        ("Type", _meeting_label(meeting.get("meeting_type"))),
    ]
    if meeting.get("notes"):
        details.append(("Customer Notes", meeting["notes"]))
    subject = f"New Virtual Meeting Booking - {meeting['customer_name']}"
    text = f"New virtual meeting booking\n\n{_lines(details)}\n\nAction required: prepare for the consultation.\n"
    html = _page("New Virtual Meeting Booking", _rows(details))
    return EmailMessage(to=admin_email, subject=subject, text=text, html=html)


def ticket_confirmation(ticket: Dict[str, Any]) -> EmailMessage:
    details = [
        ("Ticket", ticket["ticket_number"]),
        ("Subject", ticket["subject"]),
        ("Priority", ticket.get("priority", "medium")),
    ]
    subject = f"Support Ticket {ticket['ticket_number']} Received - {STORE_NAME}"
    text = (
        f"Dear {ticket['customer_name']},\n\n"
        f"We received your request and will get back to you within 24 hours.\n\n{_lines(details)}\n"
    )
    html = _page(
        "Support Ticket Received",
        f"<p>Dear {escape(ticket['customer_name'])},</p>"
        f"<p>We received your request and will get back to you within 24 hours.</p>{_rows(details)}",
    )
    return EmailMessage(to=ticket["customer_email"], subject=subject, text=text, html=html)


def contact_inquiry_notification(inquiry: Dict[str, Any], admin_email: str) -> EmailMessage:
    name = f"{inquiry['first_name']} {inquiry['last_name']}"
    details = [
        ("Name", name),
        ("Email", inquiry["email"]),
        ("Phone", inquiry.get("phone") or "Not provided"),
        ("Inquiry Type", inquiry["inquiry_type"]),
        ("Message", inquiry["message"]),
    ]
    subject = f"New Contact Inquiry - {inquiry['inquiry_type']} - {name}"
    text = f"New contact inquiry\n\n{_lines(details)}\n"
    html = _page("New Contact Inquiry", _rows(details))
    return EmailMessage(to=admin_email, subject=subject, text=text, html=html)
