import asyncio

import pytest

from fakes import FakeSMTP
from studio_gateway.schemas import Booking
from studio_gateway.services.mailer import BookingMailer, long_date

BOOKING = Booking.model_validate({
    "id": 3,
    "firstName": "Grace",
    "lastName": "Hopper",
    "email": "grace@example.com",
    "phone": "555-0199",
    "serviceType": "Portrait Session",
    "date": "2026-06-01",
    "time": "10:30",
    "guests": 2,
    "message": "Outdoor if possible",
    "status": "pending",
})


def test_booking_reads_camel_case_and_normalizes():
    booking = Booking.model_validate({"firstName": "A", "lastName": None, "status": "CONFIRMED", "guests": None})

    assert booking.first_name == "A"
    assert booking.last_name == ""
    assert booking.guests == ""
    assert booking.status == "confirmed"


def test_booking_status_defaults_to_pending():
    assert Booking.model_validate({"status": None}).status == "pending"


def test_long_date():
    assert long_date("2026-06-01") == "Monday, June 1, 2026"
    assert long_date("not a date") == "not a date"
    assert long_date("") == ""


@pytest.mark.parametrize(
    "email_type, subject, heading",
    [
        ("confirmation", "Booking Confirmation - Portrait Session", "Booking Confirmed!"),
        ("update", "Booking Update - Portrait Session", "Your Booking Has Been Updated"),
        ("cancellation", "Booking Cancellation - Portrait Session", "Booking Cancellation Notice"),
        ("custom", "Message Regarding Your Booking - Portrait Session", "Update on Your Booking"),
    ],
)
def test_notification_subject_and_heading(mailer, email_type, subject, heading):
    email = mailer.render_notification(BOOKING, "", email_type)

    assert email.subject == subject
    assert heading in email.html


def test_notification_embeds_booking_details(mailer):
    email = mailer.render_notification(BOOKING, "Bring a jacket.", "confirmation")

    for value in ("Grace", "Hopper", "Portrait Session", "2026-06-01", "10:30", "Bring a jacket."):
        assert value in email.html
    # pending badge colours
    assert "#fff3cd" in email.html
    assert "G-Limit Studio" in email.html


def test_notification_skips_empty_custom_message(mailer):
    email = mailer.render_notification(BOOKING, "", "custom")

    assert "border-left: 4px solid #667eea" not in email.html


def test_notification_escapes_html(mailer):
    booking = BOOKING.model_copy(update={"first_name": "<b>Eve</b>"})

    email = mailer.render_notification(booking, "<script>alert(1)</script>", "update")

    assert "<script>" not in email.html
    assert "&lt;script&gt;alert(1)&lt;/script&gt;" in email.html
    assert "&lt;b&gt;Eve&lt;/b&gt;" in email.html


def test_notification_rejects_unknown_type(mailer):
    with pytest.raises(ValueError):
        mailer.render_notification(BOOKING, "", "newsletter")


def test_booking_received_email(mailer):
    email = mailer.render_booking_received(BOOKING)

    assert email.subject == "Booking Confirmation - G-Limit Studio"
    assert "Monday, June 1, 2026" in email.html
    assert "Outdoor if possible" in email.html


def test_admin_notification_email(mailer):
    email = mailer.render_admin_notification(BOOKING)

    assert email.subject == "New Booking Request - Grace Hopper"
    assert "grace@example.com" in email.html


def test_status_update_email(mailer):
    booking = BOOKING.model_copy(update={"status": "cancelled"})

    email = mailer.render_status_update(booking, "pending")

    assert email.subject == "Booking Status Update - Cancelled"
    assert "pending" in email.html
    assert "#fee2e2" in email.html


def test_send_builds_multipart_message(mailer, smtp_connections):
    email = mailer.render_booking_approved(BOOKING)

    message_id = mailer.send("grace@example.com", email, "G-Limit Studio", "studio@glimit.test")

    connection = smtp_connections[0]
    message = connection.sent[0]
    assert connection.host == "smtp.glimit.test"
    assert connection.port == 587
    assert message["Message-ID"] == message_id
    assert message["From"] == "G-Limit Studio <studio@glimit.test>"
    assert message.get_content_type() == "multipart/alternative"
    assert "Booking Approved" in message["Subject"]


def test_send_skips_starttls_on_implicit_tls(smtp_connections):
    def factory(host, port, secure, timeout):
        connection = FakeSMTP(host, port, secure, timeout)
        smtp_connections.append(connection)
        return connection

    mailer = BookingMailer(host="smtp.glimit.test", port=465, secure=True, smtp_factory=factory)

    mailer.send("grace@example.com", mailer.render_booking_approved(BOOKING), "Studio", "studio@glimit.test")

    assert smtp_connections[0].started_tls is False
    assert smtp_connections[0].login_args is None


def test_send_requires_recipient(mailer):
    with pytest.raises(ValueError):
        mailer.send("", mailer.render_booking_approved(BOOKING), "Studio", "studio@glimit.test")


def test_delivery_helpers_report_success(mailer, smtp_connections):
    result = asyncio.run(mailer.send_admin_notification(BOOKING))

    assert result == {"success": True}
    assert smtp_connections[0].sent[0]["To"] == "admin@glimit.test"


def test_delivery_helpers_report_failure():
    def failing_factory(host, port, secure, timeout):
        raise OSError("Network is unreachable")

    mailer = BookingMailer(host="smtp.glimit.test", smtp_factory=failing_factory)

    result = asyncio.run(mailer.send_booking_received(BOOKING))

    assert result == {"success": False, "error": "Network is unreachable"}


def test_delivery_helpers_send_under_photography_name(mailer, smtp_connections):
    result = asyncio.run(mailer.send_booking_approved(BOOKING))

    assert result == {"success": True}
    message = smtp_connections[0].sent[0]
    assert message["From"] == "G-Limit Photography <studio@glimit.test>"
    assert message["To"] == "grace@example.com"


def test_sender_name_is_configurable(smtp_connections):
    def factory(host, port, secure, timeout):
        connection = FakeSMTP(host, port, secure, timeout)
        smtp_connections.append(connection)
        return connection

    mailer = BookingMailer(
        host="smtp.glimit.test", user="studio@glimit.test", sender_name="Studio Desk", smtp_factory=factory
    )

    asyncio.run(mailer.send_status_update(BOOKING, "confirmed"))

    assert smtp_connections[0].sent[0]["From"] == "Studio Desk <studio@glimit.test>"
