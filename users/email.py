import logging

from django.conf import settings
from django.core.mail import send_mail

logger = logging.getLogger(__name__)


def send_notification(subject, message, recipients):
    """
    Sends a plain-text email. Returns True on success; failures are logged
    and never propagated to the caller's request.
    """
    recipients = [r for r in recipients if r]
    if not recipients:
        logger.warning(f"No recipients for '{subject}', skipping email")
        return False

    try:
        send_mail(subject, message, settings.DEFAULT_FROM_EMAIL, recipients, fail_silently=False)
    except Exception as e:
        logger.error(f"Failed to send '{subject}' to {recipients}: {e}")
        return False

    logger.info(f"Sent '{subject}' to {recipients}")
    return True


def notify_admin_of_new_farmer(farmer):
    subject = f"New farmer registration: {farmer.name}"
    message = (
        f"A new farmer has registered and is waiting for approval.\n\n"
        f"Name: {farmer.name}\n"
        f"Email: {farmer.email}\n\n"
        f"Review pending farmers at {settings.FRONTEND_BASE_URL}/admin/farmers"
    )
    return send_notification(subject, message, [settings.ADMIN_EMAIL])


def notify_farmer_of_approval(farmer):
    subject = "Your farmer account has been approved"
    message = (
        f"Hi {farmer.name},\n\n"
        "Good news! Your account has been approved and you can now log in and list your products.\n\n"
        f"{settings.FRONTEND_BASE_URL}/login"
    )
    return send_notification(subject, message, [farmer.email])


def notify_farmer_of_rejection(farmer, reason=None):
    subject = "Your farmer account application"
    message = (
        f"Hi {farmer.name},\n\n"
        "Unfortunately your farmer account was not approved at this time.\n"
    )
    if reason:
        message += f"\nReason: {reason}\n"
    return send_notification(subject, message, [farmer.email])
