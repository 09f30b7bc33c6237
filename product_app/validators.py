from django.core.exceptions import ValidationError
from django.utils import timezone


def validate_expiry_date(expiry_date, today=None):
    """An expiry date, when given, may not lie before today."""
    if expiry_date is None:
        return
    today = today or timezone.localdate()
    if expiry_date < today:
        raise ValidationError("Expiry date cannot be in the past")


def validate_availability_window(start_date, end_date):
    """Equipment must become unavailable no earlier than it becomes available."""
    if start_date is None or end_date is None:
        return
    if end_date < start_date:
        raise ValidationError("End date must be after start date")


def validate_image_count(images):
    if not isinstance(images, list) or not 1 <= len(images) <= 4:
        raise ValidationError("You must upload between 1 and 4 images")
