from rest_framework import status
from rest_framework.exceptions import APIException


class CheckoutError(APIException):
    """The cart can't be turned into an order in its current state."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Checkout failed'
    default_code = 'invalid_state'
