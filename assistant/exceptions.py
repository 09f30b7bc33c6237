from rest_framework import status
from rest_framework.exceptions import APIException


class UpstreamServiceError(APIException):
    status_code = status.HTTP_502_BAD_GATEWAY
    default_detail = 'Upstream service unavailable'
    default_code = 'upstream_error'
