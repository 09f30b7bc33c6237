from django.conf import settings
from rest_framework_simplejwt.authentication import JWTAuthentication


class CookieJWTAuthentication(JWTAuthentication):
    """
    Reads the access token from the `Authorization: Bearer` header first and
    falls back to the http-only cookie set at login.
    """

    def authenticate(self, request):
        header = self.get_header(request)
        if header is not None:
            raw_token = self.get_raw_token(header)
        else:
            raw_token = request.COOKIES.get(settings.JWT_COOKIE_NAME)

        if not raw_token:
            return None

        if isinstance(raw_token, str):
            raw_token = raw_token.encode()

        validated_token = self.get_validated_token(raw_token)
        return self.get_user(validated_token), validated_token
