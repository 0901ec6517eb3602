"""
Visitor identification for unique view counting.

Sets ``request.visitor_id``: the user id when the request carries a valid
JWT (or a session login), otherwise the ``visitorId`` cookie. Anonymous
visitors without the cookie get a fresh UUID4, set on the response.
"""

import uuid

from django.conf import settings
from rest_framework.exceptions import AuthenticationFailed
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import InvalidToken, TokenError


class VisitorIdMiddleware:
    def __init__(self, get_response):
        self.get_response = get_response
        self.jwt_authentication = JWTAuthentication()

    def _authenticated_user_id(self, request):
        user = getattr(request, 'user', None)
        if user is not None and user.is_authenticated:
            return str(user.id)
        try:
            result = self.jwt_authentication.authenticate(request)
        except (InvalidToken, TokenError, AuthenticationFailed):
            # Bad tokens are rejected by the view itself
            return None
        if result is None:
            return None
        return str(result[0].id)

    def __call__(self, request):
        cookie_name = settings.VISITOR_COOKIE_NAME
        new_visitor_id = None

        visitor_id = self._authenticated_user_id(request)
        if visitor_id is None:
            visitor_id = (request.COOKIES.get(cookie_name) or '').strip()[:64]
            if not visitor_id:
                visitor_id = new_visitor_id = str(uuid.uuid4())

        request.visitor_id = visitor_id
        response = self.get_response(request)

        if new_visitor_id is not None:
            response.set_cookie(
                cookie_name,
                new_visitor_id,
                max_age=settings.VISITOR_COOKIE_MAX_AGE,
                samesite='None' if not settings.DEBUG else 'Lax',
                secure=not settings.DEBUG,
            )
        return response
