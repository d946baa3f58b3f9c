# accounts/authentication.py
from rest_framework.exceptions import AuthenticationFailed
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import InvalidToken
from rest_framework_simplejwt.settings import api_settings

from .registry import find_account_by_id


class AccountJWTAuthentication(JWTAuthentication):
    """
    Bearer-token authentication for both account tables.

    The token's user_id and role claims are resolved through the account
    registry instead of AUTH_USER_MODEL only.
    """

    def get_user(self, validated_token):
        try:
            account_id = validated_token[api_settings.USER_ID_CLAIM]
        except KeyError:
            raise InvalidToken('Token contained no recognizable user identification')

        account = find_account_by_id(account_id, validated_token.get('role'))
        if account is None:
            raise AuthenticationFailed('User not found', code='user_not_found')

        if not account.is_active:
            raise AuthenticationFailed('User is inactive', code='user_inactive')

        return account
