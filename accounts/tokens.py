# accounts/tokens.py
from rest_framework.exceptions import AuthenticationFailed
from rest_framework_simplejwt.exceptions import InvalidToken, TokenError
from rest_framework_simplejwt.settings import api_settings
from rest_framework_simplejwt.tokens import RefreshToken

from .registry import find_account_by_id


# -----------------------------
# HELPER: JWT TOKEN GENERATOR
# -----------------------------
def get_tokens_for_account(account):
    """
    Issue an access/refresh pair and embed the role in the payload.
    The role claim is copied onto the access token.
    """
    refresh = RefreshToken.for_user(account)
    refresh['role'] = account.role
    return {
        'token': str(refresh.access_token),
        'refreshToken': str(refresh),
    }


def refresh_tokens(raw_refresh_token):
    """
    Exchange a refresh token for a new pair.

    The subject is looked up again so deleted or disabled accounts
    cannot keep refreshing.
    """
    try:
        refresh = RefreshToken(raw_refresh_token)
    except TokenError as e:
        raise InvalidToken(str(e))

    account = find_account_by_id(refresh.get(api_settings.USER_ID_CLAIM), refresh.get('role'))
    if account is None or not account.is_active:
        raise AuthenticationFailed('User not found', code='user_not_found')

    return account, get_tokens_for_account(account)
