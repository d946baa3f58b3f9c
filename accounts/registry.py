# accounts/registry.py
"""
Account lookup across the two account tables.

Tokens carry an account id and a role. Admin-role tokens may point at an
AdminAccount or at a User promoted to admin, so lookup walks an ordered list
of stores and returns the first hit. The stores are installed once by
AccountsConfig.ready().
"""
import logging

from django.core.exceptions import ValidationError

logger = logging.getLogger(__name__)


class AccountStore:
    """One account model plus the roles it can hold."""

    def __init__(self, model, roles):
        self.model = model
        self.roles = tuple(roles)

    def __repr__(self):
        return f"AccountStore({self.model.__name__}, roles={self.roles})"

    def handles(self, role):
        return role is None or role in self.roles

    def find_by_id(self, account_id):
        try:
            return self.model.objects.filter(pk=account_id).first()
        except (ValidationError, ValueError, TypeError):
            # Not a valid primary key for this table
            return None

    def find_by_email(self, email):
        return self.model.objects.filter(email__iexact=email).first()


class AccountRegistry:

    def __init__(self, stores=None):
        self._stores = list(stores or [])

    @property
    def stores(self):
        return tuple(self._stores)

    def configure(self, stores):
        self._stores = list(stores)
        logger.debug("Account stores configured: %s", self._stores)

    def find_account_by_id(self, account_id, role=None):
        if not account_id:
            return None
        for store in self._stores:
            if not store.handles(role):
                continue
            account = store.find_by_id(account_id)
            if account is not None:
                return account
        return None

    def find_account_by_email(self, email):
        if not email:
            return None
        email = email.strip()
        for store in self._stores:
            account = store.find_by_email(email)
            if account is not None:
                return account
        return None


registry = AccountRegistry()


def find_account_by_id(account_id, role=None):
    return registry.find_account_by_id(account_id, role)


def find_account_by_email(email):
    return registry.find_account_by_email(email)
