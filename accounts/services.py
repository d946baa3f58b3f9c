# accounts/services.py
import logging

from django.contrib.auth import authenticate, get_user_model
from django.db import transaction
from django.db.models import Q

from redhope.exceptions import ConflictError
from .models import AdminAccount

User = get_user_model()

logger = logging.getLogger(__name__)


def ensure_unique_identity(model, username=None, email=None, exclude_pk=None):
    """Raise ConflictError when username or email is already taken in model's table."""
    queryset = model.objects.all()
    if exclude_pk is not None:
        queryset = queryset.exclude(pk=exclude_pk)

    if email and queryset.filter(email__iexact=email.strip()).exists():
        raise ConflictError('Email is already registered')
    if username and queryset.filter(username=username).exists():
        raise ConflictError('Username is already taken')


@transaction.atomic
def register_user(data, role='user'):
    """Create a regular user from validated registration data."""
    data = dict(data)
    password = data.pop('password')
    username = data.pop('username')
    email = data.pop('email').strip().lower()
    role = data.pop('role', role)

    # Login checks admin accounts first, so their identities are reserved too
    ensure_unique_identity(User, username=username, email=email)
    ensure_unique_identity(AdminAccount, username=username, email=email)

    user = User(username=username, email=email, role=role)
    for field, value in data.items():
        setattr(user, field, value)
    user.set_password(password)
    user.save()

    logger.info("Registered user %s (%s)", user.username, user.pk)
    return user


def authenticate_account(identifier, password, request=None):
    """
    Resolve login credentials to an account.

    Admin accounts are checked first, then regular users through the
    authentication backends. Returns None when nothing matches.
    """
    admin = AdminAccount.objects.filter(
        Q(email__iexact=identifier) | Q(username=identifier)
    ).first()
    if admin is not None:
        if admin.is_active and admin.check_password(password):
            admin.record_login()
            return admin
        return None

    return authenticate(request, username=identifier, password=password)


@transaction.atomic
def update_user(user, data):
    """Apply validated profile data to a user, enforcing unique username/email."""
    ensure_unique_identity(
        User,
        username=data.get('username') if data.get('username') != user.username else None,
        email=data.get('email') if data.get('email') and data['email'].lower() != user.email else None,
        exclude_pk=user.pk,
    )

    if 'city_id' in data and data['city_id'] != user.city_id:
        user.set_city(data.pop('city_id'))

    for field, value in data.items():
        setattr(user, field, value)
    user.save()
    return user


@transaction.atomic
def save_admin_account(data, account=None):
    """Create or update an AdminAccount from AdminAccountWriteSerializer data."""
    data = dict(data)
    permissions = data.pop('permissions', None) or {}
    password = data.pop('password', None)

    if account is None:
        ensure_unique_identity(AdminAccount, username=data.get('username'), email=data.get('email'))
        account = AdminAccount()
    else:
        ensure_unique_identity(
            AdminAccount,
            username=data.get('username'),
            email=data.get('email'),
            exclude_pk=account.pk,
        )

    for field, value in data.items():
        setattr(account, field, value)
    for flag, enabled in permissions.items():
        setattr(account, flag, enabled)
    if password:
        account.set_password(password)

    account.save()
    return account
