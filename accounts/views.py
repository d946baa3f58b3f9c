import logging

from django.contrib.auth import get_user_model
from django.db.models import Q
from django.shortcuts import get_object_or_404
from django.utils import timezone
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import AuthenticationFailed, PermissionDenied, ValidationError
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from redhope.pagination import paginate_queryset
from .models import ADMIN_PERMISSION_FLAGS, ADMIN_ROLES, AdminAccount
from .permissions import HasAdminPermission, IsAdminRole
from .serializers import (
    AdminAccountSerializer,
    AdminAccountWriteSerializer,
    AdminUserCreateSerializer,
    AdminUserUpdateSerializer,
    ChangePasswordSerializer,
    LoginSerializer,
    ProfileUpdateSerializer,
    RegisterSerializer,
    UserSerializer,
)
from .services import authenticate_account, register_user, save_admin_account, update_user
from .tokens import get_tokens_for_account, refresh_tokens

User = get_user_model()

logger = logging.getLogger(__name__)


def account_summary(account):
    return {
        'id': str(account.pk),
        'username': account.username,
        'email': account.email,
        'role': account.role,
        'isAdmin': account.is_admin,
    }


def _require_user(request):
    """Endpoints under /user/ act on regular User rows only."""
    if not isinstance(request.user, User):
        raise ValidationError('This endpoint is only available to user accounts')
    return request.user


# -----------------------------
# REGISTER API
# -----------------------------
@api_view(['POST'])
@permission_classes([AllowAny])
def register(request):
    """
    Registers a user and returns JWT tokens
    """
    serializer = RegisterSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    user = register_user(serializer.validated_data)
    tokens = get_tokens_for_account(user)

    return Response(
        {
            'success': True,
            'message': 'Registration successful',
            **tokens,
            'user': account_summary(user),
        },
        status=status.HTTP_201_CREATED,
    )


# -----------------------------
# LOGIN API
# -----------------------------
@api_view(['POST'])
@permission_classes([AllowAny])
def login(request):
    """
    JWT login with email or username; admin accounts are checked first
    """
    serializer = LoginSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    account = authenticate_account(
        serializer.validated_data['identifier'],
        serializer.validated_data['password'],
        request=request,
    )
    if account is None:
        logger.info("Failed login for %s", serializer.validated_data['identifier'])
        raise AuthenticationFailed('Invalid credentials')

    return Response({
        'success': True,
        'message': 'Login successful',
        **get_tokens_for_account(account),
        'user': account_summary(account),
    })


@api_view(['GET', 'POST'])
@permission_classes([AllowAny])
def logout(request):
    """Tokens are stateless; the client discards them."""
    return Response({'success': True, 'message': 'Logged out successfully'})


@api_view(['POST'])
@permission_classes([AllowAny])
def refresh_token(request):
    raw = request.data.get('refreshToken') or request.data.get('refresh')
    if not raw:
        raise ValidationError('refreshToken is required')

    account, tokens = refresh_tokens(raw)
    return Response({'success': True, **tokens, 'user': account_summary(account)})


# ========================================
# USER PROFILE
# ========================================
@api_view(['GET', 'PUT'])
@permission_classes([IsAuthenticated])
def profile(request):
    user = _require_user(request)

    if request.method == 'PUT':
        serializer = ProfileUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        user = update_user(user, serializer.validated_data)
        return Response({
            'success': True,
            'message': 'Profile updated successfully',
            'user': UserSerializer(user).data,
        })

    return Response({'success': True, 'user': UserSerializer(user).data})


@api_view(['PUT'])
@permission_classes([IsAuthenticated])
def change_password(request):
    user = _require_user(request)

    serializer = ChangePasswordSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    if not user.check_password(serializer.validated_data['currentPassword']):
        raise ValidationError({'currentPassword': 'Current password is incorrect'})

    user.set_password(serializer.validated_data['newPassword'])
    user.save(update_fields=['password'])
    logger.info("Password changed for user %s", user.pk)

    return Response({'success': True, 'message': 'Password changed successfully'})


@api_view(['DELETE'])
@permission_classes([IsAuthenticated])
def delete_account(request):
    user = _require_user(request)
    user_id = user.pk
    user.delete()
    logger.info("User %s deleted their account", user_id)
    return Response({'success': True, 'message': 'Account deleted successfully'})


# ========================================
# ADMIN: PROFILE & STATS
# ========================================
@api_view(['GET'])
@permission_classes([IsAdminRole])
def admin_profile(request):
    account = request.user
    return Response({
        'success': True,
        'admin': {
            **account_summary(account),
            'permissions': {flag: account.has_admin_permission(flag) for flag in ADMIN_PERMISSION_FLAGS},
            'lastLogin': account.last_login,
        },
    })


@api_view(['GET'])
@permission_classes([HasAdminPermission('view_reports')])
def admin_stats(request):
    return Response({
        'success': True,
        'totalUsers': User.objects.count(),
        'totalDonors': User.objects.filter(is_donor=True).count(),
        'totalAdmins': AdminAccount.objects.count(),
        'lastUpdated': timezone.now(),
    })


# ========================================
# ADMIN: ADMIN ACCOUNTS
# ========================================
@api_view(['GET', 'POST'])
@permission_classes([HasAdminPermission('manage_admins')])
def admin_accounts(request):
    if request.method == 'POST':
        serializer = AdminAccountWriteSerializer(data=request.data, context={'creating': True})
        serializer.is_valid(raise_exception=True)
        account = save_admin_account(serializer.validated_data)
        logger.info("Admin account %s created by %s", account.username, request.user.username)
        return Response(
            {
                'success': True,
                'message': 'Admin account created successfully',
                'admin': AdminAccountSerializer(account).data,
            },
            status=status.HTTP_201_CREATED,
        )

    queryset = AdminAccount.objects.all()
    search = request.query_params.get('search', '').strip()
    if search:
        queryset = queryset.filter(Q(username__icontains=search) | Q(email__icontains=search))
    role = request.query_params.get('role')
    if role:
        queryset = queryset.filter(role=role)

    return paginate_queryset(request, queryset, AdminAccountSerializer)


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([HasAdminPermission('manage_admins')])
def admin_account_detail(request, account_id):
    account = get_object_or_404(AdminAccount, pk=account_id)

    if request.method == 'DELETE':
        if account.pk == request.user.pk:
            raise ValidationError('You cannot delete your own admin account')
        account.delete()
        return Response({
            'success': True,
            'message': 'Admin account deleted successfully',
            'deletedAdminId': str(account_id),
        })

    if request.method == 'PUT':
        serializer = AdminAccountWriteSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        account = save_admin_account(serializer.validated_data, account=account)
        return Response({
            'success': True,
            'message': 'Admin account updated successfully',
            'admin': AdminAccountSerializer(account).data,
        })

    return Response({'success': True, 'admin': AdminAccountSerializer(account).data})


# ========================================
# ADMIN: USER MANAGEMENT
# ========================================
def _require_role_grant(request, role=None, target=None):
    """Granting an admin role, or touching an admin user, needs manage_admins."""
    if role in ADMIN_ROLES or (target is not None and target.is_admin):
        if not request.user.has_admin_permission('manage_admins'):
            raise PermissionDenied('Permission denied: manage_admins required')


@api_view(['GET', 'POST'])
@permission_classes([HasAdminPermission('manage_users')])
def admin_users(request):
    if request.method == 'POST':
        serializer = AdminUserCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        _require_role_grant(request, role=serializer.validated_data.get('role'))
        user = register_user(serializer.validated_data)
        return Response(
            {'success': True, 'message': 'User created successfully', 'user': UserSerializer(user).data},
            status=status.HTTP_201_CREATED,
        )

    queryset = User.objects.all()

    search = request.query_params.get('search', '').strip()
    if search:
        queryset = queryset.filter(
            Q(username__icontains=search)
            | Q(email__icontains=search)
            | Q(first_name__icontains=search)
            | Q(last_name__icontains=search)
        )

    role = request.query_params.get('role')
    if role:
        queryset = queryset.filter(role=role)

    blood_type = request.query_params.get('bloodType')
    if blood_type:
        queryset = queryset.filter(blood_type=blood_type)

    is_donor = request.query_params.get('isDonor')
    if is_donor in ('true', 'false'):
        queryset = queryset.filter(is_donor=is_donor == 'true')

    return paginate_queryset(request, queryset, UserSerializer)


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([HasAdminPermission('manage_users')])
def admin_user_detail(request, user_id):
    user = get_object_or_404(User, pk=user_id)

    if request.method == 'DELETE':
        _require_role_grant(request, target=user)
        user.delete()
        logger.info("User %s deleted by admin %s", user_id, request.user.username)
        return Response({'success': True, 'message': 'User deleted successfully'})

    if request.method == 'PUT':
        serializer = AdminUserUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        _require_role_grant(request, role=serializer.validated_data.get('role'), target=user)
        user = update_user(user, serializer.validated_data)
        return Response({
            'success': True,
            'message': 'User updated successfully',
            'user': UserSerializer(user).data,
        })

    return Response({'success': True, 'user': UserSerializer(user).data})
