from django.apps import AppConfig


class AccountsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'accounts'

    def ready(self):
        from .models import ADMIN_ROLES, AdminAccount, User
        from .registry import AccountStore, registry

        # Admin table first: admin-role tokens usually point there
        registry.configure([
            AccountStore(AdminAccount, ADMIN_ROLES),
            AccountStore(User, [role for role, _ in User.ROLE_CHOICES]),
        ])
