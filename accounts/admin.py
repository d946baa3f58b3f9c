from django.contrib import admin
from django.contrib.auth.admin import UserAdmin

from .models import AdminAccount, User


@admin.register(User)
class RedHopeUserAdmin(UserAdmin):
    list_display = ('username', 'email', 'role', 'blood_type', 'is_donor', 'city_id', 'is_active')
    search_fields = ('username', 'email', 'first_name', 'last_name', 'phone_number')
    list_filter = ('role', 'blood_type', 'is_donor', 'is_active')
    ordering = ('-date_joined',)

    fieldsets = UserAdmin.fieldsets + (
        ('Donor Profile', {
            'fields': ('role', 'blood_type', 'is_donor', 'phone_number', 'date_of_birth', 'gender', 'address')
        }),
        ('Location', {
            'fields': ('latitude', 'longitude', 'city_id', 'last_city_update')
        }),
    )


@admin.register(AdminAccount)
class AdminAccountAdmin(admin.ModelAdmin):
    list_display = ('username', 'email', 'role', 'is_active', 'last_login', 'created_at')
    search_fields = ('username', 'email')
    list_filter = ('role', 'is_active')
    readonly_fields = ('password', 'last_login', 'created_at', 'updated_at')

    fieldsets = (
        ('Account', {
            'fields': ('username', 'email', 'password', 'role', 'is_active')
        }),
        ('Permissions', {
            'fields': ('manage_users', 'manage_hospitals', 'manage_content', 'view_reports', 'manage_admins')
        }),
        ('Timestamps', {
            'fields': ('last_login', 'created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    actions = ['deactivate_accounts']

    @admin.action(description='Deactivate selected admin accounts')
    def deactivate_accounts(self, request, queryset):
        updated = queryset.update(is_active=False)
        self.message_user(request, f"{updated} admin account(s) deactivated.")
