# hospitals/admin.py
from django.contrib import admin
from django.utils.html import format_html

from .models import Hospital


@admin.register(Hospital)
class HospitalAdmin(admin.ModelAdmin):
    list_display = ['name', 'structure', 'wilaya', 'region', 'telephone', 'has_location']
    list_filter = ['wilaya', 'structure']
    search_fields = ['name', 'wilaya', 'structure', 'telephone']
    readonly_fields = ['created_at', 'updated_at']

    fieldsets = (
        ('Hospital Information', {
            'fields': ('name', 'structure', 'telephone', 'fax')
        }),
        ('Location', {
            'fields': ('wilaya', 'region', 'latitude', 'longitude')
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    actions = ['resolve_regions']

    def has_location(self, obj):
        if obj.latitude is None or obj.longitude is None:
            return format_html('<span style="color: red;">{}</span>', 'missing')
        return format_html('<span style="color: green;">{}, {}</span>', obj.latitude, obj.longitude)
    has_location.short_description = 'Coordinates'

    @admin.action(description='Link selected hospitals to their wilaya')
    def resolve_regions(self, request, queryset):
        linked = 0
        for hospital in queryset.filter(region__isnull=True):
            hospital.save()
            if hospital.region_id:
                linked += 1
        self.message_user(request, f"{linked} hospital(s) linked to a wilaya.")
