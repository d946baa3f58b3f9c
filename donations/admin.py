# donations/admin.py
from django.contrib import admin
from django.utils import timezone
from django.utils.html import format_html

from .models import Donation, DonationRequest, DonorResponse


@admin.register(Donation)
class DonationAdmin(admin.ModelAdmin):
    list_display = ['id', 'donor', 'recipient', 'hospital', 'blood_type', 'status', 'emergency_level', 'scheduled_date']
    list_filter = ['status', 'emergency_level', 'blood_type', 'created_at']
    search_fields = ['donor__username', 'recipient__username', 'hospital__name']
    readonly_fields = ['request_date', 'scheduled_date', 'completed_date', 'cancelled_date', 'created_at', 'updated_at']

    fieldsets = (
        ('Donation', {
            'fields': ('donor', 'recipient', 'hospital', 'blood_type', 'status', 'emergency_level', 'notes')
        }),
        ('Timeline', {
            'fields': ('request_date', 'scheduled_date', 'completed_date', 'cancelled_date'),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )


class DonorResponseInline(admin.TabularInline):
    model = DonorResponse
    extra = 0
    readonly_fields = ['responded_at']


@admin.register(DonationRequest)
class DonationRequestAdmin(admin.ModelAdmin):
    list_display = [
        'id',
        'requester',
        'patient_name',
        'blood_type',
        'urgency',
        'status_badge',
        'response_count',
        'expiry_date',
    ]
    list_filter = ['status', 'urgency', 'blood_type', 'created_at']
    search_fields = ['patient_name', 'requester__username', 'hospital__name', 'city_id']
    readonly_fields = ['fulfilled_at', 'cancelled_at', 'created_at', 'updated_at']
    inlines = [DonorResponseInline]

    fieldsets = (
        ('Request Information', {
            'fields': ('requester', 'donor', 'hospital', 'patient_name', 'blood_type', 'urgency', 'status', 'notes')
        }),
        ('Location', {
            'fields': ('latitude', 'longitude', 'city_id')
        }),
        ('Timeline', {
            'fields': ('expiry_date', 'fulfilled_at', 'cancelled_at', 'created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    actions = ['expire_selected']

    def status_badge(self, obj):
        colors = {
            'Active': 'orange',
            'Fulfilled': 'green',
            'Expired': 'gray',
            'Cancelled': 'red',
        }
        return format_html('<strong style="color: {};">{}</strong>', colors.get(obj.status, 'black'), obj.status)
    status_badge.short_description = 'Status'

    def response_count(self, obj):
        return obj.responses.count()
    response_count.short_description = 'Responses'

    @admin.action(description='Expire selected active requests')
    def expire_selected(self, request, queryset):
        updated = queryset.filter(status='Active').update(status='Expired', updated_at=timezone.now())
        self.message_user(request, f"{updated} request(s) marked as expired.")
