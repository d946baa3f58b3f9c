from django.contrib import admin

from .models import BloodCenter, Wilaya


class BloodCenterInline(admin.TabularInline):
    model = BloodCenter
    extra = 0


@admin.register(Wilaya)
class WilayaAdmin(admin.ModelAdmin):
    list_display = ['code', 'name', 'latitude', 'longitude', 'blood_center_count']
    search_fields = ['code', 'name']
    inlines = [BloodCenterInline]

    def blood_center_count(self, obj):
        return obj.blood_centers.count()
    blood_center_count.short_description = 'Blood Centers'


@admin.register(BloodCenter)
class BloodCenterAdmin(admin.ModelAdmin):
    list_display = ['name', 'wilaya', 'latitude', 'longitude']
    list_filter = ['wilaya']
    search_fields = ['name', 'wilaya__name']
