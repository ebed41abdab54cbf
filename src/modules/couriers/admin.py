from django.contrib import admin

from modules.couriers.models import CourierProfile


@admin.register(CourierProfile)
class CourierProfileAdmin(admin.ModelAdmin):
    list_display = ("user", "first_name", "last_name", "phone", "is_active", "is_available")
    list_filter = ("is_active", "is_available")
    search_fields = ("first_name", "last_name", "phone", "user__email")
