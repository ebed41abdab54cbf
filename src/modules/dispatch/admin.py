from django.contrib import admin, messages
from django.db import DatabaseError

from modules.dispatch.models import Assignment
from modules.dispatch.repositories.django_repository import AssignmentDjangoRepository
from modules.dispatch.synchronizer import AssignmentSynchronizer
from modules.upstream.mirror import UpstreamMirror


@admin.register(Assignment)
class AssignmentAdmin(admin.ModelAdmin):
    """Assignment admin; saves go through the synchronizer so edits mirror upstream."""

    list_display = (
        "order",
        "status",
        "assignment_type",
        "courier_name",
        "customer_name",
        "updated_at",
    )
    list_filter = ("status", "assignment_type")
    search_fields = ("order__id", "courier_id", "courier_name", "customer_name")
    readonly_fields = ("created_at", "updated_at")

    def save_model(self, request, obj, form, change):
        fields = {
            name: getattr(obj, name) for name in form.fields if name != "order"
        }
        synchronizer = AssignmentSynchronizer(
            AssignmentDjangoRepository(), UpstreamMirror()
        )
        result = synchronizer.save(obj.order_id, fields, context="admin")
        if not result.write:
            raise DatabaseError(result.write.error)
        if result.mirror is not None and not result.mirror:
            self.message_user(
                request,
                f"Saved locally, but the upstream was not updated: {result.mirror.error}",
                level=messages.WARNING,
            )
