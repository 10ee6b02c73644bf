from django.contrib import admin

from src.accounts.models import Account


@admin.register(Account)
class AccountAdmin(admin.ModelAdmin):
    """Read-only: accounts are created by the registration flow only."""

    list_display = ("address", "display_name", "created_at")
    search_fields = ("address", "display_name")
    readonly_fields = ("address", "display_name", "password_hash", "created_at")
    ordering = ("-created_at",)

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
