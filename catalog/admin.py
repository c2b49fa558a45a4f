from django.contrib import admin

from .models import Category, Panchayath


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ('name', 'actual_fee', 'offer_fee', 'is_active', 'created_at')
    list_filter = ('is_active',)
    search_fields = ('name', 'description')
    actions = ['activate', 'deactivate']

    def has_delete_permission(self, request, obj=None):
        # Deactivate instead; registrations refer to categories by name.
        return False

    @admin.action(description='Activate selected categories')
    def activate(self, request, queryset):
        updated = queryset.update(is_active=True)
        self.message_user(request, f"{updated} categories activated.")

    @admin.action(description='Deactivate selected categories')
    def deactivate(self, request, queryset):
        updated = queryset.update(is_active=False)
        self.message_user(request, f"{updated} categories deactivated.")


@admin.register(Panchayath)
class PanchayathAdmin(admin.ModelAdmin):
    list_display = ('name', 'district', 'created_at')
    list_filter = ('district',)
    search_fields = ('name', 'district')
