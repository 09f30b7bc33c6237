from django.contrib import admin
from django.contrib.auth.admin import UserAdmin
from django.db.models import Count

from .email import notify_farmer_of_approval
from .models import CustomUser


@admin.register(CustomUser)
class CustomUserAdmin(UserAdmin):
    model = CustomUser
    list_display = ('email', 'name', 'role', 'is_approved', 'product_count', 'date_joined')
    list_filter = ('role', 'is_approved', 'is_active')
    search_fields = ('email', 'name')
    ordering = ('-date_joined',)
    readonly_fields = ('last_login', 'date_joined', 'updated_at')

    fieldsets = (
        ('Account', {'fields': ('email', 'username', 'password')}),
        ('Marketplace', {'fields': ('name', 'role', 'is_approved', 'location', 'avatar')}),
        ('Django access', {'fields': ('is_active', 'is_staff', 'is_superuser')}),
        ('Dates', {'fields': ('last_login', 'date_joined', 'updated_at')}),
    )
    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('email', 'username', 'name', 'role', 'password1', 'password2'),
        }),
    )

    actions = ['approve_farmers']

    def get_queryset(self, request):
        return super().get_queryset(request).annotate(_product_count=Count('products'))

    @admin.display(description='Products', ordering='_product_count')
    def product_count(self, obj):
        return obj._product_count

    @admin.action(description="Approve selected farmers")
    def approve_farmers(self, request, queryset):
        pending = list(queryset.filter(role=CustomUser.ROLE_FARMER, is_approved=False))
        for farmer in pending:
            farmer.is_approved = True
            farmer.save(update_fields=['is_approved'])
            notify_farmer_of_approval(farmer)
        self.message_user(request, f"{len(pending)} farmers approved.")
