from django.contrib import admin
from django.utils.html import format_html

from users.models import CustomUser
from .models import Product, Equipment, Wishlist


# ----------------------------------------
# 1. Helper Function (Image Preview)
# ----------------------------------------
def get_image_preview_tag(obj):
    if obj.image_url:
        return format_html(
            '<img src="{}" width="50" height="50" style="object-fit:cover; border-radius: 4px;" />',
            obj.image_url
        )
    return "-"
get_image_preview_tag.short_description = 'Preview'


class AdminOnlyMixin:
    def has_module_permission(self, request):
        return request.user.is_authenticated and request.user.is_admin

    def has_add_permission(self, request):
        return request.user.is_authenticated and request.user.is_admin

    def has_change_permission(self, request, obj=None):
        return request.user.is_authenticated and request.user.is_admin

    def has_delete_permission(self, request, obj=None):
        return request.user.is_authenticated and request.user.is_admin


# ----------------------------------------
# 2. Product Admin
# ----------------------------------------
@admin.register(Product)
class ProductAdmin(AdminOnlyMixin, admin.ModelAdmin):
    list_display = ('name', 'category', 'farmer_name', 'price', 'stock', 'status', get_image_preview_tag)
    list_filter = ('category', 'status', 'is_organic', 'featured')
    search_fields = ('name', 'farmer__name', 'farmer__email')

    fieldsets = (
        (None, {'fields': ('name', 'category', 'description')}),
        ('Farmer', {'fields': ('farmer',)}),
        ('Pricing and Inventory', {'fields': ('price', 'unit', 'stock', 'low_stock_threshold', 'status')}),
        ('Details', {'fields': ('is_organic', 'featured', 'expiry_date')}),
        ('Media', {'fields': ('image_url', get_image_preview_tag)}),
        ('Sales', {'fields': ('total_sold', 'revenue', 'views', 'total_value')}),
    )
    readonly_fields = (get_image_preview_tag, 'total_sold', 'revenue', 'views', 'total_value')

    actions = ['mark_active', 'mark_inactive']

    @admin.action(description="Activate selected products")
    def mark_active(self, request, queryset):
        # queryset.update() skips save(), so the admin decision is stored as-is
        updated = queryset.update(status=Product.STATUS_ACTIVE)
        self.message_user(request, f"{updated} products marked as active.")

    @admin.action(description="Deactivate selected products")
    def mark_inactive(self, request, queryset):
        updated = queryset.update(status=Product.STATUS_INACTIVE)
        self.message_user(request, f"{updated} products marked as inactive.")

    def farmer_name(self, obj):
        return obj.farmer.name if obj.farmer else '-'
    farmer_name.short_description = 'Farmer'

    def formfield_for_foreignkey(self, db_field, request, **kwargs):
        if db_field.name == "farmer":
            kwargs["queryset"] = CustomUser.objects.filter(role=CustomUser.ROLE_FARMER)
        return super().formfield_for_foreignkey(db_field, request, **kwargs)


# ----------------------------------------
# 3. Equipment & Wishlist
# ----------------------------------------
@admin.register(Equipment)
class EquipmentAdmin(AdminOnlyMixin, admin.ModelAdmin):
    list_display = ('name', 'equipment_type', 'owner', 'rental_price', 'availability_start_date', 'availability_end_date')
    list_filter = ('equipment_type', 'condition', 'fuel_type')
    search_fields = ('name', 'brand', 'owner__email')


@admin.register(Wishlist)
class WishlistAdmin(AdminOnlyMixin, admin.ModelAdmin):
    list_display = ('user', 'updated_at')
    filter_horizontal = ('products',)
    search_fields = ('user__email',)
