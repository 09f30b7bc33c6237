from django.contrib import admin
from .models import Order, OrderItem, Cart, CartItem, OrderStatusHistory


# --- 1. Orders ---
class OrderItemInline(admin.TabularInline):
    model = OrderItem
    raw_id_fields = ['product']
    extra = 0
    readonly_fields = ['product', 'quantity', 'price']


class OrderStatusHistoryInline(admin.TabularInline):
    model = OrderStatusHistory
    extra = 0
    readonly_fields = ['status', 'changed_by', 'timestamp']


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ('id', 'user', 'subtotal', 'delivery_fee', 'total', 'status', 'created_at')
    list_filter = ('status', 'created_at')
    search_fields = ('user__name', 'user__email')

    fieldsets = (
        (None, {'fields': ('user', 'status')}),
        ('Amounts', {'fields': ('subtotal', 'delivery_fee', 'total')}),
        ('Timestamps', {'fields': ('created_at', 'updated_at')}),
    )
    inlines = [OrderItemInline, OrderStatusHistoryInline]
    readonly_fields = ('user', 'subtotal', 'delivery_fee', 'total', 'created_at', 'updated_at')


# --- 2. Cart Management ---
class CartItemInline(admin.TabularInline):
    model = CartItem
    raw_id_fields = ['product']
    extra = 0


@admin.register(Cart)
class CartAdmin(admin.ModelAdmin):
    list_display = ('id', 'user', 'updated_at')
    search_fields = ('user__email',)
    inlines = [CartItemInline]
    readonly_fields = ('user',)


@admin.register(OrderStatusHistory)
class OrderStatusHistoryAdmin(admin.ModelAdmin):
    list_display = ('order', 'status', 'timestamp', 'changed_by')
    list_filter = ('status', 'timestamp')
    search_fields = ('order__id',)
