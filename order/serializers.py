# order/serializers.py
from rest_framework import serializers

from product_app.serializers import ProductLiteSerializer
from users.serializers import UserSerializer

from .models import Order, OrderItem, CartItem, OrderStatusHistory


# ----------------------------------------------------
# 1. CART SERIALIZERS
# ----------------------------------------------------
class CartItemSerializer(serializers.ModelSerializer):
    product = ProductLiteSerializer(read_only=True)
    lineTotal = serializers.DecimalField(source='line_total', max_digits=12, decimal_places=2, read_only=True)

    class Meta:
        model = CartItem
        fields = ['id', 'product', 'quantity', 'lineTotal']
        read_only_fields = fields


class CartSummarySerializer(serializers.Serializer):
    """Renders the dict built by `services.get_cart`."""
    items = CartItemSerializer(many=True, read_only=True)
    subtotal = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)
    deliveryFee = serializers.DecimalField(source='delivery_fee', max_digits=10, decimal_places=2, read_only=True)
    total = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)


# ----------------------------------------------------
# 2. ORDER SERIALIZERS
# ----------------------------------------------------
class OrderItemSerializer(serializers.ModelSerializer):
    product = ProductLiteSerializer(read_only=True)

    class Meta:
        model = OrderItem
        fields = ['product', 'quantity', 'price']


class StatusHistorySerializer(serializers.ModelSerializer):
    changedByName = serializers.CharField(source='changed_by.name', read_only=True, allow_null=True)

    class Meta:
        model = OrderStatusHistory
        fields = ['status', 'timestamp', 'changedByName']


class OrderSerializer(serializers.ModelSerializer):
    user = UserSerializer(read_only=True)
    items = OrderItemSerializer(many=True, read_only=True)
    history = StatusHistorySerializer(many=True, read_only=True)
    deliveryFee = serializers.DecimalField(source='delivery_fee', max_digits=10, decimal_places=2, read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Order
        fields = [
            'id', 'user', 'items', 'subtotal', 'deliveryFee', 'total',
            'status', 'history', 'createdAt', 'updatedAt',
        ]
        read_only_fields = fields


class FarmerOrderSerializer(serializers.ModelSerializer):
    """
    An order as seen by one farmer: only the lines for their products.
    Expects the `farmer_items` prefetch from `services.orders_for_farmer`.
    """
    buyerName = serializers.CharField(source='user.name', read_only=True, allow_null=True)
    items = OrderItemSerializer(source='farmer_items', many=True, read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = Order
        fields = ['id', 'buyerName', 'items', 'status', 'createdAt']
        read_only_fields = fields


class OrderStatusUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(
        choices=Order.ADMIN_STATUSES,
        error_messages={
            'required': 'Invalid status',
            'invalid_choice': 'Invalid status',
            'null': 'Invalid status',
        },
    )
