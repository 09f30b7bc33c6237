# order/models.py
from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models

from product_app.models import Product


# -----------------------------
# 1️⃣ Cart Model
# -----------------------------
class Cart(models.Model):
    # One cart per user, created lazily on the first add
    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='cart')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"Cart for {self.user.email}"


# -----------------------------
# 2️⃣ CartItem Model
# -----------------------------
class CartItem(models.Model):
    cart = models.ForeignKey(Cart, on_delete=models.CASCADE, related_name='items')
    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name='cart_items')
    quantity = models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)])

    class Meta:
        unique_together = ('cart', 'product')
        ordering = ['id']

    def __str__(self):
        return f"{self.quantity} x {self.product.name}"

    @property
    def line_total(self):
        return self.product.price * self.quantity


# -----------------------------
# 3️⃣ Order Model
# -----------------------------
class Order(models.Model):
    STATUS_PLACED = 'placed'
    STATUS_PROCESSING = 'processing'
    STATUS_IN_TRANSIT = 'in_transit'
    STATUS_DELIVERED = 'delivered'
    STATUS_CANCELLED = 'cancelled'
    STATUS_CHOICES = (
        (STATUS_PLACED, 'Placed'),
        (STATUS_PROCESSING, 'Processing'),
        (STATUS_IN_TRANSIT, 'In transit'),
        (STATUS_DELIVERED, 'Delivered'),
        (STATUS_CANCELLED, 'Cancelled'),
    )
    # Statuses an admin may move an order to
    ADMIN_STATUSES = (STATUS_PROCESSING, STATUS_IN_TRANSIT, STATUS_DELIVERED, STATUS_CANCELLED)
    # Old clients still filter by "shipped"
    STATUS_ALIASES = {'shipped': STATUS_IN_TRANSIT}

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,  # Keeps order if user is deleted
        null=True,
        related_name='orders'
    )
    subtotal = models.DecimalField(max_digits=12, decimal_places=2)
    delivery_fee = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('0.00'))
    total = models.DecimalField(max_digits=12, decimal_places=2)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PLACED)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at', '-id']

    def __str__(self):
        return f"Order {self.id} by {self.user.email if self.user else 'Deleted User'} ({self.status})"


# -----------------------------
# 4️⃣ OrderItem Model
# -----------------------------
class OrderItem(models.Model):
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name='items')
    product = models.ForeignKey(
        Product,
        on_delete=models.SET_NULL,
        null=True,
        related_name='order_items'
    )
    quantity = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    # Price at purchase time; later product price changes don't touch it
    price = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(Decimal('0'))])

    class Meta:
        ordering = ['id']

    def __str__(self):
        return f"{self.quantity} of {self.product.name if self.product else 'Deleted Product'}"


# -----------------------------
# 5️⃣ OrderStatusHistory Model
# -----------------------------
class OrderStatusHistory(models.Model):
    order = models.ForeignKey(
        Order,
        on_delete=models.CASCADE,
        related_name='history'
    )
    changed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True
    )
    status = models.CharField(max_length=20, choices=Order.STATUS_CHOICES)
    timestamp = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name_plural = "Order Status Histories"
        ordering = ['timestamp', 'id']

    def __str__(self):
        return f"Order {self.order_id} status changed to {self.status}"
