from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models

from .validators import validate_image_count


# -----------------------------
# 1️⃣ Product Model
# -----------------------------
class Product(models.Model):
    UNIT_CHOICES = [
        ('kg', 'Kilogram'),
        ('g', 'Gram'),
        ('piece', 'Piece'),
        ('bunch', 'Bunch'),
        ('liter', 'Liter'),
    ]

    STATUS_DRAFT = 'draft'
    STATUS_ACTIVE = 'active'
    STATUS_INACTIVE = 'inactive'
    STATUS_OUT_OF_STOCK = 'out_of_stock'
    STATUS_CHOICES = [
        (STATUS_DRAFT, 'Draft'),
        (STATUS_ACTIVE, 'Active'),
        (STATUS_INACTIVE, 'Inactive'),
        (STATUS_OUT_OF_STOCK, 'Out of stock'),
    ]

    farmer = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        limit_choices_to={'role': 'farmer'},
        related_name='products'
    )
    name = models.CharField(max_length=255)
    category = models.CharField(max_length=100)
    description = models.TextField()
    price = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(Decimal('0'))])
    unit = models.CharField(max_length=10, choices=UNIT_CHOICES)
    stock = models.PositiveIntegerField(default=0)

    # New products wait for an admin before they show up in the marketplace
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_INACTIVE)

    image_url = models.CharField(max_length=500, blank=True, default='')
    low_stock_threshold = models.PositiveIntegerField(default=10, validators=[MinValueValidator(1)])
    featured = models.BooleanField(default=False)
    is_organic = models.BooleanField(default=False)
    expiry_date = models.DateField(null=True, blank=True)

    # Sales counters
    total_sold = models.PositiveIntegerField(default=0)
    revenue = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    views = models.PositiveIntegerField(default=0)
    total_value = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0.00'))

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.name} ({self.farmer.name})"

    def sync_stock_status(self):
        """
        stock <= 0 forces out_of_stock; restocking only re-activates a product
        that was out_of_stock, other statuses are left alone.
        """
        if self.stock <= 0:
            self.status = self.STATUS_OUT_OF_STOCK
        elif self.status == self.STATUS_OUT_OF_STOCK:
            self.status = self.STATUS_ACTIVE

    def save(self, *args, **kwargs):
        self.total_value = (self.price or Decimal('0')) * self.stock

        # Partial saves that don't touch stock (admin status changes, view
        # counters) must not re-derive the status.
        update_fields = kwargs.get('update_fields')
        if update_fields is None:
            self.sync_stock_status()
        elif 'stock' in update_fields:
            self.sync_stock_status()
            kwargs['update_fields'] = {*update_fields, 'status', 'total_value'}
        elif 'price' in update_fields:
            kwargs['update_fields'] = {*update_fields, 'total_value'}

        super().save(*args, **kwargs)


# -----------------------------
# 2️⃣ Equipment Model
# -----------------------------
class Equipment(models.Model):
    TYPE_CHOICES = [
        ('Tractor', 'Tractor'),
        ('Tiller', 'Tiller'),
        ('Sprayer', 'Sprayer'),
        ('Seeder', 'Seeder'),
        ('Harvester', 'Harvester'),
        ('Plough', 'Plough'),
        ('Other', 'Other'),
    ]
    CONDITION_CHOICES = [('New', 'New'), ('Good', 'Good'), ('Average', 'Average')]
    FUEL_CHOICES = [('Diesel', 'Diesel'), ('Petrol', 'Petrol'), ('Manual', 'Manual')]
    PICKUP_CHOICES = [('Self-pickup', 'Self-pickup'), ('Delivery available', 'Delivery available')]

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        limit_choices_to={'role': 'farmer'},
        related_name='equipment'
    )
    name = models.CharField(max_length=255)
    equipment_type = models.CharField(max_length=20, choices=TYPE_CHOICES)
    brand = models.CharField(max_length=100)
    model_number = models.CharField(max_length=100)
    condition = models.CharField(max_length=10, choices=CONDITION_CHOICES, default='Good')
    fuel_type = models.CharField(max_length=10, choices=FUEL_CHOICES)
    rental_price = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(Decimal('0'))])
    min_rental_duration = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    max_rental_duration = models.PositiveIntegerField(null=True, blank=True, validators=[MinValueValidator(1)])
    availability_start_date = models.DateField()
    availability_end_date = models.DateField()
    pickup_method = models.CharField(max_length=20, choices=PICKUP_CHOICES)
    images = models.JSONField(default=list, validators=[validate_image_count])

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        verbose_name_plural = 'Equipment'

    def __str__(self):
        return f"{self.name} ({self.equipment_type})"


# -----------------------------
# 3️⃣ Wishlist Model
# -----------------------------
class Wishlist(models.Model):
    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='wishlist')
    products = models.ManyToManyField(Product, blank=True, related_name='wishlisted_by')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"Wishlist for {self.user.email}"
