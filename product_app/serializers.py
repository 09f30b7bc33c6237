from decimal import Decimal

from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import serializers

from .models import Product, Equipment
from .validators import validate_expiry_date, validate_availability_window, validate_image_count


def run_validator(validator, *args):
    """Re-raises a Django model validator failure as a DRF validation error."""
    try:
        validator(*args)
    except DjangoValidationError as e:
        raise serializers.ValidationError(e.messages)


# ----------------------------------------------------
# 1. PRODUCT SERIALIZERS
# ----------------------------------------------------
class ProductSerializer(serializers.ModelSerializer):
    farmerName = serializers.CharField(source='farmer.name', read_only=True)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal('0'))
    stock = serializers.IntegerField(min_value=0)
    imageUrl = serializers.CharField(source='image_url', required=False, allow_blank=True)
    lowStockThreshold = serializers.IntegerField(source='low_stock_threshold', required=False, min_value=1)
    isOrganic = serializers.BooleanField(source='is_organic', required=False)
    expiryDate = serializers.DateField(source='expiry_date', required=False, allow_null=True)
    totalSold = serializers.IntegerField(source='total_sold', read_only=True)
    totalValue = serializers.DecimalField(source='total_value', max_digits=14, decimal_places=2, read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Product
        fields = [
            'id', 'name', 'category', 'description', 'price', 'unit', 'stock', 'status',
            'farmer', 'farmerName', 'imageUrl', 'lowStockThreshold', 'featured', 'isOrganic',
            'expiryDate', 'totalSold', 'revenue', 'views', 'totalValue', 'createdAt', 'updatedAt',
        ]
        read_only_fields = ['farmer', 'farmerName', 'status', 'revenue', 'views']

    def validate_expiryDate(self, value):
        run_validator(validate_expiry_date, value)
        return value


class ProductLiteSerializer(serializers.ModelSerializer):
    """Compact product shape nested inside cart lines and order items."""
    imageUrl = serializers.CharField(source='image_url', read_only=True)

    class Meta:
        model = Product
        fields = ['id', 'name', 'price', 'unit', 'stock', 'status', 'farmer', 'imageUrl']
        read_only_fields = fields


class ProductRejectSerializer(serializers.Serializer):
    reason = serializers.CharField(
        error_messages={
            'required': 'Rejection reason is required',
            'blank': 'Rejection reason is required',
        }
    )


# ----------------------------------------------------
# 2. EQUIPMENT SERIALIZER
# ----------------------------------------------------
class EquipmentSerializer(serializers.ModelSerializer):
    equipmentName = serializers.CharField(source='name')
    equipmentType = serializers.ChoiceField(source='equipment_type', choices=Equipment.TYPE_CHOICES)
    modelNumber = serializers.CharField(source='model_number')
    fuelType = serializers.ChoiceField(source='fuel_type', choices=Equipment.FUEL_CHOICES)
    rentalPrice = serializers.DecimalField(source='rental_price', max_digits=10, decimal_places=2, min_value=Decimal('0'))
    minRentalDuration = serializers.IntegerField(source='min_rental_duration', min_value=1)
    maxRentalDuration = serializers.IntegerField(source='max_rental_duration', min_value=1, required=False, allow_null=True)
    availabilityStartDate = serializers.DateField(source='availability_start_date')
    availabilityEndDate = serializers.DateField(source='availability_end_date')
    pickupMethod = serializers.ChoiceField(source='pickup_method', choices=Equipment.PICKUP_CHOICES)
    images = serializers.ListField(child=serializers.CharField())
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = Equipment
        fields = [
            'id', 'owner', 'equipmentName', 'equipmentType', 'brand', 'modelNumber', 'condition',
            'fuelType', 'rentalPrice', 'minRentalDuration', 'maxRentalDuration',
            'availabilityStartDate', 'availabilityEndDate', 'pickupMethod', 'images', 'createdAt',
        ]
        read_only_fields = ['owner']

    def validate_images(self, value):
        run_validator(validate_image_count, value)
        return value

    def validate(self, data):
        # Partial updates may carry only one side of the window
        instance = self.instance
        start = data.get('availability_start_date', getattr(instance, 'availability_start_date', None))
        end = data.get('availability_end_date', getattr(instance, 'availability_end_date', None))
        try:
            validate_availability_window(start, end)
        except DjangoValidationError as e:
            raise serializers.ValidationError({'availabilityEndDate': e.messages})

        min_days = data.get('min_rental_duration', getattr(instance, 'min_rental_duration', None))
        max_days = data.get('max_rental_duration', getattr(instance, 'max_rental_duration', None))
        if min_days and max_days and max_days < min_days:
            raise serializers.ValidationError(
                {'maxRentalDuration': ['Maximum rental duration cannot be shorter than the minimum']}
            )
        return data


# ----------------------------------------------------
# 3. WISHLIST
# ----------------------------------------------------
class WishlistAddSerializer(serializers.Serializer):
    productId = serializers.PrimaryKeyRelatedField(
        queryset=Product.objects.all(),
        error_messages={'required': 'Product ID is required', 'null': 'Product ID is required'},
    )
