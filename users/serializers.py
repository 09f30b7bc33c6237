from collections.abc import Mapping

from rest_framework import serializers
from rest_framework.exceptions import AuthenticationFailed

from .models import CustomUser


class LocationSerializer(serializers.Serializer):
    lat = serializers.FloatField(required=False)
    lng = serializers.FloatField(required=False)
    address = serializers.CharField(required=False, allow_blank=True)


class FarmerLocationSerializer(LocationSerializer):
    address = serializers.CharField()


# ----------------------------------------------------
# 1. REGISTRATION (one serializer per role)
# ----------------------------------------------------
class BaseRegistrationSerializer(serializers.ModelSerializer):
    role = None

    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, min_length=8)
    location = LocationSerializer(required=False)

    class Meta:
        model = CustomUser
        fields = ('name', 'email', 'password', 'location', 'avatar')
        extra_kwargs = {'avatar': {'required': False}}

    def validate_email(self, value):
        email = value.strip().lower()
        if CustomUser.objects.filter(email=email).exists():
            raise serializers.ValidationError("User already exists with this email")
        return email

    def create(self, validated_data):
        location = validated_data.get('location')
        return CustomUser.objects.create_user(
            username=validated_data['email'],
            email=validated_data['email'],
            password=validated_data['password'],
            name=validated_data['name'],
            role=self.role,
            is_approved=self.role != CustomUser.ROLE_FARMER,  # farmers wait for an admin
            location=dict(location) if location else None,
            avatar=validated_data.get('avatar', ''),
        )


class BuyerRegistrationSerializer(BaseRegistrationSerializer):
    role = CustomUser.ROLE_BUYER


class FarmerRegistrationSerializer(BaseRegistrationSerializer):
    role = CustomUser.ROLE_FARMER

    # Farmers must say where their produce ships from
    location = FarmerLocationSerializer()


REGISTRATION_SERIALIZERS = {
    CustomUser.ROLE_BUYER: BuyerRegistrationSerializer,
    CustomUser.ROLE_FARMER: FarmerRegistrationSerializer,
}


def get_registration_serializer_class(data):
    """Picks the registration serializer from the `role` tag of the payload."""
    if not isinstance(data, Mapping):
        raise serializers.ValidationError({'non_field_errors': ['Invalid data. Expected a dictionary.']})
    role = data.get('role') or CustomUser.ROLE_BUYER
    try:
        return REGISTRATION_SERIALIZERS[role]
    except (KeyError, TypeError):
        raise serializers.ValidationError({'role': [f"Cannot register with role '{role}'."]})


# ----------------------------------------------------
# 2. LOGIN
# ----------------------------------------------------
class LoginSerializer(serializers.Serializer):
    email = serializers.CharField()
    password = serializers.CharField(write_only=True, trim_whitespace=True)

    def validate(self, data):
        email = data['email'].strip().lower()
        user = CustomUser.objects.filter(email=email).first()

        if not user or not user.check_password(data['password']) or not user.is_active:
            raise AuthenticationFailed("Incorrect email or password")
        if user.is_farmer and not user.is_approved:
            raise AuthenticationFailed("Your account is pending admin approval")
        return {'user': user}


# ----------------------------------------------------
# 3. USER OUTPUT / PROFILE
# ----------------------------------------------------
class UserSerializer(serializers.ModelSerializer):
    isApproved = serializers.BooleanField(source='is_approved', read_only=True)
    createdAt = serializers.DateTimeField(source='date_joined', read_only=True)

    class Meta:
        model = CustomUser
        fields = ('id', 'name', 'email', 'role', 'isApproved', 'location', 'avatar', 'createdAt')
        read_only_fields = fields


class ProfileUpdateSerializer(serializers.ModelSerializer):
    location = LocationSerializer(required=False, allow_null=True)

    class Meta:
        model = CustomUser
        fields = ('name', 'avatar', 'location')
        extra_kwargs = {
            'name': {'required': False},
            'avatar': {'required': False, 'allow_blank': True},
        }

    def update(self, instance, validated_data):
        if 'location' in validated_data:
            location = validated_data.pop('location')
            instance.location = dict(location) if location else None
        return super().update(instance, validated_data)


class AdminUserUpdateSerializer(serializers.ModelSerializer):
    isApproved = serializers.BooleanField(source='is_approved', required=False)

    class Meta:
        model = CustomUser
        fields = ('name', 'role', 'isApproved')
        extra_kwargs = {
            'name': {'required': False},
            'role': {'required': False},
        }
