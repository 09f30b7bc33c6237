from django.contrib.auth.models import AbstractUser
from django.db import models


class CustomUser(AbstractUser):
    ROLE_FARMER = 'farmer'
    ROLE_BUYER = 'buyer'
    ROLE_ADMIN = 'admin'
    USER_ROLES = [
        (ROLE_FARMER, 'Farmer'),
        (ROLE_BUYER, 'Buyer'),
        (ROLE_ADMIN, 'Admin'),
    ]
    name = models.CharField(max_length=150)
    role = models.CharField(max_length=10, choices=USER_ROLES, default=ROLE_BUYER)
    email = models.EmailField(unique=True)

    # Farmers stay unapproved until an admin reviews them
    is_approved = models.BooleanField(default=False)

    # {"lat": .., "lng": .., "address": ..}
    location = models.JSONField(null=True, blank=True)
    avatar = models.CharField(max_length=500, blank=True, default='')

    updated_at = models.DateTimeField(auto_now=True)

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['username', 'name']

    @property
    def is_farmer(self):
        return self.role == self.ROLE_FARMER

    @property
    def is_buyer(self):
        return self.role == self.ROLE_BUYER

    @property
    def is_admin(self):
        return self.role == self.ROLE_ADMIN or self.is_superuser

    def __str__(self):
        return f"{self.email} ({self.role})"
