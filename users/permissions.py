# users/permissions.py

from rest_framework.permissions import BasePermission


class IsFarmer(BasePermission):
    """
    Custom permission to only allow access to users with role='farmer'.
    """
    message = "You do not have permission to perform this action"

    def has_permission(self, request, view):
        return request.user.is_authenticated and request.user.role == 'farmer'


class IsBuyer(BasePermission):
    message = "You do not have permission to perform this action"

    def has_permission(self, request, view):
        return request.user.is_authenticated and request.user.role == 'buyer'


class IsAdmin(BasePermission):
    """
    Admin role or Django superuser.
    """
    message = "You do not have permission to perform this action"

    def has_permission(self, request, view):
        return request.user.is_authenticated and request.user.is_admin


class IsOwnerOrAdmin(BasePermission):
    """
    Object-level check for resources that carry a `user` foreign key
    (orders). Admins can see everything.
    """
    message = "Not authorized to view this order"

    def has_object_permission(self, request, view, obj):
        user = request.user
        if user.is_admin:
            return True
        return obj.user_id == user.id


class IsProductOwner(BasePermission):
    """
    Write access only for the farmer who listed the product.
    """
    message = "Not authorized to modify this product"

    def has_object_permission(self, request, view, obj):
        if request.method in ('GET', 'HEAD', 'OPTIONS'):
            return True
        return obj.farmer_id == request.user.id
