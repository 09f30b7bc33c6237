# product_app/urls.py
from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views import (
    ProductListCreateView,
    FarmerProductListView,
    ProductDetailView,
    AdminProductListView,
    AdminProductDetailView,
    ApproveProductView,
    RejectProductView,
    ToggleProductStatusView,
    EquipmentViewSet,
    WishlistView,
    WishlistRemoveView,
)

# ------------------ 1. Router ------------------
router = DefaultRouter(trailing_slash=False)
router.register(r'equipment', EquipmentViewSet, basename='equipment')

# ------------------ 2. URL Patterns ------------------
urlpatterns = [
    # --- Products (public + farmer) ---
    path('products', ProductListCreateView.as_view(), name='product-list'),
    path('products/farmer', FarmerProductListView.as_view(), name='product-farmer-list'),

    # --- Admin moderation ---
    path('products/all', AdminProductListView.as_view(), name='admin-product-list'),
    path('products/admin/<int:pk>', AdminProductDetailView.as_view(), name='admin-product-detail'),
    path('products/<int:pk>/approve', ApproveProductView.as_view(), name='product-approve'),
    path('products/<int:pk>/reject', RejectProductView.as_view(), name='product-reject'),
    path('products/<int:pk>/toggle-status', ToggleProductStatusView.as_view(), name='product-toggle-status'),

    path('products/<int:pk>', ProductDetailView.as_view(), name='product-detail'),

    # --- Wishlist ---
    path('wishlist', WishlistView.as_view(), name='wishlist'),
    path('wishlist/<int:product_id>', WishlistRemoveView.as_view(), name='wishlist-remove'),

    # --- Equipment (router) ---
    path('', include(router.urls)),
]
