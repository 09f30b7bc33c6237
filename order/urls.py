# order/urls.py
from django.urls import path
from .views import (
    CartView,
    CartRemoveItemView,
    CheckoutView,
    OrderListView,
    FarmerOrderListView,
    OrderDetailView,
    AdminOrderListView,
    AdminOrderStatusView,
    AdminExportOrdersCsvView,
)

urlpatterns = [
    # Cart
    path('cart', CartView.as_view(), name='cart'),
    path('cart/<str:product_id>', CartRemoveItemView.as_view(), name='cart-remove-item'),

    # Buyer / farmer orders
    path('orders/checkout', CheckoutView.as_view(), name='order-checkout'),
    path('orders', OrderListView.as_view(), name='my-orders-list'),
    path('orders/farmer', FarmerOrderListView.as_view(), name='farmer-orders'),
    path('orders/<int:pk>', OrderDetailView.as_view(), name='order-detail'),

    # Admin
    path('admin/orders', AdminOrderListView.as_view(), name='admin-order-list'),
    path('admin/orders/export', AdminExportOrdersCsvView.as_view(), name='admin-export-orders'),
    path('admin/orders/<int:pk>/status', AdminOrderStatusView.as_view(), name='admin-order-status'),
]
