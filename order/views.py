# order/views.py
import logging

import pandas as pd
from django.http import HttpResponse
from django.shortcuts import get_object_or_404
from rest_framework import generics, views, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from users.permissions import IsAdmin, IsBuyer, IsFarmer, IsOwnerOrAdmin

from . import services
from .filters import AdminOrderFilter
from .models import Order
from .serializers import (
    CartSummarySerializer,
    OrderSerializer,
    FarmerOrderSerializer,
    OrderStatusUpdateSerializer,
)

logger = logging.getLogger(__name__)

EXPORT_COLUMNS = ['OrderID', 'Customer', 'Total', 'Status', 'Created At']


# -------------------------------------------------
# 1. CART & CHECKOUT
# -------------------------------------------------

class CartView(views.APIView):
    permission_classes = [IsAuthenticated, IsBuyer]

    def get(self, request):
        return Response(CartSummarySerializer(services.get_cart(request.user)).data)

    def post(self, request):
        services.add_item(request.user, request.data.get('productId'), request.data.get('quantity'))
        return Response(CartSummarySerializer(services.get_cart(request.user)).data)


class CartRemoveItemView(views.APIView):
    permission_classes = [IsAuthenticated, IsBuyer]

    def delete(self, request, product_id):
        services.remove_item(request.user, product_id)
        return Response(CartSummarySerializer(services.get_cart(request.user)).data)


class CheckoutView(views.APIView):
    permission_classes = [IsAuthenticated, IsBuyer]

    def post(self, request):
        order = services.checkout(request.user)
        order = services.orders_with_details().get(pk=order.pk)
        return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)


# -------------------------------------------------
# 2. ORDER LISTING
# -------------------------------------------------

class OrderListView(generics.ListAPIView):
    permission_classes = [IsAuthenticated]
    serializer_class = OrderSerializer
    filter_backends = []

    def get_queryset(self):
        return services.orders_for_buyer(self.request.user)


class FarmerOrderListView(generics.ListAPIView):
    permission_classes = [IsAuthenticated, IsFarmer]
    serializer_class = FarmerOrderSerializer
    filter_backends = []

    def get_queryset(self):
        return services.orders_for_farmer(self.request.user)


class OrderDetailView(generics.RetrieveAPIView):
    """Owner or admin only; everyone else gets a 403."""
    permission_classes = [IsAuthenticated, IsOwnerOrAdmin]
    serializer_class = OrderSerializer
    filter_backends = []

    def get_queryset(self):
        return services.orders_with_details()


# -------------------------------------------------
# 3. ADMIN ORDER MANAGEMENT
# -------------------------------------------------

class AdminOrderListView(generics.ListAPIView):
    """
    Get a list of ALL orders for the ADMIN, newest first.
    """
    permission_classes = [IsAuthenticated, IsAdmin]
    serializer_class = OrderSerializer
    filterset_class = AdminOrderFilter

    def get_queryset(self):
        return services.orders_with_details()

    def list(self, request, *args, **kwargs):
        orders = self.filter_queryset(self.get_queryset())
        data = self.get_serializer(orders, many=True).data
        return Response({
            "status": "success",
            "results": len(data),
            "data": {"orders": data},
        })


class AdminOrderStatusView(views.APIView):
    permission_classes = [IsAuthenticated, IsAdmin]

    def patch(self, request, pk):
        serializer = OrderStatusUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        order = get_object_or_404(Order, pk=pk)
        services.update_order_status(order, serializer.validated_data['status'], request.user)

        order = services.orders_with_details().get(pk=order.pk)
        return Response({"status": "success", "data": {"order": OrderSerializer(order).data}})


class AdminExportOrdersCsvView(generics.GenericAPIView):
    """CSV of all orders; honours the same filters as the admin list."""
    permission_classes = [IsAuthenticated, IsAdmin]
    filterset_class = AdminOrderFilter

    def get_queryset(self):
        return Order.objects.select_related('user')

    def get(self, request, *args, **kwargs):
        orders = self.filter_queryset(self.get_queryset())
        rows = [
            {
                'OrderID': order.id,
                'Customer': order.user.name if order.user else '',
                'Total': order.total,
                'Status': order.status,
                'Created At': order.created_at.isoformat(),
            }
            for order in orders
        ]
        df = pd.DataFrame(rows, columns=EXPORT_COLUMNS)

        response = HttpResponse(df.to_csv(index=False), content_type='text/csv')
        response['Content-Disposition'] = 'attachment; filename="orders.csv"'
        logger.info(f"Admin {request.user.email} exported {len(rows)} orders")
        return response
