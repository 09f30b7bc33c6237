# product_app/views.py

import logging

from django.db.models import F
from django.shortcuts import get_object_or_404
from django.utils import timezone
from rest_framework import generics, viewsets, views, status
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from farmmarket.pagination import StandardPagination
from users.permissions import IsAdmin, IsFarmer, IsProductOwner

from .filters import AdminProductFilter
from .models import Product, Equipment, Wishlist
from .serializers import ProductSerializer, ProductRejectSerializer, EquipmentSerializer, WishlistAddSerializer

logger = logging.getLogger(__name__)


# ------------------
# 1. PRODUCT VIEWS (public + farmer)
# ------------------
class ProductListCreateView(generics.ListCreateAPIView):
    """
    GET is public and only shows active products; POST lets a farmer list a
    new product, which starts out inactive until an admin approves it.
    """
    serializer_class = ProductSerializer
    filter_backends = []

    def get_permissions(self):
        if self.request.method == 'POST':
            return [IsAuthenticated(), IsFarmer()]
        return [AllowAny()]

    def get_queryset(self):
        return Product.objects.filter(status=Product.STATUS_ACTIVE).select_related('farmer')

    def perform_create(self, serializer):
        product = serializer.save(farmer=self.request.user, status=Product.STATUS_INACTIVE)
        logger.info(f"Farmer {self.request.user.email} created product {product.id} ({product.name})")


class FarmerProductListView(generics.ListAPIView):
    permission_classes = [IsAuthenticated, IsFarmer]
    serializer_class = ProductSerializer
    filter_backends = []

    def get_queryset(self):
        return Product.objects.filter(farmer=self.request.user)


class ProductDetailView(generics.RetrieveUpdateDestroyAPIView):
    """
    Any signed-in user can read a product (each read counts as a view);
    only the owning farmer can change or delete it.
    """
    serializer_class = ProductSerializer
    queryset = Product.objects.select_related('farmer')
    http_method_names = ['get', 'patch', 'delete', 'head', 'options']
    filter_backends = []

    def get_permissions(self):
        if self.request.method in ('PATCH', 'DELETE'):
            return [IsAuthenticated(), IsFarmer(), IsProductOwner()]
        return [IsAuthenticated()]

    def retrieve(self, request, *args, **kwargs):
        product = self.get_object()
        Product.objects.filter(pk=product.pk).update(views=F('views') + 1)
        product.refresh_from_db(fields=['views'])
        return Response(self.get_serializer(product).data)


# ------------------
# 2. ADMIN PRODUCT MODERATION
# ------------------
class AdminProductListView(generics.ListAPIView):
    permission_classes = [IsAuthenticated, IsAdmin]
    serializer_class = ProductSerializer
    filterset_class = AdminProductFilter
    pagination_class = StandardPagination

    def get_queryset(self):
        return Product.objects.all().select_related('farmer')


class AdminProductDetailView(generics.RetrieveAPIView):
    permission_classes = [IsAuthenticated, IsAdmin]
    serializer_class = ProductSerializer
    queryset = Product.objects.select_related('farmer')


class AdminProductStatusView(views.APIView):
    """
    Base for the approve / reject / toggle endpoints. Admin decisions are
    stored as-is, without the stock based status correction.
    """
    permission_classes = [IsAuthenticated, IsAdmin]

    def next_status(self, request, product):
        raise NotImplementedError

    def patch(self, request, pk):
        product = get_object_or_404(Product, pk=pk)
        new_status = self.next_status(request, product)
        product.status = new_status
        product.save(update_fields=['status', 'updated_at'])
        logger.info(f"Admin {request.user.email} set product {product.id} to {new_status}")
        return Response({
            "status": "success",
            "message": f"Product {new_status} successfully",
            "product": ProductSerializer(product).data,
        })


class ApproveProductView(AdminProductStatusView):
    def next_status(self, request, product):
        return Product.STATUS_ACTIVE


class RejectProductView(AdminProductStatusView):
    def next_status(self, request, product):
        serializer = ProductRejectSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        logger.info(f"Product {product.id} rejected: {serializer.validated_data['reason']}")
        return Product.STATUS_INACTIVE


class ToggleProductStatusView(AdminProductStatusView):
    def next_status(self, request, product):
        if product.status == Product.STATUS_ACTIVE:
            return Product.STATUS_INACTIVE
        return Product.STATUS_ACTIVE


# ------------------
# 3. EQUIPMENT
# ------------------
class EquipmentViewSet(viewsets.ModelViewSet):
    """
    Farmers manage their own rental equipment. Records belonging to someone
    else simply don't exist for them (404).
    """
    serializer_class = EquipmentSerializer
    permission_classes = [IsAuthenticated, IsFarmer]
    http_method_names = ['get', 'post', 'patch', 'delete', 'head', 'options']
    filter_backends = []

    def get_queryset(self):
        return Equipment.objects.filter(owner=self.request.user)

    def perform_create(self, serializer):
        serializer.save(owner=self.request.user)

    @action(detail=False, methods=['get'], permission_classes=[AllowAny], authentication_classes=[])
    def available(self, request):
        equipment = Equipment.objects.filter(availability_end_date__gte=timezone.localdate())
        return Response(self.get_serializer(equipment, many=True).data)


# ------------------
# 4. WISHLIST
# ------------------
class WishlistView(views.APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        wishlist = Wishlist.objects.filter(user=request.user).first()
        if not wishlist:
            return Response([])
        return Response(ProductSerializer(wishlist.products.all(), many=True).data)

    def post(self, request):
        serializer = WishlistAddSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        product = serializer.validated_data['productId']

        wishlist, _ = Wishlist.objects.get_or_create(user=request.user)
        wishlist.products.add(product)
        return Response(ProductSerializer(wishlist.products.all(), many=True).data, status=status.HTTP_201_CREATED)


class WishlistRemoveView(views.APIView):
    permission_classes = [IsAuthenticated]

    def delete(self, request, product_id):
        wishlist = get_object_or_404(Wishlist, user=request.user)
        if not wishlist.products.filter(pk=product_id).exists():
            return Response({"detail": "Product not found in wishlist"}, status=status.HTTP_404_NOT_FOUND)
        wishlist.products.remove(product_id)
        return Response({"message": "Product removed from wishlist"})
