import logging

from django.conf import settings
from django.contrib.auth import get_user_model
from django.shortcuts import get_object_or_404
from rest_framework import generics, views, status
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.tokens import RefreshToken

from farmmarket.pagination import StandardPagination
from .email import notify_admin_of_new_farmer, notify_farmer_of_approval, notify_farmer_of_rejection
from .filters import AdminUserFilter
from .permissions import IsAdmin
from .serializers import (
    get_registration_serializer_class,
    LoginSerializer,
    UserSerializer,
    ProfileUpdateSerializer,
    AdminUserUpdateSerializer,
)

User = get_user_model()
logger = logging.getLogger(__name__)


def token_response(user, status_code):
    """
    Issues a JWT for `user`, returns it in the body and sets it as an
    http-only cookie for browser clients.
    """
    refresh = RefreshToken.for_user(user)
    access = refresh.access_token

    response = Response({
        "status": "success",
        "token": str(access),
        "refresh": str(refresh),
        "user": UserSerializer(user).data,
    }, status=status_code)

    response.set_cookie(
        settings.JWT_COOKIE_NAME,
        str(access),
        max_age=int(settings.SIMPLE_JWT['ACCESS_TOKEN_LIFETIME'].total_seconds()),
        httponly=True,
        secure=settings.JWT_COOKIE_SECURE,
        samesite='Lax',
    )
    return response


# -------------------------------------------------
# 1. AUTH
# -------------------------------------------------

class RegisterUserView(views.APIView):
    """
    Handles registration of new users. The `role` field picks the payload
    shape (buyer or farmer); admins cannot self-register.
    """
    permission_classes = [AllowAny]
    authentication_classes = []

    def post(self, request):
        serializer_class = get_registration_serializer_class(request.data)
        serializer = serializer_class(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        logger.info(f"Registered {user.role} {user.email} (id={user.id})")

        if user.is_farmer and not user.is_approved:
            notify_admin_of_new_farmer(user)

        return token_response(user, status.HTTP_201_CREATED)


class LoginView(views.APIView):
    permission_classes = [AllowAny]
    authentication_classes = []

    def get_authenticate_header(self, request):
        # Keeps failed logins at 401; without auth classes DRF would send 403
        return 'Bearer realm="api"'

    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.validated_data['user']
        logger.info(f"Login for {user.email}")
        return token_response(user, status.HTTP_200_OK)


class LogoutView(views.APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        response = Response({"status": "success"})
        response.delete_cookie(settings.JWT_COOKIE_NAME, samesite='Lax')
        return response


class CurrentUserView(generics.RetrieveAPIView):
    """
    Returns the currently authenticated user's info
    """
    serializer_class = UserSerializer
    permission_classes = [IsAuthenticated]

    def get_object(self):
        return self.request.user


class UpdateMeView(views.APIView):
    permission_classes = [IsAuthenticated]

    def patch(self, request):
        serializer = ProfileUpdateSerializer(request.user, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        if not serializer.validated_data:
            raise ValidationError({"detail": "No valid fields provided for update."})
        user = serializer.save()
        return Response({"status": "success", "data": UserSerializer(user).data})


# -------------------------------------------------
# 2. ADMIN USER MANAGEMENT
# -------------------------------------------------

class AdminUserListView(generics.ListAPIView):
    """
    Lists users with role/approval/search filters plus the counters shown on
    the admin dashboard cards.
    """
    permission_classes = [IsAuthenticated, IsAdmin]
    serializer_class = UserSerializer
    filterset_class = AdminUserFilter
    pagination_class = StandardPagination

    def get_queryset(self):
        return User.objects.all().order_by('-date_joined')

    def list(self, request, *args, **kwargs):
        queryset = self.filter_queryset(self.get_queryset())
        page = self.paginate_queryset(queryset)
        users = self.get_serializer(page, many=True).data

        stats = {
            "totalUsers": User.objects.count(),
            "activeFarmers": User.objects.filter(role='farmer', is_approved=True).count(),
            "activeBuyers": User.objects.filter(role='buyer').count(),
            "pendingApproval": User.objects.filter(role='farmer', is_approved=False).count(),
        }
        return Response({
            "results": len(users),
            "total": self.paginator.page.paginator.count,
            "users": users,
            "stats": stats,
        })


class AdminUserUpdateView(views.APIView):
    permission_classes = [IsAuthenticated, IsAdmin]

    def patch(self, request, pk):
        user = get_object_or_404(User, pk=pk)
        serializer = AdminUserUpdateSerializer(user, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        return Response({"status": "success", "user": UserSerializer(user).data})


# -------------------------------------------------
# 3. FARMER APPROVAL
# -------------------------------------------------

def get_farmer_or_404(pk):
    return get_object_or_404(User, pk=pk, role='farmer')


class FarmerListView(generics.ListAPIView):
    permission_classes = [IsAuthenticated, IsAdmin]
    serializer_class = UserSerializer

    def get_queryset(self):
        return User.objects.filter(role='farmer').order_by('-date_joined')


class PendingFarmerListView(FarmerListView):
    def get_queryset(self):
        return super().get_queryset().filter(is_approved=False)


class ApproveFarmerView(views.APIView):
    permission_classes = [IsAuthenticated, IsAdmin]

    def patch(self, request, pk):
        farmer = get_farmer_or_404(pk)
        farmer.is_approved = True
        farmer.save(update_fields=['is_approved'])
        logger.info(f"Farmer approved: {farmer.email} (id={farmer.id})")

        notify_farmer_of_approval(farmer)

        return Response({
            "status": "success",
            "message": "Farmer approved successfully.",
            "farmer": UserSerializer(farmer).data,
        })


class RejectFarmerView(views.APIView):
    permission_classes = [IsAuthenticated, IsAdmin]

    def patch(self, request, pk):
        farmer = get_farmer_or_404(pk)
        farmer.is_approved = False
        farmer.save(update_fields=['is_approved'])
        logger.info(f"Farmer rejected: {farmer.email} (id={farmer.id})")

        notify_farmer_of_rejection(farmer, request.data.get('reason'))

        return Response({
            "status": "success",
            "message": "Farmer rejected.",
            "farmer": UserSerializer(farmer).data,
        })


class FarmerDetailView(views.APIView):
    """
    PATCH toggles approval from the admin panel, DELETE removes the farmer.
    """
    permission_classes = [IsAuthenticated, IsAdmin]

    def patch(self, request, pk):
        is_approved = request.data.get('isApproved')
        if not isinstance(is_approved, bool):
            raise ValidationError({"detail": "isApproved field must be boolean"})

        farmer = get_farmer_or_404(pk)
        farmer.is_approved = is_approved
        farmer.save(update_fields=['is_approved'])
        return Response({"status": "success", "farmer": UserSerializer(farmer).data})

    def delete(self, request, pk):
        farmer = get_farmer_or_404(pk)
        logger.info(f"Deleting farmer {farmer.email} (id={farmer.id})")
        farmer.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)
