from django.urls import path
from users.views import (
    RegisterUserView,
    LoginView,
    LogoutView,
    CurrentUserView,
    UpdateMeView,
    AdminUserListView,
    AdminUserUpdateView,
    FarmerListView,
    PendingFarmerListView,
    ApproveFarmerView,
    RejectFarmerView,
    FarmerDetailView,
)

urlpatterns = [
    # Auth
    path('auth/register', RegisterUserView.as_view(), name='auth-register'),
    path('auth/login', LoginView.as_view(), name='auth-login'),
    path('auth/logout', LogoutView.as_view(), name='auth-logout'),
    path('auth/me', CurrentUserView.as_view(), name='auth-me'),
    path('users/me', UpdateMeView.as_view(), name='users-me'),

    # Admin user management
    path('admin/users', AdminUserListView.as_view(), name='admin-users'),
    path('admin/users/<int:pk>', AdminUserUpdateView.as_view(), name='admin-user-update'),

    # Farmer approval (admin)
    path('farmers', FarmerListView.as_view(), name='farmers-list'),
    path('farmers/pending', PendingFarmerListView.as_view(), name='farmers-pending'),
    path('farmers/<int:pk>', FarmerDetailView.as_view(), name='farmer-detail'),
    path('farmers/<int:pk>/approve', ApproveFarmerView.as_view(), name='farmer-approve'),
    path('farmers/<int:pk>/reject', RejectFarmerView.as_view(), name='farmer-reject'),
]
