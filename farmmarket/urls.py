from django.contrib import admin
from django.urls import path, include


urlpatterns = [
    path('admin/', admin.site.urls),

    # Accounts & admin user management
    path('api/', include('users.urls')),

    # Catalogue: products, equipment, wishlist
    path('api/', include('product_app.urls')),

    # Cart, checkout and orders
    path('api/', include('order.urls')),

    # AI helpers
    path('api/assistant/', include('assistant.urls')),
]
