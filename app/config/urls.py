"""
URL configuration for the settlement backend.

URL Structure:
    /                              - ReDoc API documentation
    /admin/                        - Django admin interface
    /health/                       - Health check endpoint
    /schema/                       - OpenAPI schema (YAML)
    /api/v1/auth/token/            - Obtain JWT pair (email + password)
    /api/v1/auth/token/refresh/    - Refresh JWT access token
    /api/v1/orders/                - Order endpoints
        (POST)                     - Create order (caller is the buyer)
        {id}/                      - Order detail
        {id}/confirm-payment/      - Seller confirms payment
        {id}/cancel/               - Seller cancels a pending order
        {id}/mark-sent/            - Seller marks the order as sent
        {id}/confirm-receipt/      - Buyer confirms receipt
    /api/v1/payments/              - Payment endpoints
        webhooks/paystack/         - Paystack webhook endpoint (POST)
    /api/v1/notifications/         - Notification endpoints
        dispatch/                  - Internal dispatch endpoint (POST, bearer token)
"""

from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularRedocView
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from core.views import health_check

# =============================================================================
# API v1 Routes
# =============================================================================
api_v1_patterns = [
    # Authentication (simplejwt)
    path("auth/token/", TokenObtainPairView.as_view(), name="token_obtain_pair"),
    path("auth/token/refresh/", TokenRefreshView.as_view(), name="token_refresh"),
    # Orders
    path("orders/", include("orders.urls")),
    # Payments
    path("payments/", include("payments.urls")),
    # Notifications
    path("notifications/", include("notifications.urls")),
]

urlpatterns = [
    # Documentation
    path("", SpectacularRedocView.as_view(url_name="schema"), name="redoc"),
    path("schema/", SpectacularAPIView.as_view(), name="schema"),
    # Admin
    path("admin/", admin.site.urls),
    # Health check (Docker, Kubernetes, load balancers)
    path("health/", health_check, name="health_check"),
    # API v1
    path("api/v1/", include(api_v1_patterns)),
]

# =============================================================================
# Admin Site Customization
# =============================================================================
admin.site.site_header = "Settlement Admin"
admin.site.site_title = "Settlement Admin Portal"
admin.site.index_title = "Orders, payouts and subscriptions"
