"""
Django admin configuration for marketplace models.
"""

from django.contrib import admin

from marketplace.models import Follow, Product, ProductComment, ProductLike


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("name", "seller", "price", "is_active", "created_at")
    list_filter = ("is_active",)
    search_fields = ("name", "seller__display_name")
    raw_id_fields = ("seller",)


@admin.register(ProductLike)
class ProductLikeAdmin(admin.ModelAdmin):
    list_display = ("product", "user", "created_at")
    raw_id_fields = ("product", "user")


@admin.register(ProductComment)
class ProductCommentAdmin(admin.ModelAdmin):
    list_display = ("product", "user", "created_at")
    raw_id_fields = ("product", "user")


@admin.register(Follow)
class FollowAdmin(admin.ModelAdmin):
    list_display = ("follower", "following", "created_at")
    raw_id_fields = ("follower", "following")
