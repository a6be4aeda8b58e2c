from django.urls import path
from . import views

urlpatterns = [
    # Public catalog
    path("api/products/", views.product_list, name="product_list"),
    path("api/products/<str:product_id>/", views.product_detail, name="product_detail"),
    path("api/products/<str:product_id>/reviews/", views.product_reviews, name="product_reviews"),
    path("api/products/<str:product_id>/selection/", views.product_selection, name="product_selection"),
    path("api/products/<str:product_id>/enquiries/", views.product_enquiry, name="product_enquiry"),
    path("api/contact/", views.contact, name="contact"),

    # Staff
    path("api/manage/products/", views.manage_products, name="manage_products"),
    path("api/manage/products/<str:product_id>/", views.manage_product, name="manage_product"),
    path("api/manage/products/<str:product_id>/options/<str:kind>/", views.manage_product_options, name="manage_product_options"),
    path("api/manage/options/<str:option_id>/", views.manage_option, name="manage_option"),
    path("api/manage/enquiries/", views.manage_enquiries, name="manage_enquiries"),
    path("api/manage/enquiries/<str:enquiry_id>/status/", views.manage_enquiry_status, name="manage_enquiry_status"),
]
