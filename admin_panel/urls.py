from django.urls import path, include
from rest_framework.routers import DefaultRouter
from core.apps import get_storage
from .views import (
    UserViewSet,
    AdminInternshipViewSet,
    AdminApplicationViewSet,
)

storage = get_storage()

router = DefaultRouter(trailing_slash=False)
router.register(r'users', UserViewSet.with_storage(storage), basename='admin-users')
router.register(r'internships', AdminInternshipViewSet.with_storage(storage), basename='admin-internships')
router.register(r'applications', AdminApplicationViewSet.with_storage(storage), basename='admin-applications')

urlpatterns = [
    path('', include(router.urls)),
]
