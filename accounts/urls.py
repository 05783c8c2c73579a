from django.urls import path
from core.apps import get_storage
from .views import (
    RegisterView, LoginView, LogoutView, CurrentUserView, ResetPasswordView
)

storage = get_storage()

urlpatterns = [
    path('register', RegisterView.as_view(storage=storage), name='register'),
    path('login', LoginView.as_view(storage=storage), name='login'),
    path('logout', LogoutView.as_view(storage=storage), name='logout'),
    path('user', CurrentUserView.as_view(storage=storage), name='current-user'),
    path('reset-password', ResetPasswordView.as_view(storage=storage), name='reset-password'),
]
