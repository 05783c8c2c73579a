from django.contrib.auth import authenticate, login, logout
from rest_framework import status
from rest_framework.response import Response
from rest_framework.authtoken.models import Token
from rest_framework.permissions import AllowAny, IsAuthenticated
from core.views import StorageAPIView
from .serializers import (
    UserSerializer, RegistrationSerializer, LoginSerializer, ResetPasswordSerializer
)
import logging

logger = logging.getLogger(__name__)


def auth_payload(user):
    token, _ = Token.objects.get_or_create(user=user)
    return {**UserSerializer(user).data, 'token': token.key}


class RegisterView(StorageAPIView):
    """Self-registration for students and companies; signs the new user in"""
    permission_classes = [AllowAny]
    authentication_classes = []

    def post(self, request):
        serializer = RegistrationSerializer(data=request.data, context={'storage': self.storage})
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        user = self.storage.create_user(
            username=data['username'],
            password=data['password'],
            role=data['role'],
            email=data['email'],
            name=data.get('name') or None,
        )
        login(request, user, backend='django.contrib.auth.backends.ModelBackend')
        return Response(auth_payload(user), status=status.HTTP_201_CREATED)


class LoginView(StorageAPIView):
    permission_classes = [AllowAny]
    authentication_classes = []

    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = authenticate(
            request,
            username=serializer.validated_data['username'],
            password=serializer.validated_data['password'],
        )
        if user is None:
            logger.warning(f"Failed login for '{serializer.validated_data['username']}'")
            return Response(
                {'message': 'Invalid username or password'},
                status=status.HTTP_401_UNAUTHORIZED
            )

        login(request, user)
        return Response(auth_payload(user))


class LogoutView(StorageAPIView):
    permission_classes = [IsAuthenticated]

    def post(self, request):
        Token.objects.filter(user=request.user).delete()
        logout(request)
        return Response({"message": "Logged out successfully"})


class CurrentUserView(StorageAPIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return Response(UserSerializer(request.user).data)


class ResetPasswordView(StorageAPIView):
    """Set a new password for a username; there is no verification step"""
    permission_classes = [AllowAny]
    authentication_classes = []

    def post(self, request):
        serializer = ResetPasswordSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = self.storage.get_user_by_username(serializer.validated_data['username'])
        if user is None:
            return Response({"message": "User not found"}, status=status.HTTP_404_NOT_FOUND)

        self.storage.update_user_password(user.id, serializer.validated_data['password'])
        logger.info(f"Password reset for '{user.username}'")
        return Response({"message": "Password reset successful."}, status=status.HTTP_200_OK)
