from django.http import HttpResponse
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound
from rest_framework.response import Response
from accounts.serializers import (
    UserSerializer, AdminUserCreateSerializer, AdminUserUpdateSerializer
)
from applications.serializers import ApplicationSerializer, StatusUpdateSerializer
from core import lifecycle
from core.views import StorageViewSet
from internships.serializers import (
    InternshipSerializer, InternshipWriteSerializer, AdminInternshipCreateSerializer
)
from .permissions import IsAdmin
from .utils import (
    build_applications_workbook, EXPORT_CONTENT_TYPE, EXPORT_FILENAME
)
import logging


logger = logging.getLogger(__name__)


class AdminViewSet(StorageViewSet):
    """Admin routes act on any record; there is no ownership check"""
    permission_classes = [IsAdmin]
    lookup_value_regex = r'\d+'


# ==========================================================
# USERS
# ==========================================================
class UserViewSet(AdminViewSet):

    def list(self, request):
        return Response(UserSerializer(self.storage.get_all_users(), many=True).data)

    def create(self, request):
        serializer = AdminUserCreateSerializer(data=request.data, context={'storage': self.storage})
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        user = self.storage.create_user(
            username=data['username'],
            password=data['password'],
            role=data['role'],
            email=data['email'],
            name=data.get('name') or None,
        )
        logger.info(f"Admin {request.user.id} created user {user.id}")
        return Response(UserSerializer(user).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request, pk=None):
        serializer = AdminUserUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        user = self.storage.update_user(pk, serializer.validated_data)
        logger.info(f"Admin {request.user.id} updated user {pk}")
        return Response(UserSerializer(user).data)

    def destroy(self, request, pk=None):
        # Their internships and applications stay behind as orphans
        self.storage.delete_user(pk)
        logger.info(f"Admin {request.user.id} deleted user {pk}")
        return Response(status=status.HTTP_204_NO_CONTENT)


# ==========================================================
# INTERNSHIPS
# ==========================================================
class AdminInternshipViewSet(AdminViewSet):

    def create(self, request):
        serializer = AdminInternshipCreateSerializer(data=request.data, context={'storage': self.storage})
        serializer.is_valid(raise_exception=True)

        internship = self.storage.create_internship(
            serializer.validated_data['company_id'], serializer.validated_data
        )
        logger.info(f"Admin {request.user.id} created internship {internship.id}")
        return Response(InternshipSerializer(internship).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request, pk=None):
        serializer = InternshipWriteSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        internship = self.storage.update_internship(pk, serializer.validated_data)
        return Response(InternshipSerializer(internship).data)

    def destroy(self, request, pk=None):
        self.storage.delete_internship(pk)
        logger.info(f"Admin {request.user.id} deleted internship {pk}")
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=['get'])
    def applications(self, request, pk=None):
        if self.storage.get_internship(pk) is None:
            raise NotFound("Internship not found")
        applications = self.storage.get_applications_by_internship(pk)
        return Response(ApplicationSerializer(applications, many=True).data)


# ==========================================================
# APPLICATIONS
# ==========================================================
class AdminApplicationViewSet(AdminViewSet):

    def list(self, request):
        return Response(ApplicationSerializer(self.storage.get_all_applications(), many=True).data)

    def destroy(self, request, pk=None):
        self.storage.delete_application(pk)
        logger.info(f"Admin {request.user.id} deleted application {pk}")
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=['get'])
    def export(self, request):
        """Every application as an .xlsx attachment"""
        applications = self.storage.get_all_applications()
        try:
            content = build_applications_workbook(applications)
        except Exception as e:
            logger.error(f"Applications export failed: {str(e)}")
            return Response(
                {'message': 'Failed to export applications'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

        response = HttpResponse(content, content_type=EXPORT_CONTENT_TYPE)
        response['Content-Disposition'] = f'attachment; filename={EXPORT_FILENAME}'
        logger.info(f"Admin {request.user.id} exported applications")
        return response

    @action(detail=True, methods=['patch'], url_path='status')
    def update_status(self, request, pk=None):
        serializer = StatusUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        requested = lifecycle.parse_requested_status(serializer.validated_data.get('status'))

        with self.storage.atomic():
            application = self.storage.get_application(pk)
            if application is None:
                raise NotFound("Application not found")
            lifecycle.check_transition(application.status, requested)
            application = self.storage.update_application_status(pk, requested)

        logger.info(f"Admin {request.user.id} set application {pk} to {requested}")
        return Response(ApplicationSerializer(application).data)
