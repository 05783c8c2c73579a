from rest_framework import status
from rest_framework.response import Response
from admin_panel.permissions import IsStudent, IsCompany
from core import lifecycle
from core.views import StorageAPIView
from .serializers import ApplicationSerializer, ApplicationCreateSerializer, StatusUpdateSerializer
import logging

logger = logging.getLogger(__name__)


class ApplicationCreateView(StorageAPIView):
    """A student applies; status and timestamp are always set here"""
    permission_classes = [IsStudent]

    def post(self, request):
        serializer = ApplicationCreateSerializer(data=request.data, context={'storage': self.storage})
        serializer.is_valid(raise_exception=True)

        application = self.storage.create_application(
            internship_id=serializer.validated_data['internship_id'],
            student_id=request.user.id,
            resume_url=serializer.validated_data['resume_url'],
        )
        return Response(ApplicationSerializer(application).data, status=status.HTTP_201_CREATED)


class StudentApplicationListView(StorageAPIView):
    permission_classes = [IsStudent]

    def get(self, request):
        applications = self.storage.get_applications_by_student(request.user.id)
        return Response(ApplicationSerializer(applications, many=True).data)


class InternshipApplicationListView(StorageAPIView):
    """Applicants for one internship, visible to the owning company only"""
    permission_classes = [IsCompany]

    def get(self, request, pk):
        self.storage.verify_internship_ownership(pk, request.user.id, action="view applications for")
        applications = self.storage.get_applications_by_internship(pk)
        return Response(ApplicationSerializer(applications, many=True).data)


class ApplicationStatusView(StorageAPIView):
    """Accept or reject an application to one of the company's internships"""
    permission_classes = [IsCompany]

    def patch(self, request, pk):
        serializer = StatusUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        requested = lifecycle.parse_requested_status(serializer.validated_data.get('status'))

        with self.storage.atomic():
            application = self.storage.verify_application_ownership(pk, request.user.id, lock=True)
            lifecycle.check_transition(application.status, requested)
            application = self.storage.update_application_status(pk, requested)

        logger.info(f"Company {request.user.id} set application {pk} to {requested}")
        return Response(ApplicationSerializer(application).data)
