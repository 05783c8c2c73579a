from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from admin_panel.permissions import IsCompany
from core.views import StorageAPIView
from .filters import InternshipFilter
from .serializers import InternshipSerializer, InternshipWriteSerializer
import logging

logger = logging.getLogger(__name__)


class InternshipListView(StorageAPIView):
    """
    GET  -> every internship with its company name (no login needed)
    POST -> a company posts an internship owned by itself
    """

    def get_authenticators(self):
        # The public listing ignores credentials, so a stale token cannot 401 it
        if self.request.method == 'GET':
            return []
        return super().get_authenticators()

    def get_permissions(self):
        if self.request.method == 'GET':
            return [AllowAny()]
        return [IsCompany()]

    def get(self, request):
        filterset = InternshipFilter(request.query_params, queryset=self.storage.get_internships())
        if not filterset.is_valid():
            raise ValidationError(filterset.errors)
        return Response(InternshipSerializer(filterset.qs, many=True).data)

    def post(self, request):
        serializer = InternshipWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        internship = self.storage.create_internship(request.user.id, serializer.validated_data)
        return Response(InternshipSerializer(internship).data, status=status.HTTP_201_CREATED)


class CompanyInternshipListView(StorageAPIView):
    """Internships owned by the signed-in company"""
    permission_classes = [IsCompany]

    def get(self, request):
        internships = self.storage.get_internships_by_company(request.user.id)
        return Response(InternshipSerializer(internships, many=True).data)


class InternshipDetailView(StorageAPIView):
    """Owner-only edit and delete of a single internship"""
    permission_classes = [IsCompany]

    def patch(self, request, pk):
        serializer = InternshipWriteSerializer(data=request.data, partial=True)

        with self.storage.atomic():
            self.storage.verify_internship_ownership(pk, request.user.id, action="edit", lock=True)
            serializer.is_valid(raise_exception=True)
            internship = self.storage.update_internship(pk, serializer.validated_data)

        return Response(InternshipSerializer(internship).data)

    def delete(self, request, pk):
        with self.storage.atomic():
            self.storage.verify_internship_ownership(pk, request.user.id, action="delete", lock=True)
            self.storage.delete_internship(pk)

        logger.info(f"Company {request.user.id} deleted internship {pk}")
        return Response(status=status.HTTP_204_NO_CONTENT)
