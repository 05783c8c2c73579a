from django.urls import path
from core.apps import get_storage
from .views import (
    ApplicationCreateView, StudentApplicationListView,
    InternshipApplicationListView, ApplicationStatusView,
)

storage = get_storage()

urlpatterns = [
    path('applications', ApplicationCreateView.as_view(storage=storage), name='application-create'),
    path('applications/student', StudentApplicationListView.as_view(storage=storage), name='student-applications'),
    path('applications/internship/<int:pk>', InternshipApplicationListView.as_view(storage=storage), name='internship-applications'),
    path('applications/<int:pk>/status', ApplicationStatusView.as_view(storage=storage), name='application-status'),
]
