from django.urls import path
from core.apps import get_storage
from .views import InternshipListView, CompanyInternshipListView, InternshipDetailView

storage = get_storage()

urlpatterns = [
    path('internships', InternshipListView.as_view(storage=storage), name='internship-list'),
    path('internships/company', CompanyInternshipListView.as_view(storage=storage), name='company-internships'),
    path('internships/<int:pk>', InternshipDetailView.as_view(storage=storage), name='internship-detail'),
]
