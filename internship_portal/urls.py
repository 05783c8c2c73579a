from django.urls import path, include
from django.http import JsonResponse


def home(request):
    return JsonResponse({"message": "Internship Portal API is running."})


urlpatterns = [
    path('', home),

    path('api/', include('accounts.urls')),
    path('api/', include('internships.urls')),
    path('api/', include('applications.urls')),
    path('api/admin/', include('admin_panel.urls')),
]
