from django.db.models import Q
from django_filters import rest_framework as filters
from .models import Internship


class InternshipFilter(filters.FilterSet):
    """Literal, case-insensitive substring filters for the public listing"""
    search = filters.CharFilter(method='filter_search')
    location = filters.CharFilter(lookup_expr='icontains')
    company = filters.NumberFilter(field_name='company_id')

    class Meta:
        model = Internship
        fields = ['location', 'company']

    def filter_search(self, queryset, name, value):
        return queryset.filter(
            Q(title__icontains=value)
            | Q(description__icontains=value)
            | Q(requirements__icontains=value)
            | Q(location__icontains=value)
        )
