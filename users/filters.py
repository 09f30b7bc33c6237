from django.db.models import Q
from django_filters import rest_framework as filters

from .models import CustomUser


class AdminUserFilter(filters.FilterSet):
    role = filters.CharFilter(method='filter_role')
    approved = filters.BooleanFilter(field_name='is_approved')
    search = filters.CharFilter(method='filter_search')

    class Meta:
        model = CustomUser
        fields = ['role', 'approved', 'search']

    def filter_role(self, queryset, name, value):
        if value == 'all':
            return queryset
        return queryset.filter(role=value)

    def filter_search(self, queryset, name, value):
        return queryset.filter(Q(name__icontains=value) | Q(email__icontains=value))
