from django.db.models import Q
from django_filters import rest_framework as filters

from .models import Product


class AdminProductFilter(filters.FilterSet):
    """`?status=&category=&search=`; the value `all` disables a filter."""
    status = filters.CharFilter(method='filter_unless_all')
    category = filters.CharFilter(method='filter_unless_all')
    search = filters.CharFilter(method='filter_search')

    class Meta:
        model = Product
        fields = ['status', 'category', 'search']

    def filter_unless_all(self, queryset, name, value):
        if value == 'all':
            return queryset
        return queryset.filter(**{name: value})

    def filter_search(self, queryset, name, value):
        return queryset.filter(Q(name__icontains=value) | Q(description__icontains=value))
