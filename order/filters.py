from django_filters import rest_framework as filters

from .models import Order


class AdminOrderFilter(filters.FilterSet):
    """
    `?status=&user=&from=&to=`. Unknown statuses are ignored rather than
    rejected, and `shipped` is read as `in_transit`.
    """
    status = filters.CharFilter(method='filter_status')
    user = filters.NumberFilter(field_name='user_id')

    class Meta:
        model = Order
        fields = ['status', 'user']

    def filter_status(self, queryset, name, value):
        value = Order.STATUS_ALIASES.get(value, value)
        if value not in dict(Order.STATUS_CHOICES):
            return queryset
        return queryset.filter(status=value)


# `from` is a keyword, so the date range filters can't be declared in the class body
AdminOrderFilter.base_filters['from'] = filters.DateFilter(field_name='created_at', lookup_expr='date__gte')
AdminOrderFilter.base_filters['to'] = filters.DateFilter(field_name='created_at', lookup_expr='date__lte')
