import django_filters

from modules.orders.models import Order


class OrderFilter(django_filters.FilterSet):
    order_status = django_filters.CharFilter(
        field_name="order_status", lookup_expr="iexact"
    )
    source_system = django_filters.CharFilter(field_name="source_system")
    courier = django_filters.CharFilter(field_name="courier_id")
    start_date = django_filters.DateFilter(
        field_name="created_at", lookup_expr="date__gte"
    )
    end_date = django_filters.DateFilter(
        field_name="created_at", lookup_expr="date__lte"
    )
    min_total = django_filters.NumberFilter(
        field_name="total_amount", lookup_expr="gte"
    )
    max_total = django_filters.NumberFilter(
        field_name="total_amount", lookup_expr="lte"
    )

    class Meta:
        model = Order
        fields = [
            "order_status",
            "source_system",
            "courier",
            "start_date",
            "end_date",
            "min_total",
            "max_total",
        ]
