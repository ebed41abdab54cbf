from __future__ import annotations

from rest_framework import serializers

from modules.stores.models import StoreAddress


class StoreAddressSerializer(serializers.ModelSerializer):
    address_text = serializers.CharField(read_only=True)

    class Meta:
        model = StoreAddress
        fields = [
            "id",
            "name",
            "address_line_1",
            "address_line_2",
            "landmark",
            "city",
            "state",
            "pincode",
            "latitude",
            "longitude",
            "contact_name",
            "contact_phone",
            "is_default",
            "address_text",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class CreateStoreAddressSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=200)
    address_line_1 = serializers.CharField(max_length=255)
    address_line_2 = serializers.CharField(
        max_length=255, required=False, allow_blank=True, default=""
    )
    landmark = serializers.CharField(
        max_length=255, required=False, allow_blank=True, default=""
    )
    city = serializers.CharField(
        max_length=100, required=False, allow_blank=True, default=""
    )
    state = serializers.CharField(
        max_length=100, required=False, allow_blank=True, default=""
    )
    pincode = serializers.CharField(
        max_length=20, required=False, allow_blank=True, default=""
    )
    latitude = serializers.FloatField(
        required=False, allow_null=True, default=None, min_value=-90, max_value=90
    )
    longitude = serializers.FloatField(
        required=False, allow_null=True, default=None, min_value=-180, max_value=180
    )
    contact_name = serializers.CharField(
        max_length=200, required=False, allow_blank=True, default=""
    )
    contact_phone = serializers.CharField(
        max_length=32, required=False, allow_blank=True, default=""
    )
    is_default = serializers.BooleanField(required=False, default=False)
