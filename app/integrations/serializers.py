"""
Serializers for the integrations API.
"""

from rest_framework import serializers

from integrations.client import MAX_LIMIT


class ExternalPostSerializer(serializers.Serializer):
    external_id = serializers.CharField()
    title = serializers.CharField()
    body = serializers.CharField()
    user_id = serializers.IntegerField(allow_null=True)


class LimitQuerySerializer(serializers.Serializer):
    limit = serializers.IntegerField(min_value=1, max_value=MAX_LIMIT, default=10)


class ImportResultSerializer(serializers.Serializer):
    created = serializers.IntegerField()
    skipped = serializers.IntegerField()
