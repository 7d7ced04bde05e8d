"""
API views for the external posts integration.

URL Structure (prefix /api/v1/integrations/):
    external-posts/          GET   (authenticated) ?limit=
    external-posts/import/   POST  (staff) {"limit": N}

Error Mapping:
    ExternalServiceError -> 502 via core.exception_handler
    CircuitOpenError     -> 503 via core.exception_handler
    Import failures come back as ServiceResult and are mapped here
"""

from __future__ import annotations

import logging

from drf_spectacular.utils import (
    OpenApiParameter,
    OpenApiResponse,
    extend_schema,
)
from rest_framework import status
from rest_framework.permissions import IsAdminUser, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from integrations.client import ExternalPostsClient
from integrations.serializers import (
    ExternalPostSerializer,
    ImportResultSerializer,
    LimitQuerySerializer,
)
from integrations.services import ExternalPostImportService

logger = logging.getLogger(__name__)


def service_unavailable(error: str) -> Response:
    return Response(
        {"error": error, "error_code": "SERVICE_UNAVAILABLE"},
        status=status.HTTP_503_SERVICE_UNAVAILABLE,
    )


class ExternalPostListView(APIView):
    """Proxy the external posts API (cached, circuit-protected)."""

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="List external posts",
        parameters=[OpenApiParameter("limit", int, description="1-100, default 10")],
        responses={
            200: ExternalPostSerializer(many=True),
            502: OpenApiResponse(description="Upstream error"),
            503: OpenApiResponse(description="Circuit open"),
        },
        tags=["Integrations"],
    )
    def get(self, request):
        query = LimitQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        posts = ExternalPostsClient().list_posts(limit=query.validated_data["limit"])

        return Response(ExternalPostSerializer([p.to_dict() for p in posts], many=True).data)


class ExternalPostImportView(APIView):
    """Import external posts as drafts owned by the calling staff user."""

    permission_classes = [IsAdminUser]

    @extend_schema(
        summary="Import external posts",
        request=LimitQuerySerializer,
        responses={
            200: ImportResultSerializer,
            502: OpenApiResponse(description="Upstream error"),
            503: OpenApiResponse(description="Circuit open"),
        },
        tags=["Integrations"],
    )
    def post(self, request):
        params = LimitQuerySerializer(data=request.data)
        params.is_valid(raise_exception=True)

        result = ExternalPostImportService.import_posts(
            request.user, limit=params.validated_data["limit"]
        )
        if not result:
            if result.error_code == "SERVICE_UNAVAILABLE":
                return service_unavailable(result.error)
            return Response(result.to_response(), status=status.HTTP_502_BAD_GATEWAY)

        return Response(ImportResultSerializer(result.data).data)
