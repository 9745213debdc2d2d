"""
Application API views.

Owners create, list, rename, pause and delete the applications their
licenses and users belong to.
"""

import uuid

from asgiref.sync import async_to_sync
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.exceptions import validation_error_response
from api.v1.apps.serializers import (
    ApplicationDTOSerializer,
    CreateApplicationRequestSerializer,
    UpdateApplicationRequestSerializer,
)
from api.v1.owner import get_owner_id
from applications.application.commands.create_application import CreateApplicationCommand
from applications.application.commands.update_application import (
    DeleteApplicationCommand,
    UpdateApplicationCommand,
)
from applications.application.handlers.application_handlers import (
    CreateApplicationHandler,
    DeleteApplicationHandler,
    ListApplicationsHandler,
    UpdateApplicationHandler,
)
from applications.infrastructure.repositories.django_application_repository import (
    DjangoApplicationRepository,
)
from core.instrumentation import Status, StatusCode, get_tracer

_application_repo = DjangoApplicationRepository()

tracer = get_tracer(__name__)


class ApplicationListView(APIView):
    """View for listing and creating applications."""

    @extend_schema(
        operation_id="list_applications",
        summary="List Applications",
        description="List the applications owned by the authenticated owner.",
        tags=["Applications"],
        responses={
            200: ApplicationDTOSerializer(many=True),
            401: {"description": "Unauthorized"},
        },
    )
    def get(self, request: Request) -> Response:
        """List applications."""
        return async_to_sync(self._handle_list_applications)(request)

    async def _handle_list_applications(self, request: Request) -> Response:
        """Async handler for list applications."""
        with tracer.start_as_current_span("list_applications") as span:
            span.set_attribute("operation", "list_applications")

            handler = ListApplicationsHandler(application_repository=_application_repo)
            result = await handler.handle(get_owner_id(request))

            span.set_attribute("applications.count", len(result))
            span.set_status(Status(StatusCode.OK))
            return Response(ApplicationDTOSerializer(result, many=True).data)

    @extend_schema(
        operation_id="create_application",
        summary="Create Application",
        description="Create an application with a fresh secret, status active and version 1.0.",
        tags=["Applications"],
        request=CreateApplicationRequestSerializer,
        responses={
            201: ApplicationDTOSerializer,
            400: {"description": "Bad Request"},
            401: {"description": "Unauthorized"},
        },
    )
    def post(self, request: Request) -> Response:
        """Create an application."""
        return async_to_sync(self._handle_create_application)(request)

    async def _handle_create_application(self, request: Request) -> Response:
        """Async handler for create application."""
        with tracer.start_as_current_span("create_application") as span:
            span.set_attribute("operation", "create_application")

            serializer = CreateApplicationRequestSerializer(data=request.data)
            if not serializer.is_valid():
                span.set_attribute("error", "validation_failed")
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                return validation_error_response(serializer.errors)

            handler = CreateApplicationHandler(application_repository=_application_repo)
            command = CreateApplicationCommand(
                owner_id=get_owner_id(request),
                name=serializer.validated_data["name"],
            )

            result = await handler.handle(command)

            span.set_attribute("application.id", str(result.id))
            span.set_status(Status(StatusCode.OK))
            return Response(ApplicationDTOSerializer(result).data, status=status.HTTP_201_CREATED)


class ApplicationDetailView(APIView):
    """View for updating and deleting one application."""

    @extend_schema(
        operation_id="update_application",
        summary="Update Application",
        description="Rename an application, or set its status to active or paused.",
        tags=["Applications"],
        request=UpdateApplicationRequestSerializer,
        responses={
            200: ApplicationDTOSerializer,
            400: {"description": "Bad Request"},
            401: {"description": "Unauthorized"},
            404: {"description": "Application not found"},
        },
    )
    def patch(self, request: Request, application_id: uuid.UUID) -> Response:
        """Update an application."""
        return async_to_sync(self._handle_update_application)(request, application_id)

    async def _handle_update_application(
        self, request: Request, application_id: uuid.UUID
    ) -> Response:
        """Async handler for update application."""
        with tracer.start_as_current_span("update_application") as span:
            span.set_attribute("operation", "update_application")
            span.set_attribute("application.id", str(application_id))

            serializer = UpdateApplicationRequestSerializer(data=request.data)
            if not serializer.is_valid():
                span.set_attribute("error", "validation_failed")
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                return validation_error_response(serializer.errors)

            handler = UpdateApplicationHandler(application_repository=_application_repo)
            command = UpdateApplicationCommand(
                owner_id=get_owner_id(request),
                application_id=application_id,
                name=serializer.validated_data.get("name"),
                status=serializer.validated_data.get("status"),
            )

            result = await handler.handle(command)

            span.set_status(Status(StatusCode.OK))
            return Response(ApplicationDTOSerializer(result).data)

    @extend_schema(
        operation_id="delete_application",
        summary="Delete Application",
        description="Delete an application together with its licenses, users and variables.",
        tags=["Applications"],
        responses={
            204: {"description": "Application deleted"},
            401: {"description": "Unauthorized"},
            404: {"description": "Application not found"},
        },
    )
    def delete(self, request: Request, application_id: uuid.UUID) -> Response:
        """Delete an application."""
        return async_to_sync(self._handle_delete_application)(request, application_id)

    async def _handle_delete_application(
        self, request: Request, application_id: uuid.UUID
    ) -> Response:
        """Async handler for delete application."""
        with tracer.start_as_current_span("delete_application") as span:
            span.set_attribute("operation", "delete_application")
            span.set_attribute("application.id", str(application_id))

            handler = DeleteApplicationHandler(application_repository=_application_repo)
            await handler.handle(
                DeleteApplicationCommand(
                    owner_id=get_owner_id(request), application_id=application_id
                )
            )

            span.set_status(Status(StatusCode.OK))
            return Response(status=status.HTTP_204_NO_CONTENT)
