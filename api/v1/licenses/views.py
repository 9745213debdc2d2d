"""
License API views.

These endpoints are used by the dashboard to:
- Issue batches of license keys
- Add time to unused licenses
- Ban and delete licenses
"""

import uuid

from asgiref.sync import async_to_sync
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.exceptions import validation_error_response
from api.v1.licenses.serializers import (
    AddLicenseTimeRequestSerializer,
    BanLicenseRequestSerializer,
    CountResponseSerializer,
    CreateLicenseBatchRequestSerializer,
    DeleteLicensesRequestSerializer,
    LicenseBatchResponseSerializer,
    LicenseDTOSerializer,
)
from api.v1.owner import get_owner_id
from applications.infrastructure.repositories.django_application_repository import (
    DjangoApplicationRepository,
)
from core.instrumentation import Status, StatusCode, get_tracer
from licenses.application.commands.add_license_time import AddLicenseTimeCommand
from licenses.application.commands.ban_license import BanLicenseCommand
from licenses.application.commands.create_license_batch import CreateLicenseBatchCommand
from licenses.application.commands.delete_licenses import DeleteLicensesCommand
from licenses.application.handlers.create_license_batch_handler import CreateLicenseBatchHandler
from licenses.application.handlers.license_lifecycle_handlers import (
    AddLicenseTimeHandler,
    BanLicenseHandler,
    DeleteLicensesHandler,
    ListLicensesHandler,
)
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository

# Initialize repositories (in production, use DI container)
_application_repo = DjangoApplicationRepository()
_license_repo = DjangoLicenseRepository()

tracer = get_tracer(__name__)

_ERROR_RESPONSES = {
    400: {"description": "Bad Request"},
    401: {"description": "Unauthorized"},
    404: {"description": "Application or license not found"},
}


class LicenseCollectionView(APIView):
    """View for listing, creating and deleting an application's licenses."""

    @extend_schema(
        operation_id="list_licenses",
        summary="List Licenses",
        description="List the application's licenses, newest first.",
        tags=["Licenses"],
        responses={200: LicenseDTOSerializer(many=True), **_ERROR_RESPONSES},
    )
    def get(self, request: Request, application_id: uuid.UUID) -> Response:
        """List licenses."""
        return async_to_sync(self._handle_list_licenses)(request, application_id)

    async def _handle_list_licenses(self, request: Request, application_id: uuid.UUID) -> Response:
        """Async handler for list licenses."""
        with tracer.start_as_current_span("list_licenses") as span:
            span.set_attribute("operation", "list_licenses")
            span.set_attribute("application.id", str(application_id))

            handler = ListLicensesHandler(
                application_repository=_application_repo,
                license_repository=_license_repo,
            )
            result = await handler.handle(get_owner_id(request), application_id)

            span.set_attribute("licenses.count", len(result))
            span.set_status(Status(StatusCode.OK))
            return Response(LicenseDTOSerializer(result, many=True).data)

    @extend_schema(
        operation_id="create_licenses",
        summary="Create License Batch",
        description=(
            "Generate ``amount`` license keys from ``mask`` (each ``*`` becomes a random "
            "character). All licenses of the batch share one expiry; an expiry unit of "
            "315569260 issues lifetime licenses."
        ),
        tags=["Licenses"],
        request=CreateLicenseBatchRequestSerializer,
        responses={201: LicenseBatchResponseSerializer, **_ERROR_RESPONSES},
    )
    def post(self, request: Request, application_id: uuid.UUID) -> Response:
        """Create a batch of licenses."""
        return async_to_sync(self._handle_create_licenses)(request, application_id)

    async def _handle_create_licenses(
        self, request: Request, application_id: uuid.UUID
    ) -> Response:
        """Async handler for create license batch."""
        with tracer.start_as_current_span("create_licenses") as span:
            span.set_attribute("operation", "create_licenses")
            span.set_attribute("application.id", str(application_id))

            serializer = CreateLicenseBatchRequestSerializer(data=request.data)
            if not serializer.is_valid():
                span.set_attribute("error", "validation_failed")
                span.set_attribute("error.details", str(serializer.errors))
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                return validation_error_response(serializer.errors)

            data = serializer.validated_data
            span.set_attribute("amount", data["amount"])
            span.set_attribute("expiry_unit", data["expiry_unit"])

            handler = CreateLicenseBatchHandler(
                application_repository=_application_repo,
                license_repository=_license_repo,
            )
            command = CreateLicenseBatchCommand(
                owner_id=get_owner_id(request),
                application_id=application_id,
                amount=data["amount"],
                mask=data["mask"],
                duration=data["duration"],
                expiry_unit=data["expiry_unit"],
                level=data.get("level"),
                note=data.get("note") or None,
                lowercase_letters=data["lowercase_letters"],
                uppercase_letters=data["uppercase_letters"],
            )

            result = await handler.handle(command)

            span.set_attribute("licenses.count", result.count)
            span.set_status(Status(StatusCode.OK))
            return Response(
                LicenseBatchResponseSerializer(result).data, status=status.HTTP_201_CREATED
            )

    @extend_schema(
        operation_id="delete_licenses",
        summary="Delete Licenses",
        description=(
            "Delete the application's used or unused licenses, or exactly the listed ids. "
            "A request without a recognised mode is rejected."
        ),
        tags=["Licenses"],
        request=DeleteLicensesRequestSerializer,
        responses={200: CountResponseSerializer, **_ERROR_RESPONSES},
    )
    def delete(self, request: Request, application_id: uuid.UUID) -> Response:
        """Delete licenses."""
        return async_to_sync(self._handle_delete_licenses)(request, application_id)

    async def _handle_delete_licenses(
        self, request: Request, application_id: uuid.UUID
    ) -> Response:
        """Async handler for delete licenses."""
        with tracer.start_as_current_span("delete_licenses") as span:
            span.set_attribute("operation", "delete_licenses")
            span.set_attribute("application.id", str(application_id))

            serializer = DeleteLicensesRequestSerializer(data=request.data)
            if not serializer.is_valid():
                span.set_attribute("error", "validation_failed")
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                return validation_error_response(serializer.errors)

            handler = DeleteLicensesHandler(
                application_repository=_application_repo,
                license_repository=_license_repo,
            )
            command = DeleteLicensesCommand(
                owner_id=get_owner_id(request),
                application_id=application_id,
                mode=serializer.validated_data.get("mode"),
                license_ids=serializer.validated_data["license_ids"],
            )

            result = await handler.handle(command)

            span.set_attribute("licenses.deleted", result.count)
            span.set_status(Status(StatusCode.OK))
            return Response(CountResponseSerializer(result).data)


class AddLicenseTimeView(APIView):
    """View for adding time to every unused license."""

    @extend_schema(
        operation_id="add_license_time",
        summary="Add License Time",
        description=(
            "Add ``time`` units to every unused license of the application. "
            "Used licenses are never changed."
        ),
        tags=["Licenses"],
        request=AddLicenseTimeRequestSerializer,
        responses={200: CountResponseSerializer, **_ERROR_RESPONSES},
    )
    def post(self, request: Request, application_id: uuid.UUID) -> Response:
        """Add time to unused licenses."""
        return async_to_sync(self._handle_add_license_time)(request, application_id)

    async def _handle_add_license_time(
        self, request: Request, application_id: uuid.UUID
    ) -> Response:
        """Async handler for add license time."""
        with tracer.start_as_current_span("add_license_time") as span:
            span.set_attribute("operation", "add_license_time")
            span.set_attribute("application.id", str(application_id))

            serializer = AddLicenseTimeRequestSerializer(data=request.data)
            if not serializer.is_valid():
                span.set_attribute("error", "validation_failed")
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                return validation_error_response(serializer.errors)

            handler = AddLicenseTimeHandler(
                application_repository=_application_repo,
                license_repository=_license_repo,
            )
            command = AddLicenseTimeCommand(
                owner_id=get_owner_id(request),
                application_id=application_id,
                time=serializer.validated_data["time"],
                expiry_unit=serializer.validated_data["expiry_unit"],
            )

            result = await handler.handle(command)

            span.set_attribute("licenses.updated", result.count)
            span.set_status(Status(StatusCode.OK))
            return Response(CountResponseSerializer(result).data)


class BanLicenseView(APIView):
    """View for banning one license."""

    @extend_schema(
        operation_id="ban_license",
        summary="Ban License",
        description="Mark a license as banned with an optional reason.",
        tags=["Licenses"],
        request=BanLicenseRequestSerializer,
        responses={200: LicenseDTOSerializer, **_ERROR_RESPONSES},
    )
    def post(self, request: Request, application_id: uuid.UUID, license_id: uuid.UUID) -> Response:
        """Ban a license."""
        return async_to_sync(self._handle_ban_license)(request, application_id, license_id)

    async def _handle_ban_license(
        self, request: Request, application_id: uuid.UUID, license_id: uuid.UUID
    ) -> Response:
        """Async handler for ban license."""
        with tracer.start_as_current_span("ban_license") as span:
            span.set_attribute("operation", "ban_license")
            span.set_attribute("application.id", str(application_id))
            span.set_attribute("license.id", str(license_id))

            serializer = BanLicenseRequestSerializer(data=request.data)
            if not serializer.is_valid():
                span.set_attribute("error", "validation_failed")
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                return validation_error_response(serializer.errors)

            handler = BanLicenseHandler(
                application_repository=_application_repo,
                license_repository=_license_repo,
            )
            command = BanLicenseCommand(
                owner_id=get_owner_id(request),
                application_id=application_id,
                license_id=license_id,
                reason=serializer.validated_data.get("reason") or None,
            )

            result = await handler.handle(command)

            span.set_status(Status(StatusCode.OK))
            return Response(LicenseDTOSerializer(result).data)
