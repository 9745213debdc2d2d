"""
Application user API views.

These endpoints are used by the dashboard to:
- Create, edit, list and delete application users
- Extend or subtract subscription time for a cohort of users
- Ban, pause, reset hardware ids and drop subscriptions
- Manage per-user variables
"""

import uuid

from asgiref.sync import async_to_sync
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.exceptions import validation_error_response
from api.v1.owner import get_owner_id
from api.v1.users.serializers import (
    AppUserDTOSerializer,
    BanAppUserRequestSerializer,
    ChangeUserTimeRequestSerializer,
    CreateAppUserRequestSerializer,
    DeleteAppUsersRequestSerializer,
    ExtendAppUsersRequestSerializer,
    PauseAppUsersRequestSerializer,
    ResetHwidRequestSerializer,
    SetUserVarRequestSerializer,
    UpdateAppUserRequestSerializer,
    UserCountResponseSerializer,
    UserVarDTOSerializer,
)
from applications.infrastructure.repositories.django_application_repository import (
    DjangoApplicationRepository,
)
from core.instrumentation import Status, StatusCode, get_tracer
from users.application.commands.change_user_time import (
    ExtendAppUsersCommand,
    SubtractAppUserTimeCommand,
)
from users.application.commands.manage_users import (
    CreateAppUserCommand,
    DeleteAppUsersCommand,
    UpdateAppUserCommand,
)
from users.application.commands.moderate_users import (
    BanAppUserCommand,
    DeleteSubscriptionCommand,
    PauseAppUsersCommand,
    ResetHwidCommand,
)
from users.application.commands.user_vars import DeleteUserVarCommand, SetUserVarCommand
from users.application.handlers.app_user_handlers import (
    CreateAppUserHandler,
    DeleteAppUsersHandler,
    ListAppUsersHandler,
    UpdateAppUserHandler,
)
from users.application.handlers.entitlement_handlers import (
    ExtendAppUsersHandler,
    SubtractAppUserTimeHandler,
)
from users.application.handlers.moderation_handlers import (
    BanAppUserHandler,
    DeleteSubscriptionHandler,
    PauseAppUsersHandler,
    ResetHwidHandler,
)
from users.application.handlers.user_var_handlers import (
    DeleteUserVarHandler,
    ListUserVarsHandler,
    SetUserVarHandler,
)
from users.domain.cohort import AppUserCohort
from users.infrastructure.repositories.django_app_user_repository import (
    DjangoAppUserRepository,
)
from users.infrastructure.repositories.django_user_var_repository import (
    DjangoUserVarRepository,
)

# Initialize repositories (in production, use DI container)
_application_repo = DjangoApplicationRepository()
_app_user_repo = DjangoAppUserRepository()
_user_var_repo = DjangoUserVarRepository()

tracer = get_tracer(__name__)

_ERROR_RESPONSES = {
    400: {"description": "Bad Request"},
    401: {"description": "Unauthorized"},
    404: {"description": "Application or user not found"},
}


def _validation_failed(span, serializer) -> Response:
    span.set_attribute("error", "validation_failed")
    span.set_attribute("error.details", str(serializer.errors))
    span.set_status(Status(StatusCode.ERROR, "Validation failed"))
    return validation_error_response(serializer.errors)


class AppUserCollectionView(APIView):
    """View for listing, creating and deleting an application's users."""

    @extend_schema(
        operation_id="list_app_users",
        summary="List Users",
        description="List the application's users, newest first, with their variables.",
        tags=["Users"],
        responses={200: AppUserDTOSerializer(many=True), **_ERROR_RESPONSES},
    )
    def get(self, request: Request, application_id: uuid.UUID) -> Response:
        """List users."""
        return async_to_sync(self._handle_list_app_users)(request, application_id)

    async def _handle_list_app_users(self, request: Request, application_id: uuid.UUID) -> Response:
        """Async handler for list users."""
        with tracer.start_as_current_span("list_app_users") as span:
            span.set_attribute("operation", "list_app_users")
            span.set_attribute("application.id", str(application_id))

            handler = ListAppUsersHandler(
                application_repository=_application_repo,
                app_user_repository=_app_user_repo,
                user_var_repository=_user_var_repo,
            )
            result = await handler.handle(get_owner_id(request), application_id)

            span.set_attribute("users.count", len(result))
            span.set_status(Status(StatusCode.OK))
            return Response(AppUserDTOSerializer(result, many=True).data)

    @extend_schema(
        operation_id="create_app_user",
        summary="Create User",
        description="Create a user. The subscription defaults to ``default``.",
        tags=["Users"],
        request=CreateAppUserRequestSerializer,
        responses={
            201: AppUserDTOSerializer,
            409: {"description": "Username already exists"},
            **_ERROR_RESPONSES,
        },
    )
    def post(self, request: Request, application_id: uuid.UUID) -> Response:
        """Create a user."""
        return async_to_sync(self._handle_create_app_user)(request, application_id)

    async def _handle_create_app_user(
        self, request: Request, application_id: uuid.UUID
    ) -> Response:
        """Async handler for create user."""
        with tracer.start_as_current_span("create_app_user") as span:
            span.set_attribute("operation", "create_app_user")
            span.set_attribute("application.id", str(application_id))

            serializer = CreateAppUserRequestSerializer(data=request.data)
            if not serializer.is_valid():
                return _validation_failed(span, serializer)

            data = serializer.validated_data
            handler = CreateAppUserHandler(
                application_repository=_application_repo,
                app_user_repository=_app_user_repo,
            )
            command = CreateAppUserCommand(
                owner_id=get_owner_id(request),
                application_id=application_id,
                username=data["username"],
                password=data["password"],
                email=data.get("email") or None,
                subscription=data.get("subscription") or None,
                expiry=data.get("expiry"),
            )

            result = await handler.handle(command)

            span.set_attribute("user.id", str(result.id))
            span.set_status(Status(StatusCode.OK))
            return Response(AppUserDTOSerializer(result).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        operation_id="delete_app_users",
        summary="Delete Users",
        description=(
            "Delete users whose expiry is in the past (``expired``), or exactly the "
            "listed ids. Users without an expiry are never expired."
        ),
        tags=["Users"],
        request=DeleteAppUsersRequestSerializer,
        responses={200: UserCountResponseSerializer, **_ERROR_RESPONSES},
    )
    def delete(self, request: Request, application_id: uuid.UUID) -> Response:
        """Delete users."""
        return async_to_sync(self._handle_delete_app_users)(request, application_id)

    async def _handle_delete_app_users(
        self, request: Request, application_id: uuid.UUID
    ) -> Response:
        """Async handler for delete users."""
        with tracer.start_as_current_span("delete_app_users") as span:
            span.set_attribute("operation", "delete_app_users")
            span.set_attribute("application.id", str(application_id))

            serializer = DeleteAppUsersRequestSerializer(data=request.data)
            if not serializer.is_valid():
                return _validation_failed(span, serializer)

            handler = DeleteAppUsersHandler(
                application_repository=_application_repo,
                app_user_repository=_app_user_repo,
            )
            command = DeleteAppUsersCommand(
                owner_id=get_owner_id(request),
                application_id=application_id,
                mode=serializer.validated_data.get("mode"),
                user_ids=serializer.validated_data["user_ids"],
            )

            result = await handler.handle(command)

            span.set_attribute("users.deleted", result.count)
            span.set_status(Status(StatusCode.OK))
            return Response(UserCountResponseSerializer(result).data)


class ExtendAppUsersView(APIView):
    """View for adding time to a cohort of users."""

    @extend_schema(
        operation_id="extend_app_users",
        summary="Extend Users",
        description=(
            "Add ``time`` units to every user matching the username and subscription "
            "filters. Users without an expiry start from now; an expiry unit of "
            "315569260 makes the cohort unlimited."
        ),
        tags=["Users"],
        request=ExtendAppUsersRequestSerializer,
        responses={200: UserCountResponseSerializer, **_ERROR_RESPONSES},
    )
    def post(self, request: Request, application_id: uuid.UUID) -> Response:
        """Extend a cohort of users."""
        return async_to_sync(self._handle_extend_app_users)(request, application_id)

    async def _handle_extend_app_users(
        self, request: Request, application_id: uuid.UUID
    ) -> Response:
        """Async handler for extend users."""
        with tracer.start_as_current_span("extend_app_users") as span:
            span.set_attribute("operation", "extend_app_users")
            span.set_attribute("application.id", str(application_id))

            serializer = ExtendAppUsersRequestSerializer(data=request.data)
            if not serializer.is_valid():
                return _validation_failed(span, serializer)

            data = serializer.validated_data
            cohort = AppUserCohort.from_dashboard(
                username=data.get("username"),
                subscription=data.get("subscription"),
                active_only=data["active_only"],
            )
            span.set_attribute("cohort", str(cohort))

            handler = ExtendAppUsersHandler(
                application_repository=_application_repo,
                app_user_repository=_app_user_repo,
            )
            command = ExtendAppUsersCommand(
                owner_id=get_owner_id(request),
                application_id=application_id,
                time=data["time"],
                expiry_unit=data["expiry_unit"],
                cohort=cohort,
            )

            result = await handler.handle(command)

            span.set_attribute("users.updated", result.count)
            span.set_status(Status(StatusCode.OK))
            return Response(UserCountResponseSerializer(result).data)


class SubtractAppUserTimeView(APIView):
    """View for removing time from a cohort of users."""

    @extend_schema(
        operation_id="subtract_app_user_time",
        summary="Subtract User Time",
        description=(
            "Remove ``time`` units from every matching user. Expiry never moves "
            "before now and users without an expiry are left unchanged."
        ),
        tags=["Users"],
        request=ChangeUserTimeRequestSerializer,
        responses={200: UserCountResponseSerializer, **_ERROR_RESPONSES},
    )
    def post(self, request: Request, application_id: uuid.UUID) -> Response:
        """Subtract time from a cohort of users."""
        return async_to_sync(self._handle_subtract_app_user_time)(request, application_id)

    async def _handle_subtract_app_user_time(
        self, request: Request, application_id: uuid.UUID
    ) -> Response:
        """Async handler for subtract user time."""
        with tracer.start_as_current_span("subtract_app_user_time") as span:
            span.set_attribute("operation", "subtract_app_user_time")
            span.set_attribute("application.id", str(application_id))

            serializer = ChangeUserTimeRequestSerializer(data=request.data)
            if not serializer.is_valid():
                return _validation_failed(span, serializer)

            data = serializer.validated_data
            cohort = AppUserCohort.from_dashboard(
                username=data.get("username"), subscription=data.get("subscription")
            )
            span.set_attribute("cohort", str(cohort))

            handler = SubtractAppUserTimeHandler(
                application_repository=_application_repo,
                app_user_repository=_app_user_repo,
            )
            command = SubtractAppUserTimeCommand(
                owner_id=get_owner_id(request),
                application_id=application_id,
                time=data["time"],
                expiry_unit=data["expiry_unit"],
                cohort=cohort,
            )

            result = await handler.handle(command)

            span.set_attribute("users.updated", result.count)
            span.set_status(Status(StatusCode.OK))
            return Response(UserCountResponseSerializer(result).data)


class PauseAppUsersView(APIView):
    """View for pausing or unpausing users."""

    @extend_schema(
        operation_id="pause_app_users",
        summary="Pause Users",
        description="Pause (``action=pause``) or unpause (``action=unpause``) the listed users.",
        tags=["Users"],
        request=PauseAppUsersRequestSerializer,
        responses={200: UserCountResponseSerializer, **_ERROR_RESPONSES},
    )
    def post(self, request: Request, application_id: uuid.UUID) -> Response:
        """Pause or unpause users."""
        return async_to_sync(self._handle_pause_app_users)(request, application_id)

    async def _handle_pause_app_users(
        self, request: Request, application_id: uuid.UUID
    ) -> Response:
        """Async handler for pause users."""
        with tracer.start_as_current_span("pause_app_users") as span:
            span.set_attribute("operation", "pause_app_users")
            span.set_attribute("application.id", str(application_id))

            serializer = PauseAppUsersRequestSerializer(data=request.data)
            if not serializer.is_valid():
                return _validation_failed(span, serializer)

            handler = PauseAppUsersHandler(
                application_repository=_application_repo,
                app_user_repository=_app_user_repo,
            )
            command = PauseAppUsersCommand(
                owner_id=get_owner_id(request),
                application_id=application_id,
                user_ids=serializer.validated_data["user_ids"],
                action=serializer.validated_data.get("action"),
            )

            result = await handler.handle(command)

            span.set_attribute("users.updated", result.count)
            span.set_status(Status(StatusCode.OK))
            return Response(UserCountResponseSerializer(result).data)


class ResetHwidView(APIView):
    """View for clearing hardware bindings."""

    @extend_schema(
        operation_id="reset_hwid",
        summary="Reset HWID",
        description=(
            "Clear the hardware id of the listed users, or of every user when none is listed."
        ),
        tags=["Users"],
        request=ResetHwidRequestSerializer,
        responses={200: UserCountResponseSerializer, **_ERROR_RESPONSES},
    )
    def post(self, request: Request, application_id: uuid.UUID) -> Response:
        """Reset hardware ids."""
        return async_to_sync(self._handle_reset_hwid)(request, application_id)

    async def _handle_reset_hwid(self, request: Request, application_id: uuid.UUID) -> Response:
        """Async handler for reset hwid."""
        with tracer.start_as_current_span("reset_hwid") as span:
            span.set_attribute("operation", "reset_hwid")
            span.set_attribute("application.id", str(application_id))

            serializer = ResetHwidRequestSerializer(data=request.data)
            if not serializer.is_valid():
                return _validation_failed(span, serializer)

            handler = ResetHwidHandler(
                application_repository=_application_repo,
                app_user_repository=_app_user_repo,
            )
            command = ResetHwidCommand(
                owner_id=get_owner_id(request),
                application_id=application_id,
                user_ids=serializer.validated_data["user_ids"],
            )

            result = await handler.handle(command)

            span.set_attribute("users.updated", result.count)
            span.set_status(Status(StatusCode.OK))
            return Response(UserCountResponseSerializer(result).data)


class AppUserDetailView(APIView):
    """View for editing one user."""

    @extend_schema(
        operation_id="update_app_user",
        summary="Update User",
        description="Edit a user's username, password, email, subscription or hardware id.",
        tags=["Users"],
        request=UpdateAppUserRequestSerializer,
        responses={
            200: AppUserDTOSerializer,
            409: {"description": "Username already exists"},
            **_ERROR_RESPONSES,
        },
    )
    def patch(self, request: Request, application_id: uuid.UUID, user_id: uuid.UUID) -> Response:
        """Update a user."""
        return async_to_sync(self._handle_update_app_user)(request, application_id, user_id)

    async def _handle_update_app_user(
        self, request: Request, application_id: uuid.UUID, user_id: uuid.UUID
    ) -> Response:
        """Async handler for update user."""
        with tracer.start_as_current_span("update_app_user") as span:
            span.set_attribute("operation", "update_app_user")
            span.set_attribute("application.id", str(application_id))
            span.set_attribute("user.id", str(user_id))

            serializer = UpdateAppUserRequestSerializer(data=request.data)
            if not serializer.is_valid():
                return _validation_failed(span, serializer)

            data = serializer.validated_data
            handler = UpdateAppUserHandler(
                application_repository=_application_repo,
                app_user_repository=_app_user_repo,
                user_var_repository=_user_var_repo,
            )
            command = UpdateAppUserCommand(
                owner_id=get_owner_id(request),
                application_id=application_id,
                user_id=user_id,
                username=data.get("username"),
                password=data.get("password") or None,
                email=data.get("email"),
                subscription=data.get("subscription"),
                hwid=data.get("hwid"),
            )

            result = await handler.handle(command)

            span.set_status(Status(StatusCode.OK))
            return Response(AppUserDTOSerializer(result).data)


class BanAppUserView(APIView):
    """View for banning one user."""

    @extend_schema(
        operation_id="ban_app_user",
        summary="Ban User",
        description="Mark a user as banned with an optional reason.",
        tags=["Users"],
        request=BanAppUserRequestSerializer,
        responses={200: AppUserDTOSerializer, **_ERROR_RESPONSES},
    )
    def post(self, request: Request, application_id: uuid.UUID, user_id: uuid.UUID) -> Response:
        """Ban a user."""
        return async_to_sync(self._handle_ban_app_user)(request, application_id, user_id)

    async def _handle_ban_app_user(
        self, request: Request, application_id: uuid.UUID, user_id: uuid.UUID
    ) -> Response:
        """Async handler for ban user."""
        with tracer.start_as_current_span("ban_app_user") as span:
            span.set_attribute("operation", "ban_app_user")
            span.set_attribute("application.id", str(application_id))
            span.set_attribute("user.id", str(user_id))

            serializer = BanAppUserRequestSerializer(data=request.data)
            if not serializer.is_valid():
                return _validation_failed(span, serializer)

            handler = BanAppUserHandler(
                application_repository=_application_repo,
                app_user_repository=_app_user_repo,
            )
            command = BanAppUserCommand(
                owner_id=get_owner_id(request),
                application_id=application_id,
                user_id=user_id,
                reason=serializer.validated_data.get("reason") or None,
            )

            result = await handler.handle(command)

            span.set_status(Status(StatusCode.OK))
            return Response(AppUserDTOSerializer(result).data)


class DeleteSubscriptionView(APIView):
    """View for putting a user back on the default subscription."""

    @extend_schema(
        operation_id="delete_subscription",
        summary="Delete Subscription",
        description="Reset a user's subscription to ``default`` and clear the expiry.",
        tags=["Users"],
        request=None,
        responses={200: AppUserDTOSerializer, **_ERROR_RESPONSES},
    )
    def post(self, request: Request, application_id: uuid.UUID, user_id: uuid.UUID) -> Response:
        """Delete a user's subscription."""
        return async_to_sync(self._handle_delete_subscription)(request, application_id, user_id)

    async def _handle_delete_subscription(
        self, request: Request, application_id: uuid.UUID, user_id: uuid.UUID
    ) -> Response:
        """Async handler for delete subscription."""
        with tracer.start_as_current_span("delete_subscription") as span:
            span.set_attribute("operation", "delete_subscription")
            span.set_attribute("application.id", str(application_id))
            span.set_attribute("user.id", str(user_id))

            handler = DeleteSubscriptionHandler(
                application_repository=_application_repo,
                app_user_repository=_app_user_repo,
            )
            command = DeleteSubscriptionCommand(
                owner_id=get_owner_id(request),
                application_id=application_id,
                user_id=user_id,
            )

            result = await handler.handle(command)

            span.set_status(Status(StatusCode.OK))
            return Response(AppUserDTOSerializer(result).data)


class UserVarCollectionView(APIView):
    """View for listing and setting one user's variables."""

    @extend_schema(
        operation_id="list_user_vars",
        summary="List User Variables",
        tags=["Users"],
        responses={200: UserVarDTOSerializer(many=True), **_ERROR_RESPONSES},
    )
    def get(self, request: Request, application_id: uuid.UUID, user_id: uuid.UUID) -> Response:
        """List a user's variables."""
        return async_to_sync(self._handle_list_user_vars)(request, application_id, user_id)

    async def _handle_list_user_vars(
        self, request: Request, application_id: uuid.UUID, user_id: uuid.UUID
    ) -> Response:
        """Async handler for list user variables."""
        with tracer.start_as_current_span("list_user_vars") as span:
            span.set_attribute("operation", "list_user_vars")
            span.set_attribute("user.id", str(user_id))

            handler = ListUserVarsHandler(
                application_repository=_application_repo,
                app_user_repository=_app_user_repo,
                user_var_repository=_user_var_repo,
            )
            result = await handler.handle(get_owner_id(request), application_id, user_id)

            span.set_status(Status(StatusCode.OK))
            return Response(UserVarDTOSerializer(result, many=True).data)

    @extend_schema(
        operation_id="set_user_var",
        summary="Set User Variable",
        description="Create or overwrite a named variable on a user.",
        tags=["Users"],
        request=SetUserVarRequestSerializer,
        responses={200: UserVarDTOSerializer, **_ERROR_RESPONSES},
    )
    def post(self, request: Request, application_id: uuid.UUID, user_id: uuid.UUID) -> Response:
        """Set a user variable."""
        return async_to_sync(self._handle_set_user_var)(request, application_id, user_id)

    async def _handle_set_user_var(
        self, request: Request, application_id: uuid.UUID, user_id: uuid.UUID
    ) -> Response:
        """Async handler for set user variable."""
        with tracer.start_as_current_span("set_user_var") as span:
            span.set_attribute("operation", "set_user_var")
            span.set_attribute("user.id", str(user_id))

            serializer = SetUserVarRequestSerializer(data=request.data)
            if not serializer.is_valid():
                return _validation_failed(span, serializer)

            data = serializer.validated_data
            handler = SetUserVarHandler(
                application_repository=_application_repo,
                app_user_repository=_app_user_repo,
                user_var_repository=_user_var_repo,
            )
            command = SetUserVarCommand(
                owner_id=get_owner_id(request),
                application_id=application_id,
                user_id=user_id,
                name=data["name"],
                value=data.get("value"),
                read_only=data["read_only"],
            )

            result = await handler.handle(command)

            span.set_attribute("var.name", result.name)
            span.set_status(Status(StatusCode.OK))
            return Response(UserVarDTOSerializer(result).data)


class UserVarDetailView(APIView):
    """View for deleting one user variable."""

    @extend_schema(
        operation_id="delete_user_var",
        summary="Delete User Variable",
        tags=["Users"],
        responses={204: {"description": "Variable deleted"}, **_ERROR_RESPONSES},
    )
    def delete(
        self, request: Request, application_id: uuid.UUID, user_id: uuid.UUID, var_name: str
    ) -> Response:
        """Delete a user variable."""
        return async_to_sync(self._handle_delete_user_var)(
            request, application_id, user_id, var_name
        )

    async def _handle_delete_user_var(
        self, request: Request, application_id: uuid.UUID, user_id: uuid.UUID, var_name: str
    ) -> Response:
        """Async handler for delete user variable."""
        with tracer.start_as_current_span("delete_user_var") as span:
            span.set_attribute("operation", "delete_user_var")
            span.set_attribute("user.id", str(user_id))
            span.set_attribute("var.name", var_name)

            handler = DeleteUserVarHandler(
                application_repository=_application_repo,
                app_user_repository=_app_user_repo,
                user_var_repository=_user_var_repo,
            )
            await handler.handle(
                DeleteUserVarCommand(
                    owner_id=get_owner_id(request),
                    application_id=application_id,
                    user_id=user_id,
                    name=var_name,
                )
            )

            span.set_status(Status(StatusCode.OK))
            return Response(status=status.HTTP_204_NO_CONTENT)
