from rest_framework import status, serializers as drf_serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.accounts.permissions import IsAdminRole
from .serializers import (
    FilterConfigSerializer,
    PublicFilterConfigSerializer,
    ReplaceConfigSerializer,
    AddGroupSerializer,
    RemoveGroupSerializer,
    GroupMetaSerializer,
    ReplaceValueSerializer,
    RemoveValueSerializer,
    CascadeResponseSerializer,
)
from .services import (
    ABSENT,
    get_config,
    get_public_config,
    replace_config,
    add_extra_group,
    remove_group as remove_group_service,
    update_group_meta,
    replace_value as replace_value_service,
    remove_value as remove_value_service,
    FiltersServiceError,
    FilterValidationError,
    GroupKeyConflictError,
    FilterFamilyNotFoundError,
    FilterGroupNotFoundError,
    FilterValueNotFoundError,
)


class ErrorResponseSerializer(drf_serializers.Serializer):
    error = drf_serializers.CharField()


ERROR_STATUS = {
    FilterValidationError: status.HTTP_400_BAD_REQUEST,
    GroupKeyConflictError: status.HTTP_400_BAD_REQUEST,
    FilterFamilyNotFoundError: status.HTTP_404_NOT_FOUND,
    FilterGroupNotFoundError: status.HTTP_404_NOT_FOUND,
    FilterValueNotFoundError: status.HTTP_404_NOT_FOUND,
}


def _error_response(error: FiltersServiceError):
    return Response(
        {'error': str(error)},
        status=ERROR_STATUS.get(type(error), status.HTTP_400_BAD_REQUEST),
    )


def _cascade_response(config, result):
    return Response({
        'config': FilterConfigSerializer(config).data,
        'cascade': result.as_dict(),
    })


ADMIN_ERRORS = {
    400: ErrorResponseSerializer,
    404: ErrorResponseSerializer,
}


@extend_schema(
    methods=['GET'],
    responses={200: FilterConfigSerializer, 404: ErrorResponseSerializer},
    description="Get the filter config of an entity family, creating defaults on first access.",
    tags=['admin-filters'],
)
@extend_schema(
    methods=['PUT'],
    request=ReplaceConfigSerializer,
    responses={200: FilterConfigSerializer, **ADMIN_ERRORS},
    description="Replace all fixed and extra group values. No entity cascade.",
    tags=['admin-filters'],
)
@api_view(['GET', 'PUT'])
@permission_classes([IsAdminRole])
def filter_config(request, family):
    """Get or replace a family's filter config."""
    try:
        if request.method == 'GET':
            config = get_config(family=family)
        else:
            serializer = ReplaceConfigSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            data = serializer.validated_data
            config = replace_config(
                family=family,
                fixed_groups=data.get('fixed_groups'),
                extra_groups=data.get('extra_groups'),
                fixed_group_meta=data.get('fixed_group_meta', ABSENT),
                hidden_fixed_groups=data.get('hidden_fixed_groups', ABSENT),
            )
    except FiltersServiceError as e:
        return _error_response(e)

    return Response(FilterConfigSerializer(config).data)


@extend_schema(
    request=AddGroupSerializer,
    responses={201: FilterConfigSerializer, **ADMIN_ERRORS},
    description="Add an extra filter group. The key is derived from the label when omitted.",
    tags=['admin-filters'],
)
@api_view(['POST'])
@permission_classes([IsAdminRole])
def add_group(request, family):
    """Add extra group."""
    serializer = AddGroupSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        config = add_extra_group(family=family, **serializer.validated_data)
    except FiltersServiceError as e:
        return _error_response(e)

    return Response(FilterConfigSerializer(config).data, status=status.HTTP_201_CREATED)


@extend_schema(
    request=RemoveGroupSerializer,
    responses={200: CascadeResponseSerializer, **ADMIN_ERRORS},
    description=(
        "Remove a group. Fixed groups are hidden and emptied; extra groups are "
        "deleted and stripped from every entity's custom filters."
    ),
    tags=['admin-filters'],
)
@api_view(['POST'])
@permission_classes([IsAdminRole])
def remove_group(request, family):
    """Remove group."""
    serializer = RemoveGroupSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        config, result = remove_group_service(family=family, key=serializer.validated_data['key'])
    except FiltersServiceError as e:
        return _error_response(e)

    return _cascade_response(config, result)


@extend_schema(
    request=GroupMetaSerializer,
    responses={200: FilterConfigSerializer, **ADMIN_ERRORS},
    description="Update label, icon or icon type of a group. Omitted fields are kept, null clears.",
    tags=['admin-filters'],
)
@api_view(['PATCH'])
@permission_classes([IsAdminRole])
def group_meta(request, family):
    """Update group display metadata."""
    serializer = GroupMetaSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    changes = dict(serializer.validated_data)
    key = changes.pop('key')

    try:
        config = update_group_meta(family=family, key=key, **changes)
    except FiltersServiceError as e:
        return _error_response(e)

    return Response(FilterConfigSerializer(config).data)


@extend_schema(
    request=ReplaceValueSerializer,
    responses={200: CascadeResponseSerializer, **ADMIN_ERRORS},
    description="Rename a value in a group and in every entity that uses it.",
    tags=['admin-filters'],
)
@api_view(['POST'])
@permission_classes([IsAdminRole])
def replace_value(request, family):
    """Rename value with cascade."""
    serializer = ReplaceValueSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        config, result = replace_value_service(family=family, **serializer.validated_data)
    except FiltersServiceError as e:
        return _error_response(e)

    return _cascade_response(config, result)


@extend_schema(
    request=RemoveValueSerializer,
    responses={200: CascadeResponseSerializer, **ADMIN_ERRORS},
    description="Remove a value from a group and from every entity that uses it.",
    tags=['admin-filters'],
)
@api_view(['POST'])
@permission_classes([IsAdminRole])
def remove_value(request, family):
    """Remove value with cascade."""
    serializer = RemoveValueSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        config, result = remove_value_service(family=family, **serializer.validated_data)
    except FiltersServiceError as e:
        return _error_response(e)

    return _cascade_response(config, result)


@extend_schema(
    responses={200: PublicFilterConfigSerializer, 404: ErrorResponseSerializer},
    description="Public filter groups of an entity family.",
    tags=['filters'],
)
@api_view(['GET'])
@permission_classes([AllowAny])
def public_filters(request, family):
    """Public filters (never creates a config)."""
    try:
        data = get_public_config(family=family)
    except FiltersServiceError as e:
        return _error_response(e)

    return Response(data)
