from rest_framework import viewsets, status, serializers as drf_serializers
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, extend_schema_view, OpenApiParameter

from apps.accounts.permissions import IsAdminRole
from apps.analytics.services import record_unique_view
from apps.filters.families import PLACES, ROUTES
from .models import Place, Route, Service
from .serializers import (
    PlaceSerializer,
    PlaceListSerializer,
    PlaceDetailSerializer,
    PlaceWriteSerializer,
    RouteSerializer,
    RouteListSerializer,
    RouteDetailSerializer,
    RouteWriteSerializer,
    ServiceSerializer,
    ServiceListSerializer,
    ServiceDetailSerializer,
    ServiceWriteSerializer,
)
from .services import (
    admin_list,
    get_extra_group_keys,
    list_public_places,
    list_public_routes,
    list_public_services,
    get_public_place,
    get_public_route,
    get_public_service,
    get_place_by_id,
    create_place,
    update_place,
    delete_place,
    get_route_by_id,
    create_route,
    update_route,
    delete_route,
    get_service_by_id,
    create_service,
    update_service,
    delete_service,
    CatalogServiceError,
    PlaceNotFoundError,
    RouteNotFoundError,
    ServiceNotFoundError,
)


class ErrorResponseSerializer(drf_serializers.Serializer):
    error = drf_serializers.CharField()


class CatalogPagination(PageNumberPagination):
    """Custom pagination for catalog lists."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


NOT_FOUND_ERRORS = (PlaceNotFoundError, RouteNotFoundError, ServiceNotFoundError)


def _error_response(error: CatalogServiceError):
    if isinstance(error, NOT_FOUND_ERRORS):
        return Response({'error': str(error)}, status=status.HTTP_404_NOT_FOUND)
    return Response({'error': str(error)}, status=status.HTTP_400_BAD_REQUEST)


def query_values(params, key):
    """
    Values of a multi-valued query parameter.

    Accepts repeated keys (``?seasons=a&seasons=b``), the bracket form
    (``?seasons[]=a``) and comma-separated values.
    """
    values = []
    for raw in params.getlist(key) + params.getlist(f'{key}[]'):
        values.extend(part.strip() for part in raw.split(','))
    return [value for value in values if value]


def filters_from_query(params, keys):
    return {key: query_values(params, key) for key in keys if query_values(params, key)}


SEARCH_PARAMETER = OpenApiParameter('search', str, description="Substring over title and descriptions")


# ============================================
# Admin CRUD
# ============================================

class AdminCatalogViewSet(viewsets.ModelViewSet):
    """
    Shared admin CRUD for catalog records.

    Writes go through the service layer; subclasses name the model, the
    serializers and the service functions.
    """

    permission_classes = [IsAdminRole]
    pagination_class = CatalogPagination
    lookup_value_regex = '[0-9a-fA-F-]{36}'

    model = None
    list_serializer_class = None
    write_serializer_class = None
    output_serializer_class = None

    def get_queryset(self):
        return admin_list(model=self.model, search=self.request.query_params.get('search'))

    def get_serializer_class(self):
        if self.action in ('create', 'update', 'partial_update'):
            return self.write_serializer_class
        if self.action == 'list':
            return self.list_serializer_class
        return self.output_serializer_class

    def perform_get(self, pk):
        raise NotImplementedError

    def perform_create_record(self, data):
        raise NotImplementedError

    def perform_update_record(self, pk, data):
        raise NotImplementedError

    def perform_delete_record(self, pk):
        raise NotImplementedError

    def retrieve(self, request, *args, **kwargs):
        try:
            record = self.perform_get(kwargs['pk'])
        except CatalogServiceError as e:
            return _error_response(e)
        return Response(self.output_serializer_class(record).data)

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            record = self.perform_create_record(serializer.validated_data)
        except CatalogServiceError as e:
            return _error_response(e)

        return Response(self.output_serializer_class(record).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        # PUT and PATCH both keep absent keys
        serializer = self.get_serializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        try:
            record = self.perform_update_record(kwargs['pk'], serializer.validated_data)
        except CatalogServiceError as e:
            return _error_response(e)

        return Response(self.output_serializer_class(record).data)

    def partial_update(self, request, *args, **kwargs):
        return self.update(request, *args, **kwargs)

    def destroy(self, request, *args, **kwargs):
        try:
            self.perform_delete_record(kwargs['pk'])
        except CatalogServiceError as e:
            return _error_response(e)

        return Response(status=status.HTTP_204_NO_CONTENT)


@extend_schema_view(
    list=extend_schema(parameters=[SEARCH_PARAMETER], tags=['admin-places']),
    retrieve=extend_schema(responses={200: PlaceSerializer, 404: ErrorResponseSerializer}, tags=['admin-places']),
    create=extend_schema(responses={201: PlaceSerializer, 400: ErrorResponseSerializer}, tags=['admin-places']),
    update=extend_schema(responses={200: PlaceSerializer, 404: ErrorResponseSerializer}, tags=['admin-places']),
    partial_update=extend_schema(responses={200: PlaceSerializer, 404: ErrorResponseSerializer}, tags=['admin-places']),
    destroy=extend_schema(responses={204: None, 404: ErrorResponseSerializer}, tags=['admin-places']),
)
class AdminPlaceViewSet(AdminCatalogViewSet):
    """
    Admin CRUD for places.

    Changing ``nearby_place_ids`` mirrors the change onto the listed places;
    deleting a place detaches it from every place that lists it.
    """

    model = Place
    list_serializer_class = PlaceListSerializer
    write_serializer_class = PlaceWriteSerializer
    output_serializer_class = PlaceSerializer

    def perform_get(self, pk):
        return get_place_by_id(place_id=pk)

    def perform_create_record(self, data):
        return create_place(data=data)

    def perform_update_record(self, pk, data):
        return update_place(place_id=pk, data=data)

    def perform_delete_record(self, pk):
        delete_place(place_id=pk)


@extend_schema_view(
    list=extend_schema(parameters=[SEARCH_PARAMETER], tags=['admin-routes']),
    retrieve=extend_schema(responses={200: RouteSerializer, 404: ErrorResponseSerializer}, tags=['admin-routes']),
    create=extend_schema(responses={201: RouteSerializer, 400: ErrorResponseSerializer}, tags=['admin-routes']),
    update=extend_schema(responses={200: RouteSerializer, 404: ErrorResponseSerializer}, tags=['admin-routes']),
    partial_update=extend_schema(responses={200: RouteSerializer, 404: ErrorResponseSerializer}, tags=['admin-routes']),
    destroy=extend_schema(responses={204: None, 404: ErrorResponseSerializer}, tags=['admin-routes']),
)
class AdminRouteViewSet(AdminCatalogViewSet):
    """
    Admin CRUD for routes.

    Changing ``guide_ids`` adds or removes this route in the guides'
    ``route_ids``; deleting a route removes it from every guide.
    """

    model = Route
    list_serializer_class = RouteListSerializer
    write_serializer_class = RouteWriteSerializer
    output_serializer_class = RouteSerializer

    def get_queryset(self):
        return super().get_queryset().prefetch_related('points')

    def perform_get(self, pk):
        return get_route_by_id(route_id=pk)

    def perform_create_record(self, data):
        return create_route(data=data)

    def perform_update_record(self, pk, data):
        return update_route(route_id=pk, data=data)

    def perform_delete_record(self, pk):
        delete_route(route_id=pk)


@extend_schema_view(
    list=extend_schema(parameters=[SEARCH_PARAMETER], tags=['admin-services']),
    retrieve=extend_schema(responses={200: ServiceSerializer, 404: ErrorResponseSerializer}, tags=['admin-services']),
    create=extend_schema(responses={201: ServiceSerializer, 400: ErrorResponseSerializer}, tags=['admin-services']),
    update=extend_schema(responses={200: ServiceSerializer, 404: ErrorResponseSerializer}, tags=['admin-services']),
    partial_update=extend_schema(
        responses={200: ServiceSerializer, 404: ErrorResponseSerializer}, tags=['admin-services']
    ),
    destroy=extend_schema(responses={204: None, 404: ErrorResponseSerializer}, tags=['admin-services']),
)
class AdminServiceViewSet(AdminCatalogViewSet):
    """Admin CRUD for services."""

    model = Service
    list_serializer_class = ServiceListSerializer
    write_serializer_class = ServiceWriteSerializer
    output_serializer_class = ServiceSerializer

    def perform_get(self, pk):
        return get_service_by_id(service_id=pk)

    def perform_create_record(self, data):
        return create_service(data=data)

    def perform_update_record(self, pk, data):
        return update_service(service_id=pk, data=data)

    def perform_delete_record(self, pk):
        delete_service(service_id=pk)


# ============================================
# Public catalog
# ============================================

class PublicCatalogViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Read-only public catalog.

    Detail pages are addressed by id or slug and record a unique view.
    """

    permission_classes = [AllowAny]
    pagination_class = CatalogPagination
    lookup_value_regex = '[^/]+'

    entity_type = None
    detail_serializer_class = None

    def get_record(self, id_or_slug):
        raise NotImplementedError

    def retrieve(self, request, *args, **kwargs):
        try:
            record = self.get_record(kwargs['pk'])
        except CatalogServiceError as e:
            return _error_response(e)

        record_unique_view(
            entity_type=self.entity_type,
            entity_id=record.id,
            visitor_id=getattr(request, 'visitor_id', None),
            user=request.user if request.user.is_authenticated else None,
        )
        return Response(self.detail_serializer_class(record).data)


@extend_schema_view(
    list=extend_schema(
        parameters=[
            SEARCH_PARAMETER,
            OpenApiParameter('sort_by', str, enum=['popularity']),
            *[OpenApiParameter(key, str, description="Comma-separated values") for key in PLACES.fixed_keys],
        ],
        description="Active places. Extra filter groups are queried by their key.",
        tags=['places'],
    ),
    retrieve=extend_schema(responses={200: PlaceDetailSerializer, 404: ErrorResponseSerializer}, tags=['places']),
)
class PublicPlaceViewSet(PublicCatalogViewSet):
    serializer_class = PlaceListSerializer
    detail_serializer_class = PlaceDetailSerializer
    entity_type = 'place'

    def get_queryset(self):
        params = self.request.query_params
        return list_public_places(
            search=params.get('search'),
            sort_by=params.get('sort_by'),
            fixed_filters=filters_from_query(params, PLACES.fixed_keys),
            extra_filters=filters_from_query(params, get_extra_group_keys(family=PLACES.name)),
        )

    def get_record(self, id_or_slug):
        return get_public_place(id_or_slug=id_or_slug)


@extend_schema_view(
    list=extend_schema(
        parameters=[
            SEARCH_PARAMETER,
            OpenApiParameter('sort_by', str, enum=['popularity', 'difficulty']),
            *[OpenApiParameter(key, str, description="Comma-separated values") for key in ROUTES.fixed_keys],
        ],
        description="Active routes. Extra filter groups are queried by their key.",
        tags=['routes'],
    ),
    retrieve=extend_schema(responses={200: RouteDetailSerializer, 404: ErrorResponseSerializer}, tags=['routes']),
)
class PublicRouteViewSet(PublicCatalogViewSet):
    serializer_class = RouteListSerializer
    detail_serializer_class = RouteDetailSerializer
    entity_type = 'route'

    def get_queryset(self):
        params = self.request.query_params
        return list_public_routes(
            search=params.get('search'),
            sort_by=params.get('sort_by'),
            fixed_filters=filters_from_query(params, ROUTES.fixed_keys),
            extra_filters=filters_from_query(params, get_extra_group_keys(family=ROUTES.name)),
        )

    def get_record(self, id_or_slug):
        return get_public_route(id_or_slug=id_or_slug)


@extend_schema_view(
    list=extend_schema(
        parameters=[SEARCH_PARAMETER, OpenApiParameter('category', str, description="Comma-separated categories")],
        tags=['services'],
    ),
    retrieve=extend_schema(responses={200: ServiceDetailSerializer, 404: ErrorResponseSerializer}, tags=['services']),
)
class PublicServiceViewSet(PublicCatalogViewSet):
    serializer_class = ServiceListSerializer
    detail_serializer_class = ServiceDetailSerializer
    entity_type = 'service'

    def get_queryset(self):
        params = self.request.query_params
        return list_public_services(
            search=params.get('search'),
            categories=query_values(params, 'category'),
        )

    def get_record(self, id_or_slug):
        return get_public_service(id_or_slug=id_or_slug)
