from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from .exceptions import NoTrucksError, RecordNotFoundError
from .serializers import (
    ExpenseFilterSerializer,
    ExpenseInputSerializer,
    ExpenseSerializer,
    FuelEntryFilterSerializer,
    FuelEntryInputSerializer,
    FuelEntrySerializer,
    RouteFilterSerializer,
    RouteInputSerializer,
    RouteNameQuerySerializer,
    RouteSerializer,
    SimilarRouteSerializer,
    TripFilterSerializer,
    TripInputSerializer,
    TripSerializer,
    TruckFilterSerializer,
    TruckInputSerializer,
    TruckSerializer,
)
from .services import get_record_store


def newest_first(records):
    return sorted(records, key=lambda record: record.date, reverse=True)


class RecordViewSet(viewsets.ViewSet):
    """
    CRUD over one record collection of the store.

    list: All records of the collection (filterable per subclass)
    create: Add a record
    retrieve: Get one record
    update / partial_update: Shallow-merge new values over a record
    destroy: Delete a record
    """

    collection = None
    serializer_class = None
    input_serializer_class = None
    filter_serializer_class = None
    lookup_value_regex = '[^/]+'

    @property
    def store(self):
        return get_record_store()

    def get_service(self):
        return getattr(self.store, self.collection)

    def get_serializer_class(self):
        if self.action in ('create', 'update', 'partial_update'):
            return self.input_serializer_class
        return self.serializer_class

    def get_record(self, pk):
        record = self.get_service().get(pk)
        if record is None:
            raise RecordNotFoundError()
        return record

    def filter_records(self, records, params):
        return records

    def list(self, request):
        records = self.get_service().all()

        if self.filter_serializer_class is not None:
            filter_serializer = self.filter_serializer_class(data=request.query_params)
            filter_serializer.is_valid(raise_exception=True)
            records = self.filter_records(records, filter_serializer.validated_data)

        return Response(self.serializer_class(records, many=True).data)

    def create(self, request):
        input_serializer = self.input_serializer_class(data=request.data)
        input_serializer.is_valid(raise_exception=True)

        record = self.get_service().add(**input_serializer.validated_data)
        return Response(self.serializer_class(record).data, status=status.HTTP_201_CREATED)

    def retrieve(self, request, pk=None):
        record = self.get_record(pk)
        return Response(self.serializer_class(record).data)

    def update(self, request, pk=None):
        return self._update(request, pk, partial=False)

    def partial_update(self, request, pk=None):
        return self._update(request, pk, partial=True)

    def destroy(self, request, pk=None):
        if not self.get_service().delete(pk):
            raise RecordNotFoundError()
        return Response(status=status.HTTP_204_NO_CONTENT)

    def _update(self, request, pk, partial):
        self.get_record(pk)

        input_serializer = self.input_serializer_class(data=request.data, partial=partial)
        input_serializer.is_valid(raise_exception=True)

        record = self.get_service().update(pk, **input_serializer.validated_data)
        return Response(self.serializer_class(record).data)


class RouteViewSet(RecordViewSet):
    """Route templates. Trips copy a route's name when they are logged."""

    collection = 'routes'
    serializer_class = RouteSerializer
    input_serializer_class = RouteInputSerializer
    filter_serializer_class = RouteFilterSerializer

    def filter_records(self, records, params):
        search = params.get('search')
        if search:
            return self.get_service().search(search)
        return records

    @extend_schema(
        parameters=[RouteNameQuerySerializer],
        responses={200: RouteSerializer},
        description="Find a route by name, ignoring case.",
        tags=['records'],
    )
    @action(detail=False, methods=['get'], url_path='by-name')
    def by_name(self, request):
        """
        GET /api/records/routes/by-name/?name=...
        """
        query_serializer = RouteNameQuerySerializer(data=request.query_params)
        query_serializer.is_valid(raise_exception=True)

        route = self.get_service().get_by_name(query_serializer.validated_data['name'])
        if route is None:
            raise RecordNotFoundError('Route not found.')
        return Response(RouteSerializer(route).data)

    @extend_schema(
        parameters=[RouteNameQuerySerializer],
        responses={200: SimilarRouteSerializer(many=True)},
        description="List routes whose names look like the given name.",
        tags=['records'],
    )
    @action(detail=False, methods=['get'])
    def similar(self, request):
        """
        GET /api/records/routes/similar/?name=...&threshold=80
        """
        query_serializer = RouteNameQuerySerializer(data=request.query_params)
        query_serializer.is_valid(raise_exception=True)
        params = query_serializer.validated_data

        matches = self.get_service().find_similar(params['name'], threshold=params['threshold'])
        data = [
            {'route': route, 'similarity': score, 'match_type': match_type}
            for route, score, match_type in matches
        ]
        return Response(SimilarRouteSerializer(data, many=True).data)


class TripViewSet(RecordViewSet):
    collection = 'trips'
    serializer_class = TripSerializer
    input_serializer_class = TripInputSerializer
    filter_serializer_class = TripFilterSerializer

    def filter_records(self, records, params):
        if params.get('route'):
            records = self.get_service().for_route(params['route'])
        if 'start_date' in params:
            start = params['start_date'].isoformat()
            records = [t for t in records if t.date >= start]
        if 'end_date' in params:
            end = params['end_date'].isoformat()
            records = [t for t in records if t.date <= end]
        return newest_first(records)


class ExpenseViewSet(RecordViewSet):
    collection = 'expenses'
    serializer_class = ExpenseSerializer
    input_serializer_class = ExpenseInputSerializer
    filter_serializer_class = ExpenseFilterSerializer

    def filter_records(self, records, params):
        return newest_first(self.get_service().by_category(params.get('category')))


class TruckViewSet(RecordViewSet):
    """Trucks. Deleting one leaves its fuel entries in place."""

    collection = 'trucks'
    serializer_class = TruckSerializer
    input_serializer_class = TruckInputSerializer
    filter_serializer_class = TruckFilterSerializer

    def filter_records(self, records, params):
        active = params.get('active')
        if active is None:
            return records
        return [truck for truck in records if truck.is_active == active]

    @extend_schema(
        responses={200: TruckSerializer},
        description="The truck selected by default: first active truck, else the first one.",
        tags=['records'],
    )
    @action(detail=False, methods=['get'])
    def default(self, request):
        """
        GET /api/records/trucks/default/
        """
        truck = self.get_service().default()
        if truck is None:
            raise NoTrucksError()
        return Response(TruckSerializer(truck).data)


class FuelEntryViewSet(RecordViewSet):
    collection = 'fuel_entries'
    serializer_class = FuelEntrySerializer
    input_serializer_class = FuelEntryInputSerializer
    filter_serializer_class = FuelEntryFilterSerializer

    def filter_records(self, records, params):
        truck_id = params.get('truck')
        if truck_id:
            records = self.get_service().by_truck(truck_id)
        return newest_first(records)
