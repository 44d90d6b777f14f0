from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'records'

router = DefaultRouter()
router.register(r'routes', views.RouteViewSet, basename='route')
router.register(r'trips', views.TripViewSet, basename='trip')
router.register(r'expenses', views.ExpenseViewSet, basename='expense')
router.register(r'trucks', views.TruckViewSet, basename='truck')
router.register(r'fuel-entries', views.FuelEntryViewSet, basename='fuel-entry')

urlpatterns = [
    # Collection routes (same shape for every collection)
    # GET    /api/records/trips/          - List trips
    # POST   /api/records/trips/          - Add trip
    # GET    /api/records/trips/{id}/     - Get trip
    # PUT    /api/records/trips/{id}/     - Update trip
    # PATCH  /api/records/trips/{id}/     - Partial update
    # DELETE /api/records/trips/{id}/     - Delete trip

    # Extra actions
    # GET    /api/records/routes/by-name/?name=   - Case-insensitive lookup
    # GET    /api/records/routes/similar/?name=   - Fuzzy duplicate check
    # GET    /api/records/trucks/default/         - Default selected truck

    path('', include(router.urls)),
]
