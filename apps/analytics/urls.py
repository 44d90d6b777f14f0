from django.urls import path
from . import views

app_name = 'analytics'

urlpatterns = [
    # Period summaries
    path('daily/', views.daily_summary, name='daily'),
    path('weekly/', views.weekly_summary, name='weekly'),
    path('monthly/', views.monthly_summary, name='monthly'),
    path('yearly/', views.yearly_summary, name='yearly'),

    # Reports
    path('report/', views.period_report, name='report'),
    path('transactions/', views.transactions, name='transactions'),
    path('history/', views.history, name='history'),

    # Dashboard
    path('dashboard/', views.dashboard, name='dashboard'),

    # Fuel and tax
    path('fuel/', views.fuel_stats, name='fuel'),
    path('tax/', views.tax_estimate, name='tax'),
]
