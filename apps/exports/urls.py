from django.urls import path
from . import views

app_name = 'exports'

urlpatterns = [
    # File exports
    path('', views.export_data, name='export'),
    path('summary-report/', views.summary_report, name='summary-report'),

    # Backup
    path('backup/', views.backup, name='backup'),
    path('backup/stats/', views.backup_stats, name='backup-stats'),
]
