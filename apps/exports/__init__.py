"""
Exports App - CSV/JSON Export and Backup Snapshots

Key Features:
- CSV export of trips, expenses and fuel entries with fixed column orders
- Pretty-printed JSON export
- Plain-text summary report
- Full backup snapshot of every collection
"""
