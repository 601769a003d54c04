# app/services/__init__.py

"""
Service package initializer: provides singleton instances and functions.
"""

# Hiring forecast service
from .prediction_service import prediction_service

# Dashboard state and training cycle
from .dashboard_service import hiring_dashboard

# Summary metrics
from .metrics_service import average_hires, total_hires
