"""
Dashboard service — per-agent mock datasets for the contextual side panel.
"""

from .dashboards import Dashboard, DashboardPanel, get_dashboard

__all__ = [
    "Dashboard",
    "DashboardPanel",
    "get_dashboard",
]
