# Application Stats Package
from .dashboard import DashboardCalculator, DashboardStats, MasteryBreakdown

__all__ = ["DashboardCalculator", "DashboardStats", "MasteryBreakdown"]
