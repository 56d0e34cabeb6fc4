"""
Class Attendance Analytics

Aggregations behind the studio class-attendance dashboard: class
performance rankings, format performance, utilization breakdowns
and overview metric cards, computed from class-session records.
"""

__version__ = "1.0.0"
