"""
Pytest configuration and shared fixtures for unit tests.
"""

import pytest


@pytest.fixture
def make_session():
    """
    Factory for upstream (camelCase) session records.

    Defaults describe a 10-spot HIIT class with 5 check-ins; keyword
    arguments override any field.
    """

    def _make(**overrides):
        session = {
            "uniqueId": "hiit-0700",
            "cleanedClass": "HIIT",
            "classType": "Cardio",
            "sessionName": "HIIT 45",
            "date": "2024-03-04",
            "dayOfWeek": "Monday",
            "time": "07:00",
            "trainerName": "Maya Patel",
            "capacity": 10,
            "checkedInCount": 5,
            "bookedCount": 6,
            "lateCancelledCount": 1,
            "revenue": 500.0,
            "totalPaid": 450.0,
        }
        session.update(overrides)
        return session

    return _make


@pytest.fixture
def studio_sessions(make_session):
    """A small week of sessions across classes, slots, days and trainers."""
    return [
        make_session(date="2024-03-04", checkedInCount=0, revenue=0.0, totalPaid=0.0),
        make_session(date="2024-03-06", dayOfWeek="Wednesday", checkedInCount=5),
        make_session(date="2024-03-08", dayOfWeek="Friday", checkedInCount=10),
        make_session(
            uniqueId="barre-1800",
            cleanedClass="Barre",
            classType="Strength",
            sessionName="Barre 57",
            date="2024-03-05",
            dayOfWeek="Tuesday",
            time="18:00",
            trainerName="Jordan Lee",
            capacity=20,
            checkedInCount=18,
            bookedCount=20,
            lateCancelledCount=2,
            revenue=1800.0,
            totalPaid=1800.0,
        ),
        make_session(
            uniqueId="barre-1800",
            cleanedClass="Barre",
            classType="Strength",
            sessionName="Barre 57",
            date="2024-03-07",
            dayOfWeek="Thursday",
            time="18:00",
            trainerName="Jordan Lee",
            capacity=20,
            checkedInCount=6,
            bookedCount=8,
            lateCancelledCount=0,
            revenue=600.0,
            totalPaid=600.0,
        ),
    ]
