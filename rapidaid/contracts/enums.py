"""Enumerations shared across all RapidAid contracts.

Values match the strings stored in Firestore by the web client.
"""

from enum import Enum


class AmbulanceStatus(str, Enum):
    """Availability of a vehicle, maintained by dispatch and driver apps."""
    AVAILABLE = "Available"
    ON_CALL = "On Call"
    OFF_DUTY = "Off Duty"


class RequestStatus(str, Enum):
    """Lifecycle of an ambulance request, driven by external dispatch."""
    PENDING = "Pending"
    ACCEPTED = "Accepted"
    ON_THE_WAY = "On The Way"
    ARRIVED = "Arrived"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"


class EmergencyType(str, Enum):
    MEDICAL = "Medical"
    ACCIDENT = "Accident"
    CARDIAC = "Cardiac"
    PREGNANCY = "Pregnancy"
    COVID = "Covid"
    OTHER = "Other"
