from .appointment import Appointment
from .aspirant import Aspirant
from .interview_request import InterviewRequest, RequestStatus
from .recruiter import Recruiter

__all__ = ["Appointment", "Aspirant", "InterviewRequest", "Recruiter", "RequestStatus"]
