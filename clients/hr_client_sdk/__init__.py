from clients.hr_client_sdk.candidates_client import CandidatesClient
from clients.hr_client_sdk.employees_client import EmployeesClient
from clients.hr_client_sdk.errors import ApiError
from clients.hr_client_sdk.http_client import HttpClient
from clients.hr_client_sdk.models import BulkActionResponse, FailureRecord
from clients.hr_client_sdk.normalizers import FetchResult, FlatResult, PaginatedResult, normalize_fetch_result

__all__ = [
    "ApiError",
    "HttpClient",
    "EmployeesClient",
    "CandidatesClient",
    "BulkActionResponse",
    "FailureRecord",
    "FetchResult",
    "FlatResult",
    "PaginatedResult",
    "normalize_fetch_result",
]
