from clients.hotel_api_sdk.admin_client import AdminClient
from clients.hotel_api_sdk.errors import ApiError
from clients.hotel_api_sdk.http_client import ApiSettings, HttpClient
from clients.hotel_api_sdk.me_client import MeClient
from clients.hotel_api_sdk.normalizers import normalize_rows
from clients.hotel_api_sdk.queries_client import QueriesClient
from clients.hotel_api_sdk.staff_client import StaffClient
from clients.hotel_api_sdk.transactions_client import TransactionsClient
from clients.hotel_api_sdk.users_client import UsersClient

__all__ = [
    "AdminClient",
    "ApiError",
    "ApiSettings",
    "HttpClient",
    "MeClient",
    "QueriesClient",
    "StaffClient",
    "TransactionsClient",
    "UsersClient",
    "normalize_rows",
]
