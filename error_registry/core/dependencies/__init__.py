"""FastAPI dependencies shared by feature routers."""

from .database import DbSession, get_db_session
from .pagination import ListRequest, get_list_request

__all__ = ["DbSession", "ListRequest", "get_db_session", "get_list_request"]
