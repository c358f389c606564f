"""Response envelope shared by the email and graph routes."""

from typing import Generic, TypeVar

from pydantic import BaseModel

DataT = TypeVar("DataT")


class ApiResponse(BaseModel, Generic[DataT]):
    """Wraps every route payload under a single ``data`` key."""

    data: DataT
