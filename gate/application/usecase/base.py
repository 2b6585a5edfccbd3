"""Base use case."""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

RequestT = TypeVar("RequestT")
ResponseT = TypeVar("ResponseT")


class BaseUseCase(ABC, Generic[RequestT, ResponseT]):
    """One application operation: resolve the caller, call domain services,
    shape the response."""

    @abstractmethod
    async def execute(self, request: RequestT) -> ResponseT:
        """Run the operation."""
