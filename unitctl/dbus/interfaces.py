from abc import ABC, abstractmethod

from unitctl.models.service import ServiceRecord


class ServiceQuery(ABC):
    """Abstract interface for querying live service state.
    """

    @abstractmethod
    async def list_services(self) -> list[ServiceRecord]:
        """Return every known service in reported order.

        Raises:
            ServiceQueryError: If the query fails
        """
