"""
Base service class
"""

from abc import ABC


class BaseService(ABC):
    """
    Base class for pipeline services.

    Services wire domain components to the storage collaborators. Those
    holding provider connections override `close`.
    """

    async def close(self) -> None:
        pass
