"""Abstract interface (port) for object storage."""

from abc import ABC, abstractmethod


class BlobStore(ABC):
    """Port for bucket-based object storage.

    The same interface is offered under the caller's credential and under an
    elevated credential; services receive one instance of each.
    """

    @abstractmethod
    async def list_buckets(self) -> list[str]:
        """Return the names of every bucket visible to the credential."""
        ...

    @abstractmethod
    async def upload(self, bucket: str, path: str, content: bytes, content_type: str) -> None:
        ...

    @abstractmethod
    async def remove(self, bucket: str, paths: list[str]) -> None:
        ...

    @abstractmethod
    def public_url(self, bucket: str, path: str) -> str:
        """Compute the public URL of an object (no network call)."""
        ...
