from abc import ABC, abstractmethod


class IUploadStorage(ABC):
    """Profile image storage port"""

    @abstractmethod
    async def store(self, content: bytes, original_filename: str) -> str:
        """Persist an uploaded file, returns the stored filename"""
        pass

    @abstractmethod
    async def remove(self, filename: str) -> None:
        """Release a stored file. Missing files are ignored."""
        pass

    @abstractmethod
    def public_url(self, filename: str) -> str:
        """Absolute URL a client can fetch the stored file from"""
        pass
