"""Queue provider interface definition.

Standardized interface a worker framework uses to talk to a queue backend:
- Queue lifecycle (create, delete, list, exists)
- Queue options (get, update, approximate count)
- Payload exchange (put, multi-put, get)
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from queuekit.exceptions import ConfigurationError


@dataclass
class BatchEntryResult:
    """Outcome of one entry of a batch send, in submission order."""

    id: str
    ok: bool
    reason: Optional[str] = None


class QueueProviderInterface(ABC):
    """
    Abstract interface for queue provider implementations.

    Every operation takes the logical queue name. Payloads are arbitrary
    application values; encoding them for the wire is the provider's job.
    """

    @abstractmethod
    def create_queue(self, queue_name: str, options: Optional[Dict[str, Any]] = None) -> "Queue":
        """
        Create a queue, or return the existing one with the same options.

        Args:
            queue_name: Queue name
            options: Provider-specific queue options

        Returns:
            Handle bound to the created queue
        """
        pass

    @abstractmethod
    def delete_queue(self, queue_name: str) -> bool:
        """
        Delete a queue.

        Returns:
            True if deleted
        """
        pass

    @abstractmethod
    def list_queues(self, prefix: Optional[str] = None) -> List[str]:
        """
        List queue names, optionally filtered by name prefix.

        Order is whatever the backend returns.
        """
        pass

    @abstractmethod
    def queue_exists(self, queue_name: str) -> bool:
        """Check whether a queue exists."""
        pass

    @abstractmethod
    def get_queue_options(self, queue_name: str) -> Dict[str, Any]:
        """Return all options of a queue, including ones never set explicitly."""
        pass

    @abstractmethod
    def update_queue(self, queue_name: str, options: Optional[Dict[str, Any]] = None) -> bool:
        """
        Change the given queue options, leaving the others untouched.

        Returns:
            True if updated
        """
        pass

    @abstractmethod
    def count(self, queue_name: str) -> int:
        """
        Get the approximate number of visible messages.

        Note: This is approximate for distributed queues.
        """
        pass

    @abstractmethod
    def put(self, queue_name: str, workload: Any) -> None:
        """Send one payload."""
        pass

    @abstractmethod
    def multi_put(self, queue_name: str, workloads: Iterable[Any]) -> List[BatchEntryResult]:
        """
        Send several payloads in one request.

        Returns:
            Per-entry results in submission order
        """
        pass

    @abstractmethod
    def get(self, queue_name: str, timeout: Optional[int] = None) -> Any:
        """
        Receive and remove one payload.

        Args:
            queue_name: Queue name
            timeout: Long polling wait time in seconds (0 or None = no long polling)

        Returns:
            The payload, or None if no message arrived within the wait window
        """
        pass


class Queue:
    """Handle on a named queue, delegating every call to its provider."""

    def __init__(self, name: str, provider: QueueProviderInterface):
        self.name = name
        self.provider = provider

    def __repr__(self) -> str:
        return f"Queue(name={self.name!r}, provider={type(self.provider).__name__})"

    def put(self, workload: Any) -> None:
        self.provider.put(self.name, workload)

    def multi_put(self, workloads: Iterable[Any]) -> List[BatchEntryResult]:
        return self.provider.multi_put(self.name, workloads)

    def get(self, timeout: Optional[int] = None) -> Any:
        return self.provider.get(self.name, timeout)

    def count(self) -> int:
        return self.provider.count(self.name)

    def options(self) -> Dict[str, Any]:
        return self.provider.get_queue_options(self.name)

    def update(self, options: Optional[Dict[str, Any]] = None) -> bool:
        return self.provider.update_queue(self.name, options)

    def exists(self) -> bool:
        return self.provider.queue_exists(self.name)

    def delete(self) -> bool:
        return self.provider.delete_queue(self.name)


class ProviderFactory:
    """Factory for creating provider instances based on configuration."""

    _registry: Dict[str, type] = {}

    @classmethod
    def register(cls, provider_type: str, provider_class: type) -> None:
        """
        Register a provider implementation.

        Args:
            provider_type: Provider type identifier (e.g., "sqs")
            provider_class: Class implementing QueueProviderInterface
        """
        cls._registry[provider_type.lower()] = provider_class

    @classmethod
    def create(cls, provider_type: str, **kwargs) -> QueueProviderInterface:
        """
        Create a provider instance.

        Raises:
            ConfigurationError: If provider type is not registered
        """
        provider_class = cls._registry.get(provider_type.lower())
        if not provider_class:
            available = ", ".join(cls._registry.keys())
            raise ConfigurationError(
                f"Unknown provider type: {provider_type}. "
                f"Available types: {available}"
            )
        return provider_class(**kwargs)

    @classmethod
    def list_types(cls) -> List[str]:
        """Get list of registered provider types."""
        return list(cls._registry.keys())
