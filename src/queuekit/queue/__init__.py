"""Queue provider abstraction layer."""

from queuekit.queue.codec import PayloadCodec
from queuekit.queue.factory import create_provider
from queuekit.queue.interface import BatchEntryResult, Queue, QueueProviderInterface
from queuekit.queue.resolver import ABSENT, Failed, Found, QueueResolver

__all__ = [
    "ABSENT",
    "BatchEntryResult",
    "Failed",
    "Found",
    "PayloadCodec",
    "Queue",
    "QueueProviderInterface",
    "QueueResolver",
    "create_provider",
]
