"""Queue name to queue URL resolution with a per-instance cache."""

import threading
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

import structlog
from botocore.exceptions import ClientError

from queuekit.utils.metrics import metrics

logger = structlog.get_logger(__name__)

# Error codes SQS uses for a missing queue (query and JSON protocols)
NON_EXISTENT_QUEUE_CODES = ("NonExistentQueue", "QueueDoesNotExist")


@dataclass(frozen=True)
class Found:
    """The queue exists at ``locator``."""

    locator: str


class _Absent:
    """The queue does not exist."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


ABSENT = _Absent()


@dataclass(frozen=True)
class Failed:
    """The lookup failed for a reason other than a missing queue."""

    error: Exception


Resolution = Union[Found, _Absent, Failed]


def is_non_existent_queue(error: ClientError) -> bool:
    """Check whether a client error means the queue does not exist."""
    code = error.response.get("Error", {}).get("Code", "")
    return any(marker in code for marker in NON_EXISTENT_QUEUE_CODES)


def extract_name(locator: str) -> str:
    """
    Extract the queue name from a queue URL.

    Example:
        >>> extract_name("https://sqs.us-east-1.amazonaws.com/123456789012/jobs")
        'jobs'
    """
    return locator.rsplit("/", 1)[-1]


class QueueResolver:
    """
    Resolves queue names to queue URLs.

    Successful lookups are cached for the lifetime of the resolver. Missing
    queues are never cached, so a queue created later by another process is
    picked up on the next lookup.
    """

    def __init__(self, client: Any):
        """
        Initialize resolver.

        Args:
            client: boto3 SQS client
        """
        self.client = client
        self._urls: Dict[str, str] = {}
        self._lock = threading.Lock()

    def resolve(self, name: str) -> Resolution:
        """
        Resolve a queue name.

        Args:
            name: Queue name

        Returns:
            ``Found(url)``, ``ABSENT`` or ``Failed(error)``
        """
        if not name:
            raise ValueError("Queue name must be a non-empty string")

        with self._lock:
            cached = self._urls.get(name)
        if cached is not None:
            return Found(cached)

        try:
            response = self.client.get_queue_url(QueueName=name)
        except ClientError as e:
            if is_non_existent_queue(e):
                metrics.resolver_lookups_total.labels(result="absent").inc()
                logger.debug("Queue does not exist", queue=name)
                return ABSENT
            metrics.resolver_lookups_total.labels(result="failed").inc()
            return Failed(e)
        except Exception as e:
            metrics.resolver_lookups_total.labels(result="failed").inc()
            return Failed(e)

        url = response["QueueUrl"]
        self.remember(name, url)
        metrics.resolver_lookups_total.labels(result="found").inc()
        logger.debug("Resolved queue URL", queue=name, url=url)
        return Found(url)

    def locator(self, name: str) -> Optional[str]:
        """
        Resolve a queue name to its URL.

        Returns:
            Queue URL, or None if the queue does not exist

        Raises:
            Exception: The original provider error when the lookup failed
        """
        resolution = self.resolve(name)
        if isinstance(resolution, Failed):
            raise resolution.error
        if isinstance(resolution, Found):
            return resolution.locator
        return None

    def remember(self, name: str, url: str) -> None:
        """Cache a known queue URL."""
        with self._lock:
            self._urls[name] = url

    def invalidate(self, name: str) -> None:
        """Drop the cached URL for a queue."""
        with self._lock:
            self._urls.pop(name, None)

    def cached(self, name: str) -> Optional[str]:
        """Return the cached URL without contacting the provider."""
        with self._lock:
            return self._urls.get(name)
