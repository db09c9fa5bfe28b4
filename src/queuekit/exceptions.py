"""Custom exceptions for queuekit."""

from botocore.exceptions import BotoCoreError, ClientError


class QueueKitError(Exception):
    """Base exception for queuekit."""

    pass


class ConfigurationError(QueueKitError):
    """Exception raised for configuration errors."""

    pass


class QueueError(QueueKitError):
    """Exception raised for queue operation errors."""

    pass


class QueueNotFoundError(QueueError):
    """Exception raised when an operation addresses a queue that does not exist."""

    def __init__(self, queue_name: str):
        super().__init__(f"Queue does not exist: {queue_name}")
        self.queue_name = queue_name


class CorruptedMessageError(QueueError):
    """
    Exception raised when a received body does not match its checksum.

    The message has already been deleted from the queue when this is raised.
    """

    def __init__(self, queue_name: str, expected: str, actual: str):
        super().__init__(
            f"Corrupted message received from {queue_name}: "
            f"checksum {actual} does not match {expected}"
        )
        self.queue_name = queue_name
        self.expected = expected
        self.actual = actual


class DecodeError(QueueError):
    """Exception raised when a message body cannot be decoded into a payload."""

    pass


# Errors raised by the service client. These are never wrapped.
ProviderError = (ClientError, BotoCoreError)
