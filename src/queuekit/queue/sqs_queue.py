"""AWS SQS implementation of the queue provider."""

from typing import Any, Dict, Iterable, List, Optional

import boto3
import structlog

from queuekit.exceptions import (
    ConfigurationError,
    CorruptedMessageError,
    DecodeError,
    QueueNotFoundError,
)
from queuekit.queue.codec import PayloadCodec, body_checksum
from queuekit.queue.interface import BatchEntryResult, Queue, QueueProviderInterface
from queuekit.queue.resolver import QueueResolver, extract_name
from queuekit.utils.metrics import metrics

logger = structlog.get_logger(__name__)

MIN_BOTO3_MAJOR_VERSION = 1
WAIT_TIME_OPTION = "ReceiveMessageWaitTimeSeconds"
DEFAULT_WAIT_TIME_SECONDS = 20


def _major_version(version: str) -> int:
    try:
        return int(version.split(".", 1)[0])
    except ValueError:
        return 0


def _attributes(options: Optional[Dict[str, Any]]) -> Dict[str, str]:
    """SQS only accepts string attribute values."""
    return {key: str(value) for key, value in (options or {}).items()}


class SQSQueueProvider(QueueProviderInterface):
    """
    AWS SQS implementation of the queue provider.

    Queue names are resolved to queue URLs once per provider instance and
    cached. Payloads go through :class:`PayloadCodec` and are checked against
    the MD5 that SQS reports for every received body.

    Configuration:
        client_config: Keyword arguments for ``boto3.client("sqs", ...)``
            (region_name, endpoint_url, credentials, ...)
    """

    def __init__(
        self,
        client_config: Optional[Dict[str, Any]] = None,
        client: Any = None,
        codec: Optional[PayloadCodec] = None,
        default_wait_time_seconds: int = DEFAULT_WAIT_TIME_SECONDS,
    ):
        """
        Initialize SQS provider.

        Args:
            client_config: Passed straight through to the boto3 client
            client: Pre-built SQS client, used instead of building one
            codec: Payload codec (pickle + zlib level 9 by default)
            default_wait_time_seconds: Long polling wait applied to new queues

        Raises:
            ConfigurationError: If the installed boto3 is too old
        """
        if _major_version(boto3.__version__) < MIN_BOTO3_MAJOR_VERSION:
            raise ConfigurationError(
                f"boto3 >= {MIN_BOTO3_MAJOR_VERSION}.0.0 is required, "
                f"found {boto3.__version__}"
            )

        self.sqs = client if client is not None else boto3.client("sqs", **(client_config or {}))
        self.codec = codec or PayloadCodec()
        self.default_wait_time_seconds = default_wait_time_seconds
        self.resolver = QueueResolver(self.sqs)

    def _queue_url(self, queue_name: str) -> str:
        url = self.resolver.locator(queue_name)
        if url is None:
            raise QueueNotFoundError(queue_name)
        return url

    def create_queue(self, queue_name: str, options: Optional[Dict[str, Any]] = None) -> Queue:
        options = dict(options or {})
        # Enable long polling unless told otherwise
        options.setdefault(WAIT_TIME_OPTION, self.default_wait_time_seconds)

        response = self.sqs.create_queue(QueueName=queue_name, Attributes=_attributes(options))

        url = response["QueueUrl"]
        name = extract_name(url)
        self.resolver.remember(name, url)
        logger.info("Created queue", queue=name, url=url)
        return Queue(name, self)

    def delete_queue(self, queue_name: str) -> bool:
        self.sqs.delete_queue(QueueUrl=self._queue_url(queue_name))
        self.resolver.invalidate(queue_name)
        logger.info("Deleted queue", queue=queue_name)
        return True

    def list_queues(self, prefix: Optional[str] = None) -> List[str]:
        params = {}
        if prefix is not None:
            params["QueueNamePrefix"] = prefix

        response = self.sqs.list_queues(**params)

        return [extract_name(url) for url in response.get("QueueUrls", [])]

    def queue_exists(self, queue_name: str) -> bool:
        return self.resolver.locator(queue_name) is not None

    def get_queue_options(self, queue_name: str) -> Dict[str, Any]:
        response = self.sqs.get_queue_attributes(
            QueueUrl=self._queue_url(queue_name),
            AttributeNames=["All"],
        )
        return response.get("Attributes", {})

    def update_queue(self, queue_name: str, options: Optional[Dict[str, Any]] = None) -> bool:
        self.sqs.set_queue_attributes(
            QueueUrl=self._queue_url(queue_name),
            Attributes=_attributes(options),
        )
        logger.info("Updated queue", queue=queue_name, options=sorted(options or {}))
        return True

    def count(self, queue_name: str) -> int:
        attributes = self.get_queue_options(queue_name)
        depth = int(attributes.get("ApproximateNumberOfMessages", 0))
        metrics.queue_depth.labels(queue_name=queue_name).set(depth)
        return depth

    def put(self, queue_name: str, workload: Any) -> None:
        queue_url = self._queue_url(queue_name)
        response = self.sqs.send_message(
            QueueUrl=queue_url,
            MessageBody=self.codec.encode(workload),
        )
        metrics.queue_publish_total.labels(queue_name=queue_name).inc()
        logger.debug("Sent message", queue=queue_name, message_id=response.get("MessageId"))

    def multi_put(self, queue_name: str, workloads: Iterable[Any]) -> List[BatchEntryResult]:
        queue_url = self._queue_url(queue_name)

        entries = [
            {"Id": str(index), "MessageBody": self.codec.encode(workload)}
            for index, workload in enumerate(workloads, start=1)
        ]

        response = self.sqs.send_message_batch(QueueUrl=queue_url, Entries=entries)

        failures = {
            failure["Id"]: failure.get("Message") or failure.get("Code", "unknown")
            for failure in response.get("Failed", [])
        }
        results = [
            BatchEntryResult(
                id=entry["Id"],
                ok=entry["Id"] not in failures,
                reason=failures.get(entry["Id"]),
            )
            for entry in entries
        ]

        sent = len(entries) - len(failures)
        metrics.queue_publish_total.labels(queue_name=queue_name).inc(sent)
        logger.debug("Sent message batch", queue=queue_name, sent=sent, failed=len(failures))
        return results

    def get(self, queue_name: str, timeout: Optional[int] = None) -> Any:
        queue_url = self._queue_url(queue_name)
        params = {
            "QueueUrl": queue_url,
            "MaxNumberOfMessages": 1,
        }
        if timeout is not None and timeout > 0:
            params["WaitTimeSeconds"] = timeout

        response = self.sqs.receive_message(**params)

        messages = response.get("Messages", [])
        if not messages:
            metrics.queue_consume_total.labels(queue_name=queue_name, status="empty").inc()
            return None

        message = messages[0]

        # Removed before the payload is handed over: at most once from here on
        self.sqs.delete_message(QueueUrl=queue_url, ReceiptHandle=message["ReceiptHandle"])

        body = message["Body"]
        actual = body_checksum(body)
        if actual != message.get("MD5OfBody"):
            metrics.queue_consume_total.labels(queue_name=queue_name, status="corrupted").inc()
            logger.warning(
                "Corrupted message received",
                queue=queue_name,
                message_id=message.get("MessageId"),
            )
            raise CorruptedMessageError(queue_name, message.get("MD5OfBody"), actual)

        try:
            workload = self.codec.decode(body)
        except DecodeError:
            metrics.queue_consume_total.labels(queue_name=queue_name, status="undecodable").inc()
            raise
        metrics.queue_consume_total.labels(queue_name=queue_name, status="ok").inc()
        logger.debug("Received message", queue=queue_name, message_id=message.get("MessageId"))
        return workload
