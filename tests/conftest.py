"""Test configuration and fixtures."""

import hashlib
import itertools
from collections import deque

import pytest
from botocore.exceptions import ClientError

from queuekit.queue.sqs_queue import SQSQueueProvider

ACCOUNT_URL = "https://sqs.us-east-1.amazonaws.com/123456789012"


def client_error(code: str, operation: str, message: str = "") -> ClientError:
    """Build a botocore ClientError with the given error code."""
    return ClientError({"Error": {"Code": code, "Message": message or code}}, operation)


class FakeSQSClient:
    """
    In-memory stand-in for a boto3 SQS client.

    Stores exactly what is sent, hands out receipt handles on receive and
    records every call in ``calls`` as ``(operation, kwargs)``.
    """

    def __init__(self):
        self.queues = {}
        self.in_flight = {}
        self.calls = []
        self.lookup_error = None
        self.failed_batch_ids = set()
        self._ids = itertools.count(1)

    def calls_to(self, operation):
        return [kwargs for name, kwargs in self.calls if name == operation]

    def inject(self, queue_name, body, md5=None):
        """Place a raw message on a queue, optionally with a wrong checksum."""
        self.queues[queue_name]["messages"].append(
            (body, md5 or hashlib.md5(body.encode("utf-8")).hexdigest())
        )

    def _queue(self, url, operation):
        name = url.rsplit("/", 1)[-1]
        if name not in self.queues:
            raise client_error("AWS.SimpleQueueService.NonExistentQueue", operation)
        return self.queues[name]

    def create_queue(self, **kwargs):
        self.calls.append(("create_queue", kwargs))
        name = kwargs["QueueName"]
        queue = self.queues.setdefault(
            name, {"url": f"{ACCOUNT_URL}/{name}", "attributes": {}, "messages": deque()}
        )
        queue["attributes"].update(kwargs.get("Attributes", {}))
        return {"QueueUrl": queue["url"]}

    def get_queue_url(self, **kwargs):
        self.calls.append(("get_queue_url", kwargs))
        if self.lookup_error is not None:
            raise self.lookup_error
        name = kwargs["QueueName"]
        if name not in self.queues:
            raise client_error("AWS.SimpleQueueService.NonExistentQueue", "GetQueueUrl")
        return {"QueueUrl": self.queues[name]["url"]}

    def delete_queue(self, **kwargs):
        self.calls.append(("delete_queue", kwargs))
        queue = self._queue(kwargs["QueueUrl"], "DeleteQueue")
        del self.queues[queue["url"].rsplit("/", 1)[-1]]
        return {}

    def list_queues(self, **kwargs):
        self.calls.append(("list_queues", kwargs))
        prefix = kwargs.get("QueueNamePrefix", "")
        urls = [q["url"] for name, q in self.queues.items() if name.startswith(prefix)]
        return {"QueueUrls": urls} if urls else {}

    def get_queue_attributes(self, **kwargs):
        self.calls.append(("get_queue_attributes", kwargs))
        queue = self._queue(kwargs["QueueUrl"], "GetQueueAttributes")
        attributes = {
            "VisibilityTimeout": "30",
            "MessageRetentionPeriod": "345600",
            "ApproximateNumberOfMessagesNotVisible": "0",
        }
        attributes.update(queue["attributes"])
        attributes["ApproximateNumberOfMessages"] = str(len(queue["messages"]))
        return {"Attributes": attributes}

    def set_queue_attributes(self, **kwargs):
        self.calls.append(("set_queue_attributes", kwargs))
        queue = self._queue(kwargs["QueueUrl"], "SetQueueAttributes")
        queue["attributes"].update(kwargs["Attributes"])
        return {}

    def send_message(self, **kwargs):
        self.calls.append(("send_message", kwargs))
        queue = self._queue(kwargs["QueueUrl"], "SendMessage")
        body = kwargs["MessageBody"]
        md5 = hashlib.md5(body.encode("utf-8")).hexdigest()
        queue["messages"].append((body, md5))
        return {"MessageId": f"msg-{next(self._ids)}", "MD5OfMessageBody": md5}

    def send_message_batch(self, **kwargs):
        self.calls.append(("send_message_batch", kwargs))
        queue = self._queue(kwargs["QueueUrl"], "SendMessageBatch")
        entries = kwargs["Entries"]
        if not entries:
            raise client_error("AWS.SimpleQueueService.EmptyBatchRequest", "SendMessageBatch")
        if len(entries) > 10:
            raise client_error(
                "AWS.SimpleQueueService.TooManyEntriesInBatchRequest", "SendMessageBatch"
            )

        successful, failed = [], []
        for entry in entries:
            if entry["Id"] in self.failed_batch_ids:
                failed.append(
                    {
                        "Id": entry["Id"],
                        "SenderFault": False,
                        "Code": "InternalError",
                        "Message": "Simulated failure",
                    }
                )
                continue
            body = entry["MessageBody"]
            md5 = hashlib.md5(body.encode("utf-8")).hexdigest()
            queue["messages"].append((body, md5))
            successful.append(
                {"Id": entry["Id"], "MessageId": f"msg-{next(self._ids)}", "MD5OfMessageBody": md5}
            )

        response = {"Successful": successful}
        if failed:
            response["Failed"] = failed
        return response

    def receive_message(self, **kwargs):
        self.calls.append(("receive_message", kwargs))
        queue = self._queue(kwargs["QueueUrl"], "ReceiveMessage")
        messages = []
        while queue["messages"] and len(messages) < kwargs.get("MaxNumberOfMessages", 1):
            body, md5 = queue["messages"].popleft()
            handle = f"receipt-{next(self._ids)}"
            self.in_flight[handle] = (body, md5)
            messages.append(
                {
                    "MessageId": f"msg-{next(self._ids)}",
                    "ReceiptHandle": handle,
                    "Body": body,
                    "MD5OfBody": md5,
                }
            )
        return {"Messages": messages} if messages else {}

    def delete_message(self, **kwargs):
        self.calls.append(("delete_message", kwargs))
        self._queue(kwargs["QueueUrl"], "DeleteMessage")
        self.in_flight.pop(kwargs["ReceiptHandle"], None)
        return {}


@pytest.fixture
def fake_sqs() -> FakeSQSClient:
    """Create an empty in-memory SQS client."""
    return FakeSQSClient()


@pytest.fixture
def provider(fake_sqs) -> SQSQueueProvider:
    """Create an SQS provider backed by the in-memory client."""
    return SQSQueueProvider(client=fake_sqs)


@pytest.fixture
def make_client_error():
    """Provide the ClientError builder to tests."""
    return client_error
