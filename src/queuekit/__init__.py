"""
queuekit - Queue provider for worker frameworks

Named queues over AWS SQS with a compressed, checksummed payload codec.
"""

__version__ = "0.1.0"
__author__ = "queuekit Team"
__all__ = ["queue", "config", "utils", "exceptions"]
