"""Factory for creating queue provider instances."""

from typing import Optional

import structlog

from queuekit.config import settings as default_settings
from queuekit.config.settings import Settings
from queuekit.exceptions import ConfigurationError
from queuekit.queue.codec import PayloadCodec
from queuekit.queue.interface import ProviderFactory, QueueProviderInterface

logger = structlog.get_logger(__name__)


def register_all_providers():
    """Register all available provider implementations."""
    from queuekit.queue.sqs_queue import SQSQueueProvider

    ProviderFactory.register("sqs", SQSQueueProvider)
    logger.debug("Registered SQS provider")


def create_provider(settings: Optional[Settings] = None) -> QueueProviderInterface:
    """
    Create a queue provider based on configuration.

    Args:
        settings: Settings to use, defaults to the global settings

    Returns:
        Queue provider instance

    Raises:
        ConfigurationError: If the provider type is not supported
    """
    settings = settings or default_settings
    provider_type = settings.provider.type.lower()

    logger.info("Creating queue provider", type=provider_type)

    if provider_type == "custom":
        from queuekit.queue.custom import CustomProviderLoader

        if not settings.provider.custom_module or not settings.provider.custom_class:
            raise ConfigurationError(
                "Custom provider requires 'custom_module' and 'custom_class' configuration"
            )

        return CustomProviderLoader.load_custom_provider(
            module_path=settings.provider.custom_module,
            class_name=settings.provider.custom_class,
            config=settings.provider.custom_config,
        )

    register_all_providers()

    provider_configs = {
        "sqs": {
            "client_config": settings.provider.client_config(),
            "codec": PayloadCodec(
                serializer=settings.codec.serializer,
                compression_level=settings.codec.compression_level,
            ),
            "default_wait_time_seconds": settings.provider.default_wait_time_seconds,
        },
    }

    config = provider_configs.get(provider_type)
    if config is None:
        raise ConfigurationError(f"No configuration found for provider type: {provider_type}")

    return ProviderFactory.create(provider_type, **config)
