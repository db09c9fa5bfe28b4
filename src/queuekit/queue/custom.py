"""Custom/plugin queue provider support."""

import importlib
import inspect
from typing import Any

import structlog

from queuekit.exceptions import ConfigurationError
from queuekit.queue.interface import QueueProviderInterface

logger = structlog.get_logger(__name__)


class CustomProviderLoader:
    """
    Support for bringing your own queue provider.

    Usage:
        1. Implement QueueProviderInterface in your own module
        2. Point queuekit at it:

           QUEUEKIT_PROVIDER__TYPE=custom
           QUEUEKIT_PROVIDER__CUSTOM_MODULE=my_company.queues.provider
           QUEUEKIT_PROVIDER__CUSTOM_CLASS=MyProvider
           QUEUEKIT_PROVIDER__CUSTOM_CONFIG='{"dsn": "..."}'
    """

    @staticmethod
    def load_custom_provider(
        module_path: str,
        class_name: str,
        config: dict[str, Any],
    ) -> QueueProviderInterface:
        """
        Load a custom provider implementation dynamically.

        Args:
            module_path: Python module path (e.g., 'myapp.queues.provider')
            class_name: Class name within the module
            config: Configuration dict to pass to constructor

        Returns:
            Instance of the custom provider

        Raises:
            ConfigurationError: If loading fails
        """
        try:
            module = importlib.import_module(module_path)
        except ImportError as e:
            raise ConfigurationError(
                f"Failed to import custom provider module '{module_path}': {e}"
            ) from e

        provider_class = getattr(module, class_name, None)
        if provider_class is None:
            raise ConfigurationError(
                f"Failed to find class '{class_name}' in module '{module_path}'"
            )

        if not inspect.isclass(provider_class) or not issubclass(
            provider_class, QueueProviderInterface
        ):
            raise ConfigurationError(
                f"Custom provider class {class_name} must implement QueueProviderInterface"
            )

        # Only pass the keys the constructor accepts
        sig = inspect.signature(provider_class.__init__)
        params = list(sig.parameters.keys())[1:]
        filtered_config = {key: value for key, value in config.items() if key in params}

        provider = provider_class(**filtered_config)

        logger.info(
            "Loaded custom queue provider",
            module=module_path,
            class_name=class_name,
        )
        return provider
