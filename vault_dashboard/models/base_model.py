import inspect
import re
from typing import Dict, Any, Optional
from datetime import datetime

class BaseModel:
    """Base class for all API models.

    Every field of a subclass is optional: the API publishes no schema, so a
    missing key just leaves the attribute as ``None``.
    """

    @staticmethod
    def _convert_camel_to_snake(key: str) -> str:
        """Convert camelCase to snake_case."""
        return re.sub(r'([a-z0-9])([A-Z])', r'\1_\2', key).lower()

    @staticmethod
    def parse_timestamp(value: Any) -> Optional[datetime]:
        """Parse an ISO 8601 timestamp, returning None when it is unusable."""
        if not isinstance(value, str) or not value:
            return None
        try:
            return datetime.fromisoformat(value.replace('Z', '+00:00'))
        except ValueError:
            return None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'BaseModel':
        """Create a model instance from a dictionary."""
        if not isinstance(data, dict):
            return data

        new_data = {}
        for key, value in data.items():
            new_key = cls._convert_camel_to_snake(key)
            new_data[new_key] = value

        # Inspect __init__ parameters
        init_params = inspect.signature(cls.__init__).parameters
        valid_keys = set(init_params) - {'self'}

        filtered_args = {k: v for k, v in new_data.items() if k in valid_keys}
        extra_keys = set(new_data) - valid_keys

        if extra_keys:
            # imported here b/c the logger pulls in config at import time
            from vault_dashboard.logger import logger, APIEvent
            logger.log(APIEvent(
                type="unexpected_keys",
                message=f"{cls.__name__}.from_dict() ignored keys: {sorted(extra_keys)}",
            ), "models")

        return cls(**filtered_args)

    @classmethod
    def from_list(cls, items: Any) -> Optional[list]:
        """Build a list of models, or None when ``items`` is not a list."""
        if not isinstance(items, list):
            return None
        return [cls.from_dict(item) for item in items]
