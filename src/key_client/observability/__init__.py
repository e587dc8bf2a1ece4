from key_client.observability.logging import configure_logging

__all__ = ["configure_logging"]
