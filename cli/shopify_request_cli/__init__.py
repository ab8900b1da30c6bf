from shopify_request.config_types import __version__

__all__ = ["__version__"]
