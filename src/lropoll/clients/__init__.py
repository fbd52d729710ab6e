from .service_client import ServiceClient as ServiceClient

__all__ = ["ServiceClient"]
