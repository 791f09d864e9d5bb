"""
Storefront API access: the authenticated request client and resource wrappers.
"""

from .client import ApiClient, Multipart, RequestDescriptor
from .facade import Storefront

__all__ = ["ApiClient", "Multipart", "RequestDescriptor", "Storefront"]
