"""Hosting service API access."""

from .http import HttpClient, HttpError, MockHttpClient, RealHttpClient
from .refs import tag_ref_exists, tag_ref_url

__all__ = [
    "HttpClient",
    "HttpError",
    "MockHttpClient",
    "RealHttpClient",
    "tag_ref_exists",
    "tag_ref_url",
]
