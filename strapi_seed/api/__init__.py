"""API clients module"""
from .strapi_client import StrapiClient, flatten_params
from ..exceptions import StrapiAPIError

__all__ = [
    "StrapiClient",
    "StrapiAPIError",
    "flatten_params",
]
