"""
Link Use Cases

Link administration and public resolution.
"""

from .list_links_use_case import ListLinksUseCase
from .get_link_use_case import GetLinkUseCase
from .create_link_use_case import CreateLinkUseCase, KeyGeneratorFactory
from .update_link_use_case import UpdateLinkUseCase
from .delete_link_use_case import DeleteLinkUseCase
from .resolve_link_use_case import ResolveLinkUseCase
from .dtos import CreateLinkCommand, LinkInfo, LinkListResponse, UpdateLinkCommand

__all__ = [
    # Use Cases
    "ListLinksUseCase",
    "GetLinkUseCase",
    "CreateLinkUseCase",
    "UpdateLinkUseCase",
    "DeleteLinkUseCase",
    "ResolveLinkUseCase",
    "KeyGeneratorFactory",
    # DTOs - Commands
    "CreateLinkCommand",
    "UpdateLinkCommand",
    # DTOs - Responses
    "LinkInfo",
    "LinkListResponse",
]
