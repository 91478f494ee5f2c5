"""Service layer holding the account and post business rules."""

from .accounts import AccountService, get_account_service
from .install import InstallReport, install
from .posts import PostService, get_post_service

__all__ = [
    "AccountService",
    "InstallReport",
    "PostService",
    "get_account_service",
    "get_post_service",
    "install",
]
