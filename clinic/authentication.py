"""
Token authentication used by the API.

Kept apart from the views so Django REST framework can import it while
loading settings without pulling in view modules.
"""
from __future__ import annotations

from rest_framework import authentication


class TokenAuthentication(authentication.TokenAuthentication):
    """DRF token auth with the ``Token`` keyword in the ``Authorization`` header."""

    keyword = 'Token'
