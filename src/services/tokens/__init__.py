"""
Módulo de tokens de sessão
"""

from .token_service import TokenService, token_service
from .token_store import TokenStore, token_store

__all__ = [
    'TokenService',
    'TokenStore',
    'token_service',
    'token_store'
]
