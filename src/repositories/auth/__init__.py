"""
Repositories para operações de autenticação
Camada de acesso a dados seguindo padrão Repository
"""

from .auth_repository import AuthRepository
from .user_action_repository import UserActionRepository

__all__ = [
    'AuthRepository',
    'UserActionRepository'
]
