"""
Módulo de serviços de autenticação
Sessão JWT, recuperação e definição de senha
"""

from .auth_service import AuthService
from .password_service import PasswordService

__all__ = [
    'AuthService',
    'PasswordService'
]
