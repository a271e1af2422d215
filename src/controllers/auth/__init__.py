"""
Módulo de controllers de autenticação
"""

from .login_controller import LoginController
from .password_controller import PasswordController

__all__ = [
    'LoginController',
    'PasswordController'
]
