"""
Validadores de entrada
"""

from .auth_validators import EmailValidator, PasswordValidator, PhoneValidator, NameValidator
from .request_validators import LoginRequest, ResetPasswordRequest, AssociationRequest, JornadaRequest

__all__ = [
    'EmailValidator',
    'PasswordValidator',
    'PhoneValidator',
    'NameValidator',
    'LoginRequest',
    'ResetPasswordRequest',
    'AssociationRequest',
    'JornadaRequest'
]
