"""
Validadores para operações de autenticação e cadastro
Responsáveis apenas por validação de dados de entrada
"""
import re
import logging
from typing import Tuple

logger = logging.getLogger(__name__)

EMAIL_PATTERN = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'

class EmailValidator:
    """Validador específico para emails"""

    @staticmethod
    def validate(email: str) -> Tuple[bool, str]:
        """Validar formato de email"""
        if not email:
            return False, "Email é obrigatório"

        if len(email) > 255:
            return False, "Email muito longo (máximo 255 caracteres)"

        if not re.match(EMAIL_PATTERN, email):
            return False, "Formato de email inválido"

        return True, ""

class PasswordValidator:
    """Validador específico para senhas"""

    @staticmethod
    def validate(password: str) -> Tuple[bool, str]:
        """Validar tamanho da senha"""
        if not password:
            return False, "Senha é obrigatória"

        if len(password) < 8:
            return False, "Senha deve ter pelo menos 8 caracteres"

        if len(password) > 128:
            return False, "Senha muito longa (máximo 128 caracteres)"

        return True, ""

class PhoneValidator:
    """Validador específico para telefones (apenas dígitos)"""

    @staticmethod
    def validate(telefone: str) -> Tuple[bool, str]:
        if not telefone:
            return False, "Telefone é obrigatório"

        if not re.fullmatch(r'\d{8,15}', str(telefone)):
            return False, "Telefone deve conter apenas números (8 a 15 dígitos)"

        return True, ""

class NameValidator:
    """Validador específico para nomes"""

    @staticmethod
    def validate(name: str) -> Tuple[bool, str]:
        """Validar nome do usuário"""
        if not name:
            return False, "Nome é obrigatório"

        name = name.strip()
        if len(name) < 2:
            return False, "Nome deve ter pelo menos 2 caracteres"

        if len(name) > 255:
            return False, "Nome muito longo (máximo 255 caracteres)"

        return True, ""
