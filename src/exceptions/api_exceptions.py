"""
Exceções personalizadas da API Clara
Cada exceção carrega seu próprio status HTTP e formato JSON
"""
from typing import Dict, Any, Optional
import logging

logger = logging.getLogger(__name__)

class BaseAPIException(Exception):
    """Exceção base para todas as exceções da API"""

    def __init__(self, message: str, error_code: str = None, details: Dict[str, Any] = None):
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Converter exceção para formato JSON"""
        return {
            'success': False,
            'error': self.error_code,
            'message': self.message,
            'details': self.details
        }

    @property
    def http_status(self) -> int:
        """Status HTTP padrão para a exceção"""
        return 500

class ValidationError(BaseAPIException):
    """Erro de validação de entrada"""

    @property
    def http_status(self) -> int:
        return 400

class NotFoundError(BaseAPIException):
    """Recurso não encontrado"""

    def __init__(self, resource_type: str, resource_id: Any):
        message = f"{resource_type} não encontrado: {resource_id}"
        super().__init__(message)
        self.resource_type = resource_type
        self.resource_id = resource_id

    @property
    def http_status(self) -> int:
        return 404

class AssociationNotFoundError(NotFoundError):
    """Associação usuário/departamento ou usuário/filial inexistente"""

    def __init__(self, association_type: str, id_usuario: Any, id_entidade: Any):
        super().__init__(association_type, f"usuário {id_usuario} / {id_entidade}")
        self.message = f"Associação não encontrada entre usuário {id_usuario} e {association_type} {id_entidade}"
        self.args = (self.message,)

class UserNotFoundError(NotFoundError):
    """Usuário autenticado sem perfil na tabela usuarios"""

    def __init__(self, uid: Any):
        super().__init__('Usuário', uid)

class DuplicateAssociationError(BaseAPIException):
    """Associação já existente"""

    @property
    def http_status(self) -> int:
        return 409

class DatabaseError(BaseAPIException):
    """Erro de banco de dados (API de tabelas ou de autenticação do Supabase)"""

    def __init__(self, message: str, original_error: Exception = None):
        super().__init__(message)
        self.original_error = original_error
        logger.error(f"Database error: {message}", exc_info=original_error)

class ExternalAPIError(BaseAPIException):
    """Erro ao chamar APIs externas"""

    def __init__(self, service_name: str, message: str, status_code: Optional[int] = None):
        super().__init__(f"Erro no serviço {service_name}: {message}")
        self.service_name = service_name
        self.status_code = status_code

    @property
    def http_status(self) -> int:
        return 502  # Bad Gateway

class AuthenticationError(BaseAPIException):
    """Erro de autenticação"""

    @property
    def http_status(self) -> int:
        return 401

class InvalidCredentialsError(AuthenticationError):
    """E-mail ou senha recusados pelo provedor"""

    def __init__(self, message: str = 'E-mail ou senha inválidos!'):
        super().__init__(message)

class UserInactiveError(AuthenticationError):
    """Perfil com status falso"""

    def __init__(self, message: str = 'Usuário Inativo. Contate um administrador!'):
        super().__init__(message)

class InvalidTokenError(AuthenticationError):
    """Token de sessão com assinatura inválida ou malformado"""

    def __init__(self, message: str = 'Token inválido'):
        super().__init__(message)

class TokenExpiredError(AuthenticationError):
    """Token de sessão ou ação de usuário expirada"""

    def __init__(self, message: str = 'Token expirado'):
        super().__init__(message)

class TokenInvalidError(AuthenticationError):
    """Ação de usuário inexistente para o token (e código) informados"""

    def __init__(self, message: str = 'Token inválido'):
        super().__init__(message)

class TokenAlreadyUsedError(AuthenticationError):
    """Ação de usuário já consumida"""

    def __init__(self, message: str = 'Token já utilizado'):
        super().__init__(message)

class AuthorizationError(BaseAPIException):
    """Usuário autenticado sem nenhuma das permissões exigidas pela rota"""

    def __init__(self, message: str = 'Usuário não tem permissão para acessar esta funcionalidade'):
        super().__init__(message)

    @property
    def http_status(self) -> int:
        return 403
