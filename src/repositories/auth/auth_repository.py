"""
Repository para operações no provedor de identidade (Supabase Auth)
e leitura do perfil do usuário autenticado
"""
import logging
from typing import Callable, Dict, Optional, Any
from supabase_auth.errors import AuthApiError, AuthInvalidCredentialsError
from config.database import get_supabase_client, get_auth_client
from exceptions.api_exceptions import DatabaseError, InvalidCredentialsError

logger = logging.getLogger(__name__)

# Seleção aninhada do perfil: filiais e departamentos vinculados
USER_PROFILE_COLUMNS = """
    *,
    usuario_filial (
        id_filial,
        is_representante,
        filiais (
            id,
            cnpj,
            endereco,
            nome_filial
        )
    ),
    usuario_departamento (
        id_departamento,
        is_representante,
        departamentos (
            id,
            nome_departamento,
            id_filial
        )
    )
"""

class AuthRepository:
    """Repository para autenticação e dados de perfil"""

    def __init__(self, client=None, auth_client_factory: Callable[[], Any] = None):
        """
        Args:
            client: cliente de serviço (tabelas e API administrativa)
            auth_client_factory: cria um cliente isolado por sign-in/sign-up
        """
        self.client = client if client is not None else get_supabase_client()
        self.auth_client_factory = auth_client_factory or get_auth_client

    def authenticate_user(self, email: str, password: str) -> Dict[str, Any]:
        """
        Autenticar usuário no provedor

        Returns:
            Dict com 'user' (id, email) e 'session' (access_token, refresh_token)

        Raises:
            InvalidCredentialsError: credenciais recusadas pelo provedor
            DatabaseError: provedor indisponível ou erro interno do provedor
        """
        try:
            response = self.auth_client_factory().auth.sign_in_with_password({
                'email': email,
                'password': password
            })
        except AuthInvalidCredentialsError as e:
            logger.warning(f"🔒 Falha de autenticação para {email}: {e}")
            raise InvalidCredentialsError()
        except AuthApiError as e:
            if e.status is not None and e.status >= 500:
                raise DatabaseError(f"Provedor de identidade falhou no login: {e}", e)
            logger.warning(f"🔒 Falha de autenticação para {email}: {e}")
            raise InvalidCredentialsError()
        except Exception as e:
            raise DatabaseError(f"Provedor de identidade indisponível: {e}", e)

        if not response or not response.user:
            raise InvalidCredentialsError()

        session = response.session
        return {
            'user': {
                'id': response.user.id,
                'email': response.user.email
            },
            'session': {
                'access_token': session.access_token if session else None,
                'refresh_token': session.refresh_token if session else None
            }
        }

    def sign_out(self, access_token: str) -> None:
        """Encerrar a sessão do provedor ligada ao access_token informado"""
        try:
            self.client.auth.admin.sign_out(access_token)
        except Exception as e:
            raise DatabaseError(f"Erro ao encerrar sessão no provedor: {e}", e)

    def sign_up(self, email: str, password: str, redirect_to: Optional[str] = None) -> Dict[str, Any]:
        """Criar identidade no provedor; retorna id e email do novo usuário"""
        credentials = {'email': email, 'password': password}
        if redirect_to:
            credentials['options'] = {'email_redirect_to': redirect_to}

        try:
            response = self.auth_client_factory().auth.sign_up(credentials)
        except Exception as e:
            raise DatabaseError(f"Erro ao cadastrar usuário no provedor: {e}", e)

        if not response or not response.user:
            raise DatabaseError("Provedor não retornou o usuário cadastrado")

        return {'id': response.user.id, 'email': response.user.email}

    def update_password(self, uid: str, new_password: str) -> None:
        """Alterar senha de um usuário via API administrativa"""
        try:
            self.client.auth.admin.update_user_by_id(uid, {'password': new_password})
        except Exception as e:
            raise DatabaseError(f"Erro ao atualizar senha no provedor: {e}", e)

    def get_user_data(self, uid: str) -> Optional[Dict[str, Any]]:
        """Buscar perfil com filiais e departamentos vinculados"""
        try:
            response = (
                self.client.table('usuarios')
                .select(USER_PROFILE_COLUMNS)
                .eq('uid', uid)
                .limit(1)
                .execute()
            )
        except Exception as e:
            raise DatabaseError(f"Erro ao buscar dados do usuário: {e}", e)

        rows = response.data or []
        return rows[0] if rows else None
