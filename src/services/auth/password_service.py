"""
Service para recuperação e definição de senhas
Fluxo baseado em ações de uso único (acoes_usuarios) com token + código
"""
import logging
import os
import secrets
from datetime import datetime, timedelta, timezone
from typing import Dict, Any, Optional
from exceptions.api_exceptions import (
    ValidationError, NotFoundError, TokenInvalidError, TokenExpiredError, TokenAlreadyUsedError
)
from repositories.auth import AuthRepository, UserActionRepository
from repositories.usuario_repository import UsuarioRepository
from repositories.permissao_repository import PermissaoRepository
from services.email_service import EmailService
from services.tokens import TokenService, TokenStore, token_service, token_store
from validators.auth_validators import PasswordValidator
from config.database import get_supabase_client

logger = logging.getLogger(__name__)

ACTION_RESET_PASSWORD = 'reset_password'
ACTION_EMAIL_ACTIVATION = 'email_activation'

RESET_PASSWORD_TTL = timedelta(minutes=15)
EMAIL_ACTIVATION_TTL = timedelta(hours=24)

def generate_action_code() -> str:
    """Código de 8 dígitos hexadecimais em maiúsculas"""
    return secrets.token_hex(4).upper()

def parse_timestamp(value: Any) -> Optional[datetime]:
    """Converter expira_em (ISO ou datetime) para datetime com fuso UTC"""
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        parsed = datetime.fromisoformat(str(value).replace('Z', '+00:00'))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed

class PasswordService:
    """Service para gerenciar recuperação e definição de senhas"""

    def __init__(self, client=None, email_service: EmailService = None,
                 tokens: TokenService = None, store: TokenStore = None):
        """Inicializar service com dependências"""
        client = client if client is not None else get_supabase_client()
        self.auth_repository = AuthRepository(client)
        self.action_repository = UserActionRepository(client)
        self.usuario_repository = UsuarioRepository(client)
        self.permissao_repository = PermissaoRepository(client)
        self.email_service = email_service or EmailService()
        self.token_service = tokens or token_service
        self.token_store = store or token_store
        self.frontend_url = os.getenv('FRONTEND_URL', 'http://localhost:3000')

    def create_user_action(self, uid: str, action_type: str, ttl: timedelta) -> Dict[str, Any]:
        """Registrar ação de uso único e retornar {token, code, expira_em}"""
        code = generate_action_code()
        expira_em = datetime.now(timezone.utc) + ttl

        token = self.token_service.generate_token({
            'uid': uid,
            'type': action_type,
            'expira_em': expira_em.isoformat()
        }, ttl)

        self.action_repository.save_action({
            'uid': uid,
            'type': action_type,
            'code': code,
            'token': token,
            'status': True,
            'expira_em': expira_em.isoformat()
        })

        return {'token': token, 'code': code, 'expira_em': expira_em}

    def forgot_password(self, email: str) -> Dict[str, Any]:
        """
        Solicitar redefinição de senha

        Email desconhecido retorna resultado neutro sem registrar ação nem
        enviar email.
        """
        if not email:
            raise ValidationError("Email é obrigatório")

        # 1. Buscar usuário (não revelar se existe ou não)
        usuario = self.usuario_repository.find_by_email(email)
        if not usuario:
            logger.info(f"Solicitação de reset para email não cadastrado: {email}")
            return {'success': False}

        # 2. Registrar ação de reset
        action = self.create_user_action(usuario['uid'], ACTION_RESET_PASSWORD, RESET_PASSWORD_TTL)

        # 3. Enviar email com código e link
        link = f"{self.frontend_url}/reset-password?token={action['token']}"
        result = self.email_service.send_reset_password_email(
            usuario['email'], usuario.get('nome_completo'), action['code'], link
        )

        if not result.get('success'):
            logger.warning(f"⚠️ Falha ao enviar email de reset para {email}: {result.get('error')}")

        return result

    def _check_action(self, action: Optional[Dict[str, Any]], expected_type: str = None) -> Dict[str, Any]:
        """Validar ação: inexistente → inválida, expirada, já consumida"""
        if not action:
            raise TokenInvalidError()

        if expected_type and action.get('type') != expected_type:
            raise TokenInvalidError()

        expira_em = parse_timestamp(action.get('expira_em'))
        if expira_em is None or datetime.now(timezone.utc) > expira_em:
            raise TokenExpiredError()

        if not action.get('status'):
            raise TokenAlreadyUsedError()

        return action

    def validate_reset_token(self, token: str) -> Dict[str, Any]:
        """Validar token de ação"""
        if not token:
            raise ValidationError("Token é obrigatório")

        action = self._check_action(self.action_repository.find_by_token(token))
        return {'valid': True, 'uid': action.get('uid'), 'type': action.get('type')}

    def validate_reset_code(self, token: str, code: str) -> Dict[str, Any]:
        """Validar par token + código"""
        if not token or not code:
            raise ValidationError("Token e código são obrigatórios")

        action = self._check_action(self.action_repository.find_by_token_and_code(token, code.strip().upper()))
        return {'valid': True, 'uid': action.get('uid'), 'type': action.get('type')}

    def _restore_action(self, action: Dict[str, Any]) -> None:
        logger.warning(f"↩️ Provedor falhou; ação {action['id']} volta a ficar disponível")
        self.action_repository.update_status(action['id'], True)

    def _validate_password(self, password: str) -> None:
        is_valid, message = PasswordValidator.validate(password)
        if not is_valid:
            raise ValidationError(message)

    def reset_password(self, token: str, uid: str, code: str, new_password: str) -> Dict[str, Any]:
        """Redefinir senha; consome a ação e revoga as sessões locais do usuário"""
        if not token or not uid or not code:
            raise ValidationError("Token, uid e código são obrigatórios")
        self._validate_password(new_password)

        # 1. Validar ação
        action = self._check_action(
            self.action_repository.find_by_token_uid_and_code(token, uid, code.strip().upper()),
            ACTION_RESET_PASSWORD
        )

        # 2. Consumir ação antes de alterar a senha
        self.action_repository.update_status(action['id'], False)

        # 3. Alterar senha no provedor; falha devolve a ação ao estado utilizável
        try:
            self.auth_repository.update_password(uid, new_password)
        except Exception:
            self._restore_action(action)
            raise

        # 4. Revogar tokens de sessão do usuário
        self.token_store.remove_by_user_id(uid)

        logger.info(f"🔑 Senha redefinida para uid {uid}")
        return {'success': True, 'uid': uid}

    def define_password(self, token: str, uid: str, code: str, password: str) -> Dict[str, Any]:
        """
        Definir a primeira senha de um usuário criado por um administrador

        Cria a identidade no provedor e reaponta usuarios.uid e
        usuario_permissoes.uid para o novo id.
        """
        if not token or not uid or not code:
            raise ValidationError("Token, uid e código são obrigatórios")
        self._validate_password(password)

        # 1. Validar ação
        action = self._check_action(
            self.action_repository.find_by_token_uid_and_code(token, uid, code.strip().upper()),
            ACTION_EMAIL_ACTIVATION
        )

        # 2. Buscar perfil vinculado ao uid provisório
        usuario = self.usuario_repository.find_by_uid(uid)
        if not usuario:
            raise NotFoundError('Usuário', uid)

        # 3. Consumir ação
        self.action_repository.update_status(action['id'], False)

        # 4. Criar identidade no provedor; falha devolve a ação ao estado utilizável
        try:
            identity = self.auth_repository.sign_up(
                usuario['email'], password, redirect_to=f"{self.frontend_url}/auth/callback"
            )
        except Exception:
            self._restore_action(action)
            raise
        new_uid = identity['id']

        # 5. Reapontar perfil e permissões
        self.usuario_repository.update_uid(usuario['id'], new_uid)
        self.permissao_repository.update_uid(usuario['id'], new_uid)

        logger.info(f"🔑 Senha definida para {usuario['email']} (uid {new_uid})")
        return {'success': True, 'uid': new_uid}
