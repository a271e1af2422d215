"""
Service para login, logout, renovação de token e cadastro no provedor
Sessão local baseada em JWT + TokenStore
"""
import logging
import os
from typing import Dict, List, Optional, Any
from exceptions.api_exceptions import (
    ValidationError, UserInactiveError, UserNotFoundError, InvalidTokenError, TokenExpiredError
)
from repositories.auth import AuthRepository
from services.permissao_service import PermissaoService
from services.tokens import TokenService, TokenStore, token_service, token_store
from config.database import get_supabase_client

logger = logging.getLogger(__name__)

class AuthService:
    """Service para autenticação de usuários"""

    def __init__(self, client=None, tokens: TokenService = None, store: TokenStore = None):
        """Inicializar service com dependências"""
        client = client if client is not None else get_supabase_client()
        self.repository = AuthRepository(client)
        self.permissao_service = PermissaoService(client)
        self.token_service = tokens or token_service
        self.token_store = store or token_store

    def login(self, email: str, password: str) -> Dict[str, Any]:
        """
        Autenticar usuário e emitir token de sessão

        Returns:
            {user, token, expiresAt, needsRefresh, session}

        Raises:
            InvalidCredentialsError: credenciais recusadas
            UserNotFoundError: identidade sem perfil
            UserInactiveError: perfil desativado
        """
        if not email or not password:
            raise ValidationError("Email e senha são obrigatórios")

        # 1. Autenticar no provedor
        auth_data = self.repository.authenticate_user(email.strip().lower(), password)
        uid = auth_data['user']['id']

        # 2. Buscar perfil
        usuario = self.repository.get_user_data(uid)
        if not usuario:
            logger.warning(f"❌ Usuário autenticado sem perfil: {uid}")
            raise UserNotFoundError(uid)

        if usuario.get('status') is False:
            logger.warning(f"🔒 Login negado para usuário inativo: {uid}")
            raise UserInactiveError()

        # 3. Buscar permissões
        permissoes = self._extract_permission_tags(self.permissao_service.get_user_permissions(uid))

        # 4. Formatar filiais e departamentos
        filiais = self.format_filiais_data(usuario)

        # 5. Emitir token e registrar no TokenStore
        token_info = self.token_service.create_token(self._prepare_token_data(usuario, permissoes))
        self.token_store.add(
            token_info['token'],
            usuario.get('uid'),
            expires_at=token_info['expiresAt'],
            provider_token=auth_data['session']['access_token']
        )

        logger.info(f"✅ Login realizado: {usuario.get('email')}")

        return {
            'user': {
                'nome': usuario.get('nome_completo'),
                'email': usuario.get('email'),
                'telefone': usuario.get('telefone'),
                'cargo': usuario.get('cargo'),
                'filiais': filiais,
                'permissoes': permissoes,
                'uid': usuario.get('uid'),
                'status': usuario.get('status')
            },
            'token': token_info['token'],
            'expiresAt': token_info['expiresAt'],
            'needsRefresh': token_info['needsRefresh'],
            'session': auth_data['session']
        }

    def logout(self, token: str) -> Dict[str, Any]:
        """Encerrar sessão: verifica o token, encerra no provedor e revoga localmente"""
        if not token:
            raise InvalidTokenError('Token não fornecido')

        decoded = self.token_service.verify_token(token)

        provider_token = self.token_store.get_provider_token(token)
        if provider_token:
            self.repository.sign_out(provider_token)
        self.token_store.remove(token)

        logger.info(f"👋 Logout realizado: {decoded.get('uid')}")
        return {
            'success': True,
            'message': 'Logout realizado com sucesso',
            'userId': decoded.get('uid')
        }

    def refresh(self, token: str, extra: Optional[Dict[str, Any]] = None) -> Optional[Dict[str, Any]]:
        """
        Renovar token próximo da expiração

        Returns:
            Novas informações de token ou None quando a renovação não se aplica

        Raises:
            InvalidTokenError: token ausente, revogado ou descartado por expiração
            TokenExpiredError: token expirado além da janela de tolerância
        """
        if not token or not self.token_store.has(token):
            raise InvalidTokenError('Token inválido ou expirado')

        try:
            token_info = self.token_service.refresh_token_if_needed(token, extra)
        except TokenExpiredError:
            self.token_store.remove(token)
            raise
        if token_info is None:
            return None

        user_id = self.token_store.get_user_id(token) or token_info['data'].get('uid')
        provider_token = self.token_store.get_provider_token(token)
        self.token_store.remove(token)
        self.token_store.add(
            token_info['token'],
            user_id,
            expires_at=token_info['expiresAt'],
            provider_token=provider_token
        )

        return token_info

    def sign_up(self, email: str, password: str) -> Dict[str, Any]:
        """Cadastrar identidade no provedor"""
        if not email or not password:
            raise ValidationError("Email e senha são obrigatórios")

        frontend_url = os.getenv('FRONTEND_URL', 'http://localhost:3000')
        return self.repository.sign_up(email, password, redirect_to=f"{frontend_url}/auth/callback")

    def format_filiais_data(self, usuario: Dict[str, Any]) -> List[Dict[str, Any]]:
        """Filiais do usuário com os nomes dos departamentos vinculados em cada uma"""
        departamentos = [
            vinculo.get('departamentos') or {}
            for vinculo in usuario.get('usuario_departamento') or []
        ]

        filiais = []
        for vinculo in usuario.get('usuario_filial') or []:
            filial = vinculo.get('filiais') or {}
            filial_id = filial.get('id', vinculo.get('id_filial'))
            filiais.append({
                'cnpj': filial.get('cnpj'),
                'endereco': filial.get('endereco'),
                'nome_filial': filial.get('nome_filial'),
                'is_representante': bool(vinculo.get('is_representante')),
                'departamentos': [
                    departamento.get('nome_departamento')
                    for departamento in departamentos
                    if departamento.get('id_filial') == filial_id
                ]
            })
        return filiais

    def _extract_permission_tags(self, permissoes: List[Dict[str, Any]]) -> List[str]:
        tags = []
        for permissao in permissoes:
            tag = (permissao.get('permissoes') or {}).get('tag')
            if tag and tag not in tags:
                tags.append(tag)
        return tags

    def _prepare_token_data(self, usuario: Dict[str, Any], permissoes: List[str]) -> Dict[str, Any]:
        return {
            'uid': usuario.get('uid'),
            'email': usuario.get('email'),
            'nome': usuario.get('nome_completo'),
            'permissoes': permissoes
        }
