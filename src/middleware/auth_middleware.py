"""
Middleware para autenticação JWT
Verifica tokens em todas as rotas protegidas
"""
import logging
from functools import wraps
from flask import request, jsonify, g
from exceptions.api_exceptions import AuthenticationError, AuthorizationError
from services.permissao_service import PermissaoService
from services.tokens import token_service, token_store

logger = logging.getLogger(__name__)

def _unauthorized(error: str, message: str):
    return jsonify({
        'success': False,
        'error': error,
        'message': message
    }), 401

def extract_bearer_token() -> str:
    """Extrair token do header Authorization ("Bearer <token>"); vazio se ausente"""
    auth_header = request.headers.get('Authorization', '')
    scheme, _, token = auth_header.partition(' ')
    if scheme.lower() != 'bearer':
        return ''
    return token.strip()

def require_auth(f):
    """
    Decorator para rotas que requerem autenticação JWT

    O token precisa estar no TokenStore (não revogado) e ter assinatura e
    validade corretas.

    Usage:
        @require_auth
        def protected_route():
            user = get_current_user()
            return jsonify({'uid': user['uid']})
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        token = extract_bearer_token()
        if not token:
            return _unauthorized('Token de autenticação obrigatório', 'Token não fornecido')

        # Token revogado ou nunca emitido por este processo
        if not token_store.has(token):
            return _unauthorized('Token inválido', 'Token inválido ou expirado')

        try:
            payload = token_service.verify_token(token)
        except AuthenticationError as e:
            return _unauthorized(e.error_code, e.message)

        # Armazenar dados do usuário no contexto da requisição
        g.current_user = payload
        g.current_token = token

        return f(*args, **kwargs)

    return decorated_function

def require_permission(*permission_ids: int):
    """
    Decorator que exige ao menos uma das permissões informadas

    Aplicar abaixo de @require_auth; a consulta é feita em usuario_permissoes
    pelo uid do token, então concessões e revogações valem imediatamente.
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            uid = (get_current_user() or {}).get('uid')
            service = PermissaoService()

            if not uid or not any(service.has_permission(uid, pid) for pid in permission_ids):
                error = AuthorizationError()
                logger.warning(f"⛔ {uid} sem permissão {list(permission_ids)} para {request.path}")
                return jsonify(error.to_dict()), error.http_status

            return f(*args, **kwargs)

        return decorated_function

    return decorator

def get_current_user():
    """
    Obter dados do usuário atual da requisição

    Returns:
        Dict com claims do token JWT ou None se não autenticado
    """
    return getattr(g, 'current_user', None)

def get_current_token():
    """Token bruto da requisição autenticada"""
    return getattr(g, 'current_token', None)
