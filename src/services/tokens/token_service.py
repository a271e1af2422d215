"""
Service para emissão, verificação e renovação de tokens de sessão JWT
Tokens assinados com HS256 e validade padrão de 2 horas
"""
import logging
import time
from datetime import timedelta
from typing import Dict, Any, Optional, Union
import jwt
from config.env_loader import get_env_var, get_int_env_var
from exceptions.api_exceptions import InvalidTokenError, TokenExpiredError
from services.tokens.token_store import EXPIRED_GRACE_SECONDS

logger = logging.getLogger(__name__)

JWT_ALGORITHM = 'HS256'
DEFAULT_EXPIRATION_SECONDS = 2 * 60 * 60
REFRESH_THRESHOLD_SECONDS = 5 * 60
RESERVED_CLAIMS = ('iat', 'exp')

class TokenService:
    """Service para gerenciar tokens JWT de sessão"""

    def __init__(self, secret_key: str = None, default_ttl: int = None,
                 refresh_threshold: int = REFRESH_THRESHOLD_SECONDS,
                 refresh_grace: int = EXPIRED_GRACE_SECONDS):
        """Inicializar service; segredo e validade vêm do ambiente quando omitidos"""
        self.secret_key = secret_key or get_env_var('JWT_SECRET')
        if not self.secret_key:
            logger.warning("⚠️ JWT_SECRET não configurado. Usando chave de desenvolvimento.")
            self.secret_key = 'dev-secret-key-change-in-production'

        self.default_ttl = default_ttl or get_int_env_var('JWT_EXPIRATION_SECONDS', DEFAULT_EXPIRATION_SECONDS)
        self.refresh_threshold = refresh_threshold
        self.refresh_grace = refresh_grace

    def _ttl_seconds(self, ttl: Union[int, timedelta, None]) -> int:
        if ttl is None:
            return self.default_ttl
        if isinstance(ttl, timedelta):
            return int(ttl.total_seconds())
        return int(ttl)

    def generate_token(self, data: Dict[str, Any], ttl: Union[int, timedelta, None] = None) -> str:
        """Assinar token com os claims informados e expiração relativa"""
        now = int(time.time())
        payload = {key: value for key, value in data.items() if key not in RESERVED_CLAIMS}
        payload['iat'] = now
        payload['exp'] = now + self._ttl_seconds(ttl)

        return jwt.encode(payload, self.secret_key, algorithm=JWT_ALGORITHM)

    def verify_token(self, token: str) -> Dict[str, Any]:
        """
        Verificar assinatura e expiração do token

        Raises:
            TokenExpiredError: token expirado
            InvalidTokenError: assinatura inválida ou token malformado
        """
        try:
            return jwt.decode(token, self.secret_key, algorithms=[JWT_ALGORITHM])
        except jwt.ExpiredSignatureError:
            logger.debug("Token expirado")
            raise TokenExpiredError()
        except jwt.InvalidTokenError:
            logger.debug("Token inválido")
            raise InvalidTokenError()

    def decode_unverified(self, token: str) -> Optional[Dict[str, Any]]:
        """Decodificar sem verificar assinatura nem expiração"""
        try:
            return jwt.decode(token, options={'verify_signature': False, 'verify_exp': False})
        except jwt.InvalidTokenError:
            return None

    def needs_refresh(self, token: str) -> bool:
        """True se o token não puder ser lido ou faltar até 5 minutos para expirar"""
        decoded = self.decode_unverified(token)
        if not decoded or 'exp' not in decoded:
            return True

        time_until_expiry = decoded['exp'] - int(time.time())
        return time_until_expiry <= self.refresh_threshold

    def create_token(self, data: Dict[str, Any], ttl: Union[int, timedelta, None] = None) -> Dict[str, Any]:
        """Emitir token e retornar {token, expiresAt, data, needsRefresh}"""
        token = self.generate_token(data, ttl)
        decoded = self.verify_token(token)

        return {
            'token': token,
            'expiresAt': decoded['exp'],
            'data': decoded,
            'needsRefresh': self.needs_refresh(token)
        }

    def refresh_token_if_needed(self, token: str, extra: Optional[Dict[str, Any]] = None) -> Optional[Dict[str, Any]]:
        """
        Renovar token próximo da expiração

        Retorna None quando a renovação não é necessária. A assinatura do token
        antigo é sempre verificada; a expiração só é tolerada até
        refresh_grace segundos após o exp.

        Raises:
            InvalidTokenError: assinatura inválida
            TokenExpiredError: token expirado além da janela de tolerância
        """
        if not self.needs_refresh(token):
            return None

        try:
            decoded = jwt.decode(
                token,
                self.secret_key,
                algorithms=[JWT_ALGORITHM],
                options={'verify_exp': False}
            )
        except jwt.InvalidTokenError:
            logger.warning("🔒 Tentativa de renovar token com assinatura inválida")
            raise InvalidTokenError()

        expired_for = int(time.time()) - decoded.get('exp', 0)
        if expired_for > self.refresh_grace:
            logger.warning(f"🔒 Renovação recusada: token expirado há {expired_for}s")
            raise TokenExpiredError()

        new_data = {**decoded, **(extra or {})}
        for claim in RESERVED_CLAIMS:
            new_data.pop(claim, None)

        logger.info(f"🔄 Token renovado para uid {new_data.get('uid')}")
        return self.create_token(new_data)

# Instância global usada pela aplicação
token_service = TokenService()
