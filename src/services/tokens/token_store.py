"""
Armazenamento em memória dos tokens de sessão emitidos
Um token só é aceito pelo middleware se estiver presente aqui; tokens
expirados são descartados após uma janela de tolerância para renovação
"""
import logging
import threading
import time
from typing import Any, Callable, Dict, Optional, Set

logger = logging.getLogger(__name__)

# Tempo, após o exp, em que o token ainda pode ser renovado
EXPIRED_GRACE_SECONDS = 5 * 60

class TokenStore:
    """Conjunto thread-safe de tokens emitidos, indexado por usuário"""

    def __init__(self, grace_seconds: int = EXPIRED_GRACE_SECONDS,
                 clock: Callable[[], float] = time.time):
        self._lock = threading.Lock()
        self.grace_seconds = grace_seconds
        self._clock = clock
        self._tokens: Set[str] = set()
        self._token_users: Dict[str, Any] = {}
        self._user_tokens: Dict[Any, Set[str]] = {}
        self._expirations: Dict[str, int] = {}
        self._provider_tokens: Dict[str, str] = {}

    def add(self, token: str, user_id: Any = None, expires_at: Optional[int] = None,
            provider_token: Optional[str] = None) -> None:
        """
        Registrar token emitido

        Args:
            expires_at: claim exp do token; sem ele o token só sai por revogação
            provider_token: access_token da sessão do provedor, usado no logout
        """
        with self._lock:
            self._purge_expired_unlocked()
            self._tokens.add(token)
            if user_id is not None:
                self._token_users[token] = user_id
                self._user_tokens.setdefault(user_id, set()).add(token)
            if expires_at is not None:
                self._expirations[token] = int(expires_at)
            if provider_token:
                self._provider_tokens[token] = provider_token

    def has(self, token: str) -> bool:
        with self._lock:
            if self._is_stale(token):
                self._remove_unlocked(token)
            return token in self._tokens

    def remove(self, token: str) -> bool:
        """Remover token; retorna False se ele não estava presente"""
        with self._lock:
            return self._remove_unlocked(token)

    def remove_by_user_id(self, user_id: Any) -> int:
        """Revogar todos os tokens de um usuário; retorna quantos foram removidos"""
        with self._lock:
            tokens = list(self._user_tokens.get(user_id, ()))
            for token in tokens:
                self._remove_unlocked(token)

        if tokens:
            logger.info(f"🔒 {len(tokens)} token(s) revogado(s) para o usuário {user_id}")
        return len(tokens)

    def get_user_id(self, token: str) -> Optional[Any]:
        with self._lock:
            return self._token_users.get(token)

    def get_provider_token(self, token: str) -> Optional[str]:
        with self._lock:
            return self._provider_tokens.get(token)

    def purge_expired(self) -> int:
        """Descartar tokens expirados além da janela de tolerância"""
        with self._lock:
            removed = self._purge_expired_unlocked()

        if removed:
            logger.debug(f"🧹 {removed} token(s) expirado(s) descartado(s)")
        return removed

    def clear(self) -> None:
        with self._lock:
            self._tokens.clear()
            self._token_users.clear()
            self._user_tokens.clear()
            self._expirations.clear()
            self._provider_tokens.clear()

    def __len__(self) -> int:
        with self._lock:
            self._purge_expired_unlocked()
            return len(self._tokens)

    def _is_stale(self, token: str) -> bool:
        expires_at = self._expirations.get(token)
        return expires_at is not None and expires_at + self.grace_seconds < self._clock()

    def _purge_expired_unlocked(self) -> int:
        stale = [token for token in self._expirations if self._is_stale(token)]
        for token in stale:
            self._remove_unlocked(token)
        return len(stale)

    def _remove_unlocked(self, token: str) -> bool:
        if token not in self._tokens:
            return False

        self._tokens.discard(token)
        self._expirations.pop(token, None)
        self._provider_tokens.pop(token, None)
        user_id = self._token_users.pop(token, None)
        if user_id is not None:
            user_tokens = self._user_tokens.get(user_id)
            if user_tokens is not None:
                user_tokens.discard(token)
                if not user_tokens:
                    del self._user_tokens[user_id]
        return True

# Instância global compartilhada entre login, logout e middleware
token_store = TokenStore()
