"""
Repository específico para usuários
Operações CRUD sobre a tabela 'usuarios'
"""
from typing import Dict, Any, Optional
from .base_repository import BaseRepository
import logging

logger = logging.getLogger(__name__)

class UsuarioRepository(BaseRepository):
    """Repository para operações com a tabela usuarios"""

    @property
    def table_name(self) -> str:
        return "usuarios"

    def find_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        """Buscar usuário por email"""
        return self.find_one({'email': email.strip().lower()})

    def find_by_uid(self, uid: str) -> Optional[Dict[str, Any]]:
        """Buscar usuário pelo uid do provedor de identidade"""
        return self.find_one({'uid': uid})

    def update_uid(self, usuario_id: Any, uid: str) -> Optional[Dict[str, Any]]:
        """Vincular o usuário a uma nova identidade do provedor"""
        return self.update(usuario_id, {'uid': uid})

    def update_status(self, usuario_id: Any, status: bool) -> Optional[Dict[str, Any]]:
        """Ativar/desativar usuário (soft delete)"""
        return self.update(usuario_id, {'status': status})
