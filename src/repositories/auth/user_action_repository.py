"""
Repository para ações de usuário (reset de senha, ativação de email)
Responsável apenas por acesso a dados da tabela acoes_usuarios
"""
import logging
from typing import Dict, Optional, Any
from repositories.base_repository import BaseRepository

logger = logging.getLogger(__name__)

class UserActionRepository(BaseRepository):
    """Repository para gerenciar ações de usuário de uso único"""

    @property
    def table_name(self) -> str:
        return "acoes_usuarios"

    def save_action(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Registrar nova ação"""
        action = self.create(data)
        logger.info(f"📝 Ação '{data.get('type')}' registrada para uid {data.get('uid')}")
        return action

    def find_by_token(self, token: str) -> Optional[Dict[str, Any]]:
        """Buscar ação pelo token exato"""
        return self.find_one({'token': token})

    def find_by_token_and_code(self, token: str, code: str) -> Optional[Dict[str, Any]]:
        """Buscar ação pelo par token + código"""
        return self.find_one({'token': token, 'code': code})

    def find_by_token_uid_and_code(self, token: str, uid: str, code: str) -> Optional[Dict[str, Any]]:
        """Buscar ação pelo trio token + uid + código"""
        return self.find_one({'token': token, 'uid': uid, 'code': code})

    def update_status(self, action_id: Any, status: bool) -> Optional[Dict[str, Any]]:
        """Atualizar status da ação (False = consumida)"""
        return self.update(action_id, {'status': status})
