"""
Repository específico para permissões de usuário
Operações sobre a tabela 'usuario_permissoes' (pares usuário/permissão)
"""
from typing import List, Dict, Any, Set, Iterable
from .base_repository import BaseRepository
import logging

logger = logging.getLogger(__name__)

class PermissaoRepository(BaseRepository):
    """Repository para operações com a tabela usuario_permissoes"""

    @property
    def table_name(self) -> str:
        return "usuario_permissoes"

    def get_permission_ids(self, id_user: Any) -> Set[int]:
        """IDs de permissão atualmente concedidos ao usuário"""
        rows = self.find_by_filters({'id_user': id_user}, columns='id_permissao')
        return {row['id_permissao'] for row in rows}

    def add_permissions(self, id_user: Any, uid: str, permission_ids: Iterable[int]) -> List[Dict[str, Any]]:
        """Inserir pares (usuário, permissão)"""
        rows = [
            {'id_user': id_user, 'id_permissao': permission_id, 'uid': uid}
            for permission_id in sorted(permission_ids)
        ]
        return self.create_many(rows)

    def remove_permissions(self, id_user: Any, permission_ids: Iterable[int]) -> List[Dict[str, Any]]:
        """Remover pares (usuário, permissão) para os IDs informados"""
        permission_ids = sorted(permission_ids)
        if not permission_ids:
            return []
        return self.delete_by_filters({'id_user': id_user, 'id_permissao': permission_ids})

    def get_permissions_by_uid(self, uid: str) -> List[Dict[str, Any]]:
        """Permissões do usuário (por uid do provedor) com dados da permissão"""
        return self.find_by_filters({'uid': uid}, columns='id_permissao, permissoes(*)')

    def has_permission(self, uid: str, id_permissao: int) -> bool:
        """Verificar se o usuário possui a permissão"""
        return self.exists({'uid': uid, 'id_permissao': id_permissao})

    def update_uid(self, id_user: Any, uid: str) -> List[Dict[str, Any]]:
        """Reapontar as permissões do usuário para um novo uid do provedor"""
        return self.update_by_filters({'id_user': id_user}, {'uid': uid})
