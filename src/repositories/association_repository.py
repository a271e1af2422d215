"""
Repository base para associações usuário ↔ entidade com flag de representante
Compartilhado por usuario_departamento e usuario_filial
"""
from abc import abstractmethod
from typing import List, Dict, Any, Optional
from .base_repository import BaseRepository
import logging

logger = logging.getLogger(__name__)

class BaseAssociationRepository(BaseRepository):
    """Operações comuns das tabelas de associação com is_representante"""

    @property
    @abstractmethod
    def entity_column(self) -> str:
        """Coluna da entidade associada (id_departamento / id_filial)"""
        pass

    def _key(self, id_usuario: Any, id_entidade: Any) -> Dict[str, Any]:
        return {'id_usuario': id_usuario, self.entity_column: id_entidade}

    def find_association(self, id_usuario: Any, id_entidade: Any) -> Optional[Dict[str, Any]]:
        """Buscar associação pelo par usuário/entidade"""
        return self.find_one(self._key(id_usuario, id_entidade))

    def list_by_usuario(self, id_usuario: Any) -> List[Dict[str, Any]]:
        """Associações de um usuário"""
        return self.find_by_filters({'id_usuario': id_usuario})

    def list_representantes(self, id_entidade: Any) -> List[Dict[str, Any]]:
        """Representantes de uma entidade, com dados do usuário"""
        return self.find_by_filters(
            {self.entity_column: id_entidade, 'is_representante': True},
            columns='*, usuarios(id, nome_completo, email, cargo, uid)'
        )

    def create_association(self, id_usuario: Any, id_entidade: Any, is_representante: bool) -> Dict[str, Any]:
        """Criar associação"""
        data = self._key(id_usuario, id_entidade)
        data['is_representante'] = is_representante
        return self.create(data)

    def update_representante(self, id_usuario: Any, id_entidade: Any, is_representante: bool) -> Optional[Dict[str, Any]]:
        """Atualizar flag de representante da associação"""
        rows = self.update_by_filters(
            self._key(id_usuario, id_entidade),
            {'is_representante': is_representante}
        )
        return rows[0] if rows else None

    def delete_association(self, id_usuario: Any, id_entidade: Any) -> bool:
        """Remover associação (hard delete)"""
        return len(self.delete_by_filters(self._key(id_usuario, id_entidade))) > 0

    def user_has_any_representante(self, id_usuario: Any) -> bool:
        """Usuário ainda representa alguma entidade deste tipo?"""
        return self.exists({'id_usuario': id_usuario, 'is_representante': True})
