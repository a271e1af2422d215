"""
Repository específico para representantes de empresa
Cada linha de 'representantes_empresas' é um papel de representante ativo
"""
from typing import List, Dict, Any, Optional
from .base_repository import BaseRepository
import logging

logger = logging.getLogger(__name__)

class RepresentanteEmpresaRepository(BaseRepository):
    """Repository para operações com a tabela representantes_empresas"""

    @property
    def table_name(self) -> str:
        return "representantes_empresas"

    def list_by_empresa(self, empresa_id: Any) -> List[Dict[str, Any]]:
        """Representantes de uma empresa com dados do usuário"""
        return self.find_by_filters(
            {'empresa_id': empresa_id},
            columns='*, usuarios(id, nome_completo, email, cargo, uid)'
        )

    def find_representante(self, empresa_id: Any, usuario_id: Any) -> Optional[Dict[str, Any]]:
        """Buscar vínculo empresa/usuário"""
        return self.find_one({'empresa_id': empresa_id, 'usuario_id': usuario_id})

    def add_representante(self, empresa_id: Any, usuario_id: Any) -> Dict[str, Any]:
        """Criar vínculo de representante"""
        return self.create({'empresa_id': empresa_id, 'usuario_id': usuario_id})

    def remove_representante(self, empresa_id: Any, usuario_id: Any) -> bool:
        """Remover vínculo de representante"""
        return len(self.delete_by_filters({'empresa_id': empresa_id, 'usuario_id': usuario_id})) > 0

    def user_is_representante(self, usuario_id: Any) -> bool:
        """Usuário representa alguma empresa?"""
        return self.exists({'usuario_id': usuario_id})
