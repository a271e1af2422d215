"""
Repository específico para a associação usuário ↔ filial
"""
from .association_repository import BaseAssociationRepository

class UsuarioFilialRepository(BaseAssociationRepository):
    """Repository para operações com a tabela usuario_filial"""

    @property
    def table_name(self) -> str:
        return "usuario_filial"

    @property
    def entity_column(self) -> str:
        return "id_filial"
