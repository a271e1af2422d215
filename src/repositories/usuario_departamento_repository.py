"""
Repository específico para a associação usuário ↔ departamento
"""
from .association_repository import BaseAssociationRepository

class UsuarioDepartamentoRepository(BaseAssociationRepository):
    """Repository para operações com a tabela usuario_departamento"""

    @property
    def table_name(self) -> str:
        return "usuario_departamento"

    @property
    def entity_column(self) -> str:
        return "id_departamento"
