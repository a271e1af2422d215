"""
Service para a associação usuário ↔ filial
"""
from repositories.usuario_filial_repository import UsuarioFilialRepository
from services.association_service import BaseAssociationService
from services.permissao_service import REP_FILIAL

class UsuarioFilialService(BaseAssociationService):
    """Associações de filial; representante recebe rep_filial"""

    def _build_repository(self, client) -> UsuarioFilialRepository:
        return UsuarioFilialRepository(client)

    @property
    def entity_name(self) -> str:
        return 'filial'

    @property
    def representative_type(self) -> str:
        return REP_FILIAL
