"""
Service para a associação usuário ↔ departamento
"""
from repositories.usuario_departamento_repository import UsuarioDepartamentoRepository
from services.association_service import BaseAssociationService
from services.permissao_service import REP_DEPARTAMENTO

class UsuarioDepartamentoService(BaseAssociationService):
    """Associações de departamento; representante recebe rep_departamento"""

    def _build_repository(self, client) -> UsuarioDepartamentoRepository:
        return UsuarioDepartamentoRepository(client)

    @property
    def entity_name(self) -> str:
        return 'departamento'

    @property
    def representative_type(self) -> str:
        return REP_DEPARTAMENTO
