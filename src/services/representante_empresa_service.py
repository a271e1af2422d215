"""
Service para representantes de empresa
Cada vínculo concede rep_empresa; a remoção revoga apenas o que nenhum outro
papel ativo exige
"""
import logging
from typing import Dict, List, Any, Iterable
from exceptions.api_exceptions import (
    ValidationError, NotFoundError, AssociationNotFoundError, DuplicateAssociationError
)
from repositories.representante_empresa_repository import RepresentanteEmpresaRepository
from repositories.usuario_repository import UsuarioRepository
from services.permissao_service import PermissaoService, REP_EMPRESA
from config.database import get_supabase_client

logger = logging.getLogger(__name__)

class RepresentanteEmpresaService:
    """Service para gerenciar representantes de empresas"""

    def __init__(self, client=None, permissao_service: PermissaoService = None):
        client = client if client is not None else get_supabase_client()
        self.repository = RepresentanteEmpresaRepository(client)
        self.usuario_repository = UsuarioRepository(client)
        self.permissao_service = permissao_service or PermissaoService(client)

    def list_representantes(self, empresa_id: Any) -> List[Dict[str, Any]]:
        if not empresa_id:
            raise ValidationError("ID da empresa é obrigatório")
        return self.repository.list_by_empresa(empresa_id)

    def add_representante(self, empresa_id: Any, usuario_id: Any) -> Dict[str, Any]:
        """Vincular usuário como representante da empresa e conceder rep_empresa"""
        if not empresa_id or not usuario_id:
            raise ValidationError("empresa_id e usuario_id são obrigatórios")

        with PermissaoService.user_lock(usuario_id):
            if self.repository.find_representante(empresa_id, usuario_id):
                raise DuplicateAssociationError(
                    f"Usuário {usuario_id} já é representante da empresa {empresa_id}"
                )

            usuario = self.usuario_repository.find_by_id(usuario_id)
            if not usuario:
                raise NotFoundError('Usuário', usuario_id)

            representante = self.repository.add_representante(empresa_id, usuario_id)
            self.permissao_service.add_representative_permissions(usuario_id, usuario.get('uid'), REP_EMPRESA)

            logger.info(f"✅ Usuário {usuario_id} agora representa a empresa {empresa_id}")
            return representante

    def remove_representante(self, empresa_id: Any, usuario_id: Any) -> bool:
        """Desvincular representante e podar permissões"""
        if not empresa_id or not usuario_id:
            raise ValidationError("empresa_id e usuario_id são obrigatórios")

        with PermissaoService.user_lock(usuario_id):
            if not self.repository.find_representante(empresa_id, usuario_id):
                raise AssociationNotFoundError('empresa', usuario_id, empresa_id)

            removed = self.repository.remove_representante(empresa_id, usuario_id)
            self.permissao_service.manage_permissions_after_representative_removal(usuario_id, REP_EMPRESA)

            logger.info(f"🗑️ Usuário {usuario_id} deixou de representar a empresa {empresa_id}")
            return removed

    def sync_representantes(self, empresa_id: Any, usuario_ids: Iterable[Any]) -> Dict[str, List[Any]]:
        """
        Substituir o conjunto de representantes da empresa

        Returns:
            Dict com 'added' e 'removed' (IDs de usuário)
        """
        if not empresa_id:
            raise ValidationError("ID da empresa é obrigatório")
        if usuario_ids is None:
            raise ValidationError("usuario_ids é obrigatório")

        desired = set(usuario_ids)
        current = {row['usuario_id'] for row in self.repository.list_by_empresa(empresa_id)}

        added = sorted(desired - current, key=str)
        removed = sorted(current - desired, key=str)

        for usuario_id in removed:
            self.remove_representante(empresa_id, usuario_id)

        for usuario_id in added:
            self.add_representante(empresa_id, usuario_id)

        return {'added': added, 'removed': removed}
