"""
Service base para associações usuário ↔ entidade com papel de representante
Mantém as permissões do usuário em sincronia com a flag is_representante
"""
import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Any, Optional
from exceptions.api_exceptions import (
    ValidationError, NotFoundError, AssociationNotFoundError, DuplicateAssociationError
)
from repositories.association_repository import BaseAssociationRepository
from repositories.usuario_repository import UsuarioRepository
from services.permissao_service import PermissaoService
from config.database import get_supabase_client

logger = logging.getLogger(__name__)

class BaseAssociationService(ABC):
    """Operações de associação compartilhadas por departamento e filial"""

    def __init__(self, client=None, permissao_service: PermissaoService = None):
        """Inicializar service com repositories e service de permissões"""
        client = client if client is not None else get_supabase_client()
        self.repository = self._build_repository(client)
        self.usuario_repository = UsuarioRepository(client)
        self.permissao_service = permissao_service or PermissaoService(client)

    @abstractmethod
    def _build_repository(self, client) -> BaseAssociationRepository:
        pass

    @property
    @abstractmethod
    def entity_name(self) -> str:
        """Nome legível da entidade (departamento / filial)"""
        pass

    @property
    @abstractmethod
    def representative_type(self) -> str:
        """Tipo de representante concedido por esta associação"""
        pass

    @property
    def entity_column(self) -> str:
        return self.repository.entity_column

    def _validate_ids(self, id_usuario: Any, id_entidade: Any) -> None:
        if not id_usuario or not id_entidade:
            raise ValidationError(f"id_usuario e {self.entity_column} são obrigatórios")

    def _get_usuario_uid(self, id_usuario: Any) -> str:
        usuario = self.usuario_repository.find_by_id(id_usuario)
        if not usuario:
            raise NotFoundError('Usuário', id_usuario)
        return usuario.get('uid')

    def _get_existing(self, id_usuario: Any, id_entidade: Any) -> Dict[str, Any]:
        existing = self.repository.find_association(id_usuario, id_entidade)
        if not existing:
            raise AssociationNotFoundError(self.entity_name, id_usuario, id_entidade)
        return existing

    def list_associations(self, id_usuario: Any = None) -> List[Dict[str, Any]]:
        """Listar associações (opcionalmente de um usuário)"""
        if id_usuario:
            return self.repository.list_by_usuario(id_usuario)
        return self.repository.find_all()

    def get_representantes(self, id_entidade: Any) -> List[Dict[str, Any]]:
        """Representantes de uma entidade"""
        if not id_entidade:
            raise ValidationError(f"ID do {self.entity_name} é obrigatório")
        return self.repository.list_representantes(id_entidade)

    def create_association(self, id_usuario: Any, id_entidade: Any,
                           is_representante: bool = False) -> Dict[str, Any]:
        """
        Criar associação; quando criada como representante concede as
        permissões do papel

        Raises:
            ValidationError: ids ausentes
            DuplicateAssociationError: par usuário/entidade já existe
        """
        self._validate_ids(id_usuario, id_entidade)
        is_representante = bool(is_representante)

        with PermissaoService.user_lock(id_usuario):
            # 1. Rejeitar duplicata
            if self.repository.find_association(id_usuario, id_entidade):
                raise DuplicateAssociationError(
                    f"Usuário {id_usuario} já está associado ao {self.entity_name} {id_entidade}"
                )

            # 2. Resolver uid antes de gravar quando houver permissões a conceder
            uid = self._get_usuario_uid(id_usuario) if is_representante else None

            # 3. Criar associação
            association = self.repository.create_association(id_usuario, id_entidade, is_representante)
            logger.info(f"✅ Associação criada: usuário {id_usuario} ↔ {self.entity_name} {id_entidade}")

            # 4. Conceder permissões do papel
            if is_representante:
                self.permissao_service.add_representative_permissions(id_usuario, uid, self.representative_type)

            return association

    def update_association(self, id_usuario: Any, id_entidade: Any,
                           is_representante: Optional[bool]) -> Dict[str, Any]:
        """
        Alterar a flag de representante e ajustar permissões

        Raises:
            ValidationError: ids ou is_representante ausentes
            AssociationNotFoundError: associação inexistente
        """
        self._validate_ids(id_usuario, id_entidade)
        if is_representante is None:
            raise ValidationError("is_representante é obrigatório")
        is_representante = bool(is_representante)

        with PermissaoService.user_lock(id_usuario):
            self._get_existing(id_usuario, id_entidade)

            updated = self.repository.update_representante(id_usuario, id_entidade, is_representante)

            if is_representante:
                uid = self._get_usuario_uid(id_usuario)
                self.permissao_service.add_representative_permissions(id_usuario, uid, self.representative_type)
            else:
                self.permissao_service.manage_permissions_after_representative_removal(
                    id_usuario, self.representative_type
                )

            logger.info(
                f"🔄 Associação atualizada: usuário {id_usuario} ↔ {self.entity_name} {id_entidade} "
                f"(representante={is_representante})"
            )
            return updated

    def delete_association(self, id_usuario: Any, id_entidade: Any) -> bool:
        """
        Remover associação; se era de representante, revoga as permissões
        que nenhum outro papel ativo exige

        Raises:
            AssociationNotFoundError: associação inexistente
        """
        self._validate_ids(id_usuario, id_entidade)

        with PermissaoService.user_lock(id_usuario):
            existing = self._get_existing(id_usuario, id_entidade)

            deleted = self.repository.delete_association(id_usuario, id_entidade)

            if existing.get('is_representante'):
                self.permissao_service.manage_permissions_after_representative_removal(
                    id_usuario, self.representative_type
                )

            logger.info(f"🗑️ Associação removida: usuário {id_usuario} ↔ {self.entity_name} {id_entidade}")
            return deleted
