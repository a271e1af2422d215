"""
Service para permissões de usuário derivadas de papéis de representante
Mapeia tipo de representante → IDs de permissão e mantém usuario_permissoes
sincronizado com as associações ativas do usuário
"""
import logging
import threading
from contextlib import contextmanager
from typing import Dict, List, Any, Set, Iterable
from exceptions.api_exceptions import ValidationError
from repositories.permissao_repository import PermissaoRepository
from repositories.usuario_departamento_repository import UsuarioDepartamentoRepository
from repositories.usuario_filial_repository import UsuarioFilialRepository
from repositories.representante_empresa_repository import RepresentanteEmpresaRepository
from config.database import get_supabase_client

logger = logging.getLogger(__name__)

REP_DEPARTAMENTO = 'rep_departamento'
REP_FILIAL = 'rep_filial'
REP_EMPRESA = 'rep_empresa'

# Tipos de representante e suas permissões
REPRESENTATIVE_PERMISSIONS: Dict[str, frozenset] = {
    REP_DEPARTAMENTO: frozenset({1, 4, 6}),
    REP_FILIAL: frozenset({1, 3, 4, 5}),
    REP_EMPRESA: frozenset({1, 2, 3, 4, 9}),
}

CLIENTE_PERMISSIONS = frozenset({1, 2, 3, 4, 5, 6, 9})

ADMIN_PERMISSION = 7
EMPRESA_PERMISSION = 9

USER_LOCK_STRIPES = 64

class PermissaoService:
    """Service para conceder e revogar permissões de representante"""

    # Locks listrados por usuário, compartilhados entre instâncias do processo
    _user_locks = tuple(threading.RLock() for _ in range(USER_LOCK_STRIPES))

    def __init__(self, client=None):
        """Inicializar service com repositories"""
        client = client if client is not None else get_supabase_client()
        self.repository = PermissaoRepository(client)
        self.departamento_repository = UsuarioDepartamentoRepository(client)
        self.filial_repository = UsuarioFilialRepository(client)
        self.empresa_repository = RepresentanteEmpresaRepository(client)

    @classmethod
    @contextmanager
    def user_lock(cls, user_id: Any):
        """
        Serializar sequências ler-comparar-gravar de um mesmo usuário

        Usuários distintos podem compartilhar a mesma faixa; nenhum fluxo segura
        o lock de dois usuários ao mesmo tempo.
        """
        with cls._user_locks[hash(user_id) % len(cls._user_locks)]:
            yield

    def get_representative_permissions(self, representative_type: str) -> Set[int]:
        """IDs de permissão de um tipo de representante"""
        if representative_type not in REPRESENTATIVE_PERMISSIONS:
            raise ValidationError(f"Tipo de representante inválido: {representative_type}")
        return set(REPRESENTATIVE_PERMISSIONS[representative_type])

    def add_permissions_to_user(self, user_id: Any, uid: str, permission_ids: Iterable[int]) -> Set[int]:
        """
        Adicionar permissões ao usuário, evitando duplicatas

        Returns:
            IDs efetivamente inseridos
        """
        with self.user_lock(user_id):
            # 1. Buscar permissões existentes
            existing = self.repository.get_permission_ids(user_id)

            # 2. Identificar permissões faltantes
            missing = set(permission_ids) - existing

            # 3. Adicionar apenas as permissões faltantes
            if missing:
                self.repository.add_permissions(user_id, uid, missing)
                logger.info(f"✅ Permissões {sorted(missing)} adicionadas ao usuário {user_id}")
            else:
                logger.debug(f"Nenhuma permissão nova para o usuário {user_id}")

            return missing

    def add_representative_permissions(self, user_id: Any, uid: str, representative_type: str) -> Set[int]:
        """Conceder as permissões de um tipo de representante"""
        permissions = self.get_representative_permissions(representative_type)
        return self.add_permissions_to_user(user_id, uid, permissions)

    def remove_permissions_from_user(self, user_id: Any, permission_ids: Iterable[int]) -> None:
        """Remover permissões específicas do usuário"""
        permission_ids = set(permission_ids)
        if permission_ids:
            self.repository.remove_permissions(user_id, permission_ids)

    def check_user_representative_status(self, user_id: Any) -> Dict[str, bool]:
        """Quais papéis de representante o usuário ainda possui"""
        return {
            REP_EMPRESA: self.empresa_repository.user_is_representante(user_id),
            REP_FILIAL: self.filial_repository.user_has_any_representante(user_id),
            REP_DEPARTAMENTO: self.departamento_repository.user_has_any_representante(user_id),
        }

    def get_required_permissions_for_user(self, user_id: Any) -> Set[int]:
        """União das permissões de todos os papéis de representante ativos"""
        status = self.check_user_representative_status(user_id)

        required: Set[int] = set()
        for representative_type, active in status.items():
            if active:
                required |= REPRESENTATIVE_PERMISSIONS[representative_type]
        return required

    def remove_representative_permissions(self, user_id: Any, representative_type: str) -> Set[int]:
        """
        Remover permissões de um tipo de representante, mantendo as que ainda
        são exigidas por outros papéis ativos do usuário

        Returns:
            IDs efetivamente removidos
        """
        permissions = self.get_representative_permissions(representative_type)

        with self.user_lock(user_id):
            required = self.get_required_permissions_for_user(user_id)
            to_remove = permissions - required

            if to_remove:
                self.remove_permissions_from_user(user_id, to_remove)
                logger.info(f"🗑️ Permissões {sorted(to_remove)} removidas do usuário {user_id} ({representative_type})")
            else:
                logger.debug(f"Nenhuma permissão removida do usuário {user_id}: todas exigidas por outros papéis")

            return to_remove

    def manage_permissions_after_representative_removal(self, user_id: Any, representative_type: str) -> Set[int]:
        """Ajustar permissões após a perda de um papel de representante"""
        return self.remove_representative_permissions(user_id, representative_type)

    def create_cliente_permissions(self, user_id: Any, uid: str) -> Set[int]:
        """Conceder o pacote de permissões do cliente"""
        return self.add_permissions_to_user(user_id, uid, CLIENTE_PERMISSIONS)

    def get_user_permissions(self, uid: str) -> List[Dict[str, Any]]:
        """Permissões do usuário com dados de cada permissão"""
        return self.repository.get_permissions_by_uid(uid)

    def has_permission(self, uid: str, permission_id: int) -> bool:
        """Verificar se o usuário possui a permissão"""
        return self.repository.has_permission(uid, permission_id)
