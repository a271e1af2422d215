"""
Testes das permissões derivadas de papéis de representante
"""
import pytest

from exceptions.api_exceptions import ValidationError
from services.permissao_service import (
    PermissaoService, REP_DEPARTAMENTO, REP_FILIAL, REP_EMPRESA, CLIENTE_PERMISSIONS
)

@pytest.fixture
def service(fake_client):
    return PermissaoService(fake_client)

def test_representative_permission_table(service):
    assert service.get_representative_permissions(REP_DEPARTAMENTO) == {1, 4, 6}
    assert service.get_representative_permissions(REP_FILIAL) == {1, 3, 4, 5}
    assert service.get_representative_permissions(REP_EMPRESA) == {1, 2, 3, 4, 9}

def test_invalid_representative_type(service):
    with pytest.raises(ValidationError) as exc_info:
        service.get_representative_permissions('rep_galaxia')

    assert 'rep_galaxia' in exc_info.value.message

def test_add_permissions_is_idempotent(service, fake_client):
    first = service.add_representative_permissions(10, 'u-10', REP_DEPARTAMENTO)
    second = service.add_representative_permissions(10, 'u-10', REP_DEPARTAMENTO)

    assert first == {1, 4, 6}
    assert second == set()
    assert len(fake_client.rows('usuario_permissoes')) == 3

def test_add_only_inserts_missing(service):
    service.add_representative_permissions(10, 'u-10', REP_DEPARTAMENTO)

    assert service.add_representative_permissions(10, 'u-10', REP_FILIAL) == {3, 5}
    assert service.repository.get_permission_ids(10) == {1, 3, 4, 5, 6}

def test_removal_keeps_permissions_required_by_other_roles(service, fake_client):
    fake_client.seed(
        'usuario_filial',
        {'id': 1, 'id_usuario': 10, 'id_filial': 2, 'is_representante': True}
    )
    service.add_representative_permissions(10, 'u-10', REP_DEPARTAMENTO)
    service.add_representative_permissions(10, 'u-10', REP_FILIAL)

    removed = service.manage_permissions_after_representative_removal(10, REP_DEPARTAMENTO)

    assert removed == {6}
    assert service.repository.get_permission_ids(10) == {1, 3, 4, 5}

def test_removal_without_other_roles_clears_everything(service):
    service.add_representative_permissions(10, 'u-10', REP_EMPRESA)

    assert service.remove_representative_permissions(10, REP_EMPRESA) == {1, 2, 3, 4, 9}
    assert service.repository.get_permission_ids(10) == set()

def test_required_permissions_union(service, fake_client):
    fake_client.seed('representantes_empresas', {'id': 1, 'empresa_id': 5, 'usuario_id': 10})
    fake_client.seed(
        'usuario_departamento',
        {'id': 1, 'id_usuario': 10, 'id_departamento': 3, 'is_representante': True}
    )

    status = service.check_user_representative_status(10)

    assert status == {REP_EMPRESA: True, REP_FILIAL: False, REP_DEPARTAMENTO: True}
    assert service.get_required_permissions_for_user(10) == {1, 2, 3, 4, 6, 9}

def test_non_representative_association_does_not_count(service, fake_client):
    fake_client.seed(
        'usuario_filial',
        {'id': 1, 'id_usuario': 10, 'id_filial': 2, 'is_representante': False}
    )

    assert service.get_required_permissions_for_user(10) == set()

def test_cliente_permissions(service):
    assert service.create_cliente_permissions(11, 'u-11') == set(CLIENTE_PERMISSIONS)
    assert service.has_permission('u-11', 9)
    assert not service.has_permission('u-11', 7)

def test_user_locks_do_not_grow_with_users(service):
    locks_before = len(PermissaoService._user_locks)

    for user_id in range(1000):
        service.add_permissions_to_user(user_id, f"u-{user_id}", {1})

    assert len(PermissaoService._user_locks) == locks_before

def test_user_lock_is_reentrant():
    with PermissaoService.user_lock('u-1'):
        with PermissaoService.user_lock('u-1'):
            pass
