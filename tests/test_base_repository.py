"""
Testes do BaseRepository sobre o cliente em memória
"""
import pytest

from exceptions.api_exceptions import DatabaseError
from repositories.usuario_repository import UsuarioRepository
from repositories.permissao_repository import PermissaoRepository

def test_filters_equality_membership_and_null(fake_client):
    fake_client.seed(
        'usuarios',
        {'id': 1, 'email': 'ana@clara.com', 'cargo': 'RH', 'uid': 'u-1'},
        {'id': 2, 'email': 'bia@clara.com', 'cargo': 'TI', 'uid': None},
        {'id': 3, 'email': 'caio@clara.com', 'cargo': 'TI', 'uid': 'u-3'},
    )
    repository = UsuarioRepository(fake_client)

    assert [row['id'] for row in repository.find_by_filters({'cargo': 'TI'})] == [2, 3]
    assert [row['id'] for row in repository.find_by_filters({'id': [1, 3]})] == [1, 3]
    assert [row['id'] for row in repository.find_by_filters({'uid': None})] == [2]
    assert repository.count({'cargo': 'TI'}) == 2
    assert repository.exists({'email': 'ana@clara.com'})

def test_find_by_email_is_case_insensitive(fake_client):
    fake_client.seed('usuarios', {'id': 1, 'email': 'ana@clara.com'})

    assert UsuarioRepository(fake_client).find_by_email('  ANA@Clara.com ')['id'] == 1

def test_create_update_delete(fake_client):
    repository = UsuarioRepository(fake_client)

    created = repository.create({'email': 'ana@clara.com', 'status': True})
    assert created['id'] == 1

    updated = repository.update_status(created['id'], False)
    assert updated['status'] is False

    assert repository.delete(created['id']) is True
    assert repository.find_by_id(created['id']) is None
    assert repository.delete(created['id']) is False

def test_delete_without_filters_is_refused(fake_client):
    with pytest.raises(DatabaseError):
        UsuarioRepository(fake_client).delete_by_filters({})

def test_client_failure_becomes_database_error(fake_client):
    fake_client.fail_on.add('usuarios')

    with pytest.raises(DatabaseError) as exc_info:
        UsuarioRepository(fake_client).find_by_id(1)

    assert 'usuarios' in exc_info.value.message
    assert isinstance(exc_info.value.original_error, RuntimeError)

def test_permission_repository_pairs(fake_client):
    repository = PermissaoRepository(fake_client)

    repository.add_permissions(7, 'u-7', {4, 1, 6})
    assert repository.get_permission_ids(7) == {1, 4, 6}

    repository.remove_permissions(7, {4, 6})
    assert repository.get_permission_ids(7) == {1}
    assert repository.has_permission('u-7', 1)

    repository.update_uid(7, 'u-novo')
    assert repository.has_permission('u-novo', 1)
    assert not repository.has_permission('u-7', 1)
