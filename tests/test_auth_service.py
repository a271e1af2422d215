"""
Testes de login, logout e renovação de token
"""
import time

import pytest

from exceptions.api_exceptions import (
    InvalidCredentialsError, UserInactiveError, UserNotFoundError, InvalidTokenError, TokenExpiredError,
    DatabaseError
)
from services.auth import AuthService
from services.tokens import TokenService, TokenStore

@pytest.fixture
def tokens():
    return TokenService(secret_key='auth-test-secret', default_ttl=7200)

@pytest.fixture
def store():
    return TokenStore()

@pytest.fixture
def seeded_client(fake_client):
    fake_client.auth.register('ana@clara.com', 'senha-forte-1', uid='u-1')
    fake_client.seed('usuarios', {
        'id': 1,
        'nome_completo': 'Ana Souza',
        'email': 'ana@clara.com',
        'telefone': '11999990000',
        'cargo': 'Analista',
        'uid': 'u-1',
        'status': True,
        'usuario_filial': [
            {'id_filial': 2, 'is_representante': True,
             'filiais': {'id': 2, 'cnpj': '12345678000199', 'endereco': 'Rua A', 'nome_filial': 'Matriz'}},
            {'id_filial': 4, 'is_representante': False,
             'filiais': {'id': 4, 'cnpj': '98765432000188', 'endereco': 'Rua B', 'nome_filial': 'Filial Sul'}},
        ],
        'usuario_departamento': [
            {'id_departamento': 7, 'is_representante': False,
             'departamentos': {'id': 7, 'nome_departamento': 'RH', 'id_filial': 2}},
            {'id_departamento': 8, 'is_representante': False,
             'departamentos': {'id': 8, 'nome_departamento': 'TI', 'id_filial': 2}},
            {'id_departamento': 9, 'is_representante': False,
             'departamentos': {'id': 9, 'nome_departamento': 'Vendas', 'id_filial': 4}},
        ],
    })
    fake_client.seed(
        'usuario_permissoes',
        {'id_user': 1, 'uid': 'u-1', 'id_permissao': 1, 'permissoes': {'id': 1, 'tag': 'dashboard'}},
        {'id_user': 1, 'uid': 'u-1', 'id_permissao': 4, 'permissoes': {'id': 4, 'tag': 'relatorios'}},
        {'id_user': 1, 'uid': 'u-1', 'id_permissao': 4, 'permissoes': {'id': 4, 'tag': 'relatorios'}},
    )
    return fake_client

@pytest.fixture
def service(seeded_client, tokens, store):
    return AuthService(seeded_client, tokens=tokens, store=store)

def test_login_success(service, store):
    result = service.login('  ANA@clara.com', 'senha-forte-1')

    user = result['user']
    assert user['nome'] == 'Ana Souza'
    assert user['uid'] == 'u-1'
    assert user['permissoes'] == ['dashboard', 'relatorios']
    assert store.has(result['token'])
    assert store.get_user_id(result['token']) == 'u-1'
    assert result['needsRefresh'] is False
    assert result['session']['access_token'] == 'sb-access-u-1'

def test_login_groups_departments_by_filial(service):
    filiais = service.login('ana@clara.com', 'senha-forte-1')['user']['filiais']

    assert filiais[0]['nome_filial'] == 'Matriz'
    assert filiais[0]['is_representante'] is True
    assert filiais[0]['departamentos'] == ['RH', 'TI']
    assert filiais[1]['departamentos'] == ['Vendas']

def test_login_wrong_password(service, store):
    with pytest.raises(InvalidCredentialsError):
        service.login('ana@clara.com', 'errada')

    assert len(store) == 0

def test_login_inactive_user(service, seeded_client, store):
    seeded_client.rows('usuarios')[0]['status'] = False

    with pytest.raises(UserInactiveError) as exc_info:
        service.login('ana@clara.com', 'senha-forte-1')

    assert exc_info.value.message == 'Usuário Inativo. Contate um administrador!'
    assert len(store) == 0

def test_login_without_profile(service, seeded_client):
    seeded_client.auth.register('orfao@clara.com', 'senha-forte-1', uid='u-orfao')

    with pytest.raises(UserNotFoundError):
        service.login('orfao@clara.com', 'senha-forte-1')

def test_logout_revokes_token(service, store, seeded_client):
    token = service.login('ana@clara.com', 'senha-forte-1')['token']

    result = service.logout(token)

    assert result == {'success': True, 'message': 'Logout realizado com sucesso', 'userId': 'u-1'}
    assert not store.has(token)
    assert seeded_client.provider.signed_out == ['sb-access-u-1']

def test_logout_with_expired_token(service, tokens):
    with pytest.raises(TokenExpiredError):
        service.logout(tokens.generate_token({'uid': 'u-1'}, ttl=-5))

def test_refresh_unknown_token(service, tokens):
    with pytest.raises(InvalidTokenError):
        service.refresh(tokens.generate_token({'uid': 'u-1'}, ttl=60))

def test_refresh_not_needed(service, store, tokens):
    token = tokens.generate_token({'uid': 'u-1'})
    store.add(token, 'u-1')

    assert service.refresh(token) is None
    assert store.has(token)

def test_refresh_rotates_token(service, store, tokens):
    token = tokens.generate_token({'uid': 'u-1', 'email': 'ana@clara.com'}, ttl=100)
    store.add(token, 'u-1')

    token_info = service.refresh(token)

    assert token_info['token'] != token
    assert token_info['data']['email'] == 'ana@clara.com'
    assert not store.has(token)
    assert store.has(token_info['token'])
    assert store.get_user_id(token_info['token']) == 'u-1'

def test_sign_up_creates_identity(service, seeded_client):
    identity = service.sign_up('novo@clara.com', 'senha-forte-2')

    assert seeded_client.auth.users['novo@clara.com']['id'] == identity['id']

def test_login_keeps_service_client_credentials(service, seeded_client):
    headers_before = dict(seeded_client.headers)

    service.login('ana@clara.com', 'senha-forte-1')
    service.login('ana@clara.com', 'senha-forte-1')

    assert seeded_client.headers == headers_before
    assert seeded_client.auth.sign_in_calls == 0
    assert len(seeded_client.auth_clients) == 2
    assert seeded_client.auth_clients[0] is not seeded_client.auth_clients[1]

def test_logout_ends_only_the_callers_provider_session(service, seeded_client):
    seeded_client.auth.register('bia@clara.com', 'senha-forte-2', uid='u-2')
    seeded_client.seed('usuarios', {'id': 2, 'nome_completo': 'Bia Lima', 'email': 'bia@clara.com',
                                    'uid': 'u-2', 'status': True})
    ana_token = service.login('ana@clara.com', 'senha-forte-1')['token']
    service.login('bia@clara.com', 'senha-forte-2')

    service.logout(ana_token)

    assert seeded_client.provider.signed_out == ['sb-access-u-1']

def test_login_provider_outage_is_not_reported_as_bad_credentials(service, seeded_client, store):
    seeded_client.provider.sign_in_error = ConnectionError('provider unreachable')

    with pytest.raises(DatabaseError):
        service.login('ana@clara.com', 'senha-forte-1')

    assert len(store) == 0

def test_login_token_leaves_store_after_expiry(seeded_client, tokens):
    now = [time.time()]
    store = TokenStore(grace_seconds=0, clock=lambda: now[0])
    service = AuthService(seeded_client, tokens=tokens, store=store)

    token = service.login('ana@clara.com', 'senha-forte-1')['token']
    assert store.has(token)
    assert store.get_provider_token(token) == 'sb-access-u-1'

    now[0] += 7200 + 1
    assert not store.has(token)

def test_refresh_rejects_token_expired_long_ago(service, store, tokens):
    token = tokens.generate_token({'uid': 'u-1'}, ttl=-30 * 24 * 60 * 60)
    store.add(token, 'u-1')

    with pytest.raises(TokenExpiredError):
        service.refresh(token)

    assert not store.has(token)

def test_refresh_drops_token_evicted_from_store(service, store, tokens):
    token = tokens.generate_token({'uid': 'u-1'}, ttl=-30 * 24 * 60 * 60)
    store.add(token, 'u-1', expires_at=int(time.time()) - 30 * 24 * 60 * 60)

    with pytest.raises(InvalidTokenError):
        service.refresh(token)

    assert len(store) == 0

def test_refresh_keeps_provider_session(service, store):
    login = service.login('ana@clara.com', 'senha-forte-1')
    token = service.token_service.generate_token({'uid': 'u-1'}, ttl=100)
    store.add(token, 'u-1', provider_token=store.get_provider_token(login['token']))

    token_info = service.refresh(token)

    assert store.get_provider_token(token_info['token']) == 'sb-access-u-1'
