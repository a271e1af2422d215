"""
Testes do fluxo de recuperação e definição de senha
"""
from datetime import datetime, timedelta, timezone

import pytest

from exceptions.api_exceptions import (
    ValidationError, TokenInvalidError, TokenExpiredError, TokenAlreadyUsedError, DatabaseError
)
from services.auth.password_service import (
    PasswordService, ACTION_RESET_PASSWORD, ACTION_EMAIL_ACTIVATION, RESET_PASSWORD_TTL,
    generate_action_code, parse_timestamp
)
from services.tokens import TokenService, TokenStore

@pytest.fixture
def store():
    return TokenStore()

@pytest.fixture
def seeded_client(fake_client):
    fake_client.auth.register('ana@clara.com', 'senha-antiga-1', uid='u-1')
    fake_client.seed('usuarios', {
        'id': 1, 'nome_completo': 'Ana Souza', 'email': 'ana@clara.com', 'uid': 'u-1', 'status': True
    })
    return fake_client

@pytest.fixture
def service(seeded_client, email_service, store):
    return PasswordService(
        seeded_client,
        email_service=email_service,
        tokens=TokenService(secret_key='password-test-secret'),
        store=store
    )

def only_action(client):
    actions = client.rows('acoes_usuarios')
    assert len(actions) == 1
    return actions[0]

def test_generate_action_code_format():
    code = generate_action_code()

    assert len(code) == 8
    assert code == code.upper()
    int(code, 16)

def test_parse_timestamp_variants():
    assert parse_timestamp('2030-01-01T10:00:00Z') == datetime(2030, 1, 1, 10, tzinfo=timezone.utc)
    assert parse_timestamp('2030-01-01T10:00:00').tzinfo == timezone.utc
    assert parse_timestamp(None) is None

def test_forgot_password_unknown_email_does_nothing(service, seeded_client, email_service):
    result = service.forgot_password('ninguem@clara.com')

    assert result == {'success': False}
    assert seeded_client.rows('acoes_usuarios') == []
    email_service.send_reset_password_email.assert_not_called()

def test_forgot_password_creates_action_and_sends_email(service, seeded_client, email_service):
    result = service.forgot_password('ana@clara.com')

    assert result['success'] is True
    action = only_action(seeded_client)
    assert action['type'] == ACTION_RESET_PASSWORD
    assert action['status'] is True
    assert action['uid'] == 'u-1'

    email, name, code, link = email_service.send_reset_password_email.call_args[0]
    assert email == 'ana@clara.com'
    assert name == 'Ana Souza'
    assert code == action['code']
    assert link == f"{service.frontend_url}/reset-password?token={action['token']}"

def test_reset_action_expires_in_fifteen_minutes(service, seeded_client):
    service.forgot_password('ana@clara.com')
    expira_em = parse_timestamp(only_action(seeded_client)['expira_em'])

    remaining = expira_em - datetime.now(timezone.utc)
    assert timedelta(minutes=14) < remaining <= RESET_PASSWORD_TTL

def test_validate_token_and_code(service, seeded_client):
    service.forgot_password('ana@clara.com')
    action = only_action(seeded_client)

    assert service.validate_reset_token(action['token']) == {
        'valid': True, 'uid': 'u-1', 'type': ACTION_RESET_PASSWORD
    }
    assert service.validate_reset_code(action['token'], action['code'].lower())['valid'] is True

    with pytest.raises(TokenInvalidError):
        service.validate_reset_code(action['token'], 'FFFFFFFF' if action['code'] != 'FFFFFFFF' else '00000000')

def test_validate_unknown_token(service):
    with pytest.raises(TokenInvalidError):
        service.validate_reset_token('nao-existe')

def test_expired_is_reported_before_used(service, seeded_client):
    service.forgot_password('ana@clara.com')
    action = only_action(seeded_client)
    action['status'] = False
    action['expira_em'] = (datetime.now(timezone.utc) - timedelta(minutes=1)).isoformat()

    with pytest.raises(TokenExpiredError):
        service.validate_reset_token(action['token'])

def test_validate_consumed_action_that_has_not_expired(service, seeded_client):
    service.forgot_password('ana@clara.com')
    action = only_action(seeded_client)
    action['status'] = False

    with pytest.raises(TokenAlreadyUsedError):
        service.validate_reset_token(action['token'])

def test_reset_password_flow(service, seeded_client, store):
    store.add('sessao-1', 'u-1')
    store.add('sessao-2', 'u-1')
    store.add('sessao-outro', 'u-2')
    service.forgot_password('ana@clara.com')
    action = only_action(seeded_client)

    result = service.reset_password(action['token'], 'u-1', action['code'], 'senha-nova-123')

    assert result == {'success': True, 'uid': 'u-1'}
    assert seeded_client.auth.users['ana@clara.com']['password'] == 'senha-nova-123'
    assert action['status'] is False
    assert not store.has('sessao-1')
    assert not store.has('sessao-2')
    assert store.has('sessao-outro')

    with pytest.raises(TokenAlreadyUsedError):
        service.reset_password(action['token'], 'u-1', action['code'], 'senha-nova-456')

def test_reset_password_rejects_short_password(service, seeded_client):
    service.forgot_password('ana@clara.com')
    action = only_action(seeded_client)

    with pytest.raises(ValidationError):
        service.reset_password(action['token'], 'u-1', action['code'], 'curta')

    assert action['status'] is True

def test_reset_password_with_wrong_uid(service, seeded_client):
    service.forgot_password('ana@clara.com')
    action = only_action(seeded_client)

    with pytest.raises(TokenInvalidError):
        service.reset_password(action['token'], 'u-2', action['code'], 'senha-nova-123')

def test_activation_action_cannot_reset_password(service, seeded_client):
    created = service.create_user_action('u-1', ACTION_EMAIL_ACTIVATION, timedelta(hours=24))

    with pytest.raises(TokenInvalidError):
        service.reset_password(created['token'], 'u-1', created['code'], 'senha-nova-123')

def test_define_password_links_new_identity(service, seeded_client):
    seeded_client.seed('usuarios', {
        'id': 2, 'nome_completo': 'Bia Lima', 'email': 'bia@clara.com', 'uid': 'provisorio-2', 'status': True
    })
    seeded_client.seed(
        'usuario_permissoes',
        {'id_user': 2, 'uid': 'provisorio-2', 'id_permissao': 1},
        {'id_user': 2, 'uid': 'provisorio-2', 'id_permissao': 4},
    )
    created = service.create_user_action('provisorio-2', ACTION_EMAIL_ACTIVATION, timedelta(hours=24))

    result = service.define_password(created['token'], 'provisorio-2', created['code'], 'senha-forte-9')

    new_uid = result['uid']
    assert new_uid == seeded_client.auth.users['bia@clara.com']['id']
    assert seeded_client.rows('usuarios')[1]['uid'] == new_uid
    assert {row['uid'] for row in seeded_client.rows('usuario_permissoes') if row['id_user'] == 2} == {new_uid}
    assert only_action(seeded_client)['status'] is False

def test_reset_password_provider_failure_keeps_action_usable(service, seeded_client, store):
    seeded_client.seed('usuarios', {
        'id': 3, 'nome_completo': 'Carla Mendes', 'email': 'carla@clara.com', 'uid': 'u-3', 'status': True
    })
    store.add('sessao-carla', 'u-3')
    service.forgot_password('carla@clara.com')
    action = only_action(seeded_client)

    with pytest.raises(DatabaseError):
        service.reset_password(action['token'], 'u-3', action['code'], 'senha-nova-123')

    assert action['status'] is True
    assert store.has('sessao-carla')
    assert service.validate_reset_token(action['token'])['valid'] is True

def test_define_password_provider_failure_keeps_action_usable(service, seeded_client):
    seeded_client.seed('usuarios', {
        'id': 2, 'nome_completo': 'Bia Lima', 'email': 'bia@clara.com', 'uid': 'provisorio-2', 'status': True
    })
    created = service.create_user_action('provisorio-2', ACTION_EMAIL_ACTIVATION, timedelta(hours=24))
    seeded_client.provider.sign_up_error = ConnectionError('provider unreachable')

    with pytest.raises(DatabaseError):
        service.define_password(created['token'], 'provisorio-2', created['code'], 'senha-forte-9')

    assert only_action(seeded_client)['status'] is True
    assert seeded_client.rows('usuarios')[1]['uid'] == 'provisorio-2'
