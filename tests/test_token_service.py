"""
Testes do TokenService (emissão, verificação e renovação de JWT)
"""
import time

import jwt
import pytest

from exceptions.api_exceptions import InvalidTokenError, TokenExpiredError
from services.tokens import TokenService

SECRET = 'unit-test-secret'

@pytest.fixture
def service():
    return TokenService(secret_key=SECRET, default_ttl=7200)

def test_generate_token_sets_iat_and_exp(service):
    token = service.generate_token({'uid': 'u-1', 'email': 'ana@clara.com'})
    decoded = jwt.decode(token, SECRET, algorithms=['HS256'])

    assert decoded['uid'] == 'u-1'
    assert decoded['exp'] - decoded['iat'] == 7200

def test_generate_token_ignores_reserved_claims_from_data(service):
    token = service.generate_token({'uid': 'u-1', 'iat': 1, 'exp': 2}, ttl=60)
    decoded = service.verify_token(token)

    assert decoded['exp'] - decoded['iat'] == 60
    assert decoded['exp'] > time.time()

def test_verify_token_rejects_other_secret(service):
    token = TokenService(secret_key='another-secret').generate_token({'uid': 'u-1'})

    with pytest.raises(InvalidTokenError):
        service.verify_token(token)

def test_verify_token_rejects_garbage(service):
    with pytest.raises(InvalidTokenError):
        service.verify_token('not-a-jwt')

def test_verify_token_expired(service):
    token = service.generate_token({'uid': 'u-1'}, ttl=-10)

    with pytest.raises(TokenExpiredError):
        service.verify_token(token)

def test_needs_refresh_threshold(service):
    assert service.needs_refresh(service.generate_token({'uid': 'u-1'}, ttl=299)) is True
    assert service.needs_refresh(service.generate_token({'uid': 'u-1'}, ttl=3600)) is False

def test_needs_refresh_for_unreadable_token(service):
    assert service.needs_refresh('garbage') is True

def test_create_token_shape(service):
    token_info = service.create_token({'uid': 'u-1'})

    assert set(token_info) == {'token', 'expiresAt', 'data', 'needsRefresh'}
    assert token_info['expiresAt'] == token_info['data']['exp']
    assert token_info['needsRefresh'] is False

def test_refresh_not_needed_returns_none(service):
    token = service.generate_token({'uid': 'u-1'})

    assert service.refresh_token_if_needed(token) is None

def test_refresh_expired_token_with_valid_signature(service):
    token = service.generate_token({'uid': 'u-1', 'nome': 'Ana'}, ttl=-60)

    token_info = service.refresh_token_if_needed(token, {'nome': 'Ana Maria'})

    assert token_info is not None
    assert token_info['data']['uid'] == 'u-1'
    assert token_info['data']['nome'] == 'Ana Maria'
    assert token_info['expiresAt'] > time.time() + 7000

def test_refresh_rejects_foreign_signature(service):
    token = TokenService(secret_key='another-secret').generate_token({'uid': 'u-1'}, ttl=10)

    with pytest.raises(InvalidTokenError):
        service.refresh_token_if_needed(token)

def test_refresh_rejects_token_expired_beyond_grace(service):
    token = service.generate_token({'uid': 'u-1'}, ttl=-30 * 24 * 60 * 60)

    with pytest.raises(TokenExpiredError):
        service.refresh_token_if_needed(token)

def test_create_then_verify_returns_original_claims(service):
    claims = {
        'uid': 'u-1',
        'email': 'ana@clara.com',
        'nome': 'Ana Souza',
        'permissoes': ['dashboard', 'relatorios'],
        'filiais': [{'id': 2, 'departamentos': ['RH', 'TI']}],
    }

    decoded = service.verify_token(service.create_token(claims)['token'])

    assert {key: value for key, value in decoded.items() if key not in ('iat', 'exp')} == claims
