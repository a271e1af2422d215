"""
Fixtures compartilhadas dos testes
Cliente Supabase em memória para exercitar repositories, services e rotas
"""
import copy
import os
import sys
import uuid
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from supabase_auth.errors import AuthApiError

SRC_DIR = Path(__file__).resolve().parent.parent / 'src'
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

os.environ.setdefault('JWT_SECRET', 'test-secret-key')
os.environ.setdefault('FRONTEND_URL', 'http://localhost:3000')

from app import create_app
from config.database import set_supabase_client, set_auth_client_factory
from services.tokens import token_service, token_store

class FakeResponse:
    def __init__(self, data):
        self.data = data

class FakeQuery:
    """Subconjunto do query builder do postgrest usado pelos repositories"""

    def __init__(self, client, table_name):
        self.client = client
        self.table_name = table_name
        self.operation = 'select'
        self.payload = None
        self.filters = []
        self.limit_value = None
        self.order_column = None
        self.order_desc = False

    def select(self, columns='*'):
        self.operation = 'select'
        return self

    def insert(self, data):
        self.operation = 'insert'
        self.payload = data
        return self

    def update(self, data):
        self.operation = 'update'
        self.payload = data
        return self

    def delete(self):
        self.operation = 'delete'
        return self

    def eq(self, column, value):
        self.filters.append(lambda row: row.get(column) == value)
        return self

    def in_(self, column, values):
        values = list(values)
        self.filters.append(lambda row: row.get(column) in values)
        return self

    def is_(self, column, value):
        self.filters.append(lambda row: row.get(column) is None)
        return self

    def order(self, column, desc=False):
        self.order_column = column
        self.order_desc = desc
        return self

    def limit(self, count):
        self.limit_value = count
        return self

    def _matches(self, row):
        return all(condition(row) for condition in self.filters)

    def execute(self):
        if self.table_name in self.client.fail_on:
            raise RuntimeError(f"falha simulada em {self.table_name}")

        rows = self.client.tables.setdefault(self.table_name, [])

        if self.operation == 'insert':
            items = self.payload if isinstance(self.payload, list) else [self.payload]
            inserted = []
            for item in items:
                row = dict(item)
                if 'id' not in row:
                    row['id'] = max((r.get('id', 0) for r in rows), default=0) + 1
                rows.append(row)
                inserted.append(copy.deepcopy(row))
            return FakeResponse(inserted)

        if self.operation == 'update':
            updated = []
            for row in rows:
                if self._matches(row):
                    row.update(self.payload)
                    updated.append(copy.deepcopy(row))
            return FakeResponse(updated)

        if self.operation == 'delete':
            deleted = [row for row in rows if self._matches(row)]
            self.client.tables[self.table_name] = [row for row in rows if not self._matches(row)]
            return FakeResponse(copy.deepcopy(deleted))

        result = [row for row in rows if self._matches(row)]
        if self.order_column:
            result.sort(key=lambda row: row.get(self.order_column), reverse=self.order_desc)
        if self.limit_value is not None:
            result = result[:self.limit_value]
        return FakeResponse(copy.deepcopy(result))

class FakeIdentityProvider:
    """Estado do provedor de identidade compartilhado por todos os clientes fake"""

    def __init__(self):
        self.users = {}
        self.signed_out = []
        self.sign_in_error = None
        self.sign_up_error = None

    def register(self, email, password, uid=None):
        uid = uid or str(uuid.uuid4())
        self.users[email] = {'id': uid, 'email': email, 'password': password}
        return uid

class FakeAdmin:
    def __init__(self, provider):
        self.provider = provider

    def update_user_by_id(self, uid, attributes):
        for user in self.provider.users.values():
            if user['id'] == uid:
                user.update(attributes)
                return SimpleNamespace(user=SimpleNamespace(id=uid, email=user['email']))
        raise RuntimeError(f"User not found: {uid}")

    def sign_out(self, jwt, scope='global'):
        self.provider.signed_out.append(jwt)

class FakeAuth:
    """Auth do cliente: sign-in troca o header Authorization do cliente dono"""

    def __init__(self, owner, provider):
        self.owner = owner
        self.provider = provider
        self.sign_in_calls = 0
        self.admin = FakeAdmin(provider)

    @property
    def users(self):
        return self.provider.users

    def register(self, email, password, uid=None):
        return self.provider.register(email, password, uid)

    def sign_in_with_password(self, credentials):
        self.sign_in_calls += 1
        if self.provider.sign_in_error is not None:
            raise self.provider.sign_in_error

        user = self.provider.users.get(credentials['email'])
        if not user or user['password'] != credentials['password']:
            raise AuthApiError('Invalid login credentials', 400, 'invalid_credentials')

        access_token = f"sb-access-{user['id']}"
        self.owner.headers['Authorization'] = f"Bearer {access_token}"
        return SimpleNamespace(
            user=SimpleNamespace(id=user['id'], email=user['email']),
            session=SimpleNamespace(access_token=access_token, refresh_token='sb-refresh-token')
        )

    def sign_up(self, credentials):
        if self.provider.sign_up_error is not None:
            raise self.provider.sign_up_error

        uid = self.provider.register(credentials['email'], credentials['password'])
        return SimpleNamespace(
            user=SimpleNamespace(id=uid, email=credentials['email']),
            session=None
        )

class FakeSupabaseClient:
    def __init__(self, provider=None, key='service-role-key'):
        self.tables = {}
        self.fail_on = set()
        self.headers = {'apiKey': key, 'Authorization': f"Bearer {key}"}
        self.provider = provider or FakeIdentityProvider()
        self.auth = FakeAuth(self, self.provider)
        self.auth_clients = []

    def table(self, name):
        return FakeQuery(self, name)

    def seed(self, table_name, *rows):
        self.tables.setdefault(table_name, []).extend(dict(row) for row in rows)

    def rows(self, table_name):
        return self.tables.get(table_name, [])

    def new_auth_client(self):
        """Cliente isolado para sign-in/sign-up, ligado ao mesmo provedor"""
        auth_client = FakeSupabaseClient(provider=self.provider, key='anon-key')
        self.auth_clients.append(auth_client)
        return auth_client

@pytest.fixture
def fake_client():
    return FakeSupabaseClient()

@pytest.fixture(autouse=True)
def auth_client_factory(fake_client):
    set_auth_client_factory(fake_client.new_auth_client)
    yield fake_client.new_auth_client
    set_auth_client_factory(None)

@pytest.fixture(autouse=True)
def clear_token_store():
    token_store.clear()
    yield
    token_store.clear()

@pytest.fixture
def email_service():
    service = MagicMock()
    service.send_reset_password_email.return_value = {'success': True, 'data': {}}
    service.send_welcome_email.return_value = {'success': True, 'data': {}}
    service.send_cliente_welcome_email.return_value = {'success': True, 'data': {}}
    return service

@pytest.fixture
def n8n_session():
    session = MagicMock()
    response = MagicMock()
    response.json.return_value = {
        'analysisAI': 'Você parece sobrecarregado.',
        'factor': 'trabalho',
        'evaluate': 'moderado',
        'activities': ['pausa ativa']
    }
    session.post.return_value = response
    return session

@pytest.fixture
def app(fake_client, email_service, n8n_session, monkeypatch):
    from routes.auth_routes import login_controller, password_controller
    from routes.association_routes import usuario_departamento_controller, usuario_filial_controller
    from routes.empresa_routes import empresa_controller
    from routes.usuario_routes import usuario_controller
    from routes.jornada_routes import jornada_controller
    from routes.cliente_routes import cliente_controller
    from services.auth import AuthService, PasswordService
    from services.usuario_service import UsuarioService
    from services.jornada_service import JornadaService
    from services.cliente_service import ClienteService
    from services.n8n_client import N8nClient

    application = create_app({
        'TESTING': True,
        'SUPABASE_CLIENT': fake_client,
        'SUPABASE_AUTH_CLIENT_FACTORY': fake_client.new_auth_client
    })

    password_service = PasswordService(fake_client, email_service=email_service)
    monkeypatch.setattr(login_controller, '_auth_service', AuthService(fake_client))
    monkeypatch.setattr(password_controller, '_password_service', password_service)
    monkeypatch.setattr(usuario_departamento_controller, '_service', None)
    monkeypatch.setattr(usuario_filial_controller, '_service', None)
    monkeypatch.setattr(empresa_controller, '_service', None)
    monkeypatch.setattr(
        usuario_controller, '_service',
        UsuarioService(fake_client, email_service=email_service, password_service=password_service)
    )
    monkeypatch.setattr(cliente_controller, '_service', ClienteService(fake_client, email_service=email_service))
    monkeypatch.setattr(
        jornada_controller, '_service',
        JornadaService(fake_client, n8n_client=N8nClient('http://n8n.local/webhook/analise', session=n8n_session))
    )

    yield application

    set_supabase_client(None)

@pytest.fixture
def client(app):
    return app.test_client()

@pytest.fixture
def auth_headers():
    token_info = token_service.create_token({'uid': 'admin-uid', 'email': 'admin@clara.com'})
    token_store.add(token_info['token'], 'admin-uid')
    return {'Authorization': f"Bearer {token_info['token']}"}
