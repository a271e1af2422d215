"""
Controller para login, logout e renovação de token
"""
import logging
from controllers.base_controller import BaseController
from services.auth import AuthService
from middleware.auth_middleware import get_current_token
from validators.request_validators import LoginRequest

logger = logging.getLogger(__name__)

class LoginController(BaseController):
    """Controller para sessão do usuário"""

    def __init__(self, auth_service: AuthService = None):
        self._auth_service = auth_service

    @property
    def auth_service(self) -> AuthService:
        # Criado na primeira requisição para não exigir Supabase no import
        if self._auth_service is None:
            self._auth_service = AuthService()
        return self._auth_service

    def login(self):
        """POST /api/auth/login - Login com JWT"""
        def _login():
            credentials = LoginRequest.from_dict(self._get_json_data())
            result = self.auth_service.login(credentials.email, credentials.password)
            return self._success_response(data=result, message='Login realizado com sucesso')

        return self._handle_exceptions(_login)

    def logout(self):
        """POST /api/auth/logout - Logout (revoga o token atual)"""
        def _logout():
            result = self.auth_service.logout(get_current_token())
            return self._success_response(
                data={'userId': result['userId']},
                message=result['message']
            )

        return self._handle_exceptions(_logout)

    def refresh(self):
        """POST /api/auth/refresh - Renovar token próximo da expiração"""
        def _refresh():
            data = self._get_json_data(['refresh_token'])
            token_info = self.auth_service.refresh(data['refresh_token'])

            if token_info is None:
                return self._error_response(
                    'Token inválido',
                    'Token inválido ou não precisa ser atualizado',
                    401
                )

            return self._success_response(data=token_info, message='Token renovado com sucesso')

        return self._handle_exceptions(_refresh)
