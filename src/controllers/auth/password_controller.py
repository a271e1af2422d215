"""
Controller para recuperação e definição de senhas
Fluxo com token + código de uso único
"""
import logging
from controllers.base_controller import BaseController
from services.auth import PasswordService
from validators.request_validators import ResetPasswordRequest

logger = logging.getLogger(__name__)

FORGOT_PASSWORD_MESSAGE = 'Se o email estiver cadastrado, você receberá as instruções para redefinir sua senha.'

class PasswordController(BaseController):
    """Controller para gerenciar recuperação e definição de senhas"""

    def __init__(self, password_service: PasswordService = None):
        self._password_service = password_service

    @property
    def password_service(self) -> PasswordService:
        if self._password_service is None:
            self._password_service = PasswordService()
        return self._password_service

    def forgot_password(self):
        """POST /api/auth/forgot-password - Solicitar reset de senha"""
        def _forgot_password():
            data = self._get_json_data(['email'])
            self.password_service.forgot_password(data['email'].strip().lower())

            # Sempre retornar sucesso por segurança (não expor se email existe)
            return self._success_response(message=FORGOT_PASSWORD_MESSAGE)

        return self._handle_exceptions(_forgot_password)

    def validate_reset_token(self):
        """POST /api/auth/validate-reset-token - Validar token de ação"""
        def _validate_token():
            data = self._get_json_data(['token'])
            result = self.password_service.validate_reset_token(data['token'])
            return self._success_response(data=result, message='Token válido')

        return self._handle_exceptions(_validate_token)

    def validate_reset_code(self):
        """POST /api/auth/validate-reset-code - Validar token + código"""
        def _validate_code():
            data = self._get_json_data(['token', 'code'])
            result = self.password_service.validate_reset_code(data['token'], str(data['code']))
            return self._success_response(data=result, message='Código verificado com sucesso!')

        return self._handle_exceptions(_validate_code)

    def reset_password(self):
        """POST /api/auth/reset-password - Redefinir senha com código"""
        def _reset_password():
            payload = ResetPasswordRequest.from_dict(self._get_json_data(), password_field='new_password')
            result = self.password_service.reset_password(
                payload.token, payload.uid, payload.code, payload.password
            )
            return self._success_response(
                data=result,
                message='Senha redefinida com sucesso! Faça login com sua nova senha.'
            )

        return self._handle_exceptions(_reset_password)

    def define_password(self):
        """POST /api/auth/define-password - Definir primeira senha"""
        def _define_password():
            payload = ResetPasswordRequest.from_dict(self._get_json_data(), password_field='password')
            result = self.password_service.define_password(
                payload.token, payload.uid, payload.code, payload.password
            )
            return self._success_response(
                data=result,
                message='Senha definida com sucesso! Faça login para continuar.'
            )

        return self._handle_exceptions(_define_password)
