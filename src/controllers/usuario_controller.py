"""
Controller para cadastro e status de usuários
"""
import logging
from controllers.base_controller import BaseController
from services.usuario_service import UsuarioService
from validators.request_validators import parse_bool

logger = logging.getLogger(__name__)

class UsuarioController(BaseController):
    """Controller para gerenciar usuários"""

    def __init__(self, service: UsuarioService = None):
        self._service = service

    @property
    def service(self) -> UsuarioService:
        if self._service is None:
            self._service = UsuarioService()
        return self._service

    def create_usuario(self):
        """POST /api/usuarios - Cadastrar usuário"""
        def _create():
            usuario = self.service.create_usuario(self._get_json_data())
            return self._success_response(
                data=usuario,
                message='Usuário criado com sucesso. Um email de ativação foi enviado.',
                status_code=201
            )

        return self._handle_exceptions(_create)

    def get_usuario(self, usuario_id):
        """GET /api/usuarios/<id>"""
        def _get():
            return self._success_response(data=self.service.get_usuario_by_id(usuario_id))

        return self._handle_exceptions(_get)

    def change_status(self, usuario_id):
        """PATCH /api/usuarios/<id>/status"""
        def _change():
            data = self._get_json_data(['status'])
            usuario = self.service.change_status(usuario_id, parse_bool(data['status'], 'status'))
            return self._success_response(data=usuario, message='Status atualizado com sucesso')

        return self._handle_exceptions(_change)
