"""
Controller para cadastro de clientes
"""
import logging
from controllers.base_controller import BaseController
from services.cliente_service import ClienteService

logger = logging.getLogger(__name__)

class ClienteController(BaseController):
    """Controller para clientes"""

    def __init__(self, service: ClienteService = None):
        self._service = service

    @property
    def service(self) -> ClienteService:
        if self._service is None:
            self._service = ClienteService()
        return self._service

    def create_cliente(self):
        """POST /api/clientes - Cadastrar cliente"""
        def _create():
            cliente = self.service.create_cliente(self._get_json_data())
            return self._success_response(
                data=cliente,
                message='Cliente cadastrado com sucesso',
                status_code=201
            )

        return self._handle_exceptions(_create)
