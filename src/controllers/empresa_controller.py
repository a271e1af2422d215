"""
Controller para representantes de empresa
"""
import logging
from controllers.base_controller import BaseController
from services.representante_empresa_service import RepresentanteEmpresaService
from exceptions.api_exceptions import ValidationError

logger = logging.getLogger(__name__)

class EmpresaController(BaseController):
    """Controller para gerenciar representantes de empresas"""

    def __init__(self, service: RepresentanteEmpresaService = None):
        self._service = service

    @property
    def service(self) -> RepresentanteEmpresaService:
        if self._service is None:
            self._service = RepresentanteEmpresaService()
        return self._service

    def list_representantes(self, empresa_id):
        """GET /api/empresas/<empresa_id>/representantes"""
        def _list():
            return self._success_response(data=self.service.list_representantes(empresa_id))

        return self._handle_exceptions(_list)

    def add_representante(self, empresa_id):
        """POST /api/empresas/<empresa_id>/representantes"""
        def _add():
            data = self._get_json_data(['usuario_id'])
            representante = self.service.add_representante(empresa_id, data['usuario_id'])
            return self._success_response(
                data=representante,
                message='Representante adicionado com sucesso',
                status_code=201
            )

        return self._handle_exceptions(_add)

    def sync_representantes(self, empresa_id):
        """PUT /api/empresas/<empresa_id>/representantes"""
        def _sync():
            data = self._get_json_data()
            usuario_ids = data.get('usuario_ids')
            if not isinstance(usuario_ids, list):
                raise ValidationError("usuario_ids deve ser uma lista")

            result = self.service.sync_representantes(empresa_id, usuario_ids)
            return self._success_response(data=result, message='Representantes atualizados com sucesso')

        return self._handle_exceptions(_sync)

    def remove_representante(self, empresa_id, usuario_id):
        """DELETE /api/empresas/<empresa_id>/representantes/<usuario_id>"""
        def _remove():
            self.service.remove_representante(empresa_id, usuario_id)
            return self._success_response(message='Representante removido com sucesso')

        return self._handle_exceptions(_remove)
