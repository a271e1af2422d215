"""
Controller da jornada emocional
"""
import logging
from flask import request
from controllers.base_controller import BaseController
from services.jornada_service import JornadaService

logger = logging.getLogger(__name__)

class JornadaController(BaseController):
    """Controller para criar jornadas e solicitar análise"""

    def __init__(self, service: JornadaService = None):
        self._service = service

    @property
    def service(self) -> JornadaService:
        if self._service is None:
            self._service = JornadaService()
        return self._service

    def create_jornada(self):
        """POST /api/jornadas"""
        def _create():
            jornada = self.service.create_jornada(self._get_json_data())
            return self._success_response(data=jornada, message='Jornada criada com sucesso', status_code=201)

        return self._handle_exceptions(_create)

    def solicitar_analise(self, jornada_id):
        """POST /api/jornadas/<id>/analise"""
        def _analise():
            data = request.get_json(silent=True) or {}
            analise = self.service.solicitar_analise(jornada_id, data.get('id_departamento'))
            return self._success_response(data=analise)

        return self._handle_exceptions(_analise)
