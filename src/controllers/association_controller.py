"""
Controller para associações usuário ↔ departamento e usuário ↔ filial
"""
import logging
from typing import Callable
from flask import request
from controllers.base_controller import BaseController
from services.association_service import BaseAssociationService
from validators.request_validators import AssociationRequest

logger = logging.getLogger(__name__)

class AssociationController(BaseController):
    """Controller genérico; o service define a entidade associada"""

    def __init__(self, service_factory: Callable[[], BaseAssociationService], entity_column: str):
        self._service_factory = service_factory
        self._service = None
        self.entity_column = entity_column

    @property
    def service(self) -> BaseAssociationService:
        if self._service is None:
            self._service = self._service_factory()
        return self._service

    def list_associations(self):
        """GET / - Listar associações (filtro opcional ?id_usuario=)"""
        def _list():
            associations = self.service.list_associations(request.args.get('id_usuario'))
            return self._success_response(data=associations)

        return self._handle_exceptions(_list)

    def get_representantes(self, id_entidade):
        """GET /representantes/<id> - Representantes da entidade"""
        def _get():
            return self._success_response(data=self.service.get_representantes(id_entidade))

        return self._handle_exceptions(_get)

    def create_association(self):
        """POST / - Criar associação"""
        def _create():
            payload = AssociationRequest.from_dict(self._get_json_data(), self.entity_column)
            association = self.service.create_association(
                payload.id_usuario, payload.id_entidade, bool(payload.is_representante)
            )
            return self._success_response(data=association, message='Associação criada com sucesso', status_code=201)

        return self._handle_exceptions(_create)

    def update_association(self):
        """PUT / - Alterar flag de representante"""
        def _update():
            payload = AssociationRequest.from_dict(self._get_json_data(), self.entity_column, require_flag=True)
            association = self.service.update_association(
                payload.id_usuario, payload.id_entidade, payload.is_representante
            )
            return self._success_response(data=association, message='Associação atualizada com sucesso')

        return self._handle_exceptions(_update)

    def delete_association(self, id_usuario, id_entidade):
        """DELETE /<id_usuario>/<id_entidade> - Remover associação"""
        def _delete():
            self.service.delete_association(id_usuario, id_entidade)
            return self._success_response(message='Associação removida com sucesso')

        return self._handle_exceptions(_delete)
