"""
Routes para representantes de empresa
"""
from flask import Blueprint
from controllers.empresa_controller import EmpresaController
from middleware.auth_middleware import require_auth, require_permission
from middleware.error_handler import log_endpoint_access
from services.permissao_service import ADMIN_PERMISSION, EMPRESA_PERMISSION

empresa_routes = Blueprint('empresas', __name__, url_prefix='/api/empresas')

empresa_controller = EmpresaController()

@empresa_routes.route('/<int:empresa_id>/representantes', methods=['GET'])
@log_endpoint_access
@require_auth
def list_representantes(empresa_id):
    """GET /api/empresas/<empresa_id>/representantes - Listar representantes"""
    return empresa_controller.list_representantes(empresa_id)

@empresa_routes.route('/<int:empresa_id>/representantes', methods=['POST'])
@log_endpoint_access
@require_auth
@require_permission(ADMIN_PERMISSION, EMPRESA_PERMISSION)
def add_representante(empresa_id):
    """
    POST /api/empresas/<empresa_id>/representantes - Adicionar representante

    PARÂMETROS (Body JSON):
    - usuario_id: ID do usuário (obrigatório)
    """
    return empresa_controller.add_representante(empresa_id)

@empresa_routes.route('/<int:empresa_id>/representantes', methods=['PUT'])
@log_endpoint_access
@require_auth
@require_permission(ADMIN_PERMISSION, EMPRESA_PERMISSION)
def sync_representantes(empresa_id):
    """
    PUT /api/empresas/<empresa_id>/representantes - Substituir representantes

    PARÂMETROS (Body JSON):
    - usuario_ids: lista completa de IDs de usuário (obrigatório)
    """
    return empresa_controller.sync_representantes(empresa_id)

@empresa_routes.route('/<int:empresa_id>/representantes/<int:usuario_id>', methods=['DELETE'])
@log_endpoint_access
@require_auth
@require_permission(ADMIN_PERMISSION, EMPRESA_PERMISSION)
def remove_representante(empresa_id, usuario_id):
    """DELETE /api/empresas/<empresa_id>/representantes/<usuario_id> - Remover representante"""
    return empresa_controller.remove_representante(empresa_id, usuario_id)
