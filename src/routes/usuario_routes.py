"""
Routes para usuários
"""
from flask import Blueprint
from controllers.usuario_controller import UsuarioController
from middleware.auth_middleware import require_auth
from middleware.error_handler import log_endpoint_access

usuario_routes = Blueprint('usuarios', __name__, url_prefix='/api/usuarios')

usuario_controller = UsuarioController()

@usuario_routes.route('/', methods=['POST'], strict_slashes=False)
@log_endpoint_access
@require_auth
def create_usuario():
    """
    POST /api/usuarios - Cadastrar usuário

    DESCRIÇÃO:
    - Cria o perfil com uid provisório e vínculos iniciais
    - Envia email de boas-vindas com código de ativação (24 horas)

    PARÂMETROS (Body JSON):
    - nome_completo, email, telefone (apenas números), cargo (obrigatórios)
    - id_filial, id_departamento (opcionais)
    """
    return usuario_controller.create_usuario()

@usuario_routes.route('/<int:usuario_id>', methods=['GET'])
@log_endpoint_access
@require_auth
def get_usuario(usuario_id):
    """GET /api/usuarios/<id> - Buscar usuário"""
    return usuario_controller.get_usuario(usuario_id)

@usuario_routes.route('/<int:usuario_id>/status', methods=['PATCH'])
@log_endpoint_access
@require_auth
def change_status(usuario_id):
    """
    PATCH /api/usuarios/<id>/status - Ativar/desativar usuário

    PARÂMETROS (Body JSON):
    - status: true/false (obrigatório)
    """
    return usuario_controller.change_status(usuario_id)
