"""
Routes para associações usuário ↔ departamento e usuário ↔ filial
Todas as rotas exigem autenticação
"""
from flask import Blueprint
from controllers.association_controller import AssociationController
from middleware.auth_middleware import require_auth
from middleware.error_handler import log_endpoint_access
from services.usuario_departamento_service import UsuarioDepartamentoService
from services.usuario_filial_service import UsuarioFilialService

def create_association_blueprint(name: str, url_prefix: str, controller: AssociationController) -> Blueprint:
    """
    Criar blueprint com o CRUD de associação

    ROTAS:
    - GET    /                               Listar (?id_usuario= opcional)
    - GET    /representantes/<id_entidade>   Representantes da entidade
    - POST   /                               Criar {id_usuario, <entidade>, is_representante}
    - PUT    /                               Alterar {id_usuario, <entidade>, is_representante}
    - DELETE /<id_usuario>/<id_entidade>     Remover
    """
    blueprint = Blueprint(name, __name__, url_prefix=url_prefix)

    @blueprint.route('/', methods=['GET'], strict_slashes=False)
    @log_endpoint_access
    @require_auth
    def list_associations():
        return controller.list_associations()

    @blueprint.route('/representantes/<int:id_entidade>', methods=['GET'])
    @log_endpoint_access
    @require_auth
    def get_representantes(id_entidade):
        return controller.get_representantes(id_entidade)

    @blueprint.route('/', methods=['POST'], strict_slashes=False)
    @log_endpoint_access
    @require_auth
    def create_association():
        return controller.create_association()

    @blueprint.route('/', methods=['PUT'], strict_slashes=False)
    @log_endpoint_access
    @require_auth
    def update_association():
        return controller.update_association()

    @blueprint.route('/<int:id_usuario>/<int:id_entidade>', methods=['DELETE'])
    @log_endpoint_access
    @require_auth
    def delete_association(id_usuario, id_entidade):
        return controller.delete_association(id_usuario, id_entidade)

    return blueprint

usuario_departamento_controller = AssociationController(UsuarioDepartamentoService, 'id_departamento')
usuario_filial_controller = AssociationController(UsuarioFilialService, 'id_filial')

usuario_departamento_routes = create_association_blueprint(
    'usuario_departamento', '/api/usuario-departamento', usuario_departamento_controller
)
usuario_filial_routes = create_association_blueprint(
    'usuario_filial', '/api/usuario-filial', usuario_filial_controller
)
