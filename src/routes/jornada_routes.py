"""
Routes da jornada emocional
"""
from flask import Blueprint
from controllers.jornada_controller import JornadaController
from middleware.auth_middleware import require_auth
from middleware.error_handler import log_endpoint_access

jornada_routes = Blueprint('jornadas', __name__, url_prefix='/api/jornadas')

jornada_controller = JornadaController()

@jornada_routes.route('/', methods=['POST'], strict_slashes=False)
@log_endpoint_access
@require_auth
def create_jornada():
    """
    POST /api/jornadas - Registrar check-in emocional

    PARÂMETROS (Body JSON):
    - emocao: Emoção selecionada (obrigatório)
    - uid: Usuário (obrigatório)
    - reflexao: Texto livre (opcional)
    - respostas: [{id_pergunta, id_resposta}] (opcional)
    """
    return jornada_controller.create_jornada()

@jornada_routes.route('/<int:jornada_id>/analise', methods=['POST'])
@log_endpoint_access
@require_auth
def solicitar_analise(jornada_id):
    """
    POST /api/jornadas/<id>/analise - Solicitar análise da jornada

    PARÂMETROS (Body JSON):
    - id_departamento: Departamento do usuário (opcional)

    RETORNA:
    - data: analysisAI, factor, evaluate, activities, id_jornada, departamento_id
    """
    return jornada_controller.solicitar_analise(jornada_id)
