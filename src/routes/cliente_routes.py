"""
Routes para cadastro de clientes
"""
from flask import Blueprint
from controllers.cliente_controller import ClienteController
from middleware.error_handler import log_endpoint_access

cliente_routes = Blueprint('clientes', __name__, url_prefix='/api/clientes')

cliente_controller = ClienteController()

@cliente_routes.route('/', methods=['POST'], strict_slashes=False)
@log_endpoint_access
def create_cliente():
    """
    POST /api/clientes - Cadastrar cliente

    DESCRIÇÃO:
    - Cria a empresa, a identidade no provedor e o usuário responsável
    - Concede as permissões do cliente (1, 2, 3, 4, 5, 6 e 9)

    PARÂMETROS (Body JSON):
    - usuario: nome, email, telefone, cargo, senha (obrigatórios), confirmarSenha
    - empresa: razaoSocial, cnpj (obrigatórios), nomeFantasia
    """
    return cliente_controller.create_cliente()
