"""
Routes para autenticação - endpoints HTTP
Sessão JWT com revogação local e fluxo de senha por token + código
"""
from flask import Blueprint
from controllers.auth import LoginController, PasswordController
from middleware.auth_middleware import require_auth
from middleware.error_handler import log_endpoint_access

# Criar blueprint com url_prefix correto
auth_routes = Blueprint('auth', __name__, url_prefix='/api/auth')

# Instanciar controllers
login_controller = LoginController()
password_controller = PasswordController()

# ====== ROTAS DE SESSÃO ======

@auth_routes.route('/login', methods=['POST'], strict_slashes=False)
@log_endpoint_access
def login():
    """
    POST /api/auth/login - Login com JWT

    DESCRIÇÃO:
    - Autentica usuário com email/senha no provedor
    - Recusa usuários inativos ou sem perfil
    - Retorna token de sessão com validade de 2 horas

    PARÂMETROS (Body JSON):
    - email: Email do usuário (obrigatório)
    - password: Senha do usuário (obrigatório)

    RETORNA:
    - success: true/false
    - data.user: nome, email, telefone, cargo, filiais, permissoes, uid, status
    - data.token / data.expiresAt / data.needsRefresh
    - data.session: access_token e refresh_token do provedor
    """
    return login_controller.login()

@auth_routes.route('/logout', methods=['POST'], strict_slashes=False)
@log_endpoint_access
@require_auth
def logout():
    """
    POST /api/auth/logout - Logout (revoga o token atual)

    HEADERS:
    - Authorization: Bearer <token> (obrigatório)

    RETORNA:
    - success: true/false
    - message: Confirmação de logout
    """
    return login_controller.logout()

@auth_routes.route('/refresh', methods=['POST'], strict_slashes=False)
@log_endpoint_access
def refresh():
    """
    POST /api/auth/refresh - Renovar token

    DESCRIÇÃO:
    - Renova apenas tokens a 5 minutos ou menos da expiração
    - O token antigo é substituído pelo novo

    PARÂMETROS (Body JSON):
    - refresh_token: Token de sessão atual (obrigatório)

    RETORNA:
    - success: true/false
    - data: token, expiresAt, data, needsRefresh
    """
    return login_controller.refresh()

# ====== ROTAS DE SENHA ======

@auth_routes.route('/forgot-password', methods=['POST'], strict_slashes=False)
@log_endpoint_access
def forgot_password():
    """
    POST /api/auth/forgot-password - Solicitar reset de senha

    DESCRIÇÃO:
    - Gera código de 8 caracteres válido por 15 minutos
    - Envia email com código e link de redefinição
    - Resposta é sempre a mesma, exista ou não o email

    PARÂMETROS (Body JSON):
    - email: Email do usuário (obrigatório)
    """
    return password_controller.forgot_password()

@auth_routes.route('/validate-reset-token', methods=['POST'], strict_slashes=False)
@log_endpoint_access
def validate_reset_token():
    """
    POST /api/auth/validate-reset-token - Validar token de ação

    PARÂMETROS (Body JSON):
    - token: Token recebido por email (obrigatório)

    ERROS:
    - 401: token inválido, expirado ou já utilizado
    """
    return password_controller.validate_reset_token()

@auth_routes.route('/validate-reset-code', methods=['POST'], strict_slashes=False)
@log_endpoint_access
def validate_reset_code():
    """
    POST /api/auth/validate-reset-code - Validar token + código

    PARÂMETROS (Body JSON):
    - token: Token recebido por email (obrigatório)
    - code: Código recebido por email (obrigatório)
    """
    return password_controller.validate_reset_code()

@auth_routes.route('/reset-password', methods=['POST'], strict_slashes=False)
@log_endpoint_access
def reset_password():
    """
    POST /api/auth/reset-password - Redefinir senha

    DESCRIÇÃO:
    - Altera a senha no provedor
    - Consome a ação (não pode ser reutilizada)
    - Revoga todas as sessões locais do usuário

    PARÂMETROS (Body JSON):
    - token, uid, code: dados da ação (obrigatórios)
    - new_password: Nova senha, mínimo 8 caracteres (obrigatório)
    """
    return password_controller.reset_password()

@auth_routes.route('/define-password', methods=['POST'], strict_slashes=False)
@log_endpoint_access
def define_password():
    """
    POST /api/auth/define-password - Definir primeira senha

    DESCRIÇÃO:
    - Usado pelo link de ativação enviado no cadastro
    - Cria a identidade no provedor e vincula perfil e permissões

    PARÂMETROS (Body JSON):
    - token, uid, code: dados da ação (obrigatórios)
    - password: Senha, mínimo 8 caracteres (obrigatório)
    """
    return password_controller.define_password()
