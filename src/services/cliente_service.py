"""
Service para cadastro de clientes
Um cliente é a empresa contratante e o usuário responsável por ela, criados
juntos e já com o pacote de permissões do cliente
"""
import logging
import re
from typing import Dict, Any
from exceptions.api_exceptions import ValidationError
from repositories.empresa_repository import EmpresaRepository
from repositories.usuario_repository import UsuarioRepository
from services.auth.auth_service import AuthService
from services.email_service import EmailService
from services.permissao_service import PermissaoService
from validators.auth_validators import EmailValidator, PasswordValidator, PhoneValidator, NameValidator
from validators.request_validators import ClienteRequest
from config.database import get_supabase_client

logger = logging.getLogger(__name__)

class ClienteService:
    """Service para cadastro de clientes"""

    def __init__(self, client=None, email_service: EmailService = None,
                 auth_service: AuthService = None, permissao_service: PermissaoService = None):
        client = client if client is not None else get_supabase_client()
        self.usuario_repository = UsuarioRepository(client)
        self.empresa_repository = EmpresaRepository(client)
        self.auth_service = auth_service or AuthService(client)
        self.permissao_service = permissao_service or PermissaoService(client)
        self.email_service = email_service or EmailService()

    def _validate_usuario(self, usuario: Dict[str, Any]) -> None:
        for validator, value in ((NameValidator, str(usuario['nome']).strip()),
                                 (EmailValidator, str(usuario['email']).strip()),
                                 (PhoneValidator, str(usuario['telefone']).strip()),
                                 (PasswordValidator, usuario.get('senha'))):
            is_valid, message = validator.validate(value)
            if not is_valid:
                raise ValidationError(message)

    def create_cliente(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Cadastrar cliente

        Cria a empresa, a identidade no provedor e o usuário vinculado à
        empresa, e concede as permissões do cliente. Se a identidade ou o
        usuário não puderem ser criados a empresa é removida.

        Raises:
            ValidationError: dados inválidos, email ou CNPJ já cadastrados
        """
        request = ClienteRequest.from_dict(data)
        usuario_data, empresa_data = request.usuario, request.empresa
        self._validate_usuario(usuario_data)

        email = str(usuario_data['email']).strip().lower()
        cnpj = re.sub(r'\D', '', str(empresa_data['cnpj']))
        if len(cnpj) != 14:
            raise ValidationError("CNPJ deve conter 14 dígitos")

        # 1. Email e CNPJ ainda livres
        if self.usuario_repository.find_by_email(email):
            raise ValidationError("Não foi possível cadastrar: o e-mail informado já está em uso.")
        if self.empresa_repository.find_by_cnpj(cnpj):
            raise ValidationError("Não foi possível cadastrar: o CNPJ informado já está em uso.")

        # 2. Criar empresa
        empresa = self.empresa_repository.create_empresa(
            razao_social=str(empresa_data['razaoSocial']).strip(),
            cnpj=cnpj,
            nome_fantasia=empresa_data.get('nomeFantasia')
        )

        try:
            # 3. Criar identidade no provedor
            identity = self.auth_service.sign_up(email, usuario_data['senha'])

            # 4. Criar usuário responsável
            usuario = self.usuario_repository.create({
                'nome_completo': str(usuario_data['nome']).strip(),
                'email': email,
                'telefone': str(usuario_data['telefone']).strip(),
                'cargo': usuario_data['cargo'],
                'uid': identity['id'],
                'empresa_id': empresa['id'],
                'status': True
            })
        except Exception:
            logger.warning(f"↩️ Cadastro do cliente {email} falhou; removendo empresa {empresa['id']}")
            self.empresa_repository.delete(empresa['id'])
            raise

        # 5. Permissões do cliente
        self.permissao_service.create_cliente_permissions(usuario['id'], usuario['uid'])
        logger.info(f"🏢 Cliente cadastrado: {email} (empresa {empresa['id']})")

        # 6. Email de boas-vindas (não crítico)
        try:
            result = self.email_service.send_cliente_welcome_email(email, usuario['nome_completo'])
            if not result.get('success'):
                logger.warning(f"⚠️ Email de boas-vindas não enviado para {email}: {result.get('error')}")
        except Exception as e:
            logger.error(f"Erro ao enviar email de boas-vindas para {email}: {e}")

        return {
            'id': usuario['id'],
            'usuario': {
                'id': usuario['id'],
                'nome': usuario['nome_completo'],
                'email': usuario['email'],
                'telefone': usuario['telefone'],
                'cargo': usuario['cargo'],
                'status': usuario['status']
            },
            'empresa': {
                'id': empresa['id'],
                'razao_social': empresa['razao_social'],
                'nome_fantasia': empresa.get('nome_fantasia'),
                'cnpj': empresa['cnpj']
            }
        }
