"""
Service para cadastro e status de usuários
O usuário nasce com uid provisório e define a senha pelo código de ativação
"""
import logging
import uuid
from typing import Dict, Any
from exceptions.api_exceptions import ValidationError, NotFoundError
from repositories.usuario_repository import UsuarioRepository
from repositories.usuario_filial_repository import UsuarioFilialRepository
from repositories.usuario_departamento_repository import UsuarioDepartamentoRepository
from services.auth.password_service import PasswordService, ACTION_EMAIL_ACTIVATION, EMAIL_ACTIVATION_TTL
from services.email_service import EmailService
from validators.auth_validators import EmailValidator, PhoneValidator, NameValidator
from config.database import get_supabase_client

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ['nome_completo', 'email', 'telefone', 'cargo']

class UsuarioService:
    """Service para gerenciar usuários"""

    def __init__(self, client=None, email_service: EmailService = None,
                 password_service: PasswordService = None):
        client = client if client is not None else get_supabase_client()
        self.repository = UsuarioRepository(client)
        self.filial_repository = UsuarioFilialRepository(client)
        self.departamento_repository = UsuarioDepartamentoRepository(client)
        self.email_service = email_service or EmailService()
        self.password_service = password_service or PasswordService(client, email_service=self.email_service)

    def _validate(self, data: Dict[str, Any]) -> None:
        missing = [field for field in REQUIRED_FIELDS if not data.get(field)]
        if missing:
            raise ValidationError(f'Campos obrigatórios faltando: {", ".join(missing)}')

        for validator, field in ((NameValidator, 'nome_completo'),
                                 (EmailValidator, 'email'),
                                 (PhoneValidator, 'telefone')):
            is_valid, message = validator.validate(str(data[field]).strip())
            if not is_valid:
                raise ValidationError(message)

    def create_usuario(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Criar usuário, vínculos iniciais e ação de ativação

        Falha no email de boas-vindas é registrada em log e não interrompe o
        cadastro.
        """
        self._validate(data)
        email = data['email'].strip().lower()

        # 1. Verificar duplicidade de email
        if self.repository.find_by_email(email):
            raise ValidationError("Já existe um usuário com este email")

        # 2. Criar usuário com uid provisório
        usuario = self.repository.create({
            'nome_completo': data['nome_completo'].strip(),
            'email': email,
            'telefone': str(data['telefone']).strip(),
            'cargo': data['cargo'],
            'uid': str(uuid.uuid4()),
            'status': True
        })
        logger.info(f"👤 Usuário criado: {email} (id {usuario.get('id')})")

        # 3. Vínculos iniciais (sem papel de representante)
        if data.get('id_filial'):
            self.filial_repository.create_association(usuario['id'], data['id_filial'], False)
        if data.get('id_departamento'):
            self.departamento_repository.create_association(usuario['id'], data['id_departamento'], False)

        # 4. Ação de ativação (definição de senha)
        action = self.password_service.create_user_action(
            usuario['uid'], ACTION_EMAIL_ACTIVATION, EMAIL_ACTIVATION_TTL
        )

        # 5. Email de boas-vindas (não crítico)
        link = f"{self.password_service.frontend_url}/codigo?token={action['token']}"
        try:
            result = self.email_service.send_welcome_email(email, usuario['nome_completo'], action['code'], link)
            if not result.get('success'):
                logger.warning(f"⚠️ Email de boas-vindas não enviado para {email}: {result.get('error')}")
        except Exception as e:
            logger.error(f"Erro ao enviar email de boas-vindas para {email}: {e}")

        return usuario

    def get_usuario_by_id(self, usuario_id: Any) -> Dict[str, Any]:
        usuario = self.repository.find_by_id(usuario_id)
        if not usuario:
            raise NotFoundError('Usuário', usuario_id)
        return usuario

    def change_status(self, usuario_id: Any, status: bool) -> Dict[str, Any]:
        """Ativar ou desativar usuário (soft delete)"""
        if not isinstance(status, bool):
            raise ValidationError("status deve ser booleano")

        self.get_usuario_by_id(usuario_id)
        usuario = self.repository.update_status(usuario_id, status)
        logger.info(f"🔄 Status do usuário {usuario_id} alterado para {status}")
        return usuario
