"""
Service para envio de emails
Boas-vindas com código de ativação e redefinição de senha
"""
import logging
import smtplib
from datetime import datetime
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from typing import Dict, Any
import os

logger = logging.getLogger(__name__)

BASE_TEMPLATE = """
<!DOCTYPE html>
<html lang="pt-BR">
<head>
    <meta charset="utf-8">
    <style>
        body {{ font-family: 'Segoe UI', sans-serif; background-color: #f6f4ff; padding: 40px; }}
        .container {{ background: #fff; max-width: 600px; margin: auto; padding: 30px; border-radius: 12px; border: 1px solid #e0d9fa; }}
        h2 {{ color: #9b87f5; text-align: center; }}
        .code {{ font-size: 24px; font-weight: bold; background: #f6f4ff; color: #9b87f5; padding: 12px; border-radius: 8px; text-align: center; margin: 20px 0; letter-spacing: 3px; }}
        .button {{ display: block; background: #7e69ab; color: white; text-align: center; padding: 12px; border-radius: 8px; text-decoration: none; font-weight: bold; margin-top: 20px; }}
        .footer {{ text-align: center; font-size: 12px; color: #999; margin-top: 30px; }}
    </style>
</head>
<body>
    <div class="container">
        <h2>{title}</h2>
        {content}
        <div class="footer">© {year} {from_name}. Todos os direitos reservados.</div>
    </div>
</body>
</html>
"""

class EmailService:
    """Service para gerenciar envio de emails"""

    def __init__(self):
        """Inicializar service com configurações de SMTP"""
        self.smtp_host = os.getenv('SMTP_HOST', 'smtp.gmail.com')
        self.smtp_port = int(os.getenv('SMTP_PORT', '587'))
        self.smtp_user = os.getenv('SMTP_USER')
        self.smtp_password = os.getenv('SMTP_PASSWORD')
        self.from_email = os.getenv('FROM_EMAIL', self.smtp_user)
        self.from_name = os.getenv('FROM_NAME', 'Clara Equilibrio Emocional')

        # URL base do frontend
        self.frontend_url = os.getenv('FRONTEND_URL', 'http://localhost:3000')

        # Verificar se configurações estão disponíveis
        self.is_configured = bool(self.smtp_user and self.smtp_password)

        if not self.is_configured:
            logger.warning("SMTP não configurado. Emails serão simulados no log.")

    def send_email(self, to: str, subject: str, html: str, title: str = None) -> Dict[str, Any]:
        """
        Enviar email com o layout padrão

        Args:
            to: Email do destinatário
            subject: Assunto do email
            html: Conteúdo HTML (inserido no layout)
            title: Título exibido no topo do email

        Returns:
            {'success': True, 'data': {...}} ou {'success': False, 'error': str}
        """
        body = BASE_TEMPLATE.format(
            title=title or subject,
            content=html,
            year=datetime.now().year,
            from_name=self.from_name
        )
        return self._send_email(to, subject, body)

    def send_reset_password_email(self, email: str, name: str, code: str, link: str) -> Dict[str, Any]:
        """Enviar código e link de redefinição de senha"""
        html = f"""
            <p>Olá <strong>{name}</strong>,</p>
            <p>Recebemos uma solicitação para redefinir sua senha. Use o código abaixo para concluir o processo:</p>
            <div class="code">{code}</div>
            <p>Se preferir, redefina diretamente pelo botão abaixo:</p>
            <a href="{link}" class="button">Redefinir Senha</a>
            <p><strong>Este código expira em 15 minutos.</strong></p>
            <p>Se você não solicitou essa alteração, ignore este email.</p>
        """
        return self.send_email(
            to=email,
            subject=f"Redefinição de senha - {self.from_name}",
            html=html,
            title="Redefinição de senha"
        )

    def send_welcome_email(self, email: str, name: str, code: str, link: str) -> Dict[str, Any]:
        """Enviar boas-vindas com código de ativação para definir a senha"""
        html = f"""
            <p>Olá <strong>{name}</strong>,</p>
            <p>Sua conta na plataforma de Check-in Emocional foi criada.</p>
            <p>Use o código abaixo para definir sua senha de acesso:</p>
            <div class="code">{code}</div>
            <a href="{link}" class="button">Definir Senha</a>
            <p><strong>Este código expira em 24 horas.</strong></p>
        """
        return self.send_email(
            to=email,
            subject=f"Bem-vindo ao {self.from_name}",
            html=html,
            title=f"Bem-vindo(a) ao {self.from_name}!"
        )

    def send_cliente_welcome_email(self, email: str, name: str) -> Dict[str, Any]:
        """Enviar boas-vindas ao responsável por um novo cliente"""
        html = f"""
            <p>Olá <strong>{name}</strong>,</p>
            <p>O cadastro da sua empresa na plataforma de Check-in Emocional foi concluído.</p>
            <p>Acesse com o email e a senha informados no cadastro.</p>
            <a href="{self.frontend_url}/login" class="button">Acessar</a>
        """
        return self.send_email(
            to=email,
            subject=f"Bem-vindo ao {self.from_name}",
            html=html,
            title=f"Bem-vindo(a) ao {self.from_name}!"
        )

    def _send_email(self, to_email: str, subject: str, html_body: str) -> Dict[str, Any]:
        """Enviar email via SMTP"""
        if not self.is_configured:
            # Simular envio no log se SMTP não configurado
            logger.info(f"📧 EMAIL SIMULADO para {to_email}")
            logger.info(f"Assunto: {subject}")
            return {'success': True, 'data': {'to': to_email, 'simulated': True}}

        try:
            # Criar mensagem
            msg = MIMEMultipart('alternative')
            msg['Subject'] = subject
            msg['From'] = f"{self.from_name} <{self.from_email}>"
            msg['To'] = to_email
            msg.attach(MIMEText(html_body, 'html', 'utf-8'))

            # Conectar e enviar
            with smtplib.SMTP(self.smtp_host, self.smtp_port) as server:
                server.starttls()
                server.login(self.smtp_user, self.smtp_password)
                server.send_message(msg)

            logger.info(f"Email enviado com sucesso para {to_email}")
            return {'success': True, 'data': {'to': to_email, 'simulated': False}}

        except smtplib.SMTPAuthenticationError as e:
            logger.error(f"❌ Erro de autenticação SMTP para {to_email}: {e}")
            return {'success': False, 'error': f"Falha de autenticação SMTP: {e}"}
        except Exception as e:
            logger.error(f"Erro ao enviar email para {to_email}: {e}")
            return {'success': False, 'error': str(e)}
