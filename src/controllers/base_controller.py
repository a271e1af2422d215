"""
Base controller
Contém utilitários de requisição/resposta e tratamento de erros comuns
"""
import logging
from flask import request, jsonify
from exceptions.api_exceptions import BaseAPIException, ValidationError, DatabaseError

logger = logging.getLogger(__name__)

class BaseController:
    """Base controller com funcionalidades comuns"""

    def _get_json_data(self, required_fields: list = None) -> dict:
        """Extrair e validar dados JSON da requisição"""
        data = request.get_json(silent=True)

        if not data or not isinstance(data, dict):
            raise ValidationError("Nenhum dado fornecido")

        if required_fields:
            missing_fields = [field for field in required_fields if data.get(field) in (None, '')]
            if missing_fields:
                raise ValidationError(f'Campos obrigatórios faltando: {", ".join(missing_fields)}')

        return data

    def _success_response(self, data=None, message: str = None, status_code: int = 200) -> tuple:
        """Criar resposta de sucesso padronizada"""
        response = {'success': True}

        if data is not None:
            response['data'] = data

        if message:
            response['message'] = message

        return jsonify(response), status_code

    def _error_response(self, error_type: str, message: str, status_code: int = 400) -> tuple:
        """Criar resposta de erro padronizada"""
        return jsonify({
            'success': False,
            'error': error_type,
            'message': message
        }), status_code

    def _handle_exceptions(self, func, *args, **kwargs):
        """Wrapper para tratamento padronizado de exceções"""
        try:
            return func(*args, **kwargs)

        except DatabaseError as e:
            logger.error(f"Erro de banco: {e}")
            return self._error_response('Erro interno do servidor', 'Falha na operação', 500)

        except BaseAPIException as e:
            return self._error_response(e.error_code, e.message, e.http_status)

        except Exception as e:
            logger.error(f"Erro inesperado: {e}", exc_info=True)
            return self._error_response('Erro interno', 'Erro inesperado no servidor', 500)
