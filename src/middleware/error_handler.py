"""
Middleware global de tratamento de erros
Toda falha que escapa dos controllers vira JSON {success, error, message, details}
"""
from flask import jsonify, request
from werkzeug.exceptions import HTTPException
import logging
import time
import uuid
import datetime
from functools import wraps
from typing import Dict, Any
from exceptions.api_exceptions import BaseAPIException, DatabaseError

logger = logging.getLogger(__name__)

def _error_payload(error: str, message: str, details: Dict[str, Any] = None) -> Dict[str, Any]:
    return {
        'success': False,
        'error': error,
        'message': message,
        'details': details or {}
    }

def _request_context() -> Dict[str, Any]:
    return {
        'endpoint': request.endpoint,
        'method': request.method,
        'url': request.url
    }

def register_error_handlers(app):
    """Registrar handlers de erro globais na aplicação Flask"""

    @app.errorhandler(BaseAPIException)
    def handle_api_exception(error: BaseAPIException):
        """Exceções da API que não foram tratadas por um controller"""
        if isinstance(error, DatabaseError):
            # Detalhes do banco ficam apenas no log
            error_id = _generate_error_id()
            logger.error(f"💥 [{error_id}] {error.message}", extra=_request_context())
            return jsonify(_error_payload(
                'Erro interno do servidor', 'Falha na operação', {'error_id': error_id}
            )), 500

        logger.warning(f"⚠️ {error.error_code}: {error.message}", extra=_request_context())
        return jsonify(error.to_dict()), error.http_status

    @app.errorhandler(404)
    def handle_not_found(error):
        return jsonify(_error_payload(
            'EndpointNotFound',
            f'Endpoint não encontrado: {request.method} {request.path}',
            {'available_endpoints': _get_available_endpoints(app)}
        )), 404

    @app.errorhandler(405)
    def handle_method_not_allowed(error):
        return jsonify(_error_payload(
            'MethodNotAllowed',
            f'Método {request.method} não permitido para {request.path}'
        )), 405

    @app.errorhandler(400)
    def handle_bad_request(error):
        return jsonify(_error_payload(
            'BadRequest',
            'Requisição inválida',
            {'description': str(getattr(error, 'description', 'Dados de entrada inválidos'))}
        )), 400

    @app.errorhandler(Exception)
    def handle_unexpected_error(error: Exception):
        """Último recurso: erros HTTP do werkzeug ou exceções inesperadas"""
        if isinstance(error, HTTPException):
            return jsonify(_error_payload(error.name, error.description)), error.code

        error_id = _generate_error_id()
        logger.error(
            f"💥 [{error_id}] {type(error).__name__}: {error}",
            extra=_request_context(),
            exc_info=True
        )
        return jsonify(_error_payload(
            'UnexpectedError', 'Erro inesperado no servidor', {'error_id': error_id}
        )), 500

def _get_available_endpoints(app) -> list:
    """Endpoints registrados, para orientar clientes que erraram a rota"""
    return sorted(
        (
            {'path': rule.rule, 'methods': sorted(rule.methods - {'HEAD', 'OPTIONS'})}
            for rule in app.url_map.iter_rules()
            if rule.endpoint != 'static'
        ),
        key=lambda endpoint: endpoint['path']
    )

def _generate_error_id() -> str:
    """ID curto para correlacionar resposta e log"""
    timestamp = datetime.datetime.now().strftime('%Y%m%d_%H%M%S')
    return f"ERR_{timestamp}_{uuid.uuid4().hex[:8]}"

def log_endpoint_access(func):
    """Decorator para logging de acesso e duração dos endpoints"""

    @wraps(func)
    def wrapper(*args, **kwargs):
        start_time = time.time()
        logger.info(f"🚀 {request.method} {request.path}", extra={'ip': request.remote_addr})

        try:
            result = func(*args, **kwargs)
        except Exception as e:
            logger.error(f"❌ {request.method} {request.path} - {time.time() - start_time:.3f}s - {e}")
            raise

        logger.info(f"✅ {request.method} {request.path} - {time.time() - start_time:.3f}s")
        return result

    return wrapper
