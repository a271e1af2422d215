"""
Aplicação Flask principal - Inicializador do Backend Clara
Autenticação, permissões de representantes e jornada emocional sobre Supabase
"""

import os
import sys
import logging
from datetime import datetime
from flask import Flask, jsonify
from flask_cors import CORS
from dotenv import load_dotenv

# Importar configuração de logging
from config.logging_config import setup_logging

# Carregar variáveis de ambiente
load_dotenv('config.env')

logger = logging.getLogger(__name__)

def create_app(config: dict = None) -> Flask:
    """
    Factory para criar aplicação Flask

    Args:
        config: Dicionário de configurações (opcional). A chave
            SUPABASE_CLIENT permite injetar um cliente já construído e
            SUPABASE_AUTH_CLIENT_FACTORY a fábrica dos clientes de login.

    Returns:
        Flask: Instância configurada da aplicação
    """
    app = Flask(__name__)

    _configure_app(app, config)
    _setup_cors(app)
    _initialize_supabase(app)
    _register_blueprints(app)
    _register_error_handlers(app)

    return app

def _configure_app(app: Flask, config: dict = None) -> None:
    """Configurar aplicação via variáveis de ambiente do config.env"""

    default_config = {
        'DEBUG': os.getenv('FLASK_DEBUG', 'False').lower() == 'true',
        'SECRET_KEY': os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production'),
        # Configuração Supabase via variáveis de ambiente
        'SUPABASE_URL': os.getenv('SUPABASE_URL'),
        'SUPABASE_SERVICE_KEY': os.getenv('SUPABASE_SERVICE_KEY'),  # Para operações administrativas
        'SUPABASE_ANON_KEY': os.getenv('SUPABASE_ANON_KEY'),  # Para operações públicas
        'FRONTEND_URL': os.getenv('FRONTEND_URL', 'http://localhost:3000'),
        'LOG_LEVEL': os.getenv('LOG_LEVEL', 'INFO'),
        'CORS_ORIGINS': os.getenv('CORS_ORIGINS', 'http://localhost:3000').split(','),
    }

    app.config.update(default_config)

    if config:
        app.config.update(config)

    # Validar configurações essenciais (cliente injetado dispensa credenciais)
    if app.config.get('SUPABASE_CLIENT') is None:
        required_configs = ['SUPABASE_URL', 'SUPABASE_SERVICE_KEY']
        missing_configs = [key for key in required_configs if not app.config.get(key)]

        if missing_configs:
            raise ValueError(f"❌ Configurações obrigatórias não encontradas: {', '.join(missing_configs)}")

    # Log das configurações carregadas (sem expor dados sensíveis)
    app.logger.info("🔧 Configurações carregadas do config.env:")
    app.logger.info(f"  - SUPABASE_URL: {app.config['SUPABASE_URL']}")
    app.logger.info(f"  - SUPABASE_SERVICE_KEY: {'✅ Configurado' if app.config['SUPABASE_SERVICE_KEY'] else '❌ Não configurado'}")
    app.logger.info(f"  - LOG_LEVEL: {app.config['LOG_LEVEL']}")
    app.logger.info(f"  - DEBUG: {app.config['DEBUG']}")

def _initialize_supabase(app: Flask) -> None:
    """Registrar cliente injetado; caso contrário o cliente é criado sob demanda"""
    from config.database import set_supabase_client, set_auth_client_factory

    client = app.config.get('SUPABASE_CLIENT')
    if client is not None:
        set_supabase_client(client)
        app.logger.info("✅ Cliente Supabase injetado na aplicação")
    else:
        app.logger.info("🔄 Cliente Supabase será criado na primeira requisição")

    auth_client_factory = app.config.get('SUPABASE_AUTH_CLIENT_FACTORY')
    if auth_client_factory is not None:
        set_auth_client_factory(auth_client_factory)

def _setup_cors(app: Flask) -> None:
    """Configurar CORS para permitir requisições do frontend"""
    # Configurar trailing slashes para evitar redirects 308
    app.url_map.strict_slashes = False

    cors_origins = app.config.get('CORS_ORIGINS', ['*'])
    app.logger.info(f"🔒 CORS configurado para origens: {cors_origins}")

    CORS(app, resources={
        r"/api/*": {
            "origins": cors_origins,
            "methods": ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
            "allow_headers": ["Content-Type", "Authorization"]
        }
    })

def _register_blueprints(app: Flask) -> None:
    """Registrar todos os blueprints da aplicação"""

    # Imports absolutos para blueprints
    from routes.auth_routes import auth_routes
    from routes.association_routes import usuario_departamento_routes, usuario_filial_routes
    from routes.empresa_routes import empresa_routes
    from routes.usuario_routes import usuario_routes
    from routes.jornada_routes import jornada_routes
    from routes.cliente_routes import cliente_routes

    app.register_blueprint(auth_routes)
    app.register_blueprint(usuario_departamento_routes)
    app.register_blueprint(usuario_filial_routes)
    app.register_blueprint(empresa_routes)
    app.register_blueprint(usuario_routes)
    app.register_blueprint(jornada_routes)
    app.register_blueprint(cliente_routes)

    app.logger.info("🚀 Aplicação inicializada:")
    app.logger.info("  ✅ Authentication: 8 endpoints (/api/auth/*)")
    app.logger.info("  ✅ Associações: 10 endpoints (/api/usuario-departamento/*, /api/usuario-filial/*)")
    app.logger.info("  ✅ Empresas: 4 endpoints (/api/empresas/<id>/representantes)")
    app.logger.info("  ✅ Usuários: 3 endpoints (/api/usuarios/*)")
    app.logger.info("  ✅ Jornadas: 2 endpoints (/api/jornadas/*)")
    app.logger.info("  ✅ Clientes: 1 endpoint (/api/clientes)")

    @app.route('/health')
    def health_check():
        """Health check completo da aplicação"""
        from config.database import get_supabase_manager

        try:
            health_status = get_supabase_manager().get_health_status()
        except Exception as e:
            app.logger.error(f"❌ Health check failed: {e}")
            return jsonify({
                'status': 'unhealthy',
                'message': f'Erro no health check: {str(e)}',
                'timestamp': datetime.now().isoformat()
            }), 503

        healthy = health_status['overall'] == 'healthy'
        return jsonify({
            'status': 'healthy' if healthy else 'unhealthy',
            'message': 'API funcionando corretamente' if healthy else 'Supabase indisponível',
            'timestamp': datetime.now().isoformat(),
            'database': health_status['connections']['supabase']['status'],
            'version': '1.0.0'
        }), 200 if healthy else 503

    @app.route('/healthz')
    def simple_health():
        """Health check simples"""
        return "OK", 200

def _register_error_handlers(app: Flask) -> None:
    """Registrar handlers globais de erro"""
    from middleware.error_handler import register_error_handlers
    register_error_handlers(app)
    app.logger.info("✅ Error handlers registrados!")

def main():
    """
    Função principal para executar a aplicação em desenvolvimento
    Em produção use: gunicorn -w 2 -b 0.0.0.0:8080 wsgi:app
    """
    # Configurar logging primeiro
    setup_logging()

    from config.env_loader import load_environment
    load_environment()

    try:
        app = create_app()
    except Exception as e:
        logger.critical(f"❌ Erro crítico na inicialização: {e}", exc_info=True)
        sys.exit(1)

    port = int(os.getenv('PORT', 5000))
    debug = os.getenv('FLASK_DEBUG', 'False').lower() == 'true'

    app.run(host='0.0.0.0', port=port, debug=debug)

if __name__ == "__main__":
    main()
