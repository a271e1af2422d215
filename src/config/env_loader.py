"""
Carregador de variáveis de ambiente para o backend Clara
"""

import os
import logging
from pathlib import Path
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

def load_environment():
    """Carrega as variáveis de ambiente do arquivo config.env"""

    # Buscar arquivo config.env na raiz do projeto
    project_root = Path(__file__).parent.parent.parent
    config_file = project_root / "config.env"

    if config_file.exists():
        load_dotenv(config_file)
        logger.info(f"✅ Variáveis de ambiente carregadas de: {config_file}")
    else:
        logger.warning(f"⚠️ Arquivo config.env não encontrado em: {config_file}")
        return

    # Mostrar configurações importantes (sem expor segredos)
    logger.info("🔧 Configurações carregadas:")
    logger.info(f"  - SUPABASE_URL: {'✅ Configurado' if os.getenv('SUPABASE_URL') else '❌ Não configurado'}")
    logger.info(f"  - SUPABASE_SERVICE_KEY: {'✅ Configurado' if os.getenv('SUPABASE_SERVICE_KEY') else '❌ Não configurado'}")
    logger.info(f"  - JWT_SECRET: {'✅ Configurado' if os.getenv('JWT_SECRET') else '❌ Não configurado'}")
    logger.info(f"  - SMTP_USER: {'✅ Configurado' if os.getenv('SMTP_USER') else '❌ Não configurado'}")
    logger.info(f"  - N8N_ANALISE_URL: {'✅ Configurado' if os.getenv('N8N_ANALISE_URL') else '❌ Não configurado'}")
    logger.info(f"  - LOG_LEVEL: {os.getenv('LOG_LEVEL', 'INFO')}")

def get_env_var(key: str, default: str = None):
    """Obter variável de ambiente com fallback para valor padrão."""
    return os.getenv(key, default)

def get_int_env_var(key: str, default: int) -> int:
    """Obter variável de ambiente inteira; valores inválidos caem no padrão"""
    value = os.getenv(key)
    if value is None or value == '':
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning(f"⚠️ Valor inválido para {key}: '{value}', usando {default}")
        return default
