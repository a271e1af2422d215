"""
Configuração do cliente Supabase
Cliente único por processo, criado sob demanda (lazy loading)
"""

import os
import logging
import threading
from typing import Any, Callable, Dict, Optional
from dotenv import load_dotenv
from supabase import create_client, Client, ClientOptions

# Carregar variáveis de ambiente
load_dotenv('config.env')

logger = logging.getLogger(__name__)

def create_supabase_client() -> Client:
    """
    Cria cliente Supabase a partir das variáveis de ambiente

    Usa SUPABASE_SERVICE_KEY (operações administrativas) e cai para
    SUPABASE_ANON_KEY quando a chave de serviço não está disponível.
    """
    supabase_url = os.getenv('SUPABASE_URL')
    supabase_key = (
        os.getenv('SUPABASE_SERVICE_KEY')
        or os.getenv('SUPABASE_SERVICE_ROLE_KEY')
        or os.getenv('SUPABASE_ANON_KEY')
    )

    if not supabase_url or not supabase_key:
        raise ValueError("SUPABASE_URL e SUPABASE_SERVICE_KEY são obrigatórios")

    try:
        client = create_client(supabase_url, supabase_key)
        logger.info("✅ Cliente Supabase criado com sucesso")
        return client
    except Exception as e:
        logger.error(f"❌ Erro ao criar cliente Supabase: {e}")
        raise e

def create_auth_client() -> Client:
    """
    Cria cliente descartável para sign-in e sign-up no provedor

    Um login troca o header Authorization do cliente que o executou pelo JWT
    do usuário final; por isso essas chamadas nunca usam o cliente global de
    serviço. O cliente não persiste nem renova a sessão.
    """
    supabase_url = os.getenv('SUPABASE_URL')
    supabase_key = (
        os.getenv('SUPABASE_ANON_KEY')
        or os.getenv('SUPABASE_SERVICE_KEY')
        or os.getenv('SUPABASE_SERVICE_ROLE_KEY')
    )

    if not supabase_url or not supabase_key:
        raise ValueError("SUPABASE_URL e SUPABASE_ANON_KEY são obrigatórios")

    return create_client(
        supabase_url,
        supabase_key,
        options=ClientOptions(persist_session=False, auto_refresh_token=False)
    )

class SupabaseManager:
    """
    Gerenciador do cliente Supabase
    Mantém um único cliente e expõe um status de saúde simples
    """

    def __init__(self, client: Client = None):
        logger.info("🔄 Inicializando SupabaseManager...")
        self.client = client or create_supabase_client()

    def get_health_status(self) -> Dict[str, Any]:
        """Testar conectividade com uma consulta mínima"""
        try:
            self.client.table('permissoes').select('id').limit(1).execute()
            return {'overall': 'healthy', 'connections': {'supabase': {'status': 'connected'}}}
        except Exception as e:
            logger.warning(f"⚠️ Supabase indisponível: {e}")
            return {'overall': 'unhealthy', 'connections': {'supabase': {'status': 'error', 'error': str(e)}}}

# Instância global (lazy loading)
_manager = None
_manager_lock = threading.Lock()

def get_supabase_manager() -> SupabaseManager:
    """Obter instância global do SupabaseManager"""
    global _manager
    if _manager is None:
        with _manager_lock:
            if _manager is None:
                _manager = SupabaseManager()
    return _manager

def get_supabase_client() -> Client:
    """Atalho para o cliente Supabase global"""
    return get_supabase_manager().client

def set_supabase_client(client: Any) -> None:
    """Substituir o cliente global (usado em testes e scripts)"""
    global _manager
    with _manager_lock:
        _manager = SupabaseManager(client=client) if client is not None else None

# Fábrica dos clientes de autenticação (substituível em testes)
_auth_client_factory: Optional[Callable[[], Any]] = None

def get_auth_client() -> Client:
    """Novo cliente de autenticação a cada chamada"""
    factory = _auth_client_factory or create_auth_client
    return factory()

def set_auth_client_factory(factory: Optional[Callable[[], Any]]) -> None:
    """Substituir a fábrica de clientes de autenticação; None restaura a padrão"""
    global _auth_client_factory
    _auth_client_factory = factory
