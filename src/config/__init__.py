"""
Configurações do sistema
"""

# Configurações disponíveis
from .database import get_supabase_client, get_supabase_manager, set_supabase_client
from .env_loader import load_environment, get_env_var, get_int_env_var

__all__ = [
    'get_supabase_client',
    'get_supabase_manager',
    'set_supabase_client',
    'load_environment',
    'get_env_var',
    'get_int_env_var'
]
