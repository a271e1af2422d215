"""
Repository específico para empresas
Operações sobre a tabela 'empresas'
"""
from typing import Dict, Any, Optional
from .base_repository import BaseRepository
import logging

logger = logging.getLogger(__name__)

class EmpresaRepository(BaseRepository):
    """Repository para operações com a tabela empresas"""

    @property
    def table_name(self) -> str:
        return "empresas"

    def find_by_cnpj(self, cnpj: str) -> Optional[Dict[str, Any]]:
        """Buscar empresa pelo CNPJ (apenas dígitos)"""
        return self.find_one({'cnpj': cnpj})

    def create_empresa(self, razao_social: str, cnpj: str, nome_fantasia: Optional[str] = None) -> Dict[str, Any]:
        """Criar empresa ativa"""
        return self.create({
            'razao_social': razao_social,
            'nome_fantasia': nome_fantasia,
            'cnpj': cnpj,
            'status': True
        })
