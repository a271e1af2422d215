"""
Repository Base para padronizar operações CRUD na API de tabelas do Supabase
Elimina repetições de query/execute e padroniza o tratamento de erros
"""
from abc import ABC, abstractmethod
from typing import List, Dict, Any, Optional, Union, Iterable
import logging
from config.database import get_supabase_client
from exceptions.api_exceptions import DatabaseError

logger = logging.getLogger(__name__)

class BaseRepository(ABC):
    """Repository base com operações CRUD padronizadas sobre o cliente Supabase"""

    def __init__(self, client=None):
        self.client = client if client is not None else get_supabase_client()

    @property
    @abstractmethod
    def table_name(self) -> str:
        """Nome da tabela principal"""
        pass

    @property
    def primary_key(self) -> str:
        """Nome da chave primária"""
        return "id"

    def _table(self):
        return self.client.table(self.table_name)

    def _execute(self, query, error_message: str) -> List[Dict[str, Any]]:
        """Executar query e converter falhas do cliente em DatabaseError"""
        try:
            response = query.execute()
        except DatabaseError:
            raise
        except Exception as e:
            raise DatabaseError(f"{error_message}: {e}", e)
        return response.data or []

    def _apply_filters(self, query, filters: Optional[Dict[str, Any]]):
        """Aplicar filtros de igualdade, pertencimento (listas) e nulidade"""
        for key, value in (filters or {}).items():
            if value is None:
                query = query.is_(key, 'null')
            elif isinstance(value, (list, tuple, set, frozenset)):
                query = query.in_(key, list(value))
            else:
                query = query.eq(key, value)
        return query

    def find_all(self, columns: str = '*', limit: Optional[int] = None,
                 order_by: Optional[str] = None) -> List[Dict[str, Any]]:
        """Buscar todos os registros com limite opcional"""
        return self.find_by_filters({}, columns=columns, limit=limit, order_by=order_by)

    def find_by_id(self, record_id: Union[str, int], columns: str = '*') -> Optional[Dict[str, Any]]:
        """Buscar registro por ID"""
        return self.find_one({self.primary_key: record_id}, columns=columns)

    def find_by_filters(self, filters: Dict[str, Any], columns: str = '*',
                        limit: Optional[int] = None,
                        order_by: Optional[str] = None) -> List[Dict[str, Any]]:
        """Buscar registros por filtros dinâmicos"""
        query = self._apply_filters(self._table().select(columns), filters)

        if order_by:
            query = query.order(order_by)

        if limit:
            query = query.limit(limit)

        return self._execute(query, f"Erro ao buscar registros em {self.table_name}")

    def find_one(self, filters: Dict[str, Any], columns: str = '*') -> Optional[Dict[str, Any]]:
        """Buscar primeiro registro que satisfaz os filtros"""
        rows = self.find_by_filters(filters, columns=columns, limit=1)
        return rows[0] if rows else None

    def exists(self, filters: Dict[str, Any]) -> bool:
        """Verificar se existe ao menos um registro com os filtros"""
        return self.find_one(filters, columns=self.primary_key) is not None

    def count(self, filters: Optional[Dict[str, Any]] = None) -> int:
        """Contar registros com filtros opcionais"""
        return len(self.find_by_filters(filters or {}, columns=self.primary_key))

    def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Criar novo registro"""
        rows = self._execute(
            self._table().insert(data),
            f"Erro ao inserir registro em {self.table_name}"
        )
        if not rows:
            raise DatabaseError(f"Nenhum registro retornado ao inserir em {self.table_name}")
        return rows[0]

    def create_many(self, rows: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Criar vários registros em um único insert"""
        rows = list(rows)
        if not rows:
            return []
        return self._execute(
            self._table().insert(rows),
            f"Erro ao inserir registros em {self.table_name}"
        )

    def update(self, record_id: Union[str, int], data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Atualizar registro existente"""
        if not data:
            return self.find_by_id(record_id)

        rows = self.update_by_filters({self.primary_key: record_id}, data)
        return rows[0] if rows else None

    def update_by_filters(self, filters: Dict[str, Any], data: Dict[str, Any]) -> List[Dict[str, Any]]:
        """Atualizar registros que satisfazem os filtros"""
        query = self._apply_filters(self._table().update(data), filters)
        return self._execute(query, f"Erro ao atualizar registros em {self.table_name}")

    def delete(self, record_id: Union[str, int]) -> bool:
        """Deletar registro por ID"""
        return len(self.delete_by_filters({self.primary_key: record_id})) > 0

    def delete_by_filters(self, filters: Dict[str, Any]) -> List[Dict[str, Any]]:
        """Deletar registros que satisfazem os filtros; retorna as linhas removidas"""
        if not filters:
            raise DatabaseError(f"Remoção sem filtros não permitida em {self.table_name}")

        query = self._apply_filters(self._table().delete(), filters)
        return self._execute(query, f"Erro ao remover registros de {self.table_name}")
