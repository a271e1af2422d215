"""
Repositories da jornada emocional
Tabelas 'jornada', 'jornada_respostas', 'perguntas' e 'respostas'
"""
from typing import List, Dict, Any, Optional, Iterable
from .base_repository import BaseRepository
import logging

logger = logging.getLogger(__name__)

class JornadaRepository(BaseRepository):
    """Repository para operações com a tabela jornada"""

    @property
    def table_name(self) -> str:
        return "jornada"

    def create_jornada(self, emocao: str, uid: str, reflexao: Optional[str] = None) -> Dict[str, Any]:
        """Criar jornada"""
        return self.create({'emocao': emocao, 'reflexao': reflexao, 'uid': uid})

class JornadaRespostaRepository(BaseRepository):
    """Repository para operações com a tabela jornada_respostas"""

    @property
    def table_name(self) -> str:
        return "jornada_respostas"

    def create_respostas(self, id_jornada: Any, respostas: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Vincular respostas (pergunta + resposta escolhida) à jornada"""
        rows = [
            {
                'id_jornada': id_jornada,
                'id_perguntas': resposta['id_pergunta'],
                'id_resposta': resposta['id_resposta']
            }
            for resposta in respostas
        ]
        return self.create_many(rows)

    def list_by_jornada(self, id_jornada: Any) -> List[Dict[str, Any]]:
        """Respostas de uma jornada"""
        return self.find_by_filters({'id_jornada': id_jornada})

class PerguntaRepository(BaseRepository):
    """Repository para operações com a tabela perguntas"""

    @property
    def table_name(self) -> str:
        return "perguntas"

    def find_by_ids(self, ids: Iterable[Any]) -> List[Dict[str, Any]]:
        ids = list(ids)
        return self.find_by_filters({'id': ids}) if ids else []

class RespostaRepository(BaseRepository):
    """Repository para operações com a tabela respostas"""

    @property
    def table_name(self) -> str:
        return "respostas"

    def find_by_ids(self, ids: Iterable[Any]) -> List[Dict[str, Any]]:
        ids = list(ids)
        return self.find_by_filters({'id': ids}) if ids else []
