"""
Service da jornada emocional
Registro das respostas do check-in e envio para análise
"""
import logging
from typing import Dict, List, Any, Optional
from exceptions.api_exceptions import ValidationError, NotFoundError
from repositories.jornada_repository import (
    JornadaRepository, JornadaRespostaRepository, PerguntaRepository, RespostaRepository
)
from services.n8n_client import N8nClient
from validators.request_validators import JornadaRequest
from config.database import get_supabase_client

logger = logging.getLogger(__name__)

class JornadaService:
    """Service para criar jornadas e solicitar análise"""

    def __init__(self, client=None, n8n_client: N8nClient = None):
        client = client if client is not None else get_supabase_client()
        self.repository = JornadaRepository(client)
        self.resposta_jornada_repository = JornadaRespostaRepository(client)
        self.pergunta_repository = PerguntaRepository(client)
        self.resposta_repository = RespostaRepository(client)
        self.n8n_client = n8n_client or N8nClient()

    def create_jornada(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Criar jornada e vincular as respostas informadas"""
        request = JornadaRequest.from_dict(data or {})

        jornada = self.repository.create_jornada(request.emocao, request.uid, request.reflexao)

        if request.respostas:
            jornada['respostas'] = self.resposta_jornada_repository.create_respostas(
                jornada['id'], request.respostas
            )

        logger.info(f"📓 Jornada {jornada['id']} criada para uid {request.uid}")
        return jornada

    def formatar_respostas_para_analise(self, jornada_respostas: List[Dict[str, Any]]) -> List[Dict[str, str]]:
        """Converter respostas da jornada em pares {question, answer}"""
        perguntas = {
            p['id']: p for p in self.pergunta_repository.find_by_ids({r['id_perguntas'] for r in jornada_respostas})
        }
        respostas = {
            r['id']: r for r in self.resposta_repository.find_by_ids({r['id_resposta'] for r in jornada_respostas})
        }

        return [
            {
                'question': perguntas.get(item['id_perguntas'], {}).get('descricao', 'Pergunta não encontrada'),
                'answer': respostas.get(item['id_resposta'], {}).get('descricao', 'Resposta não encontrada')
            }
            for item in jornada_respostas
        ]

    def solicitar_analise(self, id_jornada: Any, id_departamento: Optional[Any] = None) -> Dict[str, Any]:
        """Enviar a jornada para o serviço de análise"""
        if not id_jornada:
            raise ValidationError("ID da jornada é obrigatório")

        jornada = self.repository.find_by_id(id_jornada)
        if not jornada:
            raise NotFoundError('Jornada', id_jornada)

        answers = self.formatar_respostas_para_analise(
            self.resposta_jornada_repository.list_by_jornada(id_jornada)
        )

        return self.n8n_client.send_analise_feedback(
            uid=jornada.get('uid'),
            emotion=jornada.get('emocao'),
            reflexao=jornada.get('reflexao'),
            answers=answers,
            id_jornada=id_jornada,
            id_departamento=id_departamento
        )
