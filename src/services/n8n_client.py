"""
Cliente HTTP do serviço de análise emocional (workflows N8n)
"""
import logging
import os
from datetime import datetime
from typing import Dict, List, Any, Optional
import requests
from exceptions.api_exceptions import ExternalAPIError

logger = logging.getLogger(__name__)

class N8nClient:
    """Cliente para os webhooks de análise"""

    def __init__(self, analise_url: str = None, timeout: int = None, session: requests.Session = None):
        self.analise_url = analise_url or os.getenv('N8N_ANALISE_URL')
        self.timeout = timeout or int(os.getenv('N8N_TIMEOUT', '30'))
        self.session = session or requests.Session()

    def send_analise_feedback(self, uid: str, emotion: str, reflexao: Optional[str],
                              answers: List[Dict[str, str]], id_jornada: Any,
                              id_departamento: Any = None) -> Dict[str, Any]:
        """
        Enviar respostas da jornada para análise

        Returns:
            {analysisAI, factor, evaluate, id_jornada, activities, departamento_id}

        Raises:
            ExternalAPIError: serviço não configurado, indisponível ou resposta inválida
        """
        if not self.analise_url:
            raise ExternalAPIError('N8n', 'N8N_ANALISE_URL não configurada')

        body = {
            'userId': uid,
            'date': datetime.now().isoformat(),
            'emotion-check': 'Como você está se sentindo?',
            'emotion-check-answer': emotion,
            'user-reflections': 'Faça um resumo de suas reflexões',
            'user-reflectionsAnswer': reflexao,
            'answers': answers
        }

        try:
            logger.info(f"🧠 Enviando jornada {id_jornada} para análise")
            response = self.session.post(self.analise_url, json=body, timeout=self.timeout)
            response.raise_for_status()
            raw_data = response.json()
        except requests.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else None
            raise ExternalAPIError('N8n', f"resposta HTTP {status_code}", status_code)
        except requests.RequestException as e:
            raise ExternalAPIError('N8n', str(e))
        except ValueError as e:
            raise ExternalAPIError('N8n', f"resposta não é JSON válido: {e}")

        return {
            'analysisAI': raw_data.get('analysisAI') or raw_data.get('analysis') or '',
            'factor': raw_data.get('factor') or '',
            'evaluate': raw_data.get('evaluate') or '',
            'id_jornada': id_jornada,
            'activities': raw_data.get('activities') or raw_data.get('recommendations') or [],
            'departamento_id': id_departamento
        }
