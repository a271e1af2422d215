"""
Repositories Module
Camada de acesso a dados padronizada sobre a API de tabelas do Supabase
"""

from .base_repository import BaseRepository
from .permissao_repository import PermissaoRepository
from .usuario_repository import UsuarioRepository
from .usuario_departamento_repository import UsuarioDepartamentoRepository
from .usuario_filial_repository import UsuarioFilialRepository
from .representante_empresa_repository import RepresentanteEmpresaRepository
from .jornada_repository import (
    JornadaRepository,
    JornadaRespostaRepository,
    PerguntaRepository,
    RespostaRepository
)

__all__ = [
    'BaseRepository',
    'PermissaoRepository',
    'UsuarioRepository',
    'UsuarioDepartamentoRepository',
    'UsuarioFilialRepository',
    'RepresentanteEmpresaRepository',
    'JornadaRepository',
    'JornadaRespostaRepository',
    'PerguntaRepository',
    'RespostaRepository'
]
