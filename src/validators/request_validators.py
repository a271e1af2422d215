"""
Validação de payloads de requisição
Converte o JSON recebido em objetos tipados ou lança ValidationError
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Optional
from exceptions.api_exceptions import ValidationError

def _require(data: Dict[str, Any], fields: List[str]) -> None:
    missing = [field for field in fields if data.get(field) in (None, '')]
    if missing:
        raise ValidationError(f'Campos obrigatórios faltando: {", ".join(missing)}')

def parse_bool(value: Any, field: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.lower() in ('true', 'false'):
        return value.lower() == 'true'
    raise ValidationError(f"Campo {field} deve ser booleano")

@dataclass
class LoginRequest:
    email: str
    password: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'LoginRequest':
        _require(data, ['email', 'password'])
        return cls(email=str(data['email']).strip().lower(), password=data['password'])

@dataclass
class ResetPasswordRequest:
    token: str
    uid: str
    code: str
    password: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any], password_field: str = 'new_password') -> 'ResetPasswordRequest':
        _require(data, ['token', 'uid', 'code', password_field])
        return cls(
            token=data['token'],
            uid=data['uid'],
            code=str(data['code']),
            password=data[password_field]
        )

@dataclass
class AssociationRequest:
    """Payload de associação usuário ↔ departamento/filial"""
    id_usuario: Any
    id_entidade: Any
    is_representante: Optional[bool]

    @classmethod
    def from_dict(cls, data: Dict[str, Any], entity_column: str,
                  require_flag: bool = False) -> 'AssociationRequest':
        required = ['id_usuario', entity_column]
        if require_flag:
            required.append('is_representante')
        _require(data, required)

        flag = data.get('is_representante')
        return cls(
            id_usuario=data['id_usuario'],
            id_entidade=data[entity_column],
            is_representante=parse_bool(flag, 'is_representante') if flag is not None else None
        )

@dataclass
class JornadaRequest:
    emocao: str
    uid: str
    reflexao: Optional[str]
    respostas: List[Dict[str, Any]]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'JornadaRequest':
        _require(data, ['emocao', 'uid'])

        respostas = data.get('respostas') or []
        if not isinstance(respostas, list):
            raise ValidationError("respostas deve ser uma lista")

        for index, resposta in enumerate(respostas):
            if not isinstance(resposta, dict) or not resposta.get('id_pergunta'):
                raise ValidationError(f"Resposta {index}: id_pergunta é obrigatório")
            if not resposta.get('id_resposta'):
                raise ValidationError(f"Resposta {index}: id_resposta é obrigatório")

        return cls(
            emocao=data['emocao'],
            uid=data['uid'],
            reflexao=data.get('reflexao'),
            respostas=respostas
        )

@dataclass
class ClienteRequest:
    """Cadastro de cliente: usuário responsável + empresa"""
    usuario: Dict[str, Any]
    empresa: Dict[str, Any]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ClienteRequest':
        usuario = data.get('usuario')
        empresa = data.get('empresa')
        if not isinstance(usuario, dict) or not isinstance(empresa, dict):
            raise ValidationError("Dados do usuário e empresa são obrigatórios")

        if any(usuario.get(field) in (None, '') for field in ('nome', 'email', 'telefone', 'cargo')):
            raise ValidationError("Dados obrigatórios do usuário: nome, email, telefone e cargo")

        if any(empresa.get(field) in (None, '') for field in ('razaoSocial', 'cnpj')):
            raise ValidationError("Dados obrigatórios da empresa: razaoSocial e cnpj")

        senha = usuario.get('senha')
        confirmar = usuario.get('confirmarSenha')
        if senha and confirmar and senha != confirmar:
            raise ValidationError("As senhas não coincidem")

        return cls(usuario=usuario, empresa=empresa)
