"""Contratos que consume el servicio de funcionarios."""

from enum import Enum
from typing import List, Optional, Protocol

from servicio_funcionarios import schemas_funcionarios as schemas


class CampoBusca(str, Enum):
    """Campos permitidos en FuncionarioDAO.find_by_field."""

    ID_FUNCIONARIO = "idFuncionario"
    NOME_FUNCIONARIO = "nomeFuncionario"
    EMAIL = "email"
    USUARIO = "usuario"
    ID_CARGO = "Cargo_idCargo"


class Hasher(Protocol):
    def hash(self, senha: str) -> str:
        ...

    def verify(self, senha: str, senha_hash: str) -> bool:
        ...


class TokenIssuer(Protocol):
    def gerar_token(self, claims: dict) -> str:
        ...


class RoleLookup(Protocol):
    def find_by_id(self, id_cargo: int) -> Optional[schemas.Cargo]:
        ...


class EmployeeStore(Protocol):
    def create(self, funcionario: schemas.Funcionario) -> int:
        """Hashea la senha, inserta y devuelve el id asignado."""
        ...

    def delete(self, id_funcionario: int) -> bool:
        ...

    def update(self, funcionario: schemas.Funcionario) -> bool:
        """Solo rehashea la senha si viene informada."""
        ...

    def find_all(self) -> List[schemas.Funcionario]:
        ...

    def find_by_id(self, id_funcionario: int) -> Optional[schemas.Funcionario]:
        ...

    def find_by_field(self, field: CampoBusca, value) -> List[schemas.Funcionario]:
        ...

    def login(self, email: str, senha: str) -> Optional[schemas.Funcionario]:
        """Compara la senha contra el hash guardado; None si no autentica."""
        ...
