from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class Cargo(BaseModel):
    idCargo: int
    nomeCargo: Optional[str] = None
    model_config = ConfigDict(from_attributes=True)


class Funcionario(BaseModel):
    idFuncionario: Optional[int] = None
    nomeFuncionario: str
    email: str
    usuario: str
    # Solo de escritura: nunca se serializa ni aparece en repr
    senha: Optional[str] = Field(default=None, exclude=True, repr=False)
    cargo: Cargo
    model_config = ConfigDict(from_attributes=True)


class FuncionarioClaims(BaseModel):
    email: str
    usuario: str
    role: Optional[str] = None
    name: Optional[str] = None
    idFuncionario: int


class LoginUser(BaseModel):
    funcionario: FuncionarioClaims


class LoginResult(BaseModel):
    user: LoginUser
    token: str


class ResultadoOperacao(BaseModel):
    success: bool


class ErrorDetail(BaseModel):
    message: str


class ErrorPayload(BaseModel):
    statusCode: int
    title: str
    detail: ErrorDetail
