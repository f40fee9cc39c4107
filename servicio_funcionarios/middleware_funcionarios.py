"""Validación de requests de funcionarios."""

import re
from typing import Any

from fastapi import Request

from servicio_funcionarios.errors_funcionarios import validation_error

EMAIL_REGEX = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

CAMPOS_CREATE = ("nomeFuncionario", "email", "senha", "usuario", "cargo")
CAMPOS_UPDATE = ("nomeFuncionario", "email", "usuario", "cargo")
CAMPOS_LOGIN = ("email", "senha")
CAMPOS_TEXTO = ("nomeFuncionario", "email", "senha", "usuario")

# Mayor entero que cabe en una columna INTEGER/BIGINT con signo
ID_MAXIMO = 2**63 - 1


def _missing(value: Any) -> bool:
    return value is None or value == ""


def _check_senha(senha: Any) -> None:
    # bcrypt no acepta el byte NUL
    if isinstance(senha, str) and "\x00" in senha:
        raise validation_error("O campo 'senha' contém caracteres inválidos")


def _funcionario_from(body: Any) -> dict:
    if not isinstance(body, dict) or _missing(body.get("funcionario")):
        raise validation_error("O campo 'funcionario' é obrigatório!")
    funcionario = body["funcionario"]
    if not isinstance(funcionario, dict):
        raise validation_error("O campo 'funcionario' deve ser um objeto")
    return funcionario


def _check_shape(funcionario: dict, obrigatorios) -> None:
    for campo in obrigatorios:
        if _missing(funcionario.get(campo)):
            raise validation_error(f"O campo '{campo}' é obrigatório!")

    for campo in CAMPOS_TEXTO:
        value = funcionario.get(campo)
        if not _missing(value) and not isinstance(value, str):
            raise validation_error(f"O campo '{campo}' deve ser um texto")
    _check_senha(funcionario.get("senha"))

    cargo = funcionario["cargo"]
    if not isinstance(cargo, dict):
        raise validation_error("O campo 'cargo' deve ser um objeto")

    id_cargo = cargo.get("idCargo")
    # bool es subclase de int: True no es un id válido
    if isinstance(id_cargo, bool) or not isinstance(id_cargo, int) or not 0 < id_cargo <= ID_MAXIMO:
        raise validation_error("O campo 'idCargo' deve ser um número inteiro positivo")


def validate_create_body(body: Any) -> dict:
    funcionario = _funcionario_from(body)
    _check_shape(funcionario, CAMPOS_CREATE)
    return funcionario


def validate_update_body(body: Any) -> dict:
    """Igual que create, pero la senha es opcional (vacía = mantener la actual)."""
    funcionario = _funcionario_from(body)
    _check_shape(funcionario, CAMPOS_UPDATE)
    return funcionario


def validate_login_body(body: Any) -> dict:
    funcionario = _funcionario_from(body)
    for campo in CAMPOS_LOGIN:
        value = funcionario.get(campo)
        if not value or str(value).strip() == "":
            raise validation_error(f"O campo '{campo}' é obrigatório!")
    if not isinstance(funcionario["email"], str) or not EMAIL_REGEX.match(funcionario["email"]):
        raise validation_error("O campo 'email' não é um e-mail válido")
    if not isinstance(funcionario["senha"], str):
        raise validation_error("O campo 'senha' deve ser um texto")
    _check_senha(funcionario["senha"])
    return funcionario


def validate_id_param(raw: Any) -> int:
    if raw is None or str(raw).strip() == "":
        raise validation_error("O parâmetro 'idFuncionario' é obrigatório!")
    text = str(raw).strip()
    # len() antes de int(): cadenas enormes hacen fallar int()
    if not re.fullmatch(r"[0-9]+", text) or len(text) > 19 or not 0 < int(text) <= ID_MAXIMO:
        raise validation_error("O parâmetro 'idFuncionario' deve ser um número inteiro positivo")
    return int(text)


# === Dependencias FastAPI ===
async def _json_body(request: Request) -> Any:
    try:
        return await request.json()
    except ValueError:
        raise validation_error("O corpo da requisição deve ser um JSON válido") from None


async def create_body(request: Request) -> dict:
    return validate_create_body(await _json_body(request))


async def update_body(request: Request) -> dict:
    return validate_update_body(await _json_body(request))


async def login_body(request: Request) -> dict:
    return validate_login_body(await _json_body(request))


def id_param(request: Request) -> int:
    return validate_id_param(request.path_params.get("idFuncionario"))
