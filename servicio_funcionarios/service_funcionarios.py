import logging
from typing import Any, Dict, List, Optional

from servicio_funcionarios import schemas_funcionarios as schemas
from servicio_funcionarios.errors_funcionarios import conflict, not_found, reference_not_found, unauthorized
from servicio_funcionarios.interfaces_funcionarios import CampoBusca, EmployeeStore, RoleLookup, TokenIssuer
from servicio_funcionarios.logging_funcionarios import get_logger


def _montar_funcionario(dados: Dict[str, Any], id_funcionario: Optional[int] = None) -> schemas.Funcionario:
    # La senha viaja en claro hasta el DAO, que es quien la hashea
    return schemas.Funcionario(
        idFuncionario=id_funcionario,
        nomeFuncionario=dados["nomeFuncionario"],
        email=dados["email"],
        usuario=dados["usuario"],
        senha=dados.get("senha") or None,
        cargo=schemas.Cargo(idCargo=dados["cargo"]["idCargo"]),
    )


class FuncionarioService:
    """
    Reglas de negocio de funcionarios.

    Recibe el DAO de funcionarios, el lookup de cargos y el emisor de tokens
    por constructor; no abre sesiones ni conoce SQL.
    """

    def __init__(
        self,
        funcionario_dao: EmployeeStore,
        cargo_dao: RoleLookup,
        token_issuer: TokenIssuer,
        logger: Optional[logging.Logger] = None,
    ):
        self._funcionario_dao = funcionario_dao
        self._cargo_dao = cargo_dao
        self._token_issuer = token_issuer
        self._logger = logger or get_logger("service")

    def create_funcionario(self, dados: Dict[str, Any]) -> schemas.Funcionario:
        self._logger.info("FuncionarioService.create_funcionario()")
        id_cargo = dados["cargo"]["idCargo"]

        # El orden importa: cargo, email, usuario. Gana la primera falla.
        cargo = self._cargo_dao.find_by_id(id_cargo)
        if not cargo:
            raise reference_not_found(
                "O cargo informado não existe",
                f"O Cargo com ID {id_cargo} não foi encontrado.",
            )

        if self._funcionario_dao.find_by_field(CampoBusca.EMAIL, dados["email"]):
            raise conflict(
                "Já existe um Funcionário com o email fornecido",
                f"O email {dados['email']} já está cadastrado",
            )

        if self._funcionario_dao.find_by_field(CampoBusca.USUARIO, dados["usuario"]):
            raise conflict(
                "Já existe um Funcionário com o usuário fornecido",
                f"O usuário {dados['usuario']} já está cadastrado",
            )

        funcionario = _montar_funcionario(dados)
        funcionario.cargo = cargo
        funcionario.idFuncionario = self._funcionario_dao.create(funcionario)
        self._logger.info("Funcionário criado", extra={"idFuncionario": funcionario.idFuncionario})
        return funcionario

    def login_funcionario(self, dados: Dict[str, Any]) -> Dict[str, Any]:
        self._logger.info("FuncionarioService.login_funcionario()")
        encontrado = self._funcionario_dao.login(dados["email"], dados["senha"])

        # Misma respuesta para email desconocido y senha incorrecta
        if not encontrado:
            raise unauthorized("Usuário ou senha inválidos", "Não foi possível realizar autenticação")

        claims = {
            "email": encontrado.email,
            "usuario": encontrado.usuario,
            "role": encontrado.cargo.nomeCargo if encontrado.cargo else None,
            "name": encontrado.nomeFuncionario or None,
            "idFuncionario": encontrado.idFuncionario,
        }
        return {"user": {"funcionario": claims}, "token": self._token_issuer.gerar_token(claims)}

    def find_all(self) -> List[schemas.Funcionario]:
        self._logger.info("FuncionarioService.find_all()")
        return self._funcionario_dao.find_all()

    def find_by_id(self, id_funcionario: int) -> schemas.Funcionario:
        funcionario = self._funcionario_dao.find_by_id(id_funcionario)
        if not funcionario:
            raise not_found("Funcionário não encontrado", f"Não existe funcionário com id {id_funcionario}")
        return funcionario

    def update_funcionario(self, id_funcionario: int, dados: Dict[str, Any]) -> bool:
        # TODO: validar cargo y unicidad como en create, pendiente de definición con producto
        self._logger.info("FuncionarioService.update_funcionario()", extra={"idFuncionario": id_funcionario})
        return self._funcionario_dao.update(_montar_funcionario(dados, id_funcionario))

    def delete_funcionario(self, id_funcionario: int) -> bool:
        self._logger.info("FuncionarioService.delete_funcionario()", extra={"idFuncionario": id_funcionario})
        return self._funcionario_dao.delete(id_funcionario)
