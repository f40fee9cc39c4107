"""
FuncionarioService con DAO, lookup de cargos y emisor de tokens mockeados.

Verifica el orden de las reglas de negocio y que ninguna escritura ocurra
cuando una regla falla.
"""

from unittest.mock import MagicMock

import pytest

from servicio_funcionarios import schemas_funcionarios as schemas
from servicio_funcionarios.errors_funcionarios import ErrorKind, ErrorResponse
from servicio_funcionarios.interfaces_funcionarios import CampoBusca
from servicio_funcionarios.service_funcionarios import FuncionarioService

pytestmark = pytest.mark.unit


def _dados(**overrides):
    dados = {
        "nomeFuncionario": "Ana",
        "email": "ana@x.com",
        "senha": "secret",
        "usuario": "ana1",
        "cargo": {"idCargo": 1},
    }
    dados.update(overrides)
    return dados


def _existente(**overrides) -> schemas.Funcionario:
    campos = dict(
        idFuncionario=7,
        nomeFuncionario="Ana",
        email="ana@x.com",
        usuario="ana1",
        cargo=schemas.Cargo(idCargo=1, nomeCargo="Gerente"),
    )
    campos.update(overrides)
    return schemas.Funcionario(**campos)


@pytest.fixture
def funcionario_dao():
    dao = MagicMock()
    dao.find_by_field.return_value = []
    dao.create.return_value = 7
    return dao


@pytest.fixture
def cargo_dao():
    dao = MagicMock()
    dao.find_by_id.return_value = schemas.Cargo(idCargo=1, nomeCargo="Gerente")
    return dao


@pytest.fixture
def token_issuer():
    issuer = MagicMock()
    issuer.gerar_token.return_value = "signed.jwt.token"
    return issuer


@pytest.fixture
def service(funcionario_dao, cargo_dao, token_issuer):
    return FuncionarioService(funcionario_dao, cargo_dao, token_issuer)


class TestCreateFuncionario:
    def test_creates_and_attaches_id(self, service, funcionario_dao):
        funcionario = service.create_funcionario(_dados())

        assert funcionario.idFuncionario == 7
        assert funcionario.email == "ana@x.com"
        assert funcionario.usuario == "ana1"
        assert funcionario.cargo.nomeCargo == "Gerente"
        enviado = funcionario_dao.create.call_args.args[0]
        assert enviado.senha == "secret"

    def test_checks_run_in_order(self, service, funcionario_dao):
        service.create_funcionario(_dados())

        calls = funcionario_dao.find_by_field.call_args_list
        assert [c.args for c in calls] == [(CampoBusca.EMAIL, "ana@x.com"), (CampoBusca.USUARIO, "ana1")]

    def test_missing_cargo_stops_before_anything_else(self, service, funcionario_dao, cargo_dao):
        cargo_dao.find_by_id.return_value = None

        with pytest.raises(ErrorResponse) as exc:
            service.create_funcionario(_dados(cargo={"idCargo": 99}))

        assert exc.value.kind is ErrorKind.NOT_FOUND_REFERENCE
        assert exc.value.status_code == 400
        assert "99" in exc.value.message
        funcionario_dao.find_by_field.assert_not_called()
        funcionario_dao.create.assert_not_called()

    def test_duplicate_email_is_conflict(self, service, funcionario_dao):
        funcionario_dao.find_by_field.side_effect = lambda campo, valor: (
            [_existente()] if campo is CampoBusca.EMAIL else []
        )

        with pytest.raises(ErrorResponse) as exc:
            service.create_funcionario(_dados(usuario="outro"))

        assert exc.value.kind is ErrorKind.CONFLICT
        assert "ana@x.com" in exc.value.message
        assert funcionario_dao.find_by_field.call_count == 1
        funcionario_dao.create.assert_not_called()

    def test_duplicate_usuario_is_conflict(self, service, funcionario_dao):
        funcionario_dao.find_by_field.side_effect = lambda campo, valor: (
            [_existente()] if campo is CampoBusca.USUARIO else []
        )

        with pytest.raises(ErrorResponse) as exc:
            service.create_funcionario(_dados(email="outra@x.com"))

        assert exc.value.kind is ErrorKind.CONFLICT
        assert "ana1" in exc.value.message
        funcionario_dao.create.assert_not_called()

    def test_email_conflict_wins_over_usuario_conflict(self, service, funcionario_dao):
        funcionario_dao.find_by_field.return_value = [_existente()]

        with pytest.raises(ErrorResponse) as exc:
            service.create_funcionario(_dados())

        assert exc.value.title == "Já existe um Funcionário com o email fornecido"

    def test_returned_value_hides_senha(self, service):
        funcionario = service.create_funcionario(_dados())
        assert "senha" not in funcionario.model_dump()
        assert "secret" not in repr(funcionario)


class TestLoginFuncionario:
    def test_success_returns_claims_and_token(self, service, funcionario_dao, token_issuer):
        funcionario_dao.login.return_value = _existente()

        resultado = service.login_funcionario({"email": "ana@x.com", "senha": "secret"})

        claims = {
            "email": "ana@x.com",
            "usuario": "ana1",
            "role": "Gerente",
            "name": "Ana",
            "idFuncionario": 7,
        }
        assert resultado == {"user": {"funcionario": claims}, "token": "signed.jwt.token"}
        token_issuer.gerar_token.assert_called_once_with(claims)
        funcionario_dao.login.assert_called_once_with("ana@x.com", "secret")

    def test_missing_role_name_becomes_none(self, service, funcionario_dao):
        funcionario_dao.login.return_value = _existente(cargo=schemas.Cargo(idCargo=1))

        resultado = service.login_funcionario({"email": "ana@x.com", "senha": "secret"})

        assert resultado["user"]["funcionario"]["role"] is None

    def test_failure_is_unauthorized(self, service, funcionario_dao, token_issuer):
        funcionario_dao.login.return_value = None

        with pytest.raises(ErrorResponse) as exc:
            service.login_funcionario({"email": "ana@x.com", "senha": "wrong"})

        assert exc.value.kind is ErrorKind.UNAUTHORIZED
        assert exc.value.status_code == 401
        assert exc.value.to_dict() == {
            "statusCode": 401,
            "title": "Usuário ou senha inválidos",
            "detail": {"message": "Não foi possível realizar autenticação"},
        }
        token_issuer.gerar_token.assert_not_called()


class TestQueries:
    def test_find_all_delegates(self, service, funcionario_dao):
        funcionario_dao.find_all.return_value = [_existente()]
        assert service.find_all() == [_existente()]

    def test_find_by_id_not_found(self, service, funcionario_dao):
        funcionario_dao.find_by_id.return_value = None

        with pytest.raises(ErrorResponse) as exc:
            service.find_by_id(5)

        assert exc.value.kind is ErrorKind.NOT_FOUND
        assert exc.value.status_code == 404
        assert exc.value.message == "Não existe funcionário com id 5"

    def test_find_by_id_found(self, service, funcionario_dao):
        funcionario_dao.find_by_id.return_value = _existente()
        assert service.find_by_id(7).usuario == "ana1"


class TestUpdateAndDelete:
    def test_update_assembles_value(self, service, funcionario_dao):
        funcionario_dao.update.return_value = True

        assert service.update_funcionario(7, _dados(nomeFuncionario="Ana Maria")) is True

        enviado = funcionario_dao.update.call_args.args[0]
        assert enviado.idFuncionario == 7
        assert enviado.nomeFuncionario == "Ana Maria"
        assert enviado.cargo.idCargo == 1

    @pytest.mark.parametrize("senha", [None, ""])
    def test_update_without_senha_sends_none(self, service, funcionario_dao, senha):
        service.update_funcionario(7, _dados(senha=senha))
        assert funcionario_dao.update.call_args.args[0].senha is None

    def test_update_skips_reference_checks(self, service, funcionario_dao, cargo_dao):
        service.update_funcionario(7, _dados())
        cargo_dao.find_by_id.assert_not_called()
        funcionario_dao.find_by_field.assert_not_called()

    @pytest.mark.parametrize("removed", [True, False])
    def test_delete_returns_dao_result(self, service, funcionario_dao, removed):
        funcionario_dao.delete.return_value = removed
        assert service.delete_funcionario(3) is removed
        funcionario_dao.delete.assert_called_once_with(3)
