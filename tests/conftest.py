"""
Fixtures compartidos.

El entorno se fija ANTES de importar el paquete: la configuración se lee al
importar (JWT_SECRET_KEY es obligatoria) y el engine se crea en ``db``.
"""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET_KEY"] = "test-secret"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["LOG_JSON"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from servicio_funcionarios import models_funcionarios as models  # noqa: E402
from servicio_funcionarios.dao_funcionarios import CargoDAO, FuncionarioDAO  # noqa: E402
from servicio_funcionarios.db import Base, SessionLocal, engine  # noqa: E402
from servicio_funcionarios.main_funcionarios import app  # noqa: E402
from servicio_funcionarios.security_funcionarios import PasswordHasher  # noqa: E402


def pytest_configure(config) -> None:
    config.addinivalue_line("markers", "unit: tests sin base de datos")
    config.addinivalue_line("markers", "integration: tests contra SQLite en memoria")


@pytest.fixture(autouse=True)
def tables():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(rounds=4)


@pytest.fixture
def cargo_id() -> int:
    with SessionLocal() as db:
        cargo = models.Cargo(nomeCargo="Gerente")
        db.add(cargo)
        db.commit()
        return cargo.idCargo


@pytest.fixture
def funcionario_dao(hasher) -> FuncionarioDAO:
    return FuncionarioDAO(SessionLocal, hasher)


@pytest.fixture
def cargo_dao() -> CargoDAO:
    return CargoDAO(SessionLocal)


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture
def count_funcionarios():
    def _count() -> int:
        with SessionLocal() as db:
            return db.query(models.Funcionario).count()

    return _count
