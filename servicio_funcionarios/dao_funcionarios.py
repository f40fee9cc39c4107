import logging
from contextlib import contextmanager
from typing import Callable, Iterable, List, Optional

from sqlalchemy import select, update, delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from servicio_funcionarios import models_funcionarios as models
from servicio_funcionarios import schemas_funcionarios as schemas
from servicio_funcionarios.errors_funcionarios import conflict, invalid_field
from servicio_funcionarios.interfaces_funcionarios import CampoBusca, Hasher
from servicio_funcionarios.logging_funcionarios import get_logger

SessionFactory = Callable[[], Session]

_UNIQUE_MARKERS = ("unique", "duplicate")


def _to_schema(row: models.Funcionario) -> schemas.Funcionario:
    # La senha (hash) se queda en la base
    return schemas.Funcionario(
        idFuncionario=row.idFuncionario,
        nomeFuncionario=row.nomeFuncionario,
        email=row.email,
        usuario=row.usuario,
        cargo=schemas.Cargo(
            idCargo=row.Cargo_idCargo,
            nomeCargo=row.cargo.nomeCargo if row.cargo else None,
        ),
    )


def _is_unique_violation(exc: IntegrityError) -> bool:
    text = str(exc.orig).lower()
    return any(marker in text for marker in _UNIQUE_MARKERS)


def _select_with_cargo():
    return select(models.Funcionario).options(joinedload(models.Funcionario.cargo))


class FuncionarioDAO:
    """
    Acceso a la tabla ``funcionario``. No aplica reglas de negocio: la
    unicidad la verifica el servicio, pero las restricciones UNIQUE de la
    tabla son las que mandan y su violación se reporta como conflicto.
    """

    def __init__(self, session_factory: SessionFactory, hasher: Hasher, logger: Optional[logging.Logger] = None):
        self._session_factory = session_factory
        self._hasher = hasher
        self._logger = logger or get_logger("dao")

    @contextmanager
    def _unique_guard(self, db: Session):
        try:
            yield
        except IntegrityError as e:
            db.rollback()
            if _is_unique_violation(e):
                raise conflict(
                    "Já existe um Funcionário com os dados fornecidos",
                    "O email ou usuário informado já está cadastrado",
                ) from e
            raise

    def create(self, funcionario: schemas.Funcionario) -> int:
        self._logger.debug("FuncionarioDAO.create()")
        row = models.Funcionario(
            nomeFuncionario=funcionario.nomeFuncionario,
            email=funcionario.email,
            usuario=funcionario.usuario,
            senha=self._hasher.hash(funcionario.senha),
            Cargo_idCargo=funcionario.cargo.idCargo,
        )
        with self._session_factory() as db:
            with self._unique_guard(db):
                db.add(row)
                db.commit()
            if not row.idFuncionario:
                raise RuntimeError("Falha ao inserir funcionário")
            return row.idFuncionario

    def delete(self, id_funcionario: int) -> bool:
        self._logger.debug("FuncionarioDAO.delete()", extra={"idFuncionario": id_funcionario})
        stmt = delete(models.Funcionario).where(models.Funcionario.idFuncionario == id_funcionario)
        with self._session_factory() as db:
            result = db.execute(stmt)
            db.commit()
            return result.rowcount > 0

    def update(self, funcionario: schemas.Funcionario) -> bool:
        self._logger.debug("FuncionarioDAO.update()", extra={"idFuncionario": funcionario.idFuncionario})
        values = {
            "nomeFuncionario": funcionario.nomeFuncionario,
            "email": funcionario.email,
            "usuario": funcionario.usuario,
            "Cargo_idCargo": funcionario.cargo.idCargo,
        }
        # Sin senha nueva el hash guardado no se toca
        if funcionario.senha:
            values["senha"] = self._hasher.hash(funcionario.senha)
        stmt = (
            update(models.Funcionario)
            .where(models.Funcionario.idFuncionario == funcionario.idFuncionario)
            .values(**values)
        )
        with self._session_factory() as db:
            with self._unique_guard(db):
                result = db.execute(stmt)
                db.commit()
            return result.rowcount > 0

    def find_all(self) -> List[schemas.Funcionario]:
        self._logger.debug("FuncionarioDAO.find_all()")
        stmt = _select_with_cargo().order_by(models.Funcionario.idFuncionario.asc())
        with self._session_factory() as db:
            return [_to_schema(row) for row in db.execute(stmt).scalars().all()]

    def find_by_id(self, id_funcionario: int) -> Optional[schemas.Funcionario]:
        self._logger.debug("FuncionarioDAO.find_by_id()", extra={"idFuncionario": id_funcionario})
        resultado = self.find_by_field(CampoBusca.ID_FUNCIONARIO, id_funcionario)
        return resultado[0] if resultado else None

    def find_by_field(self, field, value) -> List[schemas.Funcionario]:
        try:
            campo = CampoBusca(field)
        except ValueError:
            raise invalid_field(field) from None
        self._logger.debug("FuncionarioDAO.find_by_field()", extra={"campo": campo.value})
        column = getattr(models.Funcionario, campo.value)
        stmt = _select_with_cargo().where(column == value)
        with self._session_factory() as db:
            return [_to_schema(row) for row in db.execute(stmt).scalars().all()]

    def login(self, email: str, senha: str) -> Optional[schemas.Funcionario]:
        self._logger.debug("FuncionarioDAO.login()")
        stmt = _select_with_cargo().where(models.Funcionario.email == email)
        with self._session_factory() as db:
            rows = db.execute(stmt).scalars().all()
            if len(rows) != 1:
                self._logger.info("Funcionário não encontrado no login")
                return None
            row = rows[0]
            if not self._hasher.verify(senha, row.senha):
                self._logger.info("Senha inválida no login", extra={"idFuncionario": row.idFuncionario})
                return None
            return _to_schema(row)


class CargoDAO:
    def __init__(self, session_factory: SessionFactory, logger: Optional[logging.Logger] = None):
        self._session_factory = session_factory
        self._logger = logger or get_logger("dao")

    def find_by_id(self, id_cargo: int) -> Optional[schemas.Cargo]:
        self._logger.debug("CargoDAO.find_by_id()", extra={"idCargo": id_cargo})
        with self._session_factory() as db:
            row = db.get(models.Cargo, id_cargo)
            return schemas.Cargo.model_validate(row) if row else None

    def seed(self, nomes: Iterable[str]) -> int:
        """Crea los cargos que falten por nombre. Devuelve cuántos se insertaron."""
        with self._session_factory() as db:
            existentes = set(db.execute(select(models.Cargo.nomeCargo)).scalars().all())
            nuevos = [models.Cargo(nomeCargo=n) for n in nomes if n not in existentes]
            db.add_all(nuevos)
            db.commit()
        if nuevos:
            self._logger.info("Cargos iniciais criados", extra={"total": len(nuevos)})
        return len(nuevos)
