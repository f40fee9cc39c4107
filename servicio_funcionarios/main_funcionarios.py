from fastapi import FastAPI, Depends, status
from typing import List, Annotated

from servicio_funcionarios import config_funcionarios as settings
from servicio_funcionarios import middleware_funcionarios as middleware
from servicio_funcionarios import schemas_funcionarios as schemas
from servicio_funcionarios import security_funcionarios as security
from servicio_funcionarios.dao_funcionarios import CargoDAO, FuncionarioDAO
from servicio_funcionarios.db import Base, engine, SessionLocal
from servicio_funcionarios.errors_funcionarios import register_exception_handlers
from servicio_funcionarios.logging_funcionarios import setup_logger
from servicio_funcionarios.service_funcionarios import FuncionarioService

logger = setup_logger()

app = FastAPI(
    title="API de Serviço de Funcionários",
    description="Cadastro, consulta e autenticação de funcionários.",
    version="1.0.0",
)
register_exception_handlers(app)

# === Composición ===
password_hasher = security.PasswordHasher()
cargo_dao = CargoDAO(SessionLocal)
funcionario_dao = FuncionarioDAO(SessionLocal, password_hasher)


def get_funcionario_dao() -> FuncionarioDAO:
    return funcionario_dao


def get_funcionario_service() -> FuncionarioService:
    return FuncionarioService(funcionario_dao, cargo_dao, security.get_token_issuer())


def get_current_funcionario(
    claims: Annotated[dict, Depends(security.get_token_claims)],
    store: Annotated[FuncionarioDAO, Depends(get_funcionario_dao)],
) -> dict:
    return security.confirmar_funcionario(claims, store)


Service = Annotated[FuncionarioService, Depends(get_funcionario_service)]
CurrentFuncionario = Annotated[dict, Depends(get_current_funcionario)]
IdFuncionario = Annotated[int, Depends(middleware.id_param)]

ERROR_RESPONSES = {
    400: {"model": schemas.ErrorPayload},
    401: {"model": schemas.ErrorPayload},
    404: {"model": schemas.ErrorPayload},
}


def init_db(seed_cargos: List[str]) -> None:
    Base.metadata.create_all(bind=engine)
    if seed_cargos:
        cargo_dao.seed(seed_cargos)


@app.on_event("startup")
def _startup():
    init_db(settings.SEED_CARGOS)
    logger.info("Serviço de funcionários iniciado")


@app.get("/__health")
def health():
    return {"status": "ok"}


@app.post(
    "/funcionarios/login",
    response_model=schemas.LoginResult,
    responses=ERROR_RESPONSES,
    tags=["Auth"],
)
def login_funcionario(service: Service, dados: Annotated[dict, Depends(middleware.login_body)]):
    return service.login_funcionario(dados)


@app.get("/funcionarios/verify", response_model=schemas.FuncionarioClaims, tags=["Auth"])
def verify(funcionario: CurrentFuncionario):
    return funcionario


@app.post(
    "/funcionarios",
    response_model=schemas.Funcionario,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
    tags=["Funcionários"],
)
def create_funcionario(service: Service, dados: Annotated[dict, Depends(middleware.create_body)]):
    return service.create_funcionario(dados)


@app.get("/funcionarios", response_model=List[schemas.Funcionario], responses=ERROR_RESPONSES, tags=["Funcionários"])
def get_all_funcionarios(service: Service, funcionario: CurrentFuncionario):
    return service.find_all()


@app.get(
    "/funcionarios/{idFuncionario}",
    response_model=schemas.Funcionario,
    responses=ERROR_RESPONSES,
    tags=["Funcionários"],
)
def get_funcionario(id_funcionario: IdFuncionario, service: Service, funcionario: CurrentFuncionario):
    return service.find_by_id(id_funcionario)


@app.put(
    "/funcionarios/{idFuncionario}",
    response_model=schemas.ResultadoOperacao,
    responses=ERROR_RESPONSES,
    tags=["Funcionários"],
)
def update_funcionario(
    id_funcionario: IdFuncionario,
    service: Service,
    funcionario: CurrentFuncionario,
    dados: Annotated[dict, Depends(middleware.update_body)],
):
    return {"success": service.update_funcionario(id_funcionario, dados)}


@app.delete(
    "/funcionarios/{idFuncionario}",
    response_model=schemas.ResultadoOperacao,
    responses=ERROR_RESPONSES,
    tags=["Funcionários"],
)
def delete_funcionario(id_funcionario: IdFuncionario, service: Service, funcionario: CurrentFuncionario):
    return {"success": service.delete_funcionario(id_funcionario)}
