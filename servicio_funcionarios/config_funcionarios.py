from typing import List

from starlette.config import Config

config = Config(".env")

DATABASE_URL = config("DATABASE_URL", default="sqlite:///./funcionarios.db")
DB_POOL_SIZE = config("DB_POOL_SIZE", cast=int, default=5)
DB_MAX_OVERFLOW = config("DB_MAX_OVERFLOW", cast=int, default=10)

# Sin clave no se pueden firmar tokens: mejor no levantar el servicio
JWT_SECRET_KEY = config("JWT_SECRET_KEY", default=None)
if not JWT_SECRET_KEY:
    raise RuntimeError("Falta JWT_SECRET_KEY en variables de entorno")

ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = config("ACCESS_TOKEN_EXPIRE_MINUTES", cast=int, default=60)
BCRYPT_ROUNDS = config("BCRYPT_ROUNDS", cast=int, default=12)

LOG_LEVEL = config("LOG_LEVEL", default="INFO")
LOG_JSON = config("LOG_JSON", cast=bool, default=True)


def _split_names(raw: str) -> List[str]:
    return [n.strip() for n in raw.split(",") if n.strip()]


SEED_CARGOS = _split_names(config("SEED_CARGOS", default=""))
