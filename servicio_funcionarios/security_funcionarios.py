# security_funcionarios.py
from datetime import datetime, timedelta, timezone
from typing import Optional, Annotated

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from passlib.context import CryptContext

from servicio_funcionarios import config_funcionarios as settings
from servicio_funcionarios.errors_funcionarios import unauthorized
from servicio_funcionarios.interfaces_funcionarios import EmployeeStore


# === Senhas ===
class PasswordHasher:
    def __init__(self, rounds: int = settings.BCRYPT_ROUNDS):
        self._context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)

    def hash(self, senha: str) -> str:
        return self._context.hash(senha)

    def verify(self, senha: str, senha_hash: str) -> bool:
        try:
            return self._context.verify(senha, senha_hash)
        except ValueError:
            # PasswordValueError (p. ej. byte NUL): cuenta como senha incorrecta
            return False


def _credentials_error():
    return unauthorized("Token inválido", "Não foi possível validar as credenciais")


# === Tokens ===
class TokenJWT:
    def __init__(
        self,
        secret_key: str = settings.JWT_SECRET_KEY,
        algorithm: str = settings.ALGORITHM,
        expire_minutes: int = settings.ACCESS_TOKEN_EXPIRE_MINUTES,
    ):
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expire_minutes = expire_minutes

    def gerar_token(self, claims: dict, expires_delta: Optional[timedelta] = None) -> str:
        to_encode = claims.copy()
        expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=self._expire_minutes))
        to_encode.update({"sub": str(claims.get("usuario")), "exp": expire})
        return jwt.encode(to_encode, self._secret_key, algorithm=self._algorithm)

    def validar_token(self, token: str) -> dict:
        credentials_error = _credentials_error()
        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[self._algorithm])
        except JWTError:
            raise credentials_error
        if not (payload.get("sub") and payload.get("idFuncionario")):
            raise credentials_error
        return {
            "email": payload.get("email"),
            "usuario": payload.get("usuario"),
            "role": payload.get("role"),
            "name": payload.get("name"),
            "idFuncionario": payload.get("idFuncionario"),
        }


# Para el botón "Authorize" del Swagger; auto_error=False para responder con nuestro formato
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/funcionarios/login", auto_error=False)

token_jwt = TokenJWT()


def get_token_issuer() -> TokenJWT:
    return token_jwt


# === Dependencias ===
async def get_token_claims(
    token: Annotated[Optional[str], Depends(oauth2_scheme)],
    issuer: Annotated[TokenJWT, Depends(get_token_issuer)],
) -> dict:
    if not token:
        raise unauthorized("Token ausente", "Envie o cabeçalho Authorization: Bearer <token>")
    return issuer.validar_token(token)


def confirmar_funcionario(claims: dict, store: EmployeeStore) -> dict:
    # Un token bien firmado no basta: el funcionario puede haber sido borrado
    if not store.find_by_id(claims["idFuncionario"]):
        raise _credentials_error()
    return claims
