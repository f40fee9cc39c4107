from __future__ import annotations
from typing import List

from sqlalchemy import String, Integer, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from servicio_funcionarios.db import Base


class Cargo(Base):
    __tablename__ = "cargo"
    idCargo: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    nomeCargo: Mapped[str] = mapped_column(String(120), nullable=False)

    funcionarios: Mapped[List["Funcionario"]] = relationship(back_populates="cargo")


class Funcionario(Base):
    __tablename__ = "funcionario"
    idFuncionario: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    nomeFuncionario: Mapped[str] = mapped_column(String(120), nullable=False)
    email: Mapped[str] = mapped_column(String(160), nullable=False, unique=True, index=True)
    usuario: Mapped[str] = mapped_column(String(80), nullable=False, unique=True, index=True)
    # Hash bcrypt, nunca la senha en claro
    senha: Mapped[str] = mapped_column(String(255), nullable=False)
    Cargo_idCargo: Mapped[int] = mapped_column(Integer, ForeignKey("cargo.idCargo"), nullable=False, index=True)

    cargo: Mapped[Cargo] = relationship(back_populates="funcionarios")
