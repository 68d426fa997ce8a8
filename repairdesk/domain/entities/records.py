from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ClientRecord:
    id: str
    name: str
    phone: str
    cpf: str | None = None
    address: str | None = None


@dataclass(frozen=True)
class BrandRecord:
    id: str
    name: str


@dataclass(frozen=True)
class ModelRecord:
    id: str
    name: str
    brand_id: str
