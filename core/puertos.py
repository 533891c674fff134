# core/puertos.py
from __future__ import annotations

from typing import List, Optional, Protocol, runtime_checkable

from .modelo import Client, CompanySettings


@runtime_checkable
class ClientRepository(Protocol):
    def list(self) -> List[Client]: ...

    def get_by_id(self, client_id: str) -> Optional[Client]: ...

    def upsert(self, client: Client) -> Client: ...

    def delete(self, client_id: str) -> None: ...


@runtime_checkable
class SettingsRepository(Protocol):
    def get(self) -> CompanySettings: ...

    def save(self, settings: CompanySettings) -> None: ...
