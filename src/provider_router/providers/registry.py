"""Family tag to provider client registry."""

from __future__ import annotations

from threading import Lock
from typing import Dict, Mapping, Optional, Tuple

from provider_router.domain.exceptions import ClientNotRegisteredError
from provider_router.domain.interfaces import IProviderClient
from provider_router.domain.models import ProviderCapability, ProviderFamily


class ProviderClientRegistry:
    """Resolves the client serving a capability by its ``family`` tag.

    Supporting a new family is a single ``register`` call.
    """

    def __init__(self, clients: Optional[Mapping[str, IProviderClient]] = None) -> None:
        self._lock = Lock()
        self._clients: Dict[str, IProviderClient] = {}
        for family, client in (clients or {}).items():
            self.register(family, client)

    def register(self, family: str | ProviderFamily, client: IProviderClient) -> None:
        key = self._normalize(family)
        with self._lock:
            self._clients[key] = client

    def resolve(self, capability: ProviderCapability) -> IProviderClient:
        with self._lock:
            client = self._clients.get(capability.family)
        if client is None:
            raise ClientNotRegisteredError(
                context={"family": capability.family, "provider_id": capability.id}
            )
        return client

    def families(self) -> Tuple[str, ...]:
        with self._lock:
            return tuple(self._clients)

    def __contains__(self, family: object) -> bool:
        if not isinstance(family, str):
            return False
        with self._lock:
            return self._normalize(family) in self._clients

    @staticmethod
    def _normalize(family: str | ProviderFamily) -> str:
        if isinstance(family, ProviderFamily):
            return family.value
        return family.strip().lower()
