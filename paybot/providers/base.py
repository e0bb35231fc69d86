from abc import ABC, abstractmethod
from typing import Any, Dict, Protocol, Sequence

from ..core.execution.abi import AbiFragment


class Provider(ABC):
    """Base provider interface"""

    name: str
    timeout_s: int = 10

    @abstractmethod
    async def ready(self) -> bool:
        """Check if provider is ready to serve requests"""
        pass

    @abstractmethod
    async def health_check(self) -> Dict[str, Any]:
        """Return provider health status"""
        pass


class ContractReader(Protocol):
    """Reads view functions from on-chain contracts."""

    async def read_contract(
        self,
        address: str,
        abi: Sequence[AbiFragment],
        function_name: str,
        args: Sequence[Any] = (),
    ) -> Any:
        """Return the decoded result of ``function_name`` or raise."""
        ...
