from fastapi import APIRouter, Depends
from typing import Dict, Any

from ..container import Container, get_container

router = APIRouter()


@router.get("/health")
async def health() -> Dict[str, str]:
    """Uptime probe used by the hosting platform"""
    return {"status": "ok"}


@router.get("/healthz")
async def health_check(container: Container = Depends(get_container)) -> Dict[str, Any]:
    """Detailed health check covering the RPC node and token list cache"""

    provider_status = {
        "base_rpc": await container.contract_reader.health_check(),
        "token_list": await container.registry.health_check(),
    }

    # An unloaded token list is normal until the first symbol lookup.
    all_healthy = all(
        status["status"] in ["healthy", "unavailable"]
        for status in provider_status.values()
    )

    return {
        "status": "healthy" if all_healthy else "degraded",
        "providers": provider_status,
        "chain_id": container.settings.chain_id,
    }
