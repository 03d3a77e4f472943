"""FastAPI dependencies for shared resources."""

from core.upstream_client import EzanVaktiClient, get_upstream_client


async def upstream_client() -> EzanVaktiClient:
    """
    Shared Ezan Vakti client.

    Tests replace this through app.dependency_overrides.
    """
    return get_upstream_client()
