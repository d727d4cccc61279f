"""Auth endpoints — login, signup, current user."""

from binhub.infrastructure.api_client import ApiResult, MarketplaceApiClient


async def login(api: MarketplaceApiClient, phone: str, password: str) -> ApiResult:
    return await api.post("/auth/login", json={"phone": phone, "password": password})


async def signup(api: MarketplaceApiClient, payload: dict) -> ApiResult:
    return await api.post("/auth/signup", json=payload)


async def me(api: MarketplaceApiClient, token: str) -> ApiResult:
    return await api.get("/auth/me", token=token)
