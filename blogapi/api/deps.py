"""Request dependencies backed by objects the app lifespan puts on app.state."""
from fastapi import Depends, Request

from blogapi.services.asset_store import AssetStore
from blogapi.services.post_service import PostService
from blogapi.services.repository import Repositories


def get_repositories(request: Request) -> Repositories:
    return request.app.state.repositories


def get_asset_store(request: Request) -> AssetStore:
    return request.app.state.asset_store


def get_post_service(
    repositories: Repositories = Depends(get_repositories),
    asset_store: AssetStore = Depends(get_asset_store),
) -> PostService:
    return PostService(asset_store, repositories.new_posts)
