from typing import List

from fastapi import APIRouter, Depends, HTTPException

from apps.backend.deps import get_master_repo
from data_contracts.models import ItemContract
from repositories.base import MasterDataRepository

router = APIRouter(tags=["Items"])


@router.get("", response_model=List[ItemContract])
def list_items(repo: MasterDataRepository = Depends(get_master_repo)):
    return repo.list_items()


@router.get("/{item_id}", response_model=ItemContract)
def get_item(item_id: str, repo: MasterDataRepository = Depends(get_master_repo)):
    item = repo.get_item(item_id)
    if item is None:
        raise HTTPException(status_code=404, detail=f"Unknown item: {item_id}")
    return item
