"""
Wishlist endpoints
"""
from typing import List, Optional

from fastapi import APIRouter, Depends

from storefront.dependencies import get_current_user, get_wishlist_service, require_user
from storefront.models import User
from storefront.schemas import MessageResponse, WishlistItemCreate, WishlistItemOut
from storefront.services import WishlistService

router = APIRouter(prefix="/api/wishlist", tags=["wishlist"])


@router.get("", response_model=List[WishlistItemOut])
def list_wishlist(
    user: Optional[User] = Depends(get_current_user),
    wishlist: WishlistService = Depends(get_wishlist_service),
):
    if user is None:
        return []
    return wishlist.list_items(user.id)


@router.post("", response_model=WishlistItemOut)
def add_to_wishlist(
    data: WishlistItemCreate,
    user: User = Depends(require_user),
    wishlist: WishlistService = Depends(get_wishlist_service),
):
    return wishlist.add_item(user.id, data.product_id)


@router.delete("/{product_id}", response_model=MessageResponse)
def remove_from_wishlist(
    product_id: int,
    user: User = Depends(require_user),
    wishlist: WishlistService = Depends(get_wishlist_service),
):
    wishlist.remove_item(user.id, product_id)
    return MessageResponse(message="Removed from wishlist")
