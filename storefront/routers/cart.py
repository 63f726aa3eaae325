"""
Cart endpoints; anonymous shoppers keep their cart in the browser
"""
from typing import List, Optional, Union

from fastapi import APIRouter, Depends

from storefront.dependencies import get_cart_service, get_current_user, require_user
from storefront.models import User
from storefront.schemas import CartItemCreate, CartItemOut, CartItemUpdate, MessageResponse
from storefront.services import CartService

router = APIRouter(prefix="/api/cart", tags=["cart"])


@router.get("", response_model=List[CartItemOut])
def list_cart(user: Optional[User] = Depends(get_current_user), cart: CartService = Depends(get_cart_service)):
    if user is None:
        return []
    return cart.list_items(user.id)


@router.post("", response_model=None)
def add_to_cart(
    data: CartItemCreate,
    user: Optional[User] = Depends(get_current_user),
    cart: CartService = Depends(get_cart_service),
) -> Union[CartItemOut, MessageResponse]:
    if user is None:
        cart.catalog.get_product(data.product_id)
        return MessageResponse(message="Item added to local cart")
    return CartItemOut.model_validate(cart.add_item(user.id, data.product_id, data.quantity))


@router.put("/{item_id}", response_model=CartItemOut)
def update_cart_item(
    item_id: int,
    data: CartItemUpdate,
    user: User = Depends(require_user),
    cart: CartService = Depends(get_cart_service),
):
    return cart.update_quantity(user.id, item_id, data.quantity)


@router.delete("/{item_id}", response_model=MessageResponse)
def remove_cart_item(item_id: int, user: User = Depends(require_user), cart: CartService = Depends(get_cart_service)):
    cart.remove_item(user.id, item_id)
    return MessageResponse(message="Item removed from cart")


@router.delete("", response_model=MessageResponse)
def clear_cart(user: User = Depends(require_user), cart: CartService = Depends(get_cart_service)):
    removed = cart.clear(user.id)
    return MessageResponse(message=f"Removed {removed} items from cart")
