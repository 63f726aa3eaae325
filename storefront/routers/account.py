"""
Sign-in, registration and profile endpoints
"""
from fastapi import APIRouter, Depends, Request
from loguru import logger

from storefront.config import Settings, get_settings
from storefront.dependencies import (
    close_session,
    get_account_service,
    get_cart_service,
    get_identity_client,
    open_session,
    require_user,
)
from storefront.exceptions import ValidationError
from storefront.models import User
from storefront.schemas import (
    AuthSyncRequest,
    LoginRequest,
    MessageResponse,
    ProfileUpdate,
    ProfileUpdated,
    RegisterRequest,
    UserOut,
)
from storefront.services import AccountService, Auth0Client, CartService

router = APIRouter(prefix="/api/auth", tags=["account"])


@router.post("/sync", response_model=UserOut)
def sync_user(
    data: AuthSyncRequest,
    request: Request,
    settings: Settings = Depends(get_settings),
    accounts: AccountService = Depends(get_account_service),
    identity: Auth0Client = Depends(get_identity_client),
    cart: CartService = Depends(get_cart_service),
):
    """Open a session for a user signed in with the identity provider and merge the local cart"""
    if settings.auth0_enabled:
        profile = identity.fetch_userinfo(data.access_token)
    else:
        profile = data.user
    if profile is None or not profile.email:
        raise ValidationError("Email is required")

    user = accounts.sync_identity(profile)
    open_session(request, user)
    logger.info(f"User signed in: {user.email}")

    if data.local_cart_items:
        cart.migrate_local_items(user.id, data.local_cart_items)
    return user


@router.post("/register", response_model=UserOut)
def register(data: RegisterRequest, request: Request, accounts: AccountService = Depends(get_account_service)):
    user = accounts.register(data.name, data.email, data.password)
    open_session(request, user)
    return user


@router.post("/login", response_model=UserOut)
def login(data: LoginRequest, request: Request, accounts: AccountService = Depends(get_account_service)):
    user = accounts.authenticate(data.email, data.password)
    open_session(request, user)
    logger.info(f"User signed in with password: {user.email}")
    return user


@router.get("/me", response_model=UserOut)
def me(user: User = Depends(require_user)):
    return user


@router.put("/profile", response_model=ProfileUpdated)
def update_profile(
    data: ProfileUpdate,
    user: User = Depends(require_user),
    accounts: AccountService = Depends(get_account_service),
):
    updated = accounts.update_profile(user.id, data)
    return ProfileUpdated(message="Profile updated successfully", user=UserOut.model_validate(updated))


@router.post("/logout", response_model=MessageResponse)
def logout(request: Request):
    close_session(request)
    return MessageResponse(message="Logged out successfully")
