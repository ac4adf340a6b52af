"""Account resolution for pet-scoped routes.

A request identifies its petshop through the ``cnpj`` header (and the
``username`` header when ``REQUIRE_USERNAME`` is enabled). This is a lookup
key, not a credential: nothing is verified beyond presence, format and
existence.
"""
from typing import Optional
from fastapi import Depends, Request

from app.core.config import Settings, settings as default_settings
from app.core.errors import (
    InvalidCnpjFormatError,
    MissingIdentifierError,
    MissingUsernameError,
    PetshopNotFoundError,
)
from app.core.logging import get_logger
from app.domain.petshop import Petshop, is_cnpj_format_valid
from app.infrastructure.store import PetshopStore, get_store

logger = get_logger(__name__)


def resolve_petshop(
    store: PetshopStore,
    cnpj: Optional[str],
    username: Optional[str] = None,
    require_username: bool = True
) -> Petshop:
    """Map the identifying headers to a registered petshop.

    Checks run in a fixed order and the first failure wins:
    missing CNPJ, missing username, bad CNPJ format, unknown CNPJ.

    Args:
        store: Petshop store
        cnpj: Value of the CNPJ header (None if absent)
        username: Value of the username header (None if absent)
        require_username: Whether a missing username is rejected

    Returns:
        The matching petshop

    Raises:
        MissingIdentifierError: CNPJ header absent
        MissingUsernameError: Username required but absent
        InvalidCnpjFormatError: CNPJ not in XX.XXX.XXX/0001-XX form
        PetshopNotFoundError: No petshop registered with that CNPJ
    """
    if cnpj is None:
        logger.warning("Request without CNPJ header")
        raise MissingIdentifierError()

    if require_username and username is None:
        logger.warning("Request without username header", extra={"cnpj": cnpj})
        raise MissingUsernameError()

    if not is_cnpj_format_valid(cnpj):
        logger.warning(f"Invalid CNPJ format: {cnpj!r}", extra={"cnpj": cnpj})
        raise InvalidCnpjFormatError()

    petshop = store.get_by_cnpj(cnpj)
    if petshop is None:
        logger.warning(
            f"Petshop not found for CNPJ {cnpj}",
            extra={"cnpj": cnpj, "username": username}
        )
        raise PetshopNotFoundError(cnpj=cnpj, username=username)

    logger.debug(f"Petshop resolved: {petshop.id}", extra={"petshop_id": petshop.id})
    return petshop


def get_settings(request: Request) -> Settings:
    """FastAPI dependency returning the settings of the running app."""
    return getattr(request.app.state, "settings", default_settings)


def get_current_petshop(
    request: Request,
    store: PetshopStore = Depends(get_store),
    app_settings: Settings = Depends(get_settings)
) -> Petshop:
    """FastAPI dependency resolving the petshop of the current request.

    The resolved petshop is also attached to ``request.state.petshop``.

    Example:
        >>> @router.get("/pets")
        >>> def list_pets(petshop: Petshop = Depends(get_current_petshop)):
        ...     return petshop.pets
    """
    petshop = resolve_petshop(
        store,
        cnpj=request.headers.get(app_settings.cnpj_header),
        username=request.headers.get(app_settings.username_header),
        require_username=app_settings.require_username,
    )
    request.state.petshop = petshop
    return petshop
