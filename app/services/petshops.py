"""Petshop registration."""
from app.core.errors import DuplicateCnpjError, InvalidCnpjFormatError
from app.core.logging import get_logger
from app.domain.petshop import Petshop, PetshopCreate, is_cnpj_format_valid
from app.infrastructure.store import PetshopStore

logger = get_logger(__name__)


def register_petshop(store: PetshopStore, data: PetshopCreate) -> Petshop:
    """Register a new petshop with an empty pet list.

    Args:
        store: Petshop store
        data: Registration payload (name and CNPJ)

    Returns:
        The created petshop

    Raises:
        InvalidCnpjFormatError: If the CNPJ is not XX.XXX.XXX/0001-XX
        DuplicateCnpjError: If a petshop with that CNPJ already exists
    """
    if not is_cnpj_format_valid(data.cnpj):
        logger.warning(f"Petshop rejected, bad CNPJ format: {data.cnpj!r}", extra={"cnpj": data.cnpj})
        raise InvalidCnpjFormatError()

    petshop = store.add_petshop(Petshop(name=data.name, cnpj=data.cnpj))
    if petshop is None:
        logger.warning(f"Petshop rejected, CNPJ already registered: {data.cnpj}", extra={"cnpj": data.cnpj})
        raise DuplicateCnpjError()

    logger.info(
        f"Petshop registered: {petshop.name}",
        extra={"petshop_id": petshop.id, "cnpj": petshop.cnpj}
    )
    return petshop
