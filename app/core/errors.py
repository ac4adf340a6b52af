"""Domain errors raised by the account resolver and the services.

Each error carries the HTTP status and the user-facing message used to
build the ``{"error": message}`` response body.
"""
from typing import Optional


class PetshopAPIError(Exception):
    """Base class for predictable, client-facing errors."""

    status_code: int = 400
    default_message: str = "Requisição inválida."

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class MissingIdentifierError(PetshopAPIError):
    """The CNPJ header was not sent."""

    status_code = 400
    default_message = "Informe o CNPJ no header da requisição corretamente."


class MissingUsernameError(PetshopAPIError):
    """The username header was not sent."""

    status_code = 400
    default_message = "Informe o username no header da requisição corretamente."


class InvalidCnpjFormatError(PetshopAPIError):
    """The CNPJ does not match XX.XXX.XXX/0001-XX."""

    status_code = 400
    default_message = "O CNPJ informado não está no formato correto (XX.XXX.XXX/0001-XX)."


class DuplicateCnpjError(PetshopAPIError):
    """A petshop with this CNPJ is already registered."""

    status_code = 400
    default_message = "Já existe um petshop com o CNPJ informado."


class PetshopNotFoundError(PetshopAPIError):
    """No registered petshop matches the supplied CNPJ."""

    status_code = 404
    default_message = "Não foi possível encontrar petshop informado."

    def __init__(self, cnpj: Optional[str] = None, username: Optional[str] = None):
        message = None
        if username is not None:
            message = (
                f"Não foi possível encontrar o petshop do usuário {username} "
                f"com o CNPJ {cnpj}."
            )
        super().__init__(message)
        self.cnpj = cnpj
        self.username = username


class PetNotFoundError(PetshopAPIError):
    """The pet id does not exist in the resolved petshop."""

    status_code = 404
    default_message = "Não foi possível encontrar o pet informado."

    def __init__(self, pet_id: Optional[str] = None):
        super().__init__()
        self.pet_id = pet_id
