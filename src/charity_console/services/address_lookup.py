"""Postal code (CEP) to address lookup over the ViaCEP web service."""

from __future__ import annotations

import httpx

from charity_console.domain.documents import digits
from charity_console.domain.organization import Address
from charity_console.exceptions import (
    AddressLookupError,
    AddressNotFoundError,
    InvalidPostalCodeError,
)
from charity_console.logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_BASE_URL = "https://viacep.com.br/ws"


class AddressLookupService:
    def __init__(
        self,
        client: httpx.Client | None = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10.0,
    ) -> None:
        self._client = client or httpx.Client(timeout=timeout)
        self._base_url = base_url.rstrip("/")

    def lookup(self, postal_code: str) -> Address:
        """Resolve an 8-digit CEP (masked or not) to street, district, city, state.

        Raises:
            InvalidPostalCodeError: input does not have 8 digits
            AddressNotFoundError: the service reports the CEP as unknown
            AddressLookupError: network or HTTP failure
        """
        cep = digits(postal_code)
        if len(cep) != 8:
            raise InvalidPostalCodeError(postal_code)

        try:
            response = self._client.get(f"{self._base_url}/{cep}/json/")
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            logger.warning("address_lookup_failed", postal_code=cep, error=str(e))
            raise AddressLookupError(cep, str(e)) from e
        except ValueError as e:
            logger.warning("address_lookup_invalid_json", postal_code=cep)
            raise AddressLookupError(cep, "invalid JSON response") from e

        if not isinstance(data, dict) or data.get("erro"):
            raise AddressNotFoundError(cep)

        return Address(
            postal_code=f"{cep[:5]}-{cep[5:]}",
            street=data.get("logradouro", ""),
            neighborhood=data.get("bairro", ""),
            city=data.get("localidade", ""),
            state=data.get("uf", ""),
        )

    def close(self) -> None:
        self._client.close()
