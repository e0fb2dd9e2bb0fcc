"""Tests for the postal code lookup client."""

import httpx
import pytest

from charity_console.exceptions import (
    AddressLookupError,
    AddressNotFoundError,
    InvalidPostalCodeError,
)
from charity_console.services.address_lookup import AddressLookupService


def _service(handler) -> AddressLookupService:
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return AddressLookupService(client, base_url="https://cep.test/ws/")


class TestAddressLookupService:
    def test_lookup_maps_fields(self) -> None:
        requested: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requested.append(str(request.url))
            return httpx.Response(
                200,
                json={
                    "cep": "20040-002",
                    "logradouro": "Avenida Rio Branco",
                    "bairro": "Centro",
                    "localidade": "Rio de Janeiro",
                    "uf": "RJ",
                },
            )

        address = _service(handler).lookup("20040-002")

        assert requested == ["https://cep.test/ws/20040002/json/"]
        assert address.postal_code == "20040-002"
        assert address.street == "Avenida Rio Branco"
        assert address.neighborhood == "Centro"
        assert address.city == "Rio de Janeiro"
        assert address.state == "RJ"

    def test_unknown_postal_code(self) -> None:
        service = _service(lambda request: httpx.Response(200, json={"erro": True}))
        with pytest.raises(AddressNotFoundError) as exc_info:
            service.lookup("99999999")
        assert exc_info.value.status_code == 404

    @pytest.mark.parametrize("postal_code", ["", "1234", "123456789", "abc"])
    def test_invalid_postal_code_is_not_sent(self, postal_code: str) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("no request expected")

        with pytest.raises(InvalidPostalCodeError):
            _service(handler).lookup(postal_code)

    def test_server_error(self) -> None:
        service = _service(lambda request: httpx.Response(500))
        with pytest.raises(AddressLookupError) as exc_info:
            service.lookup("01001000")
        assert exc_info.value.context["postal_code"] == "01001000"

    def test_network_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(AddressLookupError):
            _service(handler).lookup("01001000")

    def test_invalid_json(self) -> None:
        service = _service(lambda request: httpx.Response(200, text="<html>"))
        with pytest.raises(AddressLookupError):
            service.lookup("01001000")
