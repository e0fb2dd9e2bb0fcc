"""Generative AI helpers that pre-fill forms.

Nothing returned here is saved by this module; callers present it to the
user for review.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from google import genai
from google.genai import errors, types
from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from charity_console.domain.campaigns import CampaignItem
from charity_console.domain.documents import digits, sanitize_text
from charity_console.domain.families import Child, Family
from charity_console.domain.value_objects import CampaignType, Gender, ItemUnit
from charity_console.exceptions import AIAssistError, AIAssistUnavailableError
from charity_console.logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"


@dataclass
class SuggestedItem:
    name: str
    quantity: float
    unit: ItemUnit
    average_price: Decimal | None = None


class _ItemSuggestion(BaseModel):
    name: str
    quantity: float
    unit: str
    average_price: float | None = None


class _ChildExtraction(BaseModel):
    name: str
    age: int | None = None
    gender: str | None = None


class _FamilyExtraction(BaseModel):
    responsible_name: str
    cpf: str | None = None
    nis: str | None = None
    phone: str | None = None
    address: str | None = None
    postal_code: str | None = None
    number_of_adults: int | None = None
    is_pregnant: bool | None = None
    notes: str | None = None
    children: list[_ChildExtraction] | None = None


_ITEM_LIST = TypeAdapter(list[_ItemSuggestion])


def _unit(value: str) -> ItemUnit:
    normalized = value.strip().lower()
    for unit in ItemUnit:
        if normalized == unit.value:
            return unit
    return ItemUnit.UNIT


def _gender(value: str | None) -> Gender:
    normalized = (value or "").strip().upper()
    if normalized.startswith("F"):
        return Gender.FEMALE
    if normalized.startswith("M"):
        return Gender.MALE
    return Gender.OTHER


class AIAssistService:
    """Wraps a google-genai client for the three form-filling features.

    A client can be injected directly; otherwise one is built from the API
    key on first use. With neither, every call raises
    :class:`AIAssistUnavailableError` before reaching the network.
    """

    def __init__(
        self,
        api_key: str | None = None,
        *,
        model: str = DEFAULT_MODEL,
        organization_name: str = "Lar Assistencial Matilde",
        client: Any | None = None,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._organization_name = organization_name
        self._client = client

    @property
    def is_available(self) -> bool:
        return self._client is not None or bool(self._api_key)

    def _get_client(self) -> Any:
        if self._client is None:
            if not self._api_key:
                raise AIAssistUnavailableError()
            self._client = genai.Client(api_key=self._api_key)
        return self._client

    def _generate(
        self, operation: str, prompt: str, config: types.GenerateContentConfig
    ) -> Any:
        client = self._get_client()
        try:
            response = client.models.generate_content(
                model=self._model, contents=prompt, config=config
            )
        except errors.APIError as e:
            logger.warning("ai_assist_call_failed", operation=operation, error=str(e))
            raise AIAssistError(operation, str(e)) from e
        if not getattr(response, "text", None):
            logger.warning("ai_assist_empty_response", operation=operation)
            raise AIAssistError(operation, "empty response")
        logger.debug("ai_assist_response", operation=operation, model=self._model)
        return response

    def generate_campaign_description(
        self,
        title: str,
        campaign_type: CampaignType,
        items: Sequence[CampaignItem],
    ) -> str:
        """Short donor-facing description for a campaign."""
        item_list = ", ".join(
            f"{item.target_quantity:g} {item.unit.value} de {item.name}"
            for item in items
        )
        prompt = (
            f'Você é um assistente de uma ONG chamada "{self._organization_name}".\n'
            "Crie uma descrição curta, inspiradora e apelativa para doadores "
            "para uma campanha de doação.\n\n"
            "Detalhes da campanha:\n"
            f"Título: {title}\n"
            f"Tipo: {campaign_type.value}\n"
            f"Itens necessários: {item_list or 'a definir'}\n\n"
            "A descrição deve ter no máximo 3 parágrafos curtos e enfatizar como "
            "essa ajuda fará a diferença na vida das famílias e crianças carentes. "
            "Use emojis moderadamente."
        )
        response = self._generate(
            "generate_campaign_description",
            prompt,
            types.GenerateContentConfig(temperature=0.7),
        )
        return response.text.strip()

    def suggest_package_items(
        self, name: str, description: str = ""
    ) -> list[SuggestedItem]:
        """Items (with quantity per family and unit) for a package template."""
        prompt = (
            f'Você é um assistente da ONG "{self._organization_name}".\n'
            "Sugira a lista de itens de um pacote de doação para UMA família.\n\n"
            f"Nome do pacote: {name}\n"
            f"Descrição: {description or 'sem descrição'}\n\n"
            "Para cada item informe nome, quantidade por família, unidade "
            "(uma de: kg, un, lt, pc) e preço médio estimado em reais."
        )
        response = self._generate(
            "suggest_package_items",
            prompt,
            types.GenerateContentConfig(
                response_mime_type="application/json",
                response_schema=list[_ItemSuggestion],
                temperature=0,
            ),
        )
        try:
            parsed = response.parsed or _ITEM_LIST.validate_json(response.text)
        except PydanticValidationError as e:
            raise AIAssistError("suggest_package_items", "invalid item list") from e

        return [
            SuggestedItem(
                name=sanitize_text(item.name),
                quantity=item.quantity,
                unit=_unit(item.unit),
                average_price=(
                    Decimal(str(item.average_price))
                    if item.average_price is not None
                    else None
                ),
            )
            for item in parsed
            if item.name.strip()
        ]

    def extract_family(self, text: str) -> Family:
        """Partial family record read from free text, for the registration form."""
        prompt = (
            f'Você é um assistente de cadastro da ONG "{self._organization_name}".\n'
            "Extraia do texto abaixo os dados da família: nome do responsável, "
            "CPF, NIS, telefone, endereço, CEP, número de adultos, se há gestante, "
            "observações e os filhos (nome, idade, gênero M ou F). "
            "Deixe em branco o que não estiver no texto.\n\n"
            f"Texto:\n{text}"
        )
        response = self._generate(
            "extract_family",
            prompt,
            types.GenerateContentConfig(
                response_mime_type="application/json",
                response_schema=_FamilyExtraction,
                temperature=0,
            ),
        )
        try:
            data = response.parsed or _FamilyExtraction.model_validate_json(
                response.text
            )
        except PydanticValidationError as e:
            raise AIAssistError("extract_family", "invalid family record") from e

        return Family(
            responsible_name=sanitize_text(data.responsible_name),
            cpf=digits(data.cpf),
            nis=digits(data.nis),
            phone=digits(data.phone),
            address=sanitize_text(data.address),
            postal_code=digits(data.postal_code),
            number_of_adults=data.number_of_adults or 1,
            is_pregnant=bool(data.is_pregnant),
            notes=sanitize_text(data.notes),
            children=[
                Child(
                    name=sanitize_text(child.name),
                    age=child.age or 0,
                    gender=_gender(child.gender),
                )
                for child in data.children or []
            ],
        )
