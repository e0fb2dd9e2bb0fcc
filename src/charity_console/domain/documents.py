"""Brazilian document numbers (CPF/CNPJ), contact formatting and text cleanup."""

import re

_TAG_RE = re.compile(r"</?[^>]+(>|$)")


def digits(value: str | None) -> str:
    return re.sub(r"\D", "", value or "")


def _check_digit(numbers: str, weights: list[int]) -> int:
    total = sum(int(n) * w for n, w in zip(numbers, weights, strict=True))
    remainder = total % 11
    return 0 if remainder < 2 else 11 - remainder


def is_valid_cpf(value: str | None) -> bool:
    """Validate a CPF by its two mod-11 check digits.

    Accepts masked input (000.000.000-00). Repeated-digit numbers such as
    111.111.111-11 pass the arithmetic but are not issued, so they fail.
    """
    cpf = digits(value)
    if len(cpf) != 11 or cpf == cpf[0] * 11:
        return False
    first = _check_digit(cpf[:9], list(range(10, 1, -1)))
    second = _check_digit(cpf[:10], list(range(11, 1, -1)))
    return cpf[-2:] == f"{first}{second}"


def is_valid_cnpj(value: str | None) -> bool:
    cnpj = digits(value)
    if len(cnpj) != 14 or cnpj == cnpj[0] * 14:
        return False
    first = _check_digit(cnpj[:12], [5, 4, 3, 2, 9, 8, 7, 6, 5, 4, 3, 2])
    second = _check_digit(cnpj[:13], [6, 5, 4, 3, 2, 9, 8, 7, 6, 5, 4, 3, 2])
    return cnpj[-2:] == f"{first}{second}"


def format_cpf(value: str) -> str:
    d = digits(value)
    if len(d) != 11:
        return value
    return f"{d[:3]}.{d[3:6]}.{d[6:9]}-{d[9:]}"


def format_cnpj(value: str) -> str:
    d = digits(value)
    if len(d) != 14:
        return value
    return f"{d[:2]}.{d[2:5]}.{d[5:8]}/{d[8:12]}-{d[12:]}"


def format_phone(value: str) -> str:
    d = digits(value)
    if len(d) == 11:
        return f"({d[:2]}) {d[2:7]}-{d[7:]}"
    if len(d) == 10:
        return f"({d[:2]}) {d[2:6]}-{d[6:]}"
    return value


def format_postal_code(value: str) -> str:
    d = digits(value)
    return f"{d[:5]}-{d[5:]}" if len(d) == 8 else value


def sanitize_text(value: str | None) -> str:
    """Strip HTML tags from free text typed by users."""
    if not value:
        return ""
    return _TAG_RE.sub("", value).strip()
