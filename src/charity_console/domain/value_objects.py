from enum import Enum
from uuid import uuid4


def new_id() -> str:
    return str(uuid4())


class FamilyStatus(str, Enum):
    ACTIVE = "Ativo"
    SUSPENDED = "Suspenso"
    INACTIVE = "Inativo"


class HistoryEntryType(str, Enum):
    REGISTRATION = "Cadastro"
    UPDATE = "Atualização"
    SUSPENSION = "Suspensão"
    REACTIVATION = "Reativação"
    INCIDENT = "Ocorrência"
    DELIVERY = "Entrega"
    VISIT = "Visita"
    OTHER = "Outro"


class Gender(str, Enum):
    MALE = "M"
    FEMALE = "F"
    OTHER = "Outro"


class ClothingSize(str, Enum):
    P = "P"
    M = "M"
    G = "G"
    GG = "GG"
    XG = "XG"
    KIDS_2 = "2"
    KIDS_4 = "4"
    KIDS_6 = "6"
    KIDS_8 = "8"
    KIDS_10 = "10"
    KIDS_12 = "12"
    KIDS_14 = "14"
    KIDS_16 = "16"


class CampaignType(str, Enum):
    MONTHLY_BASKET = "Cesta Básica Mensal"
    CHRISTMAS = "Natal"
    EASTER = "Páscoa"
    EMERGENCY = "Emergencial"
    OTHER = "Outro"


class ItemUnit(str, Enum):
    KILOGRAM = "kg"
    UNIT = "un"
    LITER = "lt"
    PIECE = "pc"


class EventStatus(str, Enum):
    SCHEDULED = "Agendado"
    DONE = "Realizado"
    CANCELLED = "Cancelado"


class EventFrequency(str, Enum):
    ONCE = "Única"
    WEEKLY = "Semanal"
    BIWEEKLY = "Quinzenal"
    MONTHLY = "Mensal"


class BankAccountType(str, Enum):
    CHECKING = "Corrente"
    SAVINGS = "Poupança"
    PAYMENT = "Pagamento"


class PixKeyType(str, Enum):
    CPF = "CPF"
    CNPJ = "CNPJ"
    EMAIL = "E-mail"
    PHONE = "Telefone"
    RANDOM = "Aleatória"
