from dataclasses import dataclass, field
from decimal import Decimal

from charity_console.domain.value_objects import ItemUnit, new_id


@dataclass
class PackageItem:
    name: str
    quantity: float
    unit: ItemUnit = ItemUnit.UNIT
    average_price: Decimal | None = None
    id: str = field(default_factory=new_id)


@dataclass
class Package:
    """Template of what a single family receives."""

    name: str
    id: str = field(default_factory=new_id)
    description: str = ""
    items: list[PackageItem] = field(default_factory=list)

    @property
    def estimated_cost(self) -> Decimal:
        return sum(
            (
                item.average_price * Decimal(str(item.quantity))
                for item in self.items
                if item.average_price is not None
            ),
            Decimal("0"),
        )
