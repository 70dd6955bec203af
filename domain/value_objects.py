"""Domain Value Objects"""
from pydantic import BaseModel, ConfigDict, Field, field_validator, ValidationInfo
from datetime import date
from decimal import Decimal
from typing import Dict

from domain.enums import RoomCategory
from domain.exceptions import ValidationError


class DateRange(BaseModel):
    """Value Object for date ranges"""
    model_config = ConfigDict(frozen=True)

    check_in: date
    check_out: date

    @field_validator('check_out')
    @classmethod
    def check_out_after_check_in(cls, v: date, info: ValidationInfo) -> date:
        check_in = info.data.get('check_in')
        if check_in is not None and v <= check_in:
            raise ValueError('Check-out must be after check-in')
        return v

    def nights(self) -> int:
        """Calculate number of nights"""
        return (self.check_out - self.check_in).days


class CategoryInfo(BaseModel):
    """Static metadata attached to a room category"""
    model_config = ConfigDict(frozen=True)

    display_name: str
    base_price: Decimal = Field(ge=0)
    capacity: int = Field(ge=1)


ROOM_CATALOG: Dict[RoomCategory, CategoryInfo] = {
    RoomCategory.STANDARD: CategoryInfo(display_name="Standard Room", base_price=Decimal("100.00"), capacity=2),
    RoomCategory.DELUXE: CategoryInfo(display_name="Deluxe Room", base_price=Decimal("150.00"), capacity=3),
    RoomCategory.SUITE: CategoryInfo(display_name="Suite", base_price=Decimal("250.00"), capacity=4),
}


def category_info(category: RoomCategory) -> CategoryInfo:
    """Look up catalog metadata for a category"""
    return ROOM_CATALOG[category]


def parse_category(value: str) -> RoomCategory:
    """Resolve a category name case-insensitively"""
    try:
        return RoomCategory[value.strip().upper()]
    except (KeyError, AttributeError):
        raise ValidationError(f"Unknown room category: {value}")
