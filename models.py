"""
Parameter objects for the app operations and the seed dataset shape.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from utils.exceptions import ValidationError


@dataclass
class SignInParams:
    email: str
    password: str

    def __post_init__(self) -> None:
        if not self.email:
            raise ValidationError("email is required", field="email")
        if not self.password:
            raise ValidationError("password is required", field="password")


@dataclass
class CreateUserParams(SignInParams):
    name: str = ""

    def __post_init__(self) -> None:
        super().__post_init__()
        if not self.name:
            raise ValidationError("name is required", field="name")


@dataclass
class GetMenuParams:
    category: Optional[str] = None
    query: Optional[str] = None


@dataclass
class Category:
    name: str
    description: str


@dataclass
class Customization:
    name: str
    price: float
    # topping, side, size, crust, ...
    type: str


@dataclass
class MenuItem:
    name: str
    description: str
    image_url: str
    price: float
    rating: float
    calories: int
    protein: int
    category_name: str
    customizations: List[str] = field(default_factory=list)


def _build(cls, raw: Dict[str, Any], section: str):
    try:
        return cls(**raw)
    except TypeError as e:
        raise ValidationError(
            f"Invalid {section} entry {raw!r}: {e}", field=section, value=raw
        ) from e


@dataclass
class DummyData:
    """Static dataset written by the seeder."""

    categories: List[Category]
    customizations: List[Customization]
    menu: List[MenuItem]

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "DummyData":
        """
        Build the dataset from plain dictionaries.

        Raises:
            ValidationError: If a section is missing or an entry has the wrong fields
        """
        for section in ("categories", "customizations", "menu"):
            if not isinstance(raw.get(section), list):
                raise ValidationError(
                    f"Seed data must contain a '{section}' list", field=section
                )

        return cls(
            categories=[_build(Category, c, "categories") for c in raw["categories"]],
            customizations=[
                _build(Customization, c, "customizations") for c in raw["customizations"]
            ],
            menu=[_build(MenuItem, m, "menu") for m in raw["menu"]],
        )


@dataclass
class SeedSummary:
    categories: int = 0
    customizations: int = 0
    menu_items: int = 0
    menu_customizations: int = 0
