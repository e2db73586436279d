from __future__ import annotations

from dataclasses import asdict, dataclass, fields


@dataclass
class StoreSettings:
    """Store information and receipt options shown on the settings screen."""
    store_name: str = "My Boutique"
    store_address: str = "123 Fashion Street"
    store_phone: str = "(123) 456-7890"
    store_email: str = "contact@boutique.com"
    receipt_show_logo: bool = True
    receipt_show_tax_details: bool = True
    receipt_footer_text: str = "Thank you for shopping with us!"

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def field_names(cls) -> set[str]:
        return {f.name for f in fields(cls)}

    @classmethod
    def from_dict(cls, data: dict) -> "StoreSettings":
        known = cls.field_names()
        return cls(**{k: v for k, v in data.items() if k in known})
