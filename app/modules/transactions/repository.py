# app/modules/transactions/repository.py
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Optional


@dataclass(frozen=True)
class PartnerRecord:
    partner_ref_no: str
    partner_key: str
    password: str


class PartnerDirectory:
    """Read-only registry of allowed partners, keyed by partner reference number.

    Built once at startup from configuration and never mutated afterwards, so a
    single instance can be shared by concurrent requests without locking.
    """

    def __init__(self, partners: Iterable[PartnerRecord]):
        self._partners: Mapping[str, PartnerRecord] = MappingProxyType(
            {partner.partner_ref_no: partner for partner in partners}
        )

    @classmethod
    def from_config(cls, partners: Iterable[Dict[str, Any]]) -> "PartnerDirectory":
        return cls(
            PartnerRecord(
                partner_ref_no=entry["partner_ref_no"],
                partner_key=entry["partner_key"],
                password=entry["password"],
            )
            for entry in partners
        )

    def get_by_ref_no(self, partner_ref_no: str) -> Optional[PartnerRecord]:
        return self._partners.get(partner_ref_no)

    @property
    def partners(self) -> Mapping[str, PartnerRecord]:
        return self._partners

    def __len__(self) -> int:
        return len(self._partners)
