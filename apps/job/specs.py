"""
Typed view of the free-form ``Job.specs`` JSON.

Jobs arrive from several sources (manual entry, RFQ conversion, imports) and
each writes its own keys. ``JobSpecs`` names the keys the rest of the system
reads, folds the known aliases onto one spelling and keeps whatever else was
stored in ``extra`` so nothing is lost on a round trip.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from typing import Any, Dict, Optional

# Older payloads use these spellings
ALIASES = {
    "paper": "paperType",
    "inkColors": "colors",
    "bindery": "finishing",
}


@dataclass
class JobSpecs:
    productType: Optional[str] = None
    paperType: Optional[str] = None
    paperWeight: Optional[str] = None
    coverPaperType: Optional[str] = None
    colors: Optional[str] = None
    coating: Optional[str] = None
    finishing: Optional[str] = None
    bindingStyle: Optional[str] = None
    coverType: Optional[str] = None
    pageCount: Optional[int] = None
    flatSize: Optional[str] = None
    finishedSize: Optional[str] = None
    folds: Optional[str] = None
    perforations: Optional[str] = None
    dieCut: Optional[str] = None
    bleed: Optional[str] = None
    specialInstructions: Optional[str] = None
    shipToName: Optional[str] = None
    shipToAddress: Optional[str] = None
    # Traceability for jobs created from an RFQ
    rfqSpecs: Optional[str] = None
    rfqNumber: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> JobSpecs:
        if not data:
            return cls()

        known = {f.name for f in fields(cls)} - {"extra"}
        values: Dict[str, Any] = {}
        extra: Dict[str, Any] = {}
        for key, value in data.items():
            name = ALIASES.get(key, key)
            if name in known:
                # The canonical spelling wins over an alias
                if name not in values or key == name:
                    values[name] = value
            else:
                extra[key] = value
        return cls(**values, extra=extra)

    def to_dict(self) -> Dict[str, Any]:
        data = {k: v for k, v in asdict(self).items() if k != "extra" and v is not None}
        for key, value in self.extra.items():
            data.setdefault(key, value)
        return data

    def vendor_view(self) -> Dict[str, Any]:
        """Specs as shown on the vendor portal: every known field, blanks as ''."""
        return {
            f.name: "" if getattr(self, f.name) is None else getattr(self, f.name)
            for f in fields(self)
            if f.name not in ("extra", "rfqSpecs", "rfqNumber")
        }
