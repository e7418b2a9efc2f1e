from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

from ..config import KIND_NAME, KIND_SYMPTOM

@dataclass(frozen=True)
class Disease:
    name: str
    symptoms: Tuple[str, ...] = ()
    payload: Mapping[str, Any] = field(default_factory=dict, compare=False, hash=False)

    def __post_init__(self):
        # Read-only view over a private copy of the record fields
        object.__setattr__(self, "payload", MappingProxyType(dict(self.payload)))

    def to_dict(self) -> Dict[str, Any]:
        """Return the record in its catalog shape (name, symptoms, opaque fields)."""
        return {"name": self.name, "symptoms": list(self.symptoms), **self.payload}

@dataclass(frozen=True)
class NameMatch:
    disease: Disease
    score: float  # 1.0 for substring hits, similarity otherwise

@dataclass(frozen=True)
class SymptomMatch:
    disease: Disease
    matched_symptom: str
    score: float

@dataclass(frozen=True)
class Suggestion:
    kind: str  # "name" or "symptom"
    tier: int
    disease: Disease
    label: str
    score: float
    symptom: Optional[str] = None

    @classmethod
    def for_name(cls, disease: Disease, tier: int, score: float) -> "Suggestion":
        return cls(KIND_NAME, tier, disease, disease.name, score)

    @classmethod
    def for_symptom(cls, disease: Disease, tier: int, symptom: str, score: float) -> "Suggestion":
        return cls(KIND_SYMPTOM, tier, disease, f"{disease.name} ({symptom})", score, symptom)

@dataclass
class SearchResult:
    query: str
    name_matches: List[Disease] = field(default_factory=list)
    symptom_matches: List[SymptomMatch] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return bool(self.name_matches or self.symptom_matches)
