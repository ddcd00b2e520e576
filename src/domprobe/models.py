from dataclasses import dataclass, asdict

AVAILABLE = "available"
REGISTERED = "registered"


@dataclass
class DomainResult:
    domain: str
    available: bool = False

    @property
    def status(self) -> str:
        return AVAILABLE if self.available else REGISTERED

    def to_dict(self) -> dict:
        d = asdict(self)
        d["status"] = self.status
        return d
