from .models import AVAILABLE, REGISTERED, DomainResult
from .utils import export_domains, to_records, validate_domain
from .providers.doh import check_domain_availability
from .pipeline import process_domain_batch, run

__all__ = [
    "AVAILABLE",
    "REGISTERED",
    "DomainResult",
    "check_domain_availability",
    "export_domains",
    "process_domain_batch",
    "run",
    "to_records",
    "validate_domain",
]
