import asyncio
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence

import httpx

from .config import Settings
from .models import AVAILABLE, REGISTERED, DomainResult
from .utils import ensure_dir, export_domains, to_records, write_csv, write_json, write_text
from .providers.doh import DOH_ENDPOINTS, check_domain_availability

logger = logging.getLogger(__name__)


async def process_domain_batch(
    domains: Iterable[str],
    timeout_ms: int,
    client: Optional[httpx.AsyncClient] = None,
    delay: float = 0.5,
    endpoints: Sequence[str] = DOH_ENDPOINTS,
) -> Dict[str, bool]:
    """
    Vérifie les domaines un par un (jamais deux requêtes en parallèle),
    avec une pause fixe entre chaque domaine pour ménager les résolveurs.
    L'échec d'un domaine n'interrompt jamais le lot.
    """
    if client is None:
        async with httpx.AsyncClient() as own_client:
            return await process_domain_batch(
                domains, timeout_ms, own_client, delay=delay, endpoints=endpoints
            )

    timeout = timeout_ms / 1000
    results: Dict[str, bool] = {}
    for domain in domains:
        try:
            results[domain] = await check_domain_availability(
                domain, client, endpoints=endpoints, timeout=timeout
            )
            logger.info(f"{domain}: {'disponible' if results[domain] else 'enregistré'}")
        except Exception as e:
            logger.error(f"Erreur lors du traitement de {domain}: {e}")
            results[domain] = False

        if delay:
            await asyncio.sleep(delay)
    return results


async def run(
    domains: List[str],
    out_dir: Path,
    settings: Settings,
    client: Optional[httpx.AsyncClient] = None,
) -> List[DomainResult]:
    ensure_dir(out_dir)
    mapping = await process_domain_batch(
        domains,
        settings.timeout_ms,
        client,
        delay=settings.delay,
        endpoints=settings.endpoints,
    )
    results = [DomainResult(domain=d, available=a) for d, a in mapping.items()]

    # write outputs
    write_json(out_dir / "results.json", [r.to_dict() for r in results])
    write_csv(out_dir / "results.csv", [r.to_dict() for r in results])
    records = to_records(mapping)
    for status in (AVAILABLE, REGISTERED):
        write_text(out_dir / f"{status}.txt", export_domains(records, status))
    return results
