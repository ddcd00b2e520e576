import asyncio
import logging
from typing import Optional, Sequence

import httpx

logger = logging.getLogger(__name__)

# Ordre de priorité fixe : Google puis Cloudflare
DOH_ENDPOINTS = (
    "https://dns.google/resolve",
    "https://cloudflare-dns.com/dns-query",
)

DNS_JSON_HEADERS = {"Accept": "application/dns-json"}

# Codes DNS (RCODE) considérés comme décisifs en l'absence de réponse SOA
NOERROR = 0
NXDOMAIN = 3


async def _query_soa(
    client: httpx.AsyncClient,
    endpoint: str,
    domain: str,
    timeout: Optional[float],
) -> Optional[bool]:
    """
    Interroge un seul endpoint DoH.
    Retourne False si un SOA existe, True si NOERROR/NXDOMAIN sans réponse,
    None si la réponse n'est pas exploitable.
    """
    params = {"name": domain, "type": "SOA"}
    kwargs = {"params": params, "headers": DNS_JSON_HEADERS}
    if timeout is not None:
        kwargs["timeout"] = timeout
    r = await client.get(endpoint, **kwargs)
    if not r.is_success:
        logger.debug(f"{endpoint} -> HTTP {r.status_code} pour {domain}")
        return None

    data = r.json()
    answer = data.get("Answer")
    if isinstance(answer, list) and answer:
        return False

    # bool est une sous-classe d'int : "Status": false n'est pas un RCODE
    status = data.get("Status")
    if type(status) is int and status in (NOERROR, NXDOMAIN):
        return True

    logger.debug(f"{endpoint} -> Status {status} non concluant pour {domain}")
    return None


async def check_domain_availability(
    domain: str,
    client: Optional[httpx.AsyncClient] = None,
    endpoints: Sequence[str] = DOH_ENDPOINTS,
    timeout: Optional[float] = None,
) -> bool:
    """
    Retourne True si le domaine semble libre, False s'il est enregistré
    ou si aucun endpoint n'a donné de réponse décisive.
    Ne lève jamais d'exception.
    """
    try:
        clean = domain.strip().lower()
        if client is None:
            async with httpx.AsyncClient() as own_client:
                return await _check(own_client, clean, endpoints, timeout)
        return await _check(client, clean, endpoints, timeout)
    except Exception as e:
        logger.error(f"Erreur lors de la vérification de {domain!r}: {e}")
        return False


async def _check(
    client: httpx.AsyncClient,
    domain: str,
    endpoints: Sequence[str],
    timeout: Optional[float],
) -> bool:
    for endpoint in endpoints:
        try:
            query = _query_soa(client, endpoint, domain, timeout)
            if timeout is not None:
                # borne la requête entière, pas seulement chaque phase httpx
                verdict = await asyncio.wait_for(query, timeout)
            else:
                verdict = await query
        except Exception as e:
            logger.warning(f"Erreur avec l'endpoint {endpoint} pour {domain}: {e!r}")
            continue
        if verdict is not None:
            return verdict

    # Aucun endpoint décisif : on suppose le domaine pris
    return False
