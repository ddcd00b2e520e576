import csv
import json
import re
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional

from .models import AVAILABLE, REGISTERED

DOMAIN_RE = re.compile(r"^[a-z0-9.-]+$")

# Premier label de 3 à 63 caractères, TLD alphabétique d'au moins 2 lettres
VALID_DOMAIN_RE = re.compile(r"[a-zA-Z0-9][a-zA-Z0-9-]{1,61}[a-zA-Z0-9]\.[a-zA-Z]{2,}")


def validate_domain(domain: str) -> bool:
    """
    Vérification purement syntaxique (pas de réseau, aucune exception).
    """
    if not isinstance(domain, str):
        return False
    return VALID_DOMAIN_RE.fullmatch(domain) is not None


def normalize_domain(raw: str) -> Optional[str]:
    d = raw.strip().lower()
    if not d or d.startswith("#"):
        return None
    # enlever schéma et paths éventuels
    d = re.sub(r"^https?://", "", d)
    d = d.split("/")[0].strip()
    try:
        d = d.encode("idna").decode("ascii")
    except UnicodeError:
        return None
    d = d.rstrip(".")
    if not DOMAIN_RE.match(d):
        return None
    return d or None


def read_domains_file(path: Path) -> List[str]:
    """
    Un domaine par ligne; lignes vides et commentaires ignorés.
    L'ordre d'apparition est conservé, les doublons supprimés.
    """
    items: Dict[str, None] = {}
    for line in path.read_text(encoding="utf-8").splitlines():
        n = normalize_domain(line)
        if n:
            items.setdefault(n)
    return list(items)


def to_records(results: Mapping[str, bool]) -> List[dict]:
    return [
        {"domain": domain, "status": AVAILABLE if available else REGISTERED}
        for domain, available in results.items()
    ]


def export_domains(records: Iterable[Mapping[str, str]], status: str) -> str:
    """
    Filtre les enregistrements sur leur statut ("available" ou "registered")
    et renvoie un domaine par ligne, sans saut de ligne final.
    """
    return "\n".join(r["domain"] for r in records if r["status"] == status)


def ensure_dir(p: Path) -> None:
    p.mkdir(parents=True, exist_ok=True)


def write_json(path: Path, data) -> None:
    path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")


def write_text(path: Path, text: str) -> None:
    path.write_text(text + "\n" if text else "", encoding="utf-8")


def write_csv(path: Path, rows: List[dict]) -> None:
    if not rows:
        path.write_text("", encoding="utf-8")
        return
    keys = list(rows[0].keys())
    with path.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=keys)
        w.writeheader()
        for r in rows:
            w.writerow(r)
