import sys
import argparse
import asyncio
import logging
from pathlib import Path

from dotenv import load_dotenv

from .config import load_settings
from .models import AVAILABLE
from .utils import read_domains_file, validate_domain
from .pipeline import run


def positive_int(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"entier attendu: {value}")
    if n <= 0:
        raise argparse.ArgumentTypeError(f"doit être positif: {value}")
    return n


def non_negative_float(value: str) -> float:
    try:
        x = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"nombre attendu: {value}")
    if x < 0:
        raise argparse.ArgumentTypeError(f"ne peut pas être négatif: {value}")
    return x


def parse_args(argv):
    p = argparse.ArgumentParser(description="Disponibilité de noms de domaine via DNS-over-HTTPS")
    p.add_argument("--domains", required=True, help="Fichier texte avec un domaine par ligne")
    p.add_argument("--out", default="output", help="Dossier de sortie")
    p.add_argument("--timeout", type=positive_int, default=None, help="Timeout par requête (ms)")
    p.add_argument("--delay", type=non_negative_float, default=None, help="Pause entre deux domaines (s)")
    p.add_argument("--skip-invalid", action="store_true", help="Ignorer les domaines syntaxiquement invalides")
    p.add_argument("-v", "--verbose", action="store_true", help="Logs détaillés")
    return p.parse_args(argv)


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if not verbose:
        logging.getLogger("httpx").setLevel(logging.WARNING)
        logging.getLogger("httpcore").setLevel(logging.WARNING)


def main(argv=None):
    ns = parse_args(sys.argv[1:] if argv is None else argv)
    load_dotenv()
    setup_logging(ns.verbose)

    try:
        settings = load_settings()
    except ValueError as e:
        print(f"Configuration invalide: {e}", file=sys.stderr)
        sys.exit(2)
    if ns.timeout is not None:
        settings.timeout_ms = ns.timeout
    if ns.delay is not None:
        settings.delay = ns.delay

    domains_path = Path(ns.domains)
    if not domains_path.exists():
        print(f"Fichier introuvable: {domains_path}", file=sys.stderr)
        sys.exit(1)

    domains = read_domains_file(domains_path)
    if ns.skip_invalid:
        domains = [d for d in domains if validate_domain(d)]
    if not domains:
        print("Aucun domaine valide trouvé dans le fichier.", file=sys.stderr)
        sys.exit(1)

    out_dir = Path(ns.out)

    try:
        results = asyncio.run(run(domains=domains, out_dir=out_dir, settings=settings))
    except KeyboardInterrupt:
        sys.exit(130)

    free = sum(1 for r in results if r.status == AVAILABLE)
    print(f"{free}/{len(results)} domaine(s) disponible(s), résultats dans {out_dir}")


if __name__ == "__main__":
    main()
