"""
Script para comparar dos propiedades del catálogo.

Uso:
    python -m nido.scripts.run_comparison <id-izquierda> <id-derecha>
"""

import argparse
import logging
import sys

import structlog

from nido.comparison import compare_listings
from nido.config import get_settings
from nido.database import ListingRepository

# Configurar logging
settings = get_settings()
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(message)s",
    stream=sys.stderr,
    force=True,
)

structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
        structlog.dev.ConsoleRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger()


def run_comparison(left_id: str, right_id: str) -> int:
    repo = ListingRepository()
    left = repo.get_by_id(left_id)
    right = repo.get_by_id(right_id)

    missing = [pid for pid, listing in ((left_id, left), (right_id, right)) if listing is None]
    if missing:
        logger.error("Propiedad no encontrada", ids=missing)
        return 1

    result = compare_listings(left, right)
    print(result.model_dump_json(indent=2))
    return 0


def main():
    parser = argparse.ArgumentParser(description="Compara dos propiedades")
    parser.add_argument("left_id", help="UUID de la propiedad izquierda")
    parser.add_argument("right_id", help="UUID de la propiedad derecha")
    args = parser.parse_args()

    try:
        sys.exit(run_comparison(args.left_id, args.right_id))
    except KeyboardInterrupt:
        logger.info("Comparación interrumpida por usuario")
        sys.exit(130)
    except Exception as e:
        logger.error("Error fatal en comparación", error=str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
