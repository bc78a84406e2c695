"""
Script para obtener recomendaciones de propiedades.

Usa el historial de un usuario en Supabase o un archivo JSON con el
mismo formato que la cookie de historial.

Uso:
    python -m nido.scripts.run_recommendations --user-id <uuid>
    python -m nido.scripts.run_recommendations --history-file history.json --limit 4
"""

import argparse
import json
import logging
import sys
from pathlib import Path

import structlog

from nido.config import get_settings
from nido.recommendations import build_recommendation_service

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
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.dev.ConsoleRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger()


def run_recommendations(user_id=None, history_file=None, limit=None) -> list[dict]:
    """Obtiene recomendaciones y las devuelve como dicts serializables."""
    service = build_recommendation_service(settings)

    cookie_value = None
    if history_file:
        cookie_value = Path(history_file).read_text(encoding="utf-8")

    listings = service.get_recommendations(
        user_id=user_id,
        cookie_value=cookie_value,
        limit=limit,
    )
    return [listing.model_dump() for listing in listings]


def main():
    """Entry point del script."""
    parser = argparse.ArgumentParser(description="Recomendaciones por historial")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--user-id", help="UUID del usuario logueado")
    source.add_argument("--history-file", help="JSON con el historial de navegación")
    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Cantidad de propiedades (por defecto RECOMMENDATION_LIMIT)",
    )
    args = parser.parse_args()

    try:
        listings = run_recommendations(
            user_id=args.user_id,
            history_file=args.history_file,
            limit=args.limit,
        )
        print(json.dumps(listings, ensure_ascii=False, indent=2))
        logger.info("Recomendaciones generadas", total=len(listings))
        sys.exit(0)

    except KeyboardInterrupt:
        logger.info("Interrumpido por usuario")
        sys.exit(130)
    except Exception as e:
        logger.error("Error fatal obteniendo recomendaciones", error=str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
