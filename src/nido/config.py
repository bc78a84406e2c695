"""
Configuración centralizada del sistema.
Carga variables de entorno y define settings globales.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# config.py -> nido/ -> src/ -> raíz del proyecto (donde está el .env)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Configuración principal de la aplicación."""

    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Supabase
    supabase_url: str = Field(..., description="URL del proyecto Supabase")
    supabase_key: str = Field(..., description="Anon key de Supabase")
    supabase_service_key: Optional[str] = Field(
        None, description="Service role key para operaciones admin"
    )

    # Recomendaciones
    recommendation_limit: int = Field(
        8, ge=1, description="Cantidad de propiedades recomendadas por página"
    )
    history_inference_limit: int = Field(
        10, ge=1, description="Vistas recientes usadas para inferir preferencias"
    )
    fallback_min_ratio: float = Field(
        0.5,
        ge=0.0,
        le=1.0,
        description="Fracción mínima del límite antes de caer a destacadas",
    )

    # Historial anónimo (cookie)
    history_cookie_name: str = Field(
        "property_browsing_history", description="Nombre de la cookie de historial"
    )
    history_cookie_limit: int = Field(
        20, ge=1, description="Máximo de vistas guardadas en la cookie"
    )
    history_cookie_max_age_days: int = Field(
        7, ge=1, description="Expiración de la cookie de historial (días)"
    )

    # Hipoteca
    mortgage_interest_rate: float = Field(
        3.5, ge=0.0, description="Tasa anual fija para el cálculo de cuotas (%)"
    )

    # Logging
    log_level: str = Field("INFO", description="Nivel de logging")


@lru_cache
def get_settings() -> Settings:
    """Obtiene la configuración cacheada."""
    return Settings()


# Constantes del sistema
ENERGY_CERTIFICATE_SCALE = ["A+", "A", "B", "C", "D", "E", "F", "G"]

# Texto que la UI muestra para un dato ausente
NOT_SPECIFIED = "Nije navedeno"

DEFAULT_PRICE_RANGE = (0.0, 1_000_000.0)
DEFAULT_AREA_RANGE = (0.0, 1000.0)
DEFAULT_BEDROOMS_RANGE = (0.0, 10.0)

# Banda alrededor del promedio para precio y superficie
AVERAGE_BAND = 0.2
# Holgura en dormitorios alrededor del mínimo/máximo observado
BEDROOMS_SLACK = 1
