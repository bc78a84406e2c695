"""
Nido: recomendaciones y comparación de propiedades.

Núcleo de un marketplace inmobiliario sobre Supabase.
"""

__version__ = "0.1.0"
