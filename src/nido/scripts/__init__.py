"""Entry points de línea de comandos."""
