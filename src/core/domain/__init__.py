"""Modelos y errores del dominio.

Por qué:
- Aquí viven las estructuras de datos (Pydantic v2) y los errores fatales.
- El dominio no conoce httpx, GitPython ni la CLI.
"""
