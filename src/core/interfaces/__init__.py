"""Interfaces/abstracciones del Core.

Por qué:
- Contratos (Protocol) para listar y clonar repositorios.
- El servicio de clone depende de ellos, no de httpx ni de GitPython.
"""
