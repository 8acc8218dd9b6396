"""Modelos y entidades del dominio.

Por qué:
- Aquí viven las estructuras de datos puras e inmutables (Pydantic v2).
- El dominio no conoce HTTP, CLI, ni GeoJSON: solo puntos, zonas y regiones.
"""
