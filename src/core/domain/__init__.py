"""Modelos y catálogo del dominio.

Por qué:
- Aquí viven los descriptores de operación y la configuración del cliente
  (Pydantic v2), sin conocer httpx ni la CLI.
"""
