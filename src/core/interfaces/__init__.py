"""Interfaces/abstracciones del Core.

Por qué:
- La fachada depende del contrato `RequestDispatcher`, no de httpx.
- Permite sustituir el transporte en tests por un dispatcher falso.
"""
