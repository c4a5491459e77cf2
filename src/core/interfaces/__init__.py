"""Interfaces/abstracciones del Core.

Por qué:
- Define contratos (Protocol) para probe, descarga, build y ejecución.
- El resolver y el launcher dependen de estos contratos, nunca de `go` directamente.
"""
