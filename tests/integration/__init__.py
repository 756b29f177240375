"""
Integration tests package.

Tests de integración que verifican el funcionamiento correcto de:
- Store SQL sobre una base SQLite temporal (insert atómico, soft delete)
- Reintentos ante deadlocks / base bloqueada
- Health checks

Para ejecutar solo tests de integración:
    pytest tests/integration/

Para ejecutar solo los tests contra SQL:
    pytest -m sql
"""
