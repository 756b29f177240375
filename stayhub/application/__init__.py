"""
Capa de Aplicación - Motor de reservas.

Esta capa contiene los casos de uso, DTOs e interfaces (puertos).
Orquesta la lógica de negocio y define los contratos con la infraestructura.

Estructura:
- use_cases/: Casos de uso (BookingCoordinator, consultas, recordatorios)
- dtos/: Data Transfer Objects
- interfaces/: Puertos (contratos para adaptadores)
"""
