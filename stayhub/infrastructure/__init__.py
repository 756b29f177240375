"""Adaptadores de infraestructura: almacenamiento, locks y mensajería."""
